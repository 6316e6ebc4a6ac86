from app.sgc import create_app

app = create_app()
