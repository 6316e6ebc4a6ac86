"""
Feature modules live under this package.

Each module's service.py turns user intents (create, edit, change status)
into complete records and dispatches them to the store, and computes that
area's statistics from an AppState. Modules never touch persistence.
"""
