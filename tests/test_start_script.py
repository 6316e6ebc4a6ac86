"""Tests for the gunicorn startup helpers (nothing is exec'd)."""
import pytest

from scripts.start import gunicorn_argv, resolve_port


class TestResolvePort:
    def test_default_when_unset(self):
        assert resolve_port(None) == 8080
        assert resolve_port("  ") == 8080

    def test_valid(self):
        assert resolve_port(" 5000 ") == 5000

    @pytest.mark.parametrize("raw", ["abc", "0", "65536", "-1"])
    def test_invalid(self, raw):
        with pytest.raises(ValueError, match="Invalid PORT"):
            resolve_port(raw)


class TestGunicornArgv:
    def _opt(self, argv, flag):
        return argv[argv.index(flag) + 1]

    def test_defaults(self):
        argv = gunicorn_argv(8080, {})
        assert argv[:2] == ["gunicorn", "app.wsgi:app"]
        assert self._opt(argv, "--bind") == "0.0.0.0:8080"
        assert self._opt(argv, "--workers") == "1"
        assert self._opt(argv, "--threads") == "4"
        assert self._opt(argv, "--timeout") == "60"

    def test_env_overrides(self):
        argv = gunicorn_argv(9000, {"WEB_THREADS": "8", "GUNICORN_TIMEOUT": "120"})
        assert self._opt(argv, "--threads") == "8"
        assert self._opt(argv, "--timeout") == "120"

    def test_single_worker_even_with_concurrency(self, capsys):
        argv = gunicorn_argv(9000, {"WEB_CONCURRENCY": "4"})
        assert self._opt(argv, "--workers") == "1"
        assert "WEB_CONCURRENCY" in capsys.readouterr().out

    def test_bad_threads(self):
        with pytest.raises(ValueError, match="WEB_THREADS"):
            gunicorn_argv(8080, {"WEB_THREADS": "zero"})
