"""Tests for the process entry point."""

import logging

import pytest
import uvicorn

from spa_server import serve


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # Keep a developer's .env or exported variables out of these tests
    monkeypatch.chdir(tmp_path)
    for name in ("PORT", "HOST", "CLIENT_DIR", "PUBLIC_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self):
        settings = serve.build_settings(serve.parse_args([]))
        assert settings.PORT == 3000
        assert settings.HOST == "0.0.0.0"
        assert settings.CLIENT_DIR == "build/client"
        assert settings.PUBLIC_DIR == "public"

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        settings = serve.build_settings(serve.parse_args([]))
        assert settings.PORT == 8080

    def test_flags_override_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("PUBLIC_DIR", "static")
        args = serve.parse_args(["--port", "9000", "--client-dir", "dist"])
        settings = serve.build_settings(args)
        assert settings.PORT == 9000
        assert settings.CLIENT_DIR == "dist"
        assert settings.PUBLIC_DIR == "static"

    def test_roots_resolve_against_working_directory(self, tmp_path):
        settings = serve.build_settings(serve.parse_args([]))
        assert settings.client_root == tmp_path.resolve() / "build" / "client"
        assert settings.assets_root == tmp_path.resolve() / "build" / "client" / "assets"


class TestMain:
    def test_runs_uvicorn(self, monkeypatch):
        calls = {}

        def fake_run(app, **kwargs):
            calls["app"] = app
            calls.update(kwargs)

        monkeypatch.setattr(uvicorn, "run", fake_run)
        serve.main(["--port", "4000", "--host", "127.0.0.1"])

        assert calls["port"] == 4000
        assert calls["host"] == "127.0.0.1"
        assert calls["server_header"] is False
        assert calls["app"].state.settings.PORT == 4000

    def test_bind_failure_is_fatal(self, monkeypatch, caplog):
        def fake_run(app, **kwargs):
            # What uvicorn does when the address is already in use
            raise SystemExit(1)

        monkeypatch.setattr(uvicorn, "run", fake_run)
        with caplog.at_level(logging.INFO, logger="spa_server"):
            with pytest.raises(SystemExit) as exc_info:
                serve.main(["--port", "4000"])

        assert exc_info.value.code == 1
        assert "server error" in caplog.text
        assert any(rec.levelno == logging.CRITICAL for rec in caplog.records)

    def test_clean_exit_is_not_an_error(self, monkeypatch, caplog):
        def fake_run(app, **kwargs):
            raise SystemExit(0)

        monkeypatch.setattr(uvicorn, "run", fake_run)
        with pytest.raises(SystemExit) as exc_info:
            serve.main([])

        assert exc_info.value.code == 0
        assert "server error" not in caplog.text
