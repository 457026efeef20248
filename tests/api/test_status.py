"""API tests for the status endpoint and app wiring."""
from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from notegraph import __version__
from notegraph.api import app as app_module
from notegraph.api.app import app


@pytest.fixture
def client():
    return TestClient(app)


class TestStatus:
    def test_reports_version_and_defaults(self, client):
        resp = client.get("/api/status")
        assert resp.status_code == 200
        data = resp.json()
        assert data["version"] == __version__
        assert data["server_started_at"]
        assert data["fusion"] == {"default_strategy": "smart", "min_relation": 0.3}
        assert data["analysis"] == {"min_relation": 0.3, "max_level": 3}

    def test_reflects_env_config(self, client, monkeypatch):
        monkeypatch.setenv("NOTEGRAPH_FUSION_STRATEGY", "merge")
        assert client.get("/api/status").json()["fusion"]["default_strategy"] == "merge"

    def test_lifespan_warms_engine(self):
        with patch("notegraph.api.app.get_fusion_engine") as warm:
            with TestClient(app):
                pass
        warm.assert_called_once()


class TestServerMain:
    def test_invalid_port(self, capsys):
        with patch.object(app_module, "setup_logging"), patch("uvicorn.run") as run:
            assert app_module.main(port=70000) == 1
        run.assert_not_called()
        assert "Invalid port" in capsys.readouterr().out

    def test_runs_uvicorn(self):
        with patch.object(app_module, "setup_logging"), patch("uvicorn.run") as run:
            assert app_module.main(host="0.0.0.0", port=8123) == 0
        run.assert_called_once_with(app, host="0.0.0.0", port=8123, log_config=None)

    def test_config_defaults(self):
        with patch.object(app_module, "setup_logging"), patch("uvicorn.run") as run:
            app_module.main()
        _, kwargs = run.call_args
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8000
