"""Tests for /health endpoint."""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fastapi.testclient import TestClient
from server.app import app


client = TestClient(app)


def test_health_returns_200():
    resp = client.get("/health")
    assert resp.status_code == 200


def test_health_body():
    resp = client.get("/health")
    assert resp.json() == {"ok": True}


def test_lifespan_logs_utc_timestamps(caplog):
    with caplog.at_level(logging.INFO, logger="refhub"):
        with TestClient(app):
            pass
    messages = [r.getMessage() for r in caplog.records if r.name == "refhub"]
    assert any("Startup" in m and "+00:00" in m for m in messages)
    assert any("Shutdown" in m and "+00:00" in m for m in messages)
