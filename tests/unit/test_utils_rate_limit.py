import time

import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient
from fastapi_limiter import FastAPILimiter

from storefront.utils.rate_limit import optional_rate_limit, rate_limit_health_info

def _make_app(times=2, seconds=60):
    app = FastAPI()

    @app.get("/limitedA", dependencies=[Depends(optional_rate_limit(times, seconds))])
    def limited_a():
        return {"ok": True}

    @app.get("/limitedB", dependencies=[Depends(optional_rate_limit(times, seconds))])
    def limited_b():
        return {"ok": True}

    @app.get("/rl_info")
    def rl_info(request: Request):
        return rate_limit_health_info(request)

    return app

@pytest.fixture
def local_fallback(monkeypatch):
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")

def test_fallback_blocks_after_limit(local_fallback):
    client = TestClient(_make_app(times=2))
    assert client.get("/limitedA").status_code == 200
    assert client.get("/limitedA").status_code == 200
    assert client.get("/limitedA").status_code == 429

def test_limit_is_per_path_and_session(local_fallback):
    client = TestClient(_make_app(times=2))
    headers = {"cart-session-id": "session-1"}

    assert client.get("/limitedA", headers=headers).status_code == 200
    assert client.get("/limitedA", headers=headers).status_code == 200
    assert client.get("/limitedA", headers=headers).status_code == 429

    # Autre chemin: compteur indépendant
    assert client.get("/limitedB", headers=headers).status_code == 200
    # Autre session: compteur indépendant
    assert client.get("/limitedA", headers={"cart-session-id": "session-2"}).status_code == 200

def test_window_resets(local_fallback):
    client = TestClient(_make_app(times=1, seconds=1))
    assert client.get("/limitedA").status_code == 200
    assert client.get("/limitedA").status_code == 429
    time.sleep(1.1)
    assert client.get("/limitedA").status_code == 200

def test_disabled_flag_bypasses_limit():
    app = _make_app(times=1)
    app.state.rate_limit_enabled = False
    client = TestClient(app)
    for _ in range(3):
        assert client.get("/limitedA").status_code == 200

def test_health_info(monkeypatch):
    app = _make_app()
    client = TestClient(app)
    app.state.rate_limit_enabled = True

    monkeypatch.setattr(FastAPILimiter, "redis", None, raising=False)
    info = client.get("/rl_info").json()
    assert info == {"enabled": True, "ready": False, "backend": None}

    monkeypatch.setattr(FastAPILimiter, "redis", object(), raising=False)
    info = client.get("/rl_info").json()
    assert info["ready"] is True
    assert info["backend"] == "redis"
