from fastapi import FastAPI, Depends, Request
from fastapi.testclient import TestClient

from indieevent.utils.rate_limit import optional_rate_limit, rate_limit_health_info


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


def test_rate_limit_fallback_blocks_after_limit(monkeypatch):
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")
    client = TestClient(_make_app(times=2, seconds=60))

    assert client.get("/limitedA").status_code == 200
    assert client.get("/limitedA").status_code == 200
    r3 = client.get("/limitedA")
    assert r3.status_code == 429
    assert r3.json() == {"detail": "Too Many Requests"}


def test_rate_limit_is_per_path(monkeypatch):
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")
    client = TestClient(_make_app(times=1, seconds=60))

    assert client.get("/limitedA").status_code == 200
    assert client.get("/limitedA").status_code == 429
    assert client.get("/limitedB").status_code == 200


def test_rate_limit_disabled_without_limiter(monkeypatch):
    monkeypatch.delenv("LOCAL_RATE_LIMIT_FALLBACK", raising=False)
    app = _make_app(times=1, seconds=60)
    app.state.rate_limit_enabled = False
    client = TestClient(app)

    for _ in range(3):
        assert client.get("/limitedA").status_code == 200
    info = client.get("/rl_info").json()
    assert info["enabled"] is False
    assert info["local_fallback"] is False


def test_rate_limit_fallback_forgets_expired_keys(monkeypatch):
    from indieevent.utils import rate_limit

    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")
    now = {"t": 1000.0}
    monkeypatch.setattr(rate_limit, "_clock", lambda: now["t"])
    app = _make_app(times=1, seconds=60)
    client = TestClient(app)

    assert client.get("/limitedA").status_code == 200
    assert client.get("/limitedB").status_code == 200
    assert len(app.state._rl_store[60]) == 2

    # Fenêtre écoulée: les anciennes clés sont purgées
    now["t"] += 61
    assert client.get("/limitedA").status_code == 200
    assert list(app.state._rl_store[60]) == ["ip:testclient:/limitedA"]
