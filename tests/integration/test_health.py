def test_health(client):
    assert client.get("/health").json() == {"ok": True}

def test_health_pixup_has_no_secrets(client):
    data = client.get("/health/pixup").json()
    assert data["mode"] == "development"
    assert data["webhook_secret"] is True
    assert "whsec" not in str(data)
    assert data["rate_limit"]["enabled"] is False

def test_health_supabase_failure(client, monkeypatch):
    def boom():
        raise RuntimeError("SUPABASE_URL manquant")
    monkeypatch.setattr("storefront.infra.supabase_client.get_service_supabase", boom)
    data = client.get("/health/supabase").json()
    assert data["connect_ok"] is False
    assert data["error"] == "RuntimeError"

def test_security_headers(client):
    r = client.get("/health")
    assert r.headers["X-Frame-Options"] == "DENY"
    assert r.headers["X-Content-Type-Options"] == "nosniff"
