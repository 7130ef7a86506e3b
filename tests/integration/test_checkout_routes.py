from tests.fakes import SESSION_ID, FakePixup

BODY = {
    "sessionId": SESSION_ID,
    "customer": {"name": "Ana", "email": "ana@example.com"},
    "success_url": "https://shop.test/success",
    "cancel_url": "https://shop.test/cancel",
    "webhook_url": "https://shop.test/checkout/webhook",
}

def _fill_cart(store):
    store.add_product("p1", "29.90", name="Perfume")
    store.add_product("p2", "35.10", name="Hidratante")
    store.add_cart_line(SESSION_ID, "p1", 2)
    store.add_cart_line(SESSION_ID, "p2", 1)

def test_create_payment_with_fallback(client, store):
    _fill_cart(store)
    r = client.post("/checkout/create-payment", json=BODY)
    assert r.status_code == 200
    data = r.json()
    assert data["success"] is True
    payment = data["payment"]
    assert payment["amount"] == 94.90
    assert payment["status"] == "pending"
    assert payment["pixup_id"].startswith("local_")
    assert payment["checkout_url"] == f"https://shop.test/pending?payment_id={payment['id']}"
    assert r.headers["Cache-Control"].startswith("no-store")

def test_create_payment_with_provider(client, store, pixup_client_override):
    _fill_cart(store)
    fake = pixup_client_override(FakePixup(create_response={"id": "pay_123", "checkout_url": "https://pix.test/pay_123"}))
    r = client.post("/checkout/create-payment", json=BODY)
    assert r.status_code == 200
    assert r.json()["payment"]["pixup_id"] == "pay_123"
    assert fake.created[0]["amount"] == 9490

def test_empty_cart(client, store):
    r = client.post("/checkout/create-payment", json=BODY)
    assert r.status_code == 400
    assert r.json()["error"] == "Panier vide"
    assert store.orders == {}

def test_invalid_body(client, store):
    r = client.post("/checkout/create-payment", json={**BODY, "success_url": "not-a-url"})
    assert r.status_code == 400
    assert r.json()["error"] == "Données invalides"
    assert "details" in r.json()

def test_unreadable_json(client, store):
    r = client.post("/checkout/create-payment", content=b"{oops", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] == "JSON invalide"

def test_write_failure_is_a_500(client, store):
    _fill_cart(store)
    store.fail_checkout_write = True
    r = client.post("/checkout/create-payment", json=BODY)
    assert r.status_code == 500
    assert r.json()["error"] == "Erreur interne du serveur"

def test_payment_status_for_owner(client, store):
    payment = store.add_payment(session_id=SESSION_ID, pixup_payment_id="pay_1")
    r = client.get(f"/checkout/payment/{payment['id']}/status", headers={"cart-session-id": SESSION_ID})
    assert r.status_code == 200
    assert r.json() == {"status": "pending", "amount": 94.90, "currency": "BRL"}

def test_payment_status_requires_session(client, store):
    payment = store.add_payment(session_id=SESSION_ID, pixup_payment_id="pay_1")
    r = client.get(f"/checkout/payment/{payment['id']}/status")
    assert r.status_code == 401

def test_payment_status_hidden_from_other_sessions(client, store):
    payment = store.add_payment(session_id=SESSION_ID, pixup_payment_id="pay_1")
    r = client.get(f"/checkout/payment/{payment['id']}/status", headers={"cart-session-id": "intruder"})
    assert r.status_code == 404
    r = client.get("/checkout/payment/unknown/status", headers={"cart-session-id": SESSION_ID})
    assert r.status_code == 404

def test_create_payment_is_rate_limited(client, store, app, monkeypatch):
    monkeypatch.setenv("LOCAL_RATE_LIMIT_FALLBACK", "1")
    app.state._rl_store = {}
    codes = [client.post("/checkout/create-payment", json=BODY).status_code for _ in range(11)]
    app.state._rl_store = {}
    assert codes[:10] == [400] * 10
    assert codes[10] == 429
