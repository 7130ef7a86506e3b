import json

from storefront.checkout.validation import parse_webhook_body, validate_checkout_request

VALID = {
    "sessionId": "s1",
    "success_url": "https://shop.example/success",
    "cancel_url": "https://shop.example/cancel",
    "webhook_url": "https://shop.example/checkout/webhook",
}

def test_checkout_request_ok():
    result = validate_checkout_request({**VALID, "customer": {"name": "Ana", "email": "", "phone": "11999990000"}})
    assert result.ok
    assert result.value.session_id == "s1"
    assert result.value.customer.email == ""

def test_checkout_request_customer_optional():
    result = validate_checkout_request(VALID)
    assert result.ok
    assert result.value.customer is None

def test_checkout_request_ignores_client_prices():
    # Un champ "amount" envoyé par le client n'est pas retenu
    result = validate_checkout_request({**VALID, "amount": 1, "totalAmount": "0.01"})
    assert result.ok
    assert not hasattr(result.value, "amount")

def test_checkout_request_rejects_relative_url():
    result = validate_checkout_request({**VALID, "success_url": "/success"})
    assert not result.ok
    assert result.error.status_code == 400
    assert any("success_url" in e["loc"] for e in result.error.details)

def test_checkout_request_rejects_blank_session():
    result = validate_checkout_request({**VALID, "sessionId": "   "})
    assert not result.ok

def test_checkout_request_rejects_bad_email():
    result = validate_checkout_request({**VALID, "customer": {"email": "not-an-email"}})
    assert not result.ok

def test_checkout_request_rejects_non_object():
    result = validate_checkout_request(["sessionId"])
    assert not result.ok

def test_webhook_body_ok():
    body = json.dumps({
        "payment_id": "pay_123",
        "status": "approved",
        "amount": 9490,
        "metadata": {"orderId": "o1", "sessionId": "s1"},
        "extra": "ignored",
    }).encode()
    result = parse_webhook_body(body)
    assert result.ok
    assert result.value.payment_id == "pay_123"
    assert result.value.metadata.session_id == "s1"

def test_webhook_body_invalid_json():
    result = parse_webhook_body(b"{not json")
    assert not result.ok
    assert result.error.message == "JSON invalide"

def test_webhook_body_refunded_is_not_an_inbound_status():
    result = parse_webhook_body(json.dumps({"payment_id": "pay_1", "status": "refunded"}).encode())
    assert not result.ok
    assert result.error.status_code == 400

def test_webhook_body_payment_id_must_be_string():
    result = parse_webhook_body(json.dumps({"payment_id": 123, "status": "approved"}).encode())
    assert not result.ok

def test_webhook_body_keeps_decoded_text():
    text = '{"payment_id": "pay_1", "status": "pending", "metadata": {"sessionId": "sé"}}'
    result = parse_webhook_body(text.encode("utf-8"))
    assert result.ok
    assert result.text == text

def test_webhook_body_must_be_utf8():
    result = parse_webhook_body('{"payment_id":"pay_1","status":"approved"}'.encode("utf-16-le"))
    assert not result.ok
    assert result.error.message == "JSON invalide"
