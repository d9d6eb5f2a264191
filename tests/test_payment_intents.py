from urllib.parse import parse_qs


def test_create_payment_intent(client, stripe):
    res = client.post("/api/create-payment-intent", json={"amount": 4599})
    assert res.status_code == 200
    assert res.json() == {"clientSecret": "pi_123_secret_abc"}

    (request,) = stripe.requests
    assert request.url.path == "/v1/payment_intents"
    form = parse_qs(request.content.decode())
    assert form["amount"] == ["4599"]
    assert form["currency"] == ["usd"]
    assert form["payment_method_types[0]"] == ["card"]
    assert request.headers["Authorization"].startswith("Basic ")


def test_gateway_error_is_surfaced(client, stripe):
    stripe.error = "Your card was declined."
    res = client.post("/api/create-payment-intent", json={"amount": 100})
    assert res.status_code == 500
    assert res.json() == {"error": "Your card was declined."}


def test_amount_must_be_integer(client, stripe):
    res = client.post("/api/create-payment-intent", json={"amount": "lots"})
    assert res.status_code == 400
    assert stripe.requests == []
