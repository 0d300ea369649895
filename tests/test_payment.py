from types import SimpleNamespace
import pytest
import stripe
from food_delivery.core.errors import UpstreamFailure
from food_delivery.services.payment import StripeGateway

ITEMS = [
    {"_id": "a", "name": "Pasta", "price": 12.0, "quantity": 2},
    {"_id": "b", "name": "Cake", "price": 7.5, "quantity": 1},
]

def test_line_items_include_delivery_charge():
    gateway = StripeGateway("", currency="usd")
    line_items = gateway.build_line_items(ITEMS, 33.5)
    assert [item["price_data"]["unit_amount"] for item in line_items] == [1200, 750, 200]
    assert [item["quantity"] for item in line_items] == [2, 1, 1]
    assert line_items[-1]["price_data"]["product_data"]["name"] == "Delivery Charges"

def test_missing_secret_key_is_upstream_failure():
    gateway = StripeGateway("")
    with pytest.raises(UpstreamFailure):
        gateway.create_checkout_session("o1", ITEMS, 33.5, "http://s", "http://c")

def test_checkout_session_created(monkeypatch):
    captured = {}

    def fake_create(**kwargs):
        captured.update(kwargs)
        return SimpleNamespace(id="cs_1", url="https://checkout.stripe.test/cs_1")

    monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)
    gateway = StripeGateway("sk_test_123", timeout=3)

    url = gateway.create_checkout_session("o1", ITEMS, 33.5, "http://s", "http://c")

    assert url == "https://checkout.stripe.test/cs_1"
    assert captured["mode"] == "payment"
    assert captured["client_reference_id"] == "o1"
    assert captured["success_url"] == "http://s"
    assert len(captured["line_items"]) == 3

def test_stripe_errors_become_upstream_failure(monkeypatch):
    def fake_create(**kwargs):
        raise stripe.APIConnectionError("timed out")

    monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)
    gateway = StripeGateway("sk_test_123")

    with pytest.raises(UpstreamFailure):
        gateway.create_checkout_session("o1", ITEMS, 33.5, "http://s", "http://c")

def test_gateway_installs_client_with_timeout(monkeypatch):
    monkeypatch.setattr(stripe, "api_key", None)
    monkeypatch.setattr(stripe, "default_http_client", None)

    StripeGateway("sk_test_123", timeout=3)

    assert isinstance(stripe.default_http_client, stripe.RequestsClient)
    assert stripe.default_http_client._timeout == 3
    assert stripe.api_key == "sk_test_123"
