"""
Payment gateway adapter: hosted checkout sessions
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List
import stripe
from food_delivery.core.errors import UpstreamFailure

logger = logging.getLogger(__name__)

class PaymentGateway(ABC):
    @abstractmethod
    def create_checkout_session(
        self,
        order_id: str,
        line_items: List[Dict[str, Any]],
        amount: float,
        success_url: str,
        cancel_url: str,
    ) -> str:
        """Create a checkout session and return the URL to redirect the customer to"""

def to_minor_units(value: float) -> int:
    return int(round(value * 100))

class StripeGateway(PaymentGateway):
    """Stripe Checkout implementation.

    Every call goes through a requests-based HTTP client with a fixed
    timeout so a slow provider surfaces as UpstreamFailure instead of
    holding the request open.
    """

    def __init__(self, secret_key: str, currency: str = "usd", timeout: int = 10):
        self.secret_key = secret_key
        self.currency = currency
        self.timeout = timeout
        if self.secret_key:
            stripe.api_key = self.secret_key
            stripe.default_http_client = stripe.RequestsClient(timeout=timeout)

    def build_line_items(self, line_items: List[Dict[str, Any]], amount: float) -> List[Dict[str, Any]]:
        stripe_items = [
            {
                "price_data": {
                    "currency": self.currency,
                    "product_data": {"name": item["name"]},
                    "unit_amount": to_minor_units(item["price"]),
                },
                "quantity": item["quantity"],
            }
            for item in line_items
        ]

        subtotal = sum(to_minor_units(item["price"]) * item["quantity"] for item in line_items)
        delivery = to_minor_units(amount) - subtotal
        if delivery > 0:
            stripe_items.append({
                "price_data": {
                    "currency": self.currency,
                    "product_data": {"name": "Delivery Charges"},
                    "unit_amount": delivery,
                },
                "quantity": 1,
            })
        return stripe_items

    def create_checkout_session(self, order_id, line_items, amount, success_url, cancel_url):
        if not self.secret_key:
            raise UpstreamFailure("Stripe not configured")

        try:
            session = stripe.checkout.Session.create(
                line_items=self.build_line_items(line_items, amount),
                mode="payment",
                success_url=success_url,
                cancel_url=cancel_url,
                client_reference_id=order_id,
                metadata={"order_id": order_id},
            )
        except stripe.StripeError as e:
            logger.error(f"Checkout session creation failed for order {order_id}: {e}")
            raise UpstreamFailure("Payment provider error") from e

        logger.info(f"Checkout session {session.id} created for order {order_id}")
        return session.url
