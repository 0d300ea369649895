"""
Order ledger: placement, payment verification and fulfillment tracking.

An order is written unpaid at placement and handed to the payment gateway.
The customer comes back through ``verify_order`` with the outcome:

* success flips ``payment`` from False to True with a conditional UPDATE,
  and only the call that wins that flip clears the customer's cart, so a
  retried callback is harmless;
* failure discards the unpaid order entirely, leaving the cart as it was
  for another attempt.

Fulfillment status is independent of payment and only moves forward.
"""
import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import update, delete
from sqlalchemy.orm import Session
from food_delivery.core.errors import ValidationError, NotFound
from food_delivery.models.order import Order, OrderLineItem, Address, FulfillmentStatus
from food_delivery.models.user import User
from food_delivery.services.cart import CartStore
from food_delivery.services.payment import PaymentGateway

logger = logging.getLogger(__name__)

def compute_amount(items: List[OrderLineItem], delivery_fee: float) -> float:
    """Sum of price x quantity plus the fixed delivery surcharge"""
    subtotal = sum(item.price * item.quantity for item in items)
    return round(subtotal + delivery_fee, 2)

class OrderLedger:
    def __init__(
        self,
        db: Session,
        cart: CartStore,
        gateway: PaymentGateway,
        delivery_fee: float,
        frontend_url: str,
    ):
        self.db = db
        self.cart = cart
        self.gateway = gateway
        self.delivery_fee = delivery_fee
        self.frontend_url = frontend_url.rstrip("/")

    def _validate_items(self, items: List[OrderLineItem]) -> None:
        if not items:
            raise ValidationError("Order must contain at least one item")
        for item in items:
            if item.quantity < 1:
                raise ValidationError(f"Quantity for {item.name} must be at least 1")
            if not math.isfinite(item.price) or item.price < 0:
                raise ValidationError(f"Price for {item.name} must be non-negative")

    def _get_order(self, order_id: str) -> Order:
        order = self.db.get(Order, order_id)
        if order is None:
            raise NotFound("Order not found")
        return order

    def place_order(
        self,
        user_id: str,
        items: List[OrderLineItem],
        address: Address,
        amount: Optional[float] = None,
    ) -> Tuple[Order, str]:
        """Persist an unpaid order and open a checkout session for it.

        The cart is left untouched here; it is only cleared once payment is
        confirmed. Returns the order and the checkout URL.
        """
        self._validate_items(items)
        computed = compute_amount(items, self.delivery_fee)
        if amount is not None and not math.isfinite(amount):
            raise ValidationError("Order amount must be a finite number")
        if amount is not None and abs(amount - computed) > 0.005:
            raise ValidationError(f"Order amount {amount} does not match items total {computed}")

        if self.db.get(User, user_id) is None:
            raise NotFound("User not found")

        line_items = [item.model_dump(by_alias=True, exclude_none=True) for item in items]
        now = datetime.utcnow()
        order = Order(
            user_id=user_id,
            items=line_items,
            amount=computed,
            address=address.model_dump(by_alias=True),
            status=FulfillmentStatus.PROCESSING.value,
            status_history=[{"status": FulfillmentStatus.PROCESSING.value, "timestamp": now.isoformat()}],
            payment=False,
            date=now,
        )
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        logger.info(f"Order {order.id} placed by user {user_id} for {computed}")

        success_url = f"{self.frontend_url}/verify?success=true&orderId={order.id}"
        cancel_url = f"{self.frontend_url}/verify?success=false&orderId={order.id}"
        try:
            session_url = self.gateway.create_checkout_session(
                order.id, line_items, computed, success_url, cancel_url
            )
        except Exception:
            # No checkout exists for it, so the order must not linger
            self.db.execute(delete(Order).where(Order.id == order.id, Order.payment.is_(False)))
            self.db.commit()
            logger.error(f"Order {order.id} discarded, checkout session could not be created")
            raise

        return order, session_url

    def verify_order(self, order_id: str, success: bool) -> str:
        """Apply the payment outcome for an order; safe to repeat.

        Returns a short message describing what happened.
        """
        order = self._get_order(order_id)
        user_id = order.user_id

        if success:
            flipped = self.db.execute(
                update(Order)
                .where(Order.id == order_id, Order.payment.is_(False))
                .values(payment=True)
            ).rowcount
            if flipped:
                self.cart.clear(user_id, commit=False)
                self.db.commit()
                logger.info(f"Order {order_id} paid, cart cleared for user {user_id}")
            else:
                self.db.rollback()
                logger.warning(f"Order {order_id} was already paid, ignoring repeat verification")
            return "Paid"

        if order.payment:
            logger.warning(f"Ignoring failed-payment callback for paid order {order_id}")
            return "Paid"

        removed = self.db.execute(
            delete(Order).where(Order.id == order_id, Order.payment.is_(False))
        ).rowcount
        self.db.commit()
        if not removed:
            # Lost a race with a concurrent callback
            self.db.expire_all()
            if self.db.get(Order, order_id) is None:
                raise NotFound("Order not found")
            return "Paid"
        logger.info(f"Order {order_id} discarded after failed payment")
        return "Not Paid"

    def user_orders(self, user_id: str) -> List[Order]:
        return (
            self.db.query(Order)
            .filter(Order.user_id == user_id)
            .order_by(Order.date.desc())
            .all()
        )

    def list_orders(self) -> List[Order]:
        return self.db.query(Order).order_by(Order.date.desc()).all()

    def update_status(self, order_id: str, status: FulfillmentStatus) -> Order:
        """Advance fulfillment status; moving backwards is rejected"""
        status = FulfillmentStatus(status)
        order = self._get_order(order_id)
        current = FulfillmentStatus(order.status)

        if status == current:
            return order
        if status.rank < current.rank:
            raise ValidationError(f"Cannot move order from {current.value} back to {status.value}")

        history: List[Dict[str, Any]] = list(order.status_history or [])
        history.append({"status": status.value, "timestamp": datetime.utcnow().isoformat()})
        # Only write over the status that was compared above
        changed = self.db.execute(
            update(Order)
            .where(Order.id == order_id, Order.status == current.value)
            .values(status=status.value, status_history=history)
        ).rowcount
        if not changed:
            self.db.rollback()
            logger.warning(f"Order {order_id} status changed concurrently, {status.value} not applied")
            raise ValidationError(f"Order {order_id} status changed while updating, retry")
        self.db.commit()
        self.db.refresh(order)
        logger.info(f"Order {order_id} status changed from {current.value} to {status.value}")
        return order
