from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy.orm import Session
from storefront.order.db.models import Order, OrderStatus
from storefront.order.schemas import CheckoutResponse
from storefront.order.services.gateway import FAILED, PaymentRequest, PaymentSession, get_gateway
from storefront.order.core.config import settings
from storefront.common.logging import get_logger

logger = get_logger(__name__)

def to_cents(amount: Decimal) -> int:
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

def process_payment(db: Session, order: Order, total: Decimal) -> CheckoutResponse:
    """Open a checkout session for the order and record the outcome on it."""
    request = PaymentRequest(
        name=f"Order-{order.id}",
        amount=to_cents(total),
        quantity=1,
        currency=settings.PAYMENT_CURRENCY,
        client_reference_id=str(order.id),
    )
    try:
        session = get_gateway().create_checkout_session(request)
    except Exception as e:
        logger.exception("payment_gateway_error", order_id=order.id)
        session = PaymentSession(status=FAILED, message=f"Stripe error: {e}")

    if session.ok:
        order.status = OrderStatus.PENDING_PAYMENT
        order.session_id = session.session_id
        db.add(order); db.commit()
        logger.info("payment_session_opened", order_id=order.id, session_id=session.session_id)
        return CheckoutResponse(
            order_id=order.id,
            status=OrderStatus.PENDING_PAYMENT.value,
            message=f"Payment session created: {session.session_url}",
            total=total,
            session_id=session.session_id,
            session_url=session.session_url,
        )

    order.status = OrderStatus.PAYMENT_FAILED
    db.add(order); db.commit()
    logger.warning("payment_failed", order_id=order.id, reason=session.message)
    return CheckoutResponse(
        order_id=order.id,
        status=OrderStatus.FAILED.value,
        message=f"Payment failed: {session.message}",
        total=total,
    )

def mark_paid(db: Session, order_id: int) -> bool:
    """Move a PENDING_PAYMENT order to PAID. Other statuses are left alone."""
    order = db.get(Order, order_id)
    if not order:
        logger.warning("webhook_order_not_found", order_id=order_id)
        return False
    if order.status == OrderStatus.PAID:
        logger.info("order_already_paid", order_id=order_id)
        return True
    if order.status != OrderStatus.PENDING_PAYMENT:
        logger.warning("order_not_awaiting_payment", order_id=order_id, status=order.status.value)
        return False
    order.status = OrderStatus.PAID
    db.add(order); db.commit()
    logger.info("order_paid", order_id=order_id, previous_status=OrderStatus.PENDING_PAYMENT.value)
    return True
