import json
from typing import Optional
from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.orm import Session
from storefront.order.api.deps import get_db
from storefront.order.db.models import OrderStatus
from storefront.order.schemas import CheckoutRequest, OrderRead
from storefront.order.services import checkout as service
from storefront.order.services.gateway import InvalidSignature, get_gateway
from storefront.order.services.payments import mark_paid
from storefront.common.responses import ok
from storefront.common.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

@router.post('/checkout')
def checkout(req: CheckoutRequest, db: Session = Depends(get_db)):
    resp = service.checkout(db, req)
    code = 200 if resp.status == OrderStatus.PENDING_PAYMENT.value else 400
    return JSONResponse(status_code=code, content=resp.model_dump(mode="json"))

@router.post('/webhook')
async def stripe_webhook(request: Request,
                         stripe_signature: Optional[str] = Header(default=None, alias="Stripe-Signature"),
                         db: Session = Depends(get_db)):
    body = await request.body()
    gateway = get_gateway()

    try:
        payload = body.decode("utf-8")
    except UnicodeDecodeError:
        return PlainTextResponse("Invalid payload", status_code=400)

    if gateway.webhook_secret:
        if not stripe_signature:
            logger.warning("webhook_missing_signature")
            return PlainTextResponse("Invalid signature", status_code=400)
        try:
            event = gateway.verify_webhook(payload, stripe_signature)
        except InvalidSignature:
            logger.warning("webhook_invalid_signature")
            return PlainTextResponse("Invalid signature", status_code=400)
        except ValueError:
            return PlainTextResponse("Invalid payload", status_code=400)
    else:
        # local testing only: no secret configured
        logger.warning("webhook_unverified", reason="no webhook secret configured")
        try:
            event = json.loads(payload)
        except ValueError:
            return PlainTextResponse("Invalid payload", status_code=400)

    if not isinstance(event, dict):
        return PlainTextResponse("Invalid payload", status_code=400)

    event_type = event.get("type")
    logger.info("webhook_received", event_type=event_type)
    if event_type == "checkout.session.completed":
        obj = (event.get("data") or {}).get("object") or {}
        ref = obj.get("client_reference_id")
        if not ref:
            logger.warning("webhook_missing_reference")
        else:
            try:
                mark_paid(db, int(ref))
            except (TypeError, ValueError):
                logger.warning("webhook_bad_reference", client_reference_id=ref)
    return PlainTextResponse("received", status_code=200)

@router.get('/{order_id}')
def get_order(order_id: int, db: Session = Depends(get_db)):
    return ok(OrderRead.model_validate(service.get_order(db, order_id)), 'Order retrieved successfully')
