from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse
from storefront.order.schemas import PaymentIn, PaymentOut
from storefront.order.services.gateway import PaymentRequest, get_gateway

router = APIRouter()

@router.post('/')
def create_payment(payload: PaymentIn):
    session = get_gateway().create_checkout_session(PaymentRequest(**payload.model_dump()))
    body = PaymentOut(status=session.status, message=session.message,
                      session_id=session.session_id, session_url=session.session_url)
    return JSONResponse(status_code=200 if session.ok else 400, content=body.model_dump())

@router.get('/success', response_class=PlainTextResponse)
def success():
    return "Payment successful. Thank you!"

@router.get('/cancel', response_class=PlainTextResponse)
def cancel():
    return "Payment was cancelled."
