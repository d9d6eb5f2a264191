# routers/payment_intents.py

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from errors import ExternalServiceError
from payments import PaymentGatewayError, StripeClient, get_payments

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Payments"])


class PaymentIntentRequest(BaseModel):
    amount: int  # minor units (cents)


@router.post("/create-payment-intent")
async def create_payment_intent(
    payload: PaymentIntentRequest,
    gateway: StripeClient = Depends(get_payments),
):
    try:
        client_secret = await gateway.create_payment_intent(payload.amount)
    except PaymentGatewayError as e:
        logger.error("Payment intent for %s failed: %s", payload.amount, e)
        raise ExternalServiceError(str(e), key="error")
    return {"clientSecret": client_secret}
