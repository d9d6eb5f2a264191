# payments.py

from typing import Optional

import httpx
from fastapi import Request

from config import Settings


class PaymentGatewayError(Exception):
    pass


class StripeClient:
    """Minimal Stripe REST client, just enough to create PaymentIntents."""

    CURRENCY = "usd"
    PAYMENT_METHOD_TYPES = ("card",)

    def __init__(self, secret_key: str, api_base: str = "https://api.stripe.com",
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.secret_key = secret_key
        self.api_base = api_base.rstrip("/")
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "StripeClient":
        return cls(settings.STRIPE_SECRET_KEY, settings.STRIPE_API_BASE)

    async def create_payment_intent(self, amount) -> str:
        """Create a card PaymentIntent in USD and return its client secret."""
        form = {"amount": str(amount), "currency": self.CURRENCY}
        for i, method in enumerate(self.PAYMENT_METHOD_TYPES):
            form[f"payment_method_types[{i}]"] = method

        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                res = await client.post(
                    f"{self.api_base}/v1/payment_intents",
                    data=form,
                    auth=(self.secret_key, ""),
                )
            except httpx.HTTPError as e:
                raise PaymentGatewayError(str(e) or e.__class__.__name__)

        try:
            payload = res.json()
        except ValueError:
            payload = {}

        if res.is_error:
            message = (payload.get("error") or {}).get("message") or f"Payment gateway returned {res.status_code}"
            raise PaymentGatewayError(message)

        secret = payload.get("client_secret")
        if not secret:
            raise PaymentGatewayError("Payment gateway response had no client_secret")
        return secret


def get_payments(request: Request) -> StripeClient:
    return request.app.state.payments
