"""
Scholarship Portal Backend — Payment Route Handler
===================================================

What:  POST /create-payment-intent: {fees} in, {clientSecret} out.
How:   Delegates to PaymentService; gateway failures are mapped to error
       responses by the global exception handlers.
"""

from fastapi import APIRouter

from scholarship_portal.schemas.common import ErrorResponse
from scholarship_portal.schemas.payment import PaymentIntentRequest, PaymentIntentResponse
from scholarship_portal.services.payment_service import payment_service

router = APIRouter(tags=["Payments"])


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse,
    responses={
        400: {"description": "Payment rejected by the gateway", "model": ErrorResponse},
        503: {"description": "Payment gateway unavailable", "model": ErrorResponse},
    },
    summary="Create a payment intent for an application fee",
)
async def create_payment_intent(payload: PaymentIntentRequest) -> PaymentIntentResponse:
    client_secret = await payment_service.create_payment_intent(payload.fees)
    return PaymentIntentResponse(client_secret=client_secret)
