"""
Scholarship Portal Backend — Payment Schemas
=============================================
"""

from pydantic import BaseModel, ConfigDict, Field


class PaymentIntentRequest(BaseModel):
    """Body of POST /create-payment-intent."""
    fees: float = Field(allow_inf_nan=False, description="Amount in major currency units, e.g. 19.99")


class PaymentIntentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_secret: str = Field(alias="clientSecret", description="Stripe payment intent client secret")
