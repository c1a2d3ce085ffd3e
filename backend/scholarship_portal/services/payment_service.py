"""
Scholarship Portal Backend — Payment Service (Stripe)
======================================================

What:  Creates Stripe payment intents for scholarship application fees.
How:   Converts the decimal fee to integer minor units, calls
       PaymentIntent.create in a worker thread, and returns the client secret.
Who:   Called by POST /create-payment-intent.

Amount conversion:
    amount = int(fees * 100), truncated toward zero, not rounded.
    19.999 → 1999

Resilience Strategy:
    1. Tenacity retry with exponential backoff + jitter for transient
       gateway failures (connection errors, Stripe rate limiting)
    2. Circuit breaker stops calling Stripe after repeated failures
    3. Client errors from Stripe (invalid amount, declined card) are not
       retried and map to ValidationError (400)
"""

import asyncio
import logging
import math
import time
import uuid
from typing import Optional

import stripe
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from scholarship_portal.config import settings
from scholarship_portal.exceptions import (
    CircuitBreakerOpenError,
    PaymentServiceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Gateway failures worth retrying: the request may succeed a moment later
TRANSIENT_STRIPE_ERRORS = (stripe.APIConnectionError, stripe.RateLimitError)
CLIENT_STRIPE_ERRORS = (stripe.InvalidRequestError, stripe.CardError)


def fees_to_minor_units(fees: float) -> int:
    """Major currency units to integer minor units, truncating (19.999 → 1999)."""
    return int(fees * 100)


# ══════════════════════════════════════════════════════════════════════════
# Circuit Breaker Implementation
# ══════════════════════════════════════════════════════════════════════════

class CircuitBreaker:
    """
    Circuit breaker guarding the payment gateway.

    State Machine:
        CLOSED (normal operation)
            → On failure: increment failure_count
            → When failure_count >= threshold: transition to OPEN

        OPEN (rejecting all requests)
            → All calls raise CircuitBreakerOpenError immediately
            → After recovery_timeout seconds: transition to HALF_OPEN

        HALF_OPEN (testing recovery)
            → Allow ONE request through
            → On success: transition to CLOSED (reset failure_count)
            → On failure: transition back to OPEN (reset timer)

    Not thread-safe; uvicorn async workers share a single process.
    """

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"

    def __init__(self, failure_threshold: int = 5, recovery_timeout: int = 60):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.failure_count = 0
        self.state = self.CLOSED
        self.last_failure_time: Optional[float] = None

    def can_execute(self) -> bool:
        """
        Check if a request is allowed through the circuit breaker.

        Raises:
            CircuitBreakerOpenError if OPEN and the recovery timeout hasn't elapsed.
        """
        if self.state == self.CLOSED:
            return True

        if self.state == self.OPEN:
            elapsed = time.time() - (self.last_failure_time or 0)
            if elapsed >= self.recovery_timeout:
                logger.info(
                    "Circuit breaker transitioning to HALF_OPEN after %.1fs",
                    elapsed,
                )
                self.state = self.HALF_OPEN
                return True
            remaining = int(self.recovery_timeout - elapsed)
            raise CircuitBreakerOpenError(recovery_time=remaining)

        return True

    def record_success(self) -> None:
        if self.state == self.HALF_OPEN:
            logger.info("Circuit breaker transitioning to CLOSED (gateway recovered)")
        self.failure_count = 0
        self.state = self.CLOSED
        self.last_failure_time = None

    def record_failure(self) -> None:
        self.failure_count += 1
        self.last_failure_time = time.time()

        if self.state == self.HALF_OPEN:
            logger.warning("Circuit breaker returning to OPEN (test request failed)")
            self.state = self.OPEN
        elif self.failure_count >= self.failure_threshold:
            logger.warning(
                "Circuit breaker OPENING after %d consecutive failures",
                self.failure_count,
            )
            self.state = self.OPEN


# ══════════════════════════════════════════════════════════════════════════
# Payment Service
# ══════════════════════════════════════════════════════════════════════════

class PaymentService:
    """
    Stripe payment-intent delegate.

    Error Handling Chain:
        Transient failure → tenacity retries (max_attempts with backoff)
        → Retries exhausted → record circuit breaker failure → PaymentServiceError
        → Threshold reached → later calls rejected instantly (CircuitBreakerOpenError)
        Client error (InvalidRequestError, CardError) → ValidationError, no retry,
        recorded as a breaker success (a HALF_OPEN breaker closes)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        currency: Optional[str] = None,
        max_attempts: Optional[int] = None,
        min_wait: Optional[int] = None,
        max_wait: Optional[int] = None,
        failure_threshold: Optional[int] = None,
        recovery_timeout: Optional[int] = None,
    ):
        self.api_key = settings.payment_gateway_key if api_key is None else api_key
        self.currency = currency or settings.payment_currency
        self.max_attempts = max_attempts or settings.retry_max_attempts
        self.min_wait = settings.retry_min_wait if min_wait is None else min_wait
        self.max_wait = settings.retry_max_wait if max_wait is None else max_wait
        self.circuit_breaker = CircuitBreaker(
            failure_threshold=failure_threshold or settings.cb_failure_threshold,
            recovery_timeout=(
                settings.cb_recovery_timeout if recovery_timeout is None else recovery_timeout
            ),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def create_payment_intent(self, fees: float) -> str:
        """
        Create a card payment intent for `fees` and return its client secret.

        Raises:
            PaymentServiceError: Gateway not configured, or failed after retries
            CircuitBreakerOpenError: Too many recent gateway failures
            ValidationError: Fees not a finite number, or Stripe rejected the
                request (e.g. amount too small)
        """
        if not math.isfinite(fees):
            raise ValidationError(
                message="Fees must be a finite number.",
                field="fees",
                context={"fees": str(fees)},
            )

        if not self.is_configured:
            raise PaymentServiceError(
                message="Payment gateway is not configured.",
                context={"setting": "PAYMENT_GATEWAY_KEY"},
            )

        amount = fees_to_minor_units(fees)
        request_id = str(uuid.uuid4())[:8]

        self.circuit_breaker.can_execute()

        logger.info("[%s] Creating payment intent: amount=%d %s", request_id, amount, self.currency)

        try:
            intent = await self._create_with_retry(amount)
        except CLIENT_STRIPE_ERRORS as e:
            self.circuit_breaker.record_success()
            logger.warning("[%s] Payment intent rejected by gateway: %s", request_id, str(e))
            raise ValidationError(
                message=getattr(e, "user_message", None) or "The payment request was rejected.",
                field="fees",
                context={"request_id": request_id, "amount": amount},
            )
        except stripe.StripeError as e:
            self.circuit_breaker.record_failure()
            logger.error("[%s] Payment gateway error: %s", request_id, str(e))
            raise PaymentServiceError(
                message="Could not create the payment. Please try again later.",
                retry_after=self.circuit_breaker.recovery_timeout,
                context={
                    "request_id": request_id,
                    "attempts": self.max_attempts,
                    "error_type": type(e).__name__,
                },
            )

        self.circuit_breaker.record_success()
        logger.info("[%s] Payment intent %s created", request_id, intent.id)
        return intent.client_secret

    async def _create_with_retry(self, amount: int):
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(TRANSIENT_STRIPE_ERRORS),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential_jitter(
                initial=self.min_wait,
                max=self.max_wait,
                jitter=1 if self.max_wait else 0,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                # Stripe's client is blocking; keep it off the event loop
                return await asyncio.to_thread(
                    stripe.PaymentIntent.create,
                    amount=amount,
                    currency=self.currency,
                    payment_method_types=["card"],
                    api_key=self.api_key,
                )


payment_service = PaymentService()
