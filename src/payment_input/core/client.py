"""
Stripe client helpers for creating payment intents.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol

import requests
import stripe

from .config import DEFAULT_TIMEOUT_SECONDS
from .payloads import build_payment_intent_params

__all__ = [
    "ClientFactory",
    "PaymentIntentResult",
    "PaymentProviderClient",
    "StripePaymentIntentClient",
    "create_stripe_client",
]


@dataclass(frozen=True)
class PaymentIntentResult:
    id: Optional[str]
    client_secret: Optional[str]
    status: Optional[str]

    @classmethod
    def from_intent(cls, intent: Any) -> "PaymentIntentResult":
        return cls(
            id=getattr(intent, "id", None),
            client_secret=getattr(intent, "client_secret", None),
            status=getattr(intent, "status", None),
        )


class PaymentProviderClient(Protocol):
    async def create_payment_intent(
        self,
        *,
        amount: int,
        currency: str,
        receipt_email: Optional[str] = None,
        description: Optional[str] = None,
    ) -> PaymentIntentResult: ...


ClientFactory = Callable[[str, str], PaymentProviderClient]


class StripePaymentIntentClient:
    """
    Thin wrapper around :class:`stripe.StripeClient` bound to one secret key.

    Requests go through ``stripe.RequestsClient`` so callers can share a
    :class:`requests.Session`. The SDK call blocks, so it runs in a worker
    thread to keep the event loop free.
    """

    def __init__(
        self,
        secret_key: str,
        api_version: str,
        *,
        session: Optional[requests.Session] = None,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.api_version = api_version
        self.session = session or requests.Session()
        self._stripe = stripe.StripeClient(
            secret_key,
            stripe_version=api_version,
            http_client=stripe.RequestsClient(timeout=timeout_seconds, session=self.session),
        )

    def _create(self, params: dict[str, Any]) -> PaymentIntentResult:
        intent = self._stripe.v1.payment_intents.create(params)
        return PaymentIntentResult.from_intent(intent)

    async def create_payment_intent(
        self,
        *,
        amount: int,
        currency: str,
        receipt_email: Optional[str] = None,
        description: Optional[str] = None,
    ) -> PaymentIntentResult:
        params = build_payment_intent_params(
            amount=amount,
            currency=currency,
            receipt_email=receipt_email,
            description=description,
        )
        logging.info("Creating Stripe payment intent for %s %s", amount, currency)
        result = await asyncio.to_thread(self._create, params)
        logging.info("Stripe payment intent %s created with status %s", result.id, result.status)
        return result


def create_stripe_client(
    *,
    session: Optional[requests.Session] = None,
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
) -> ClientFactory:
    """
    Return a factory building :class:`StripePaymentIntentClient` instances
    that share ``session`` and ``timeout_seconds``.
    """

    def factory(secret_key: str, api_version: str) -> PaymentProviderClient:
        return StripePaymentIntentClient(
            secret_key,
            api_version,
            session=session,
            timeout_seconds=timeout_seconds,
        )

    return factory
