"""
Helpers for constructing the PaymentIntent request sent to Stripe.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = ["build_payment_intent_params"]


def build_payment_intent_params(
    *,
    amount: int,
    currency: str,
    receipt_email: Optional[str] = None,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the ``PaymentIntent.create`` parameters.

    Empty ``receipt_email`` and ``description`` values are left out so Stripe
    neither sends a receipt nor stores a blank description.
    """
    params: Dict[str, Any] = {
        "amount": amount,
        "currency": currency,
        "automatic_payment_methods": {"enabled": True},
    }
    if receipt_email:
        params["receipt_email"] = receipt_email
    if description:
        params["description"] = description
    return params
