"""
Runtime options for payment input blocks.

Resolves the block's Stripe credentials, creates a payment intent for the
interpolated amount and returns what the chat widget needs to render the
payment form.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .client import ClientFactory, create_stripe_client
from .config import RuntimeConfig
from .credentials import CredentialStore, get_stripe_credentials
from .currency import format_amount_label, to_minor_units
from .errors import BadRequestError, NotFoundError
from .models import PaymentInputOptions, PaymentInputRuntimeOptions, SessionState
from .variables import VariableInterpolator, parse_variables

__all__ = ["compute_payment_input_runtime_options"]


async def compute_payment_input_runtime_options(
    options: Optional[PaymentInputOptions],
    *,
    session_store: Any,
    state: SessionState,
    config: RuntimeConfig,
    credential_store: CredentialStore,
    client_factory: Optional[ClientFactory] = None,
    interpolator: VariableInterpolator = parse_variables,
) -> PaymentInputRuntimeOptions:
    """
    Create a Stripe payment intent for a payment block and describe how to
    display it.

    Preview sessions (no ``result_id``) use the test keys when a test secret
    key is configured. Raises :class:`BadRequestError` or
    :class:`NotFoundError`; decryption and Stripe errors propagate unchanged.
    """
    current = state.current
    variables = current.variables
    is_preview = not current.result_id

    if options is None or not options.credentials_id:
        raise BadRequestError("Missing credentialsId")

    stripe_keys = await get_stripe_credentials(
        credential_store,
        options.credentials_id,
        state.workspace_id,
        encryption_secret=config.encryption_secret,
    )
    if stripe_keys is None:
        raise NotFoundError("Credentials not found")

    factory = client_factory or create_stripe_client(timeout_seconds=config.timeout_seconds)
    client = factory(stripe_keys.secret_key_for(is_preview), config.stripe_api_version)

    currency = options.currency or config.default_currency
    try:
        amount = to_minor_units(
            interpolator(options.amount, variables=variables, session_store=session_store),
            currency,
        )
    except ValueError as exc:
        raise BadRequestError(
            "Could not parse amount, make sure your block is configured correctly"
        ) from exc

    additional = options.additional_information
    receipt_email = interpolator(
        additional.email if additional else None,
        variables=variables,
        session_store=session_store,
    )
    description = interpolator(
        additional.description if additional else None,
        variables=variables,
        session_store=session_store,
    )

    logging.info(
        "Computing payment runtime options (preview=%s, currency=%s)", is_preview, currency
    )
    payment_intent = await client.create_payment_intent(
        amount=amount,
        currency=currency,
        receipt_email=receipt_email or None,
        description=description or None,
    )
    if not payment_intent.client_secret:
        raise BadRequestError("Could not create payment intent")

    return PaymentInputRuntimeOptions(
        payment_intent_secret=payment_intent.client_secret,
        public_key=stripe_keys.public_key_for(is_preview),
        amount_label=format_amount_label(
            amount, currency, default_locale=config.default_locale
        ),
    )
