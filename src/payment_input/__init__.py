"""
Public facade for the payment input runtime package.

The most useful pieces are re-exported so integrators can
``from payment_input import ...`` without navigating the package.
"""

from .api import compute_runtime_options
from .core import (
    BadRequestError,
    ConfigError,
    CredentialStore,
    DecryptionError,
    EncryptedCredentials,
    InMemoryCredentialStore,
    JsonFileCredentialStore,
    NotFoundError,
    PaymentInputOptions,
    PaymentInputRuntimeOptions,
    PaymentIntentResult,
    RequestError,
    RuntimeConfig,
    SessionState,
    StripeCredentials,
    StripePaymentIntentClient,
    compute_payment_input_runtime_options,
    create_stripe_client,
    decrypt_credentials,
    encrypt_credentials,
    format_amount_label,
    is_zero_decimal_currency,
    load_runtime_config,
    parse_variables,
)

__all__ = (
    "BadRequestError",
    "ConfigError",
    "CredentialStore",
    "DecryptionError",
    "EncryptedCredentials",
    "InMemoryCredentialStore",
    "JsonFileCredentialStore",
    "NotFoundError",
    "PaymentInputOptions",
    "PaymentInputRuntimeOptions",
    "PaymentIntentResult",
    "RequestError",
    "RuntimeConfig",
    "SessionState",
    "StripeCredentials",
    "StripePaymentIntentClient",
    "compute_payment_input_runtime_options",
    "compute_runtime_options",
    "create_stripe_client",
    "decrypt_credentials",
    "encrypt_credentials",
    "format_amount_label",
    "is_zero_decimal_currency",
    "load_runtime_config",
    "parse_variables",
)
