"""
Core primitives that compute payment input runtime options.
"""

from .client import (
    ClientFactory,
    PaymentIntentResult,
    PaymentProviderClient,
    StripePaymentIntentClient,
    create_stripe_client,
)
from .config import ConfigError, RuntimeConfig, load_runtime_config
from .credentials import (
    CredentialStore,
    InMemoryCredentialStore,
    JsonFileCredentialStore,
    decrypt_credentials,
    encrypt_credentials,
    get_stripe_credentials,
)
from .currency import (
    ZERO_DECIMAL_CURRENCIES,
    format_amount_label,
    is_zero_decimal_currency,
    parse_amount,
    to_minor_units,
)
from .environment import build_environment
from .errors import BadRequestError, DecryptionError, NotFoundError, RequestError
from .models import (
    AdditionalInformation,
    EncryptedCredentials,
    PaymentInputOptions,
    PaymentInputRuntimeOptions,
    SessionState,
    StripeCredentials,
    StripeKeys,
    TypebotInQueue,
    Variable,
)
from .payloads import build_payment_intent_params
from .runtime import compute_payment_input_runtime_options
from .variables import VariableInterpolator, parse_variables

__all__ = [
    "AdditionalInformation",
    "BadRequestError",
    "ClientFactory",
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
    "PaymentProviderClient",
    "RequestError",
    "RuntimeConfig",
    "SessionState",
    "StripeCredentials",
    "StripeKeys",
    "StripePaymentIntentClient",
    "TypebotInQueue",
    "Variable",
    "VariableInterpolator",
    "ZERO_DECIMAL_CURRENCIES",
    "build_environment",
    "build_payment_intent_params",
    "compute_payment_input_runtime_options",
    "create_stripe_client",
    "decrypt_credentials",
    "encrypt_credentials",
    "format_amount_label",
    "get_stripe_credentials",
    "is_zero_decimal_currency",
    "load_runtime_config",
    "parse_amount",
    "parse_variables",
    "to_minor_units",
]
