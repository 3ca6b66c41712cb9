"""
Public, high-level helpers for computing payment input runtime options.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

import requests

from .core.client import ClientFactory, create_stripe_client
from .core.config import ConfigError, RuntimeConfig, load_runtime_config
from .core.credentials import CredentialStore
from .core.models import PaymentInputOptions, PaymentInputRuntimeOptions, SessionState
from .core.runtime import compute_payment_input_runtime_options
from .core.variables import VariableInterpolator, parse_variables

__all__ = [
    "ConfigError",
    "RuntimeConfig",
    "compute_runtime_options",
    "load_runtime_config",
]


def _as_options(
    options: Union[PaymentInputOptions, Mapping[str, Any], None],
) -> Optional[PaymentInputOptions]:
    if options is None or isinstance(options, PaymentInputOptions):
        return options
    return PaymentInputOptions.from_mapping(options)


def _as_state(state: Union[SessionState, Mapping[str, Any]]) -> SessionState:
    if isinstance(state, SessionState):
        return state
    return SessionState.from_mapping(state)


async def compute_runtime_options(
    options: Union[PaymentInputOptions, Mapping[str, Any], None],
    *,
    state: Union[SessionState, Mapping[str, Any]],
    credential_store: CredentialStore,
    session_store: Any = None,
    config: Optional[RuntimeConfig] = None,
    session: Optional[requests.Session] = None,
    client_factory: Optional[ClientFactory] = None,
    interpolator: VariableInterpolator = parse_variables,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
) -> PaymentInputRuntimeOptions:
    """
    Compute the payment widget options for a block and session.

    ``options`` and ``state`` may be the dataclasses or the engine's raw
    camelCase mappings. When ``config`` is omitted it is loaded from the
    environment, ``env_file`` and ``overrides``.
    """
    if config is not None:
        if overrides or base is not None:
            raise ValueError(
                "Provide either a pre-built RuntimeConfig or environment overrides, not both."
            )
        cfg = config
    else:
        cfg = load_runtime_config(env_file=env_file, overrides=overrides, base=base)

    if client_factory is not None and session is not None:
        raise ValueError("Provide either a client_factory or a requests session, not both.")
    factory = client_factory or create_stripe_client(
        session=session, timeout_seconds=cfg.timeout_seconds
    )

    return await compute_payment_input_runtime_options(
        _as_options(options),
        session_store=session_store,
        state=_as_state(state),
        config=cfg,
        credential_store=credential_store,
        client_factory=factory,
        interpolator=interpolator,
    )
