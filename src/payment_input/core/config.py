"""
Configuration objects and helpers for the payment input runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from babel import Locale, UnknownLocaleError

from .environment import build_environment

__all__ = [
    "ConfigError",
    "DEFAULT_CURRENCY",
    "DEFAULT_LOCALE",
    "DEFAULT_STRIPE_API_VERSION",
    "RuntimeConfig",
    "load_runtime_config",
]

DEFAULT_CURRENCY = "USD"
DEFAULT_LOCALE = "en_US"
DEFAULT_STRIPE_API_VERSION = "2024-09-30.acacia"
DEFAULT_TIMEOUT_SECONDS = 30

ENCRYPTION_SECRET_LENGTH = 32

_PARAMETER_TO_ENV_KEY = {
    "encryption_secret": "PAYMENT_INPUT_ENCRYPTION_SECRET",
    "default_currency": "PAYMENT_INPUT_DEFAULT_CURRENCY",
    "default_locale": "PAYMENT_INPUT_DEFAULT_LOCALE",
    "stripe_api_version": "PAYMENT_INPUT_STRIPE_API_VERSION",
    "timeout_seconds": "PAYMENT_INPUT_TIMEOUT_SECONDS",
}


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


def _collect_parameter_overrides(explicit: Mapping[str, Any]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:  # pragma: no cover - callers pass known names only
            raise TypeError(f"Unknown runtime parameter '{key}'") from exc
        overrides[env_key] = str(value)
    return overrides


def _normalize_secret(raw_secret: Optional[str]) -> str:
    if raw_secret is None or not raw_secret.strip():
        raise ConfigError("PAYMENT_INPUT_ENCRYPTION_SECRET must be provided")
    secret = raw_secret.strip()
    if len(secret.encode("utf-8")) != ENCRYPTION_SECRET_LENGTH:
        raise ConfigError(
            f"PAYMENT_INPUT_ENCRYPTION_SECRET must be exactly {ENCRYPTION_SECRET_LENGTH} bytes"
        )
    return secret


def _normalize_currency(raw_currency: str) -> str:
    currency = raw_currency.strip().upper()
    if len(currency) != 3 or not currency.isalpha():
        raise ConfigError(
            f"PAYMENT_INPUT_DEFAULT_CURRENCY must be a 3-letter ISO 4217 code, got '{raw_currency}'"
        )
    return currency


def _normalize_locale(raw_locale: str) -> str:
    value = raw_locale.strip().replace("-", "_")
    try:
        Locale.parse(value)
    except (ValueError, UnknownLocaleError) as exc:
        raise ConfigError(f"PAYMENT_INPUT_DEFAULT_LOCALE '{raw_locale}' is not a known locale") from exc
    return value


def _positive_int(raw_value: str, field_name: str) -> int:
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ConfigError(f"{field_name} must be an integer, got '{raw_value}'") from exc
    if value <= 0:
        raise ConfigError(f"{field_name} must be greater than zero")
    return value


@dataclass(frozen=True)
class RuntimeConfig:
    encryption_secret: str
    default_currency: str = DEFAULT_CURRENCY
    default_locale: str = DEFAULT_LOCALE
    stripe_api_version: str = DEFAULT_STRIPE_API_VERSION
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS

    def __repr__(self) -> str:
        return (
            f"RuntimeConfig(encryption_secret='***', default_currency={self.default_currency!r}, "
            f"default_locale={self.default_locale!r}, stripe_api_version={self.stripe_api_version!r}, "
            f"timeout_seconds={self.timeout_seconds!r})"
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "RuntimeConfig":
        encryption_secret = _normalize_secret(values.get("PAYMENT_INPUT_ENCRYPTION_SECRET"))
        default_currency = _normalize_currency(
            values.get("PAYMENT_INPUT_DEFAULT_CURRENCY", DEFAULT_CURRENCY)
        )
        default_locale = _normalize_locale(
            values.get("PAYMENT_INPUT_DEFAULT_LOCALE", DEFAULT_LOCALE)
        )

        stripe_api_version = values.get(
            "PAYMENT_INPUT_STRIPE_API_VERSION", DEFAULT_STRIPE_API_VERSION
        ).strip()
        if not stripe_api_version:
            raise ConfigError("PAYMENT_INPUT_STRIPE_API_VERSION must not be empty")

        timeout_seconds = _positive_int(
            values.get("PAYMENT_INPUT_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS)),
            "PAYMENT_INPUT_TIMEOUT_SECONDS",
        )

        return cls(
            encryption_secret=encryption_secret,
            default_currency=default_currency,
            default_locale=default_locale,
            stripe_api_version=stripe_api_version,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        encryption_secret: Optional[str] = None,
        default_currency: Optional[str] = None,
        default_locale: Optional[str] = None,
        stripe_api_version: Optional[str] = None,
        timeout_seconds: Optional[int | str] = None,
    ) -> "RuntimeConfig":
        parameter_overrides = _collect_parameter_overrides(
            {
                "encryption_secret": encryption_secret,
                "default_currency": default_currency,
                "default_locale": default_locale,
                "stripe_api_version": stripe_api_version,
                "timeout_seconds": timeout_seconds,
            }
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        variables = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(variables)


def load_runtime_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    encryption_secret: Optional[str] = None,
    default_currency: Optional[str] = None,
    default_locale: Optional[str] = None,
    stripe_api_version: Optional[str] = None,
    timeout_seconds: Optional[int | str] = None,
) -> RuntimeConfig:
    """
    Convenience wrapper that mirrors :meth:`RuntimeConfig.from_env`.

    Settings can come from environment variables, a ``.env`` file, keyword
    arguments, or any combination of the three. Keyword arguments win.
    """
    return RuntimeConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        encryption_secret=encryption_secret,
        default_currency=default_currency,
        default_locale=default_locale,
        stripe_api_version=stripe_api_version,
        timeout_seconds=timeout_seconds,
    )
