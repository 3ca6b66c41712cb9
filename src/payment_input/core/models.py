"""
Value objects exchanged with the flow engine.

Every type accepts the engine's camelCase JSON through ``from_mapping`` so the
same objects can be built from a stored block, a session snapshot or a test.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

__all__ = [
    "AdditionalInformation",
    "EncryptedCredentials",
    "PaymentInputOptions",
    "PaymentInputRuntimeOptions",
    "SessionState",
    "StripeCredentials",
    "StripeKeys",
    "TypebotInQueue",
    "Variable",
    "VariableValue",
]

VariableValue = Union[str, List[Optional[str]], None]


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class AdditionalInformation:
    email: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "AdditionalInformation":
        return cls(
            email=_optional_str(values.get("email")),
            description=_optional_str(values.get("description")),
        )


@dataclass(frozen=True)
class PaymentInputOptions:
    """Configuration attached to a payment block."""

    credentials_id: Optional[str] = None
    currency: Optional[str] = None
    amount: Optional[str] = None
    additional_information: Optional[AdditionalInformation] = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "PaymentInputOptions":
        additional = values.get("additionalInformation")
        return cls(
            credentials_id=_optional_str(values.get("credentialsId")) or None,
            currency=_optional_str(values.get("currency")) or None,
            amount=_optional_str(values.get("amount")),
            additional_information=(
                AdditionalInformation.from_mapping(additional) if additional else None
            ),
        )


@dataclass(frozen=True)
class Variable:
    id: str
    name: str
    value: VariableValue = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "Variable":
        value = values.get("value")
        if isinstance(value, (list, tuple)):
            value = [None if item is None else str(item) for item in value]
        elif value is not None:
            value = str(value)
        return cls(id=str(values["id"]), name=str(values["name"]), value=value)


@dataclass(frozen=True)
class TypebotInQueue:
    result_id: Optional[str] = None
    variables: Tuple[Variable, ...] = ()

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "TypebotInQueue":
        typebot = values.get("typebot") or {}
        return cls(
            result_id=_optional_str(values.get("resultId")) or None,
            variables=tuple(Variable.from_mapping(v) for v in typebot.get("variables", ())),
        )


@dataclass(frozen=True)
class SessionState:
    workspace_id: str
    typebots_queue: Tuple[TypebotInQueue, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.typebots_queue:
            raise ValueError("SessionState.typebots_queue must contain at least one typebot")

    @property
    def current(self) -> TypebotInQueue:
        return self.typebots_queue[0]

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "SessionState":
        return cls(
            workspace_id=str(values["workspaceId"]),
            typebots_queue=tuple(
                TypebotInQueue.from_mapping(item) for item in values.get("typebotsQueue", ())
            ),
        )


@dataclass(frozen=True)
class EncryptedCredentials:
    id: str
    workspace_id: str
    data: str
    iv: str
    type: str = "stripe"

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "EncryptedCredentials":
        return cls(
            id=str(values["id"]),
            workspace_id=str(values["workspaceId"]),
            data=str(values["data"]),
            iv=str(values["iv"]),
            type=str(values.get("type", "stripe")),
        )

    def as_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "workspaceId": self.workspace_id,
            "type": self.type,
            "data": self.data,
            "iv": self.iv,
        }


@dataclass(frozen=True)
class StripeKeys:
    secret_key: Optional[str] = None
    public_key: Optional[str] = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "StripeKeys":
        return cls(
            secret_key=_optional_str(values.get("secretKey")) or None,
            public_key=_optional_str(values.get("publicKey")) or None,
        )


@dataclass(frozen=True)
class StripeCredentials:
    """Decrypted Stripe keys; ``live`` is mandatory, ``test`` may be partial."""

    live: StripeKeys
    test: Optional[StripeKeys] = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "StripeCredentials":
        live = StripeKeys.from_mapping(values.get("live") or {})
        if not live.secret_key or not live.public_key:
            raise ValueError("Stripe credentials must include live secretKey and publicKey")
        test = values.get("test")
        return cls(live=live, test=StripeKeys.from_mapping(test) if test else None)

    def secret_key_for(self, is_preview: bool) -> str:
        if is_preview and self.test is not None and self.test.secret_key:
            return self.test.secret_key
        return self.live.secret_key  # type: ignore[return-value]

    def public_key_for(self, is_preview: bool) -> str:
        if is_preview and self.test is not None and self.test.public_key:
            return self.test.public_key
        return self.live.public_key  # type: ignore[return-value]


@dataclass(frozen=True)
class PaymentInputRuntimeOptions:
    payment_intent_secret: str
    public_key: str
    amount_label: str

    def as_dict(self) -> Dict[str, str]:
        return {
            "paymentIntentSecret": self.payment_intent_secret,
            "publicKey": self.public_key,
            "amountLabel": self.amount_label,
        }
