"""
Credential lookup and decryption for Stripe payment blocks.

Stored records keep the credential JSON encrypted with AES-256-CBC (PKCS#7
padding). Both ``data`` and ``iv`` are base64 strings and the workspace
encryption secret is used directly as the 32-byte key.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import secrets
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol, Tuple

from Crypto.Cipher import AES
from Crypto.Util.Padding import pad, unpad

from .errors import DecryptionError
from .models import EncryptedCredentials, StripeCredentials

__all__ = [
    "CredentialStore",
    "InMemoryCredentialStore",
    "JsonFileCredentialStore",
    "decrypt_credentials",
    "encrypt_credentials",
    "get_stripe_credentials",
]

_IV_LENGTH = 16


class CredentialStore(Protocol):
    async def get(self, credentials_id: str, workspace_id: str) -> Optional[EncryptedCredentials]: ...


class InMemoryCredentialStore:
    def __init__(self, records: Iterable[EncryptedCredentials] = ()) -> None:
        self._records: Dict[Tuple[str, str], EncryptedCredentials] = {}
        for record in records:
            self.add(record)

    def add(self, record: EncryptedCredentials) -> None:
        self._records[(record.workspace_id, record.id)] = record

    async def get(self, credentials_id: str, workspace_id: str) -> Optional[EncryptedCredentials]:
        return self._records.get((workspace_id, credentials_id))


class JsonFileCredentialStore(InMemoryCredentialStore):
    """
    Credential store backed by a JSON file holding a list of records.

    Each record uses the engine's field names: ``id``, ``workspaceId``,
    ``type``, ``data`` and ``iv``.
    """

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        raw = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError(f"{path} must contain a JSON list of credential records")
        super().__init__(EncryptedCredentials.from_mapping(item) for item in raw)


def _key_bytes(secret: str) -> bytes:
    key = secret.encode("utf-8")
    if len(key) != 32:
        raise DecryptionError("Encryption secret must be exactly 32 bytes")
    return key


def encrypt_credentials(
    data: Mapping[str, Any],
    secret: str,
    *,
    iv: Optional[bytes] = None,
) -> Tuple[str, str]:
    """Encrypt a credential document, returning ``(data, iv)`` as base64."""
    iv_bytes = iv if iv is not None else secrets.token_bytes(_IV_LENGTH)
    cipher = AES.new(_key_bytes(secret), AES.MODE_CBC, iv=iv_bytes)
    plaintext = json.dumps(data, separators=(",", ":")).encode("utf-8")
    ciphertext = cipher.encrypt(pad(plaintext, AES.block_size))
    return (
        base64.b64encode(ciphertext).decode("ascii"),
        base64.b64encode(iv_bytes).decode("ascii"),
    )


def decrypt_credentials(data: str, iv: str, secret: str) -> Dict[str, Any]:
    """
    Decrypt a stored credential payload into its JSON document.

    Any failure (bad base64, wrong key, corrupt padding, invalid JSON) is
    reported as :class:`DecryptionError`.
    """
    try:
        iv_bytes = base64.b64decode(iv, validate=True)
        ciphertext = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecryptionError("Credential payload is not valid base64") from exc
    if len(iv_bytes) != _IV_LENGTH:
        raise DecryptionError(f"Credential IV must be {_IV_LENGTH} bytes")

    cipher = AES.new(_key_bytes(secret), AES.MODE_CBC, iv=iv_bytes)
    try:
        plaintext = unpad(cipher.decrypt(ciphertext), AES.block_size)
    except ValueError as exc:
        raise DecryptionError("Could not decrypt credentials") from exc

    try:
        document = json.loads(plaintext.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecryptionError("Decrypted credentials are not valid JSON") from exc
    if not isinstance(document, dict):
        raise DecryptionError("Decrypted credentials must be a JSON object")
    return document


async def get_stripe_credentials(
    store: CredentialStore,
    credentials_id: str,
    workspace_id: str,
    *,
    encryption_secret: str,
) -> Optional[StripeCredentials]:
    credentials = await store.get(credentials_id, workspace_id)
    if credentials is None:
        logging.info("No credentials %s in workspace %s", credentials_id, workspace_id)
        return None
    document = decrypt_credentials(credentials.data, credentials.iv, encryption_secret)
    return StripeCredentials.from_mapping(document)
