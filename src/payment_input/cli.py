"""
Command-line interface for computing payment input runtime options.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, Sequence, Tuple

import requests

from .api import compute_runtime_options
from .core.config import ConfigError, RuntimeConfig, load_runtime_config
from .core.credentials import JsonFileCredentialStore, encrypt_credentials
from .core.errors import DecryptionError, RequestError
from .core.models import (
    EncryptedCredentials,
    PaymentInputOptions,
    SessionState,
    StripeCredentials,
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _read_json(path: str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYMENT_INPUT_* settings (default: .env)",
    )
    common.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    common.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    parser = argparse.ArgumentParser(
        prog="payment-input",
        description="Compute Stripe payment widget options for a payment block",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    compute = commands.add_parser(
        "compute",
        parents=[common],
        help="Create a payment intent and print the runtime options as JSON",
    )
    compute.add_argument("--options", required=True, help="JSON file with the block options")
    compute.add_argument("--state", required=True, help="JSON file with the session state")
    compute.add_argument(
        "--credentials",
        required=True,
        help="JSON file listing encrypted credential records",
    )

    encrypt = commands.add_parser(
        "encrypt",
        parents=[common],
        help="Encrypt a Stripe credentials document into a storable record",
    )
    encrypt.add_argument(
        "--input",
        required=True,
        help="JSON file with {live: {secretKey, publicKey}, test: {...}}",
    )
    encrypt.add_argument("--id", help="Credentials id to include in the record")
    encrypt.add_argument("--workspace-id", help="Workspace id to include in the record")
    return parser


def _run_compute(args: argparse.Namespace, config: RuntimeConfig) -> int:
    try:
        options = PaymentInputOptions.from_mapping(_read_json(args.options))
        state = SessionState.from_mapping(_read_json(args.state))
        store = JsonFileCredentialStore(args.credentials)
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
        logging.error("Could not read input files: %s", exc)
        return 1

    try:
        runtime_options = asyncio.run(
            compute_runtime_options(
                options,
                state=state,
                credential_store=store,
                config=config,
                session=requests.Session(),
            )
        )
    except RequestError as exc:
        logging.error("Payment block rejected (%s): %s", exc.code, exc.message)
        return 1
    except DecryptionError as exc:
        logging.error("Could not decrypt credentials: %s", exc)
        return 1
    except Exception as exc:  # noqa: BLE001
        logging.error("Payment intent creation failed: %s", exc)
        return 1

    print(json.dumps(runtime_options.as_dict(), ensure_ascii=False))
    return 0


def _run_encrypt(args: argparse.Namespace, config: RuntimeConfig) -> int:
    try:
        document = _read_json(args.input)
        if not isinstance(document, dict):
            raise ValueError("credentials document must be a JSON object")
        StripeCredentials.from_mapping(document)
    except (OSError, ValueError) as exc:
        logging.error("Invalid credentials document: %s", exc)
        return 1

    data, iv = encrypt_credentials(document, config.encryption_secret)
    if args.id and args.workspace_id:
        record: dict[str, str] = EncryptedCredentials(
            id=args.id, workspace_id=args.workspace_id, data=data, iv=iv
        ).as_dict()
    else:
        record = {"data": data, "iv": iv}
    print(json.dumps(record))
    return 0


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_runtime_config(env_file=args.env_file, overrides=overrides)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    if args.command == "encrypt":
        return _run_encrypt(args, config)
    return _run_compute(args, config)


if __name__ == "__main__":
    sys.exit(run_cli())
