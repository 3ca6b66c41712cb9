"""
Minimal script that uses the public API to compute payment widget options.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from payment_input import (
    ConfigError,
    EncryptedCredentials,
    InMemoryCredentialStore,
    RequestError,
    compute_runtime_options,
    encrypt_credentials,
    load_runtime_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a Stripe payment intent for a demo block")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYMENT_INPUT_* settings",
    )
    parser.add_argument("--secret-key", required=True, help="Stripe test secret key (sk_test_...)")
    parser.add_argument("--public-key", required=True, help="Stripe test publishable key (pk_test_...)")
    parser.add_argument("--amount", default="{{Price}}", help="Amount template (default: {{Price}})")
    parser.add_argument("--price", default="19.99", help="Value bound to the Price variable")
    parser.add_argument("--currency", default="EUR", help="ISO 4217 currency code (default: EUR)")
    parser.add_argument("--email", help="Receipt email address")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_runtime_config(env_file=args.env_file)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    keys = {"secretKey": args.secret_key, "publicKey": args.public_key}
    data, iv = encrypt_credentials({"live": keys, "test": keys}, config.encryption_secret)
    store = InMemoryCredentialStore(
        [EncryptedCredentials(id="demo", workspace_id="demo-workspace", data=data, iv=iv)]
    )

    options = {
        "credentialsId": "demo",
        "currency": args.currency,
        "amount": args.amount,
        "additionalInformation": {"email": args.email or "", "description": "Demo payment"},
    }
    state = {
        "workspaceId": "demo-workspace",
        "typebotsQueue": [
            {"typebot": {"variables": [{"id": "v1", "name": "Price", "value": args.price}]}}
        ],
    }

    try:
        runtime_options = asyncio.run(
            compute_runtime_options(options, state=state, credential_store=store, config=config)
        )
    except RequestError as exc:
        logging.error("Payment block rejected: %s", exc.message)
        return 1
    except Exception as exc:  # noqa: BLE001
        logging.error("Payment intent creation failed: %s", exc)
        return 1

    logging.info("Amount to display: %s", runtime_options.amount_label)
    print(json.dumps(runtime_options.as_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
