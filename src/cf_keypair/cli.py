"""Command-line interface for generating key pairs and invoking the handler."""

import argparse
import json
import sys

import cf_keypair

from .constants import DEFAULT_KEY_TYPE, KEY_TYPES, SUCCESS
from .core import lambda_handler
from .keys import generate_key_pair
from .memory_store import MemorySecretStore


def _print_payload(_url: str, outcome, _timeout: float) -> None:
    print(json.dumps(outcome.to_payload(), indent=2))


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run the selected command.

    Args:
        argv: Optional list of command-line arguments.

    Returns:
        int: ``0`` on success, ``1`` when the invocation reports FAILED.
    """

    parser = argparse.ArgumentParser(prog="cf-keypair")
    parser.add_argument("--version", action="version", version=cf_keypair.__version__)
    sub = parser.add_subparsers(dest="cmd", required=True)
    g = sub.add_parser("generate", help="print a new public and private key")
    g.add_argument("--key-type", choices=KEY_TYPES, default=DEFAULT_KEY_TYPE)

    i = sub.add_parser("invoke", help="run the Lambda handler on an event file")
    i.add_argument("event", help="path to a JSON custom resource event, or -")
    i.add_argument(
        "--dry-run",
        action="store_true",
        help="use an in-memory store and print the response instead of sending it",
    )

    args = parser.parse_args(argv)
    if args.cmd == "generate":
        public_pem, private_pem = generate_key_pair(args.key_type)
        sys.stdout.write(public_pem)
        sys.stdout.write(private_pem)
        return 0

    try:
        if args.event == "-":
            event = json.load(sys.stdin)
        else:
            with open(args.event, encoding="utf-8") as fh:
                event = json.load(fh)
    except (OSError, ValueError) as exc:
        parser.error(f"cannot read event {args.event}: {exc}")
    if args.dry_run:
        payload = lambda_handler(
            event, None, store=MemorySecretStore(), send=_print_payload
        )
    else:
        payload = lambda_handler(event, None)
        print(payload["Status"])
    return 0 if payload["Status"] == SUCCESS else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
