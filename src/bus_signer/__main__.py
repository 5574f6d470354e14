"""Entrypoint: python -m bus_signer"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from bus_signer.application.exceptions import AppError, ValidationError
from bus_signer.config import settings
from bus_signer.domain.entities.message import Message
from bus_signer.infrastructure.bus.serializer import deserialize_signed, serialize_signed
from bus_signer.infrastructure.crypto.verifier import verify
from bus_signer.services.signing_service import sign_message

logger = logging.getLogger("bus_signer")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bus_signer",
        description="Sign and verify bus messages",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.LOG_LEVEL.upper(),
        help="Logging level",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    sign = commands.add_parser("sign", help="Sign a message and print the signed JSON")
    sign.add_argument("--topic", required=True)
    sign.add_argument("--sequence", type=int, required=True, help="Message counter ('i' on the wire)")
    payload = sign.add_mutually_exclusive_group()
    payload.add_argument("--payload", default=None, metavar="JSON", help="Payload as a JSON object")
    payload.add_argument("--payload-file", default=None, metavar="FILE", help="File holding the payload JSON")
    sign.add_argument("--cert", default=settings.CERT_PATH, metavar="FILE", help="PEM certificate file")
    sign.add_argument("--key", default=settings.KEY_PATH, metavar="FILE", help="PEM private key file")

    check = commands.add_parser("verify", help="Verify a signed message")
    check.add_argument("file", metavar="FILE", help="Signed message JSON, '-' for stdin")

    return parser


def _read_payload(args: argparse.Namespace) -> dict[str, Any]:
    if args.payload_file:
        try:
            with open(args.payload_file, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as exc:
            raise ValidationError(f"Cannot read payload file '{args.payload_file}': {exc}") from exc
    else:
        raw = args.payload or "{}"

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Payload is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValidationError("Payload must be a JSON object")
    return payload


def _sign(args: argparse.Namespace) -> int:
    if not args.cert or not args.key:
        raise ValidationError("Both a certificate and a key file are required (--cert/--key)")

    message = Message.create(args.topic, _read_payload(args), args.sequence)
    signed = sign_message(message, args.cert, args.key, settings.key_password_bytes).run()
    sys.stdout.write(serialize_signed(signed).decode("utf-8") + "\n")
    return 0


def _verify(args: argparse.Namespace) -> int:
    if args.file == "-":
        raw = sys.stdin.read()
    else:
        try:
            with open(args.file, "rb") as f:
                raw = f.read()
        except OSError as exc:
            raise ValidationError(f"Cannot read '{args.file}': {exc}") from exc

    signed = deserialize_signed(raw)
    if verify(signed):
        logger.info("Signature OK for message %s", signed.id)
        return 0
    logger.error("Signature INVALID for message %s", signed.id)
    return 1


def main(argv: list[str] | None = None) -> int:
    args = create_parser().parse_args(argv)
    # argparse does not check defaults against choices
    if args.log_level not in LOG_LEVELS:
        sys.stderr.write(
            f"bus_signer: invalid log level {args.log_level!r}, "
            f"expected one of {', '.join(LOG_LEVELS)}\n"
        )
        return 1
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    handlers = {"sign": _sign, "verify": _verify}
    try:
        return handlers[args.command](args)
    except AppError as exc:
        logger.error("%s failed: %s", args.command, exc.detail)
        return 1


if __name__ == "__main__":
    sys.exit(main())
