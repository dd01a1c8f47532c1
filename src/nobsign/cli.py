"""CLI entry point: sign and verify tokens from the shell."""

import argparse
import json
import sys

import structlog

from nobsign.config import settings
from nobsign.exceptions import SignerError
from nobsign.logging_config import setup_logging
from nobsign.serializer import Serializer, TimedSerializer
from nobsign.signer import Signer
from nobsign.timestamp import TimestampSigner

logger = structlog.get_logger()


def _add_expiry_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--timestamp", action="store_true",
        help="Expect an embedded timestamp (max age defaults to NOBSIGN_DEFAULT_MAX_AGE)",
    )
    parser.add_argument(
        "--max-age", type=int, default=None,
        help="Reject timestamped tokens older than N seconds (implies --timestamp)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nobsign", description="Sign and verify tokens")
    parser.add_argument(
        "--secret",
        help="Signing secret (defaults to NOBSIGN_SECRET_KEY)",
    )
    parser.add_argument(
        "--digest", default=None,
        help="HMAC digest (defaults to NOBSIGN_DIGEST_METHOD, sha1)",
    )
    parser.add_argument(
        "--log-level", type=str.upper, default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("sign", help="Sign a string value")
    p.add_argument("value")
    p.add_argument("--timestamp", action="store_true", help="Embed the signing time")

    p = sub.add_parser("unsign", help="Verify a token and print its value")
    p.add_argument("token")
    _add_expiry_arguments(p)

    p = sub.add_parser("dumps", help="Sign a JSON document")
    p.add_argument("document")
    p.add_argument("--timestamp", action="store_true", help="Embed the signing time")

    p = sub.add_parser("loads", help="Verify a token and print its JSON document")
    p.add_argument("token")
    _add_expiry_arguments(p)
    return parser


def _resolve_max_age(args: argparse.Namespace) -> int | None:
    """None means the token carries no timestamp."""
    if args.max_age is not None:
        return args.max_age
    if args.timestamp:
        return settings.default_max_age
    return None


def run(args: argparse.Namespace) -> str:
    secret = args.secret or settings.secret_key.get_secret_value()
    if not secret:
        raise ValueError("No secret given: pass --secret or set NOBSIGN_SECRET_KEY")
    options = {"digest_method": args.digest or settings.digest_method, "salt": settings.salt}

    if args.command == "sign":
        signer_cls = TimestampSigner if args.timestamp else Signer
        return signer_cls(secret, **options).sign(args.value)

    if args.command == "unsign":
        max_age = _resolve_max_age(args)
        if max_age is None:
            return Signer(secret, **options).unsign(args.token)
        return TimestampSigner(secret, **options).unsign(args.token, max_age)

    if args.command == "dumps":
        try:
            document = json.loads(args.document)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON document: {exc}") from exc
        serializer_cls = TimedSerializer if args.timestamp else Serializer
        return serializer_cls(secret, **options).dumps(document)

    max_age = _resolve_max_age(args)
    if max_age is None:
        document = Serializer(secret, **options).loads(args.token)
    else:
        document = TimedSerializer(secret, **options).loads(args.token, max_age)
    return json.dumps(document)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        output = run(args)
    except SignerError as exc:
        logger.warning(
            "token_rejected",
            command=args.command,
            error=type(exc).__name__,
            reason=exc.message,
        )
        return 1
    except ValueError as exc:
        logger.error("invalid_arguments", command=args.command, reason=str(exc))
        return 2

    event = "token_signed" if args.command in ("sign", "dumps") else "token_verified"
    logger.info(event, command=args.command)
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
