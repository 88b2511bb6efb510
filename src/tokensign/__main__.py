"""tokensign command line.

Usage:
    tokensign sign '{"user": 42}'        Sign a JSON payload (stdin when omitted)
    tokensign verify TOKEN --max-age 60  Verify a token and print its payload
    tokensign serve                      Start the HTTP API
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import timedelta

from tokensign.config import Settings, get_settings
from tokensign.errors import ErrorKind, TokenError
from tokensign.logging_setup import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
_EXIT_CODES: dict[ErrorKind, int] = {
    ErrorKind.BAD_SIGNATURE: 1,
    ErrorKind.SIGNATURE_EXPIRED: 2,
    ErrorKind.DECODING: 3,
    ErrorKind.ENCODING: 1,
    ErrorKind.INVALID_KEY: 1,
    ErrorKind.INVALID_CONFIG: 1,
}


def _read_payload(raw: str | None) -> object:
    text = raw if raw is not None else sys.stdin.read()
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Payload is not valid JSON: {exc}") from exc


def cmd_sign(args: argparse.Namespace, settings: Settings) -> int:
    signer = settings.build_signer(args.key)
    print(signer.sign(_read_payload(args.payload)))
    return EXIT_OK


def cmd_verify(args: argparse.Namespace, settings: Settings) -> int:
    signer = settings.build_signer(args.key)
    if args.max_age is None:
        max_age = settings.max_age
    else:
        max_age = timedelta(seconds=args.max_age)
    payload = signer.verify(args.token.strip(), max_age=max_age)
    print(json.dumps(payload))
    return EXIT_OK


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    from tokensign.api.serve import run_api_server

    run_api_server(
        host=args.host if args.host is not None else settings.api_host,
        port=args.port if args.port is not None else settings.api_port,
        key=args.key,
        settings=settings,
    )
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tokensign",
        description="Sign and verify tamper-evident, time-limited tokens",
    )
    parser.add_argument("--key", help="Secret key (default: TOKENSIGN_SECRET_KEY)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    sign_p = sub.add_parser("sign", help="Sign a JSON payload")
    sign_p.add_argument("payload", nargs="?", help="JSON payload; read from stdin if omitted")
    sign_p.set_defaults(func=cmd_sign)

    verify_p = sub.add_parser("verify", help="Verify a token and print its payload")
    verify_p.add_argument("token")
    verify_p.add_argument(
        "--max-age",
        type=float,
        default=None,
        help="Maximum token age in seconds; 0 disables expiry",
    )
    verify_p.set_defaults(func=cmd_verify)

    serve_p = sub.add_parser("serve", help="Start the HTTP API")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)
    serve_p.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(level=args.log_level or settings.log_level)

    try:
        return args.func(args, settings)
    except TokenError as exc:
        logger.error("%s: %s", exc.kind.value, exc)
        return _EXIT_CODES.get(exc.kind, 1)


if __name__ == "__main__":
    sys.exit(main())
