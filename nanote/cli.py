"""Command-line interface for the Nanote encoder.

The CLI is a thin façade over :class:`nanote.engine.Nanote`: it prints amounts
to paste into a wallet and decodes amounts copied from a block explorer. It
never talks to a node.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .amount import int_to_digits
from .charsets import format_catalog_table
from .config import ConfigurationError, load_engine_config, set_default_config_path
from .engine import Nanote
from .model import Failure

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class CLIError(RuntimeError):
    """Raised when CLI arguments are invalid or an operation fails."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Nanote: send notes with Nano amounts")
    parser.add_argument("--config", default=None, help="Path to a YAML config file")
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=None,
        help="Log the selected charset and failure reasons",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode_parser = subparsers.add_parser("encode", help="encode a note as a Nano amount")
    encode_parser.add_argument("message", help="Text to encode")
    encode_parser.add_argument(
        "--raw",
        action="store_true",
        help="Print the amount in raw units (no decimal point)",
    )

    decode_parser = subparsers.add_parser("decode", help="decode a Nano amount into a note")
    decode_parser.add_argument("amount", help="Amount to decode")
    decode_parser.add_argument(
        "--raw",
        action="store_true",
        help="Treat the amount as raw units (no decimal point)",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="show the value, charset index and checksum inside an amount"
    )
    inspect_parser.add_argument("amount", help="Amount to inspect")
    inspect_parser.add_argument("--raw", action="store_true", help="Amount is in raw units")

    charsets_parser = subparsers.add_parser("charsets", help="print the charset catalog")
    charsets_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Only print the first N charsets",
    )

    shortest_parser = subparsers.add_parser(
        "shortest-charset", help="print the index of the smallest charset covering a note"
    )
    shortest_parser.add_argument("message", help="Text to analyse")

    checksum_parser = subparsers.add_parser(
        "checksum", help="compute the checksum digit for a digit string"
    )
    checksum_parser.add_argument("digits", help="Decimal digits")

    return parser


def _engine_from_args(args: argparse.Namespace) -> Nanote:
    if args.config:
        set_default_config_path(args.config)
    overrides = {"verbose": True} if args.verbose else None
    config = load_engine_config(overrides=overrides)
    return Nanote.from_config(config)


def _unwrap(result: str | Failure, action: str) -> str:
    if isinstance(result, Failure):
        raise CLIError(f"failed to {action}: {result}")
    return result


def cmd_encode(engine: Nanote, args: argparse.Namespace) -> None:
    if args.raw:
        print(_unwrap(engine.encode_raw(args.message), "encode"))
    else:
        print(_unwrap(engine.encode(args.message), "encode"))


def cmd_decode(engine: Nanote, args: argparse.Namespace) -> None:
    if args.raw:
        print(_unwrap(engine.decode_raw(args.amount), "decode"))
    else:
        print(_unwrap(engine.decode(args.amount), "decode"))


def cmd_inspect(engine: Nanote, args: argparse.Namespace) -> None:
    result = engine.inspect(args.amount, raw=args.raw)
    if isinstance(result, Failure):
        raise CLIError(f"failed to inspect: {result}")
    parsed, charset = result
    print(f"value: {int_to_digits(parsed.value)}")
    print(f"charset index: {parsed.charset_index:0{engine.params.charset_index_length}d}")
    print(f"checksum: {parsed.checksum}")
    print(f"charset: {charset!r}")
    print(f"message: {engine.b10_decode(parsed.value, charset)}")


def cmd_charsets(engine: Nanote, args: argparse.Namespace) -> None:
    if args.limit is not None and args.limit < 0:
        raise CLIError("--limit must not be negative")
    print(format_catalog_table(engine.catalog, limit=args.limit))


def cmd_shortest_charset(engine: Nanote, args: argparse.Namespace) -> None:
    index = engine.shortest_charset(args.message)
    if index == -1:
        raise CLIError("no charset covers the given message")
    print(f"{index} {engine.charsets[index]!r}")


def cmd_checksum(engine: Nanote, args: argparse.Namespace) -> None:
    print(_unwrap(engine.calculate_checksum(args.digits), "compute checksum"))


COMMANDS = {
    "encode": cmd_encode,
    "decode": cmd_decode,
    "inspect": cmd_inspect,
    "charsets": cmd_charsets,
    "shortest-charset": cmd_shortest_charset,
    "checksum": cmd_checksum,
}


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        engine = _engine_from_args(args)
        handler = COMMANDS.get(args.command)
        if handler is None:  # pragma: no cover - argparse enforces choices
            raise CLIError(f"Unknown command: {args.command}")
        handler(engine, args)
    except KeyboardInterrupt:  # pragma: no cover - interactive use
        logger.info("Interrupted by user")
    except (CLIError, ConfigurationError) as exc:
        parser.exit(1, f"error: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
