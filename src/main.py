# src/main.py - v2
"""CLI entry point: resolve, call, records commands.

Usage:
    filevault resolve [--type T] [--file-version V] [--hash H]
    filevault call '<json payload>' | -
    filevault records
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import TYPE_CHECKING

from filevault.version import __version__

if TYPE_CHECKING:
    from filevault.config.settings import Settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = _load_settings(args.verbose)
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="filevault",
        description=f"filevault v{__version__}: versioned file resolution with a write-once cache",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- resolve ---
    p_resolve = subparsers.add_parser(
        "resolve", help="Resolve a file by type and version",
    )
    p_resolve.add_argument("--type", dest="kind", default=None, help="File type (default: core)")
    p_resolve.add_argument(
        "--file-version", dest="file_version", default=None,
        help="File version (default: 1.0.0)",
    )
    p_resolve.add_argument(
        "--hash", dest="client_hash", default=None,
        help="Hash the caller believes matches the content",
    )
    p_resolve.set_defaults(func=_cmd_resolve)

    # --- call ---
    p_call = subparsers.add_parser(
        "call", help="Invoke process_file_payload with a raw JSON payload",
    )
    p_call.add_argument("payload", help="JSON payload, or '-' to read stdin")
    p_call.set_defaults(func=_cmd_call)

    # --- records ---
    p_records = subparsers.add_parser(
        "records", help="List cached records",
    )
    p_records.set_defaults(func=_cmd_records)

    return parser


async def _cmd_resolve(args: argparse.Namespace, settings: Settings) -> int:
    """Build a payload from flags and invoke the RPC."""
    payload: dict[str, str] = {}
    if args.kind is not None:
        payload["type"] = args.kind
    if args.file_version is not None:
        payload["version"] = args.file_version
    if args.client_hash is not None:
        payload["hash"] = args.client_hash
    return await _invoke(json.dumps(payload), settings)


async def _cmd_call(args: argparse.Namespace, settings: Settings) -> int:
    """Invoke the RPC with a payload given verbatim."""
    payload = sys.stdin.read() if args.payload == "-" else args.payload
    return await _invoke(payload, settings)


async def _cmd_records(args: argparse.Namespace, settings: Settings) -> int:
    """Print one line per cached record."""
    from filevault.cache.cache_factory import create_cache_store

    store = create_cache_store(settings)
    try:
        records = await store.list_records()
    finally:
        store.close()

    for record in records:
        print(
            f"{record.kind}\t{record.version}\t{record.fingerprint}\t"
            f"{record.stored_at.isoformat()}"
        )
    print(f"{len(records)} record(s)", file=sys.stderr)
    return 0


async def _invoke(payload: str, settings: Settings) -> int:
    from filevault.api.facade import PROCESS_FILE_PAYLOAD
    from filevault.api.rpc import RpcError, init_module

    registry = init_module(settings)
    try:
        body = await registry.call(PROCESS_FILE_PAYLOAD, payload)
    except RpcError as e:
        print(f"error {int(e.code)} ({e.code.name}): {e.message}", file=sys.stderr)
        return 1
    finally:
        registry.close()

    print(body)
    return 0


def _load_settings(verbose: bool) -> Settings:
    """Load settings and configure logging from them."""
    from filevault.config.settings import load_settings
    from filevault.logging.logger import setup_logging

    settings = load_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file or None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    return settings


if __name__ == "__main__":
    sys.exit(main())
