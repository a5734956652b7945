"""Command-line management of the API key, default informer and cache.

Usage examples:
    meteoprog-informers set-key 550e8400-e29b-41d4-a716-446655440000
    meteoprog-informers get-default
    meteoprog-informers refresh
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

import aiosqlite

from meteoprog_informers.config import Settings
from meteoprog_informers.directory import build_http_client
from meteoprog_informers.helpers import mask_string, sanitize_text
from meteoprog_informers.informers import OPT_API_KEY, OPT_DEFAULT_ID
from meteoprog_informers.logging_config import configure_logging
from meteoprog_informers.state import AppState, build_app_state
from meteoprog_informers.store import OptionStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meteoprog-informers", description="Manage Meteoprog weather informers"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    set_key = sub.add_parser("set-key", help="Save the API key")
    set_key.add_argument("key")
    sub.add_parser("get-key", help="Show the saved API key (masked)")

    set_default = sub.add_parser("set-default", help="Set the default informer ID")
    set_default.add_argument("informer_id")
    sub.add_parser("get-default", help="Show the default informer ID")

    sub.add_parser("refresh", help="Clear the cache and reload the informer list")
    sub.add_parser("clear-cache", help="Clear the cached informer list")
    return parser


async def run_command(args: argparse.Namespace, state: AppState) -> int:
    store = state.store

    if args.command == "set-key":
        key = sanitize_text(args.key)
        if not key:
            print("Error: API key is required.", file=sys.stderr)
            return 1
        await store.update_option(OPT_API_KEY, key)
        print(f"Success: API key saved: {mask_string(key)}")
        return 0

    if args.command == "get-key":
        key = await store.get_option(OPT_API_KEY, "")
        if not key:
            print("Warning: API key is not set.", file=sys.stderr)
            return 0
        print(f"Current API key: {mask_string(key)}")
        return 0

    if args.command == "set-default":
        informer_id = sanitize_text(args.informer_id)
        if not informer_id:
            print("Error: Informer ID is required.", file=sys.stderr)
            return 1
        await store.update_option(OPT_DEFAULT_ID, informer_id)
        print(f"Success: Default informer set to: {informer_id}")
        return 0

    if args.command == "get-default":
        informer_id = await store.get_option(OPT_DEFAULT_ID, "")
        if not informer_id:
            print("Warning: No default informer set.", file=sys.stderr)
            return 0
        print(f"Default informer ID: {informer_id}")
        return 0

    if args.command == "refresh":
        informers = await state.informers.refresh()
        print(f"Success: Informer list refreshed ({len(informers)} informers).")
        return 0

    if args.command == "clear-cache":
        await state.informers.clear_cache()
        print("Success: Cache cleared.")
        return 0

    return 2


async def _main(args: argparse.Namespace, settings: Settings) -> int:
    db_path = Path(settings.cache.db_path).expanduser()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    async with aiosqlite.connect(db_path) as db, build_http_client(settings) as client:
        store = OptionStore(db)
        await store.init_db()
        state = await build_app_state(settings, store, client)
        return await run_command(args, state)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    configure_logging(settings.logging)
    return asyncio.run(_main(args, settings))


if __name__ == "__main__":
    sys.exit(main())
