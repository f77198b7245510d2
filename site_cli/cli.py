"""Operator CLI for the anonymous collection store and site routes."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from anonymous_session.errors import StorageError
from anonymous_session.session import IDENTITY_KEY, AnonymousSessionStore
from anonymous_session.storage import FileStorage, InMemoryStorage, KeyValueStorage
from backend_client.config import get_settings
from sitemap.render import render_sitemap

logger = logging.getLogger(__name__)

_MEMORY_PREFIX = "mem://"
_MEMORY_STORAGES: Dict[str, InMemoryStorage] = {}


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="typavibe")
    parser.add_argument(
        "--storage",
        help="Storage scope file, or mem://NAME for a process-local scope.",
    )
    parser.add_argument("--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    identity_parser = subparsers.add_parser("identity")
    identity_sub = identity_parser.add_subparsers(dest="identity_command", required=True)
    identity_show = identity_sub.add_parser("show")
    identity_show.set_defaults(func=_identity_show)
    identity_clear = identity_sub.add_parser("clear")
    identity_clear.set_defaults(func=_identity_clear)

    collections_parser = subparsers.add_parser("collections")
    collections_sub = collections_parser.add_subparsers(
        dest="collections_command", required=True
    )

    collections_save = collections_sub.add_parser("save")
    collections_save.add_argument("--slug", required=True)
    collections_save.add_argument("--field", action="append", default=[])
    collections_save.set_defaults(func=_collections_save)

    collections_list = collections_sub.add_parser("list")
    collections_list.set_defaults(func=_collections_list)

    collections_get = collections_sub.add_parser("get")
    collections_get.add_argument("--slug", required=True)
    collections_get.set_defaults(func=_collections_get)

    collections_update = collections_sub.add_parser("update")
    collections_update.add_argument("--slug", required=True)
    collections_update.add_argument("--field", action="append", default=[])
    collections_update.set_defaults(func=_collections_update)

    collections_delete = collections_sub.add_parser("delete")
    collections_delete.add_argument("--slug", required=True)
    collections_delete.set_defaults(func=_collections_delete)

    sitemap_parser = subparsers.add_parser("sitemap")
    sitemap_parser.add_argument("--base-url")
    sitemap_parser.set_defaults(func=_sitemap)

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        return args.func(args)
    except (ValueError, StorageError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2


def _identity_show(args: argparse.Namespace) -> int:
    store = _open_store(args)
    print(store.get_identity())
    return 0


def _identity_clear(args: argparse.Namespace) -> int:
    storage = _open_storage(args.storage)
    if not storage.get_item(IDENTITY_KEY):
        print("no identity")
        return 0
    store = AnonymousSessionStore(storage=storage)
    store.clear_identity()
    print(f"{store.get_identity()} cleared")
    return 0


def _collections_save(args: argparse.Namespace) -> int:
    store = _open_store(args)
    record = _parse_fields(args.field)
    record["slug"] = args.slug
    store.save_collection(record)
    print(json.dumps(store.list_own_collections()[-1], indent=2))
    return 0


def _collections_list(args: argparse.Namespace) -> int:
    store = _open_store(args)
    print(json.dumps(store.list_own_collections(), indent=2))
    return 0


def _collections_get(args: argparse.Namespace) -> int:
    store = _open_store(args)
    record = store.find_by_slug(args.slug)
    if record is None:
        return _not_found(args.slug)
    print(json.dumps(record, indent=2))
    return 0


def _collections_update(args: argparse.Namespace) -> int:
    store = _open_store(args)
    fields = _parse_fields(args.field)
    if "slug" in fields:
        raise ValueError("Use a new save to change a slug.")
    record = store.update_by_slug(args.slug, fields)
    if record is None:
        return _not_found(args.slug)
    print(json.dumps(record, indent=2))
    return 0


def _collections_delete(args: argparse.Namespace) -> int:
    store = _open_store(args)
    store.delete_by_slug(args.slug)
    print(f"{args.slug} deleted")
    return 0


def _sitemap(args: argparse.Namespace) -> int:
    base_url = args.base_url or get_settings().site_base_url
    sys.stdout.write(render_sitemap(base_url))
    return 0


def _open_store(args: argparse.Namespace) -> AnonymousSessionStore:
    return AnonymousSessionStore(storage=_open_storage(args.storage))


def _open_storage(location: Optional[str]) -> KeyValueStorage:
    location = location or get_settings().anonymous_storage_path
    if location.startswith(_MEMORY_PREFIX):
        return _MEMORY_STORAGES.setdefault(location, InMemoryStorage())
    logger.debug("Using storage file %s", location)
    return FileStorage(Path(location))


def _parse_fields(values: Iterable[str]) -> Dict[str, object]:
    fields: Dict[str, object] = {}
    for raw in values:
        if "=" not in raw:
            raise ValueError("Field must be formatted as KEY=VALUE.")
        key, value = raw.split("=", 1)
        if not key:
            raise ValueError("Field key is required.")
        try:
            fields[key] = json.loads(value)
        except json.JSONDecodeError:
            fields[key] = value
    return fields


def _not_found(slug: str) -> int:
    print(f"Collection not found: {slug}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
