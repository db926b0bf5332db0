from __future__ import annotations

"""UDBuildings command-line front end.

Usage:
    python -m udbuildings.cli.buildings_cli list
    python -m udbuildings.cli.buildings_cli show 3
    python -m udbuildings.cli.buildings_cli add A9 "New Hall" 39.681 -75.754
    python -m udbuildings.cli.buildings_cli edit 3 A9 "New Hall" 39.681 -75.754
    python -m udbuildings.cli.buildings_cli delete 3

A thin view over :class:`udbuildings.store.BuildingStore`: it only calls the
store's public operations and turns records into display text.
"""

import argparse
import sys
from typing import List, Optional

from udbuildings.config import load_settings
from udbuildings.logging_utils import get_logger
from udbuildings.store import BuildingRecord, BuildingStore, NotFound, StoreError


def display_fields(record: BuildingRecord) -> List[str]:
    """Project a record onto the labelled lines shown in the list view."""
    return [
        f"Code: {record.code}",
        f"Name: {record.name}",
        f"Latitude: {record.latitude}",
        f"Longitude: {record.longitude}",
    ]


def save_note(
    store: BuildingStore,
    identifier: Optional[int],
    code: str,
    name: str,
    latitude: str,
    longitude: str,
) -> int:
    """Create the building when ``identifier`` is None, otherwise replace it.

    Returns the building's id. Raises :class:`NotFound` when asked to update
    an id that does not exist.
    """
    if identifier is None:
        return store.create_note(code, name, latitude, longitude)
    if not store.update_note(identifier, code, name, latitude, longitude):
        raise NotFound(identifier)
    return identifier


def _print_record(record: BuildingRecord) -> None:
    print(f"[{record.id}]")
    for line in display_fields(record):
        print(f"  {line}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="UDBuildings location store")
    parser.add_argument(
        "--profile", default="dev", help="runtime profile: dev | staging | prod"
    )
    parser.add_argument("--db", help="database path (overrides UDB_DB_PATH)")
    parser.add_argument("--seed", help="seed file path (overrides UDB_SEED_PATH)")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="show every building")

    show = sub.add_parser("show", help="show one building")
    show.add_argument("id", type=int)

    add = sub.add_parser("add", help="create a building")
    edit = sub.add_parser("edit", help="replace all fields of a building")
    edit.add_argument("id", type=int)
    for p in (add, edit):
        p.add_argument("code")
        p.add_argument("name")
        p.add_argument("latitude")
        p.add_argument("longitude")

    delete = sub.add_parser("delete", help="remove a building")
    delete.add_argument("id", type=int)
    return parser


def main(argv=None) -> int:
    """Parse args, load settings, open the store and run one command."""
    args = build_parser().parse_args(argv)

    settings = load_settings(profile=args.profile)
    if args.db:
        settings.db_path = args.db
    if args.seed:
        settings.seed_path = args.seed
    settings.ensure_dirs()
    log = get_logger("udbuildings", log_dir=settings.log_dir, level=settings.log_level)

    try:
        with BuildingStore(settings) as store:
            if args.command == "list":
                records = store.fetch_all_notes()
                for record in records:
                    _print_record(record)
                print(f"{len(records)} building(s)")
            elif args.command == "show":
                _print_record(store.fetch_note(args.id))
            elif args.command in ("add", "edit"):
                identifier = args.id if args.command == "edit" else None
                rid = save_note(store, identifier, args.code, args.name, args.latitude, args.longitude)
                print(f"Saved building {rid}")
            elif args.command == "delete":
                if not store.delete_note(args.id):
                    print(f"No building with id {args.id}", file=sys.stderr)
                    return 1
                print(f"Deleted building {args.id}")
    except StoreError as exc:
        log.info("Command %s failed: %s", args.command, exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
