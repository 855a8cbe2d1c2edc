"""Administrative CLI for inspecting how two types would merge."""
from __future__ import annotations

import argparse
import importlib
import json
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from fieldmerge.config.settings import MergeSettings, load_settings
from fieldmerge.core.introspect import declared_fields, is_public
from fieldmerge.core.matching import match_fields
from fieldmerge.observability.log import configure_logging

DEFAULT_SETTINGS = Path("config/settings.toml")


def import_type(reference: str) -> type:
    """Resolve a ``module:QualName`` reference to a class."""
    module_name, sep, qualname = reference.partition(":")
    if not sep or not module_name or not qualname:
        raise SystemExit(f"Expected module:Class, got {reference!r}")
    try:
        target: object = importlib.import_module(module_name)
        for part in qualname.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as exc:
        raise SystemExit(f"Cannot resolve {reference}: {exc}")
    if not isinstance(target, type):
        raise SystemExit(f"{reference} is not a class")
    return target


def _visible(cls: type, settings: MergeSettings):
    return [
        field
        for field in declared_fields(cls)
        if settings.include_private or is_public(field.name)
    ]


def cmd_fields(args: argparse.Namespace, settings: MergeSettings) -> None:
    cls = import_type(args.type)
    rows: List[Dict[str, object]] = [
        {"name": field.name, "type": field.field_type.label, "owner": field.owner.__qualname__}
        for field in _visible(cls, settings)
    ]
    print(json.dumps(rows, indent=2))


def cmd_pairs(args: argparse.Namespace, settings: MergeSettings) -> None:
    source = import_type(args.source)
    destination = import_type(args.destination)
    pairs = match_fields(_visible(source, settings), _visible(destination, settings))
    rows = [
        {
            "name": pair.name,
            "source_type": pair.source.field_type.label,
            "destination_type": pair.destination.field_type.label,
        }
        for pair in pairs
    ]
    print(json.dumps(rows, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fieldmerge", description="Inspect field merging between types")
    parser.add_argument("--settings", default=str(DEFAULT_SETTINGS), help="Path to settings TOML")
    sub = parser.add_subparsers(dest="command", required=True)

    fields = sub.add_parser("fields", help="List the declared fields of a type")
    fields.add_argument("--type", required=True, help="module:Class")

    pairs = sub.add_parser("pairs", help="List the fields two types would merge")
    pairs.add_argument("--source", required=True, help="module:Class")
    pairs.add_argument("--destination", required=True, help="module:Class")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv()
    configure_logging(Path("config/logging.yaml"))
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings(Path(args.settings))
    except ValueError as exc:
        raise SystemExit(f"Failed to load settings: {exc}")
    if args.command == "fields":
        cmd_fields(args, settings)
        return
    if args.command == "pairs":
        cmd_pairs(args, settings)
        return


if __name__ == "__main__":
    main()
