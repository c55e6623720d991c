#!/usr/bin/env python3
"""
Merge an incoming cast list into an existing actor roster.

Both inputs are JSON arrays of actor rows (see `actor_roster.models.actors`).
Images are base64 strings.

Usage:
    # Replace the roster with freshly scraped cast, keeping curated images
    PYTHONPATH=. python scripts/merge_actor_roster.py --existing roster.json --incoming scraped.json

    # Add actors one by one instead of replacing
    PYTHONPATH=. python scripts/merge_actor_roster.py --existing roster.json --incoming extra.json --mode add

    # Drop cached artwork and download thumbnails again
    PYTHONPATH=. python scripts/merge_actor_roster.py --existing roster.json --incoming scraped.json \
        --clear-images --fetch-images --output merged.json
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from actor_roster.ingestion.roster import ActorRoster
from actor_roster.media.actor_images import load_actor_images
from actor_roster.models.actors import Actor, ActorDataError, actor_from_mapping
from actor_roster.utils.env import load_env

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="merge_actor_roster",
        description="Merge an incoming cast list into an existing actor roster.",
    )
    parser.add_argument("--existing", type=Path, default=None, help="JSON file with the current roster.")
    parser.add_argument("--incoming", type=Path, required=True, help="JSON file with the fetched cast list.")
    parser.add_argument(
        "--mode",
        choices=["set", "add"],
        default="set",
        help="set: replace the roster (unmatched actors are dropped). add: merge or append each actor.",
    )
    parser.add_argument(
        "--clear-images",
        action="store_true",
        help="Drop cached images (curated images are kept) before fetching.",
    )
    parser.add_argument("--fetch-images", action="store_true", help="Download missing thumbnails.")
    parser.add_argument("--output", type=Path, default=None, help="Write the merged roster here (default: stdout).")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else (os.getenv("ACTOR_ROSTER_LOG_LEVEL") or "WARNING").strip().upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _load_actor_rows(path: Path) -> list[Actor]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ActorDataError(f"Could not read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ActorDataError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(payload, list):
        raise ActorDataError(f"{path} must contain a JSON array of actor rows")
    return [actor_from_mapping(row) for row in payload]


def _dump_roster(roster: ActorRoster) -> str:
    rows: list[dict[str, Any]] = [actor.to_dict() for actor in roster]
    return json.dumps(rows, indent=2, ensure_ascii=False) + "\n"


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv if argv is not None else sys.argv[1:])
    load_env()
    _configure_logging(bool(args.verbose))

    try:
        existing = _load_actor_rows(args.existing) if args.existing else []
        incoming = _load_actor_rows(args.incoming)
    except ActorDataError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    roster = ActorRoster(existing)
    if args.mode == "add":
        for actor in incoming:
            roster.add_actor(actor)
    else:
        roster.set_actors(incoming)
    logger.info(f"Roster has {len(roster)} actor(s) after {args.mode} merge")

    if args.clear_images:
        roster.clear_images()
    if args.fetch_images:
        stored = load_actor_images(roster)
        logger.info(f"Stored {stored} downloaded image(s)")

    output = _dump_roster(roster)
    if args.output:
        try:
            args.output.write_text(output, encoding="utf-8")
        except OSError as exc:
            print(f"ERROR: could not write {args.output}: {exc}", file=sys.stderr)
            return 1
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
