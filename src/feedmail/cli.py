"""CLI entry point for feedmail.

Usage:
    feedmail extract mail/*.eml              # Extract posts from .eml files
    feedmail extract batch.json              # Extract from JSON email records
    feedmail extract --include-absent a.eml  # Also report emails with no post
    feedmail config                          # Show effective configuration
    feedmail --help                          # Show all options
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import structlog

from feedmail.core.config import ExtractionConfig
from feedmail.core.logging import configure_structlog, get_logger, setup_logging
from feedmail.core.types import RawEmailRecord
from feedmail.extraction.pipeline import PostExtractor
from feedmail.extraction.scoring import calculate_importance
from feedmail.extraction.tags import derive_tags
from feedmail.integrations.eml import EmlLoadError, load_eml

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="feedmail",
        description="Recover social-network posts from notification emails",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in working directory)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--json-logs", action="store_true", help="Render log events as JSON")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    extract_parser = subparsers.add_parser("extract", help="Extract posts from email files")
    extract_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        metavar="PATH",
        help=".eml file, or .json file holding one email object or a list of them",
    )
    extract_parser.add_argument(
        "--include-absent",
        action="store_true",
        help="Also print emails that yielded no post",
    )

    subparsers.add_parser("config", help="Show effective extraction configuration")

    return parser.parse_args(argv)


def load_records(path: Path) -> Iterator[RawEmailRecord]:
    """Load raw email records from an .eml or .json file.

    Raises:
        EmlLoadError: If an .eml file cannot be parsed.
        OSError: If a file cannot be read.
        ValueError: If a JSON file is malformed.
    """
    if path.suffix.lower() != ".json":
        yield load_eml(path)
        return

    data = json.loads(path.read_text(encoding="utf-8"))
    items = data if isinstance(data, list) else [data]
    for item in items:
        if not isinstance(item, dict):
            raise ValueError(f"{path}: expected an email object, got {type(item).__name__}")
        yield RawEmailRecord.from_dict(item)


def _build_config(env_file: Path | None) -> ExtractionConfig:
    if env_file is None:
        return ExtractionConfig()
    return ExtractionConfig(_env_file=env_file)


def run_extract(args: argparse.Namespace, config: ExtractionConfig) -> int:
    """Run the extract command, printing one JSON object per email."""
    extractor = PostExtractor(config=config)
    failures = 0

    for path in args.paths:
        try:
            records = list(load_records(path))
        except (EmlLoadError, OSError, ValueError) as e:
            print(f"Error: {path}: {e}", file=sys.stderr)
            failures += 1
            continue

        logger.debug("Loaded %d email(s) from %s", len(records), path)
        found = 0
        with structlog.contextvars.bound_contextvars(path=str(path)):
            for raw, record in extractor.extract_many(records):
                if record is not None:
                    found += 1
                elif not args.include_absent:
                    continue
                output: dict[str, Any] = {
                    "path": str(path),
                    "identifier": raw.identifier,
                    "post": record.to_dict() if record else None,
                }
                if record is not None:
                    output["importance"] = calculate_importance(record, config)
                    output["tags"] = derive_tags(record, config)
                print(json.dumps(output, ensure_ascii=False))
        logger.info("%s: %d post(s) from %d email(s)", path, found, len(records))

    return 1 if failures else 0


def run_config(config: ExtractionConfig) -> int:
    """Print the effective configuration as JSON."""
    print(json.dumps(config.model_dump(mode="json"), indent=2, ensure_ascii=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    setup_logging(level=level, console=True, file_logging=False, json_format=args.json_logs)
    configure_structlog(log_level=logging.getLevelName(level))

    try:
        config = _build_config(args.env_file)
    except ValueError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.command == "config":
        return run_config(config)
    return run_extract(args, config)


if __name__ == "__main__":
    sys.exit(main())
