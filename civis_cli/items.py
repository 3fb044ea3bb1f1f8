"""
Module 05 - CLI Item Sources

Shared argument handling for commands that build a tree: items come from
positional arguments, a text file (one item per line) or a JSON-lines
file of market-feed messages.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from core.merkle.nodes import ITEM_ENCODINGS, decode_item
from core.schemas.feed import read_feed_records, records_to_items


logger = logging.getLogger(__name__)


def add_item_source_arguments(parser: argparse.ArgumentParser) -> None:
    """Register --file/--records/--encoding on a subcommand parser."""
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Text file with one item per line (blank lines are skipped)",
    )
    parser.add_argument(
        "--records",
        type=str,
        default=None,
        help="JSON-lines file of market-feed messages; each order/trade record becomes an item",
    )
    add_encoding_argument(parser)


def add_encoding_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--encoding",
        type=str,
        choices=list(ITEM_ENCODINGS),
        default=None,
        help="How textual items are turned into bytes (default: from config, utf-8)",
    )


def resolve_encoding(args: argparse.Namespace) -> str:
    """Encoding from the command line, falling back to configuration."""
    if getattr(args, "encoding", None):
        return args.encoding
    config = getattr(args, "runtime_config", None)
    return config.tree.item_encoding if config is not None else "utf-8"


def read_item_lines(path: Path, encoding: str) -> list[bytes]:
    """Read a text file of items, one per line."""
    with open(path, "r", encoding="utf-8") as f:
        return [
            decode_item(line.rstrip("\r\n"), encoding)
            for line in f
            if line.strip()
        ]


def read_record_items(path: Path) -> list[bytes]:
    """Read a JSON-lines feed capture and canonically serialize its records."""
    with open(path, "r", encoding="utf-8") as f:
        records = read_feed_records(f)
    logger.info(f"Decoded {len(records)} feed records from {path}")
    return records_to_items(records)


def collect_items(
    args: argparse.Namespace,
    positional: Sequence[str] = (),
) -> list[bytes]:
    """
    Gather items from every source given on the command line.

    Order: positional items, then --file lines, then --records records.

    Raises:
        FileNotFoundError: If --file or --records does not exist
        SchemaValidationException: If an item cannot be decoded
        FeedMessageException: If a feed message is invalid
    """
    encoding = resolve_encoding(args)
    items = [decode_item(text, encoding) for text in positional]

    if getattr(args, "file", None):
        path = Path(args.file)
        if not path.exists():
            raise FileNotFoundError(f"Item file not found: {path}")
        items.extend(read_item_lines(path, encoding))

    if getattr(args, "records", None):
        path = Path(args.records)
        if not path.exists():
            raise FileNotFoundError(f"Records file not found: {path}")
        items.extend(read_record_items(path))

    logger.debug(f"Collected {len(items)} items (encoding={encoding})")
    return items
