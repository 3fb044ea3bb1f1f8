"""
Module 05 - CLI Build Command

Build a Merkle tree and print its root label and shape.

Usage:
    civis build a b c [--file items.txt] [--records feed.jsonl] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from typing import Any

from civis_cli import EXIT_RUNTIME_ERROR, EXIT_SUCCESS
from civis_cli.items import collect_items
from core.merkle import MerkleTree, build_merkle_tree
from core.schemas.errors import CivisException


logger = logging.getLogger(__name__)


@dataclass
class BuildSummary:
    """Summary of a tree build for CLI output."""
    root_label: str = ""
    leaf_count: int = 0
    branch_count: int = 0
    node_count: int = 0
    height: int = 0

    @classmethod
    def from_tree(cls, tree: MerkleTree) -> "BuildSummary":
        return cls(**tree.summary())

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def print_summary_human(summary: BuildSummary) -> None:
    print(f"root: {summary.root_label}")
    print(f"leaves: {summary.leaf_count}")
    print(f"branches: {summary.branch_count}")
    print(f"nodes: {summary.node_count}")
    print(f"height: {summary.height}")


def build_tree_from_args(args: Namespace) -> MerkleTree:
    """Collect items from the command line and build the tree."""
    items = collect_items(args, args.items)
    config = getattr(args, "runtime_config", None)
    max_items = config.tree.max_items if config is not None else None
    return build_merkle_tree(items, max_items=max_items)


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        tree = build_tree_from_args(args)
    except (CivisException, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = BuildSummary.from_tree(tree)
    logger.info(f"Built tree with root {summary.root_label}")

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)
    return EXIT_SUCCESS
