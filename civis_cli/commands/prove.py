"""
Module 05 - CLI Prove Command

Build a tree and emit the inclusion proof of one item.

Usage:
    civis prove ITEM a b c [--file items.txt] [--out proof.json] [--json]

The proof is written in its portable form:
    {"leaf_label": ..., "root_label": ..., "entries": [[label, side_bit], ...]}
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from civis_cli import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, EXIT_VERIFICATION_FAILED
from civis_cli.commands.build import build_tree_from_args
from civis_cli.items import resolve_encoding
from core.merkle import MerkleProof, Side, decode_item
from core.schemas.errors import CivisException, LabelNotFoundException


logger = logging.getLogger(__name__)


def print_proof_human(proof: MerkleProof) -> None:
    print(f"leaf: {proof.leaf_label}")
    print(f"root: {proof.root_label}")
    print(f"entries: {len(proof.entries)}")
    for depth, entry in enumerate(proof.entries):
        side = "L" if entry.side is Side.LEFT else "R"
        print(f"  [{depth}] {side} {entry.sibling_label}")


def write_proof(proof: MerkleProof, out_path: Path) -> None:
    """Write a proof as JSON, creating parent directories."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(proof.to_dict(), indent=2) + "\n", encoding="utf-8")


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Returns:
        0 on success, 2 if the item is not in the tree, 1 on other errors
    """
    try:
        item = decode_item(args.item, resolve_encoding(args))
        tree = build_tree_from_args(args)
        proof = tree.prove(item)
    except LabelNotFoundException as e:
        print(f"Not found: {e}", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED
    except (CivisException, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.out:
        out_path = Path(args.out)
        write_proof(proof, out_path)
        logger.info(f"Wrote proof with {len(proof.entries)} entries to {out_path}")

    if args.json:
        print(json.dumps(proof.to_dict(), indent=2))
    elif not args.out:
        print_proof_human(proof)
    else:
        print(f"proof written: {args.out}")
        print(f"root: {proof.root_label}")
    return EXIT_SUCCESS
