"""
Module 05 - CLI Demo Command

Build a tree from the one-byte sample vectors [1], [2], ..., [N], prove one
of them and verify the proof.

Usage:
    civis demo [--count 8] [--prove 5] [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from civis_cli import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, EXIT_VERIFICATION_FAILED
from civis_cli.commands.build import BuildSummary, print_summary_human
from civis_cli.commands.prove import print_proof_human
from core.merkle import build_merkle_tree, verify_merkle_proof


def sample_items(count: int) -> list[bytes]:
    """The sample vectors [1], [2], ..., [count]."""
    return [bytes([value]) for value in range(1, count + 1)]


def demo_cmd(args: Namespace) -> int:
    """Execute the demo command."""
    if not 1 <= args.count <= 255:
        print("Error: --count must be between 1 and 255", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    if not 1 <= args.prove <= args.count:
        print(f"Error: --prove must be between 1 and {args.count}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    tree = build_merkle_tree(sample_items(args.count))
    item = bytes([args.prove])
    proof = tree.prove(item)
    valid = verify_merkle_proof(item, proof, expected_root=tree.root_label())

    if args.json:
        print(json.dumps({
            "tree": BuildSummary.from_tree(tree).to_dict(),
            "item": item.hex(),
            "proof": proof.to_dict(),
            "valid": valid,
        }, indent=2))
    else:
        print("+++ CivisGrid +++")
        print_summary_human(BuildSummary.from_tree(tree))
        print(f"\nproof for [{args.prove}]:")
        print_proof_human(proof)
        print(f"valid: {str(valid).lower()}")

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
