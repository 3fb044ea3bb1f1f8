"""
Module 05 - CLI Verify Command

Verify an inclusion proof offline, without the tree.

Usage:
    civis verify ITEM --proof proof.json [--root LABEL] [--json]

The proof file holds either the full proof object written by `civis prove`
or a bare list of [label, side_bit] entries. The trusted root should be
passed with --root; when omitted, the root label recorded in the proof
file is used and a warning is logged.
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from civis_cli import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, EXIT_VERIFICATION_FAILED
from civis_cli.items import resolve_encoding
from core.crypto.hashing import hash_bytes
from core.merkle import decode_item, verify
from core.schemas.errors import CivisException


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    leaf_label: str = ""
    root_label: str = ""
    root_source: str = ""
    entry_count: int = 0
    valid: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_proof_file(path: Path) -> tuple[Any, str | None]:
    """
    Load a proof file.

    Returns:
        Tuple of (entries, root label recorded in the file or None). The
        entries are returned as found; malformed ones fail verification.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON
    """
    if not path.exists():
        raise FileNotFoundError(f"Proof file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        root = data.get("root_label")
        return data.get("entries"), root if isinstance(root, str) else None
    return data, None


def print_summary_human(summary: VerifySummary) -> None:
    print(f"proof: {summary.proof_path}")
    print(f"leaf: {summary.leaf_label}")
    print(f"root: {summary.root_label} ({summary.root_source})")
    print(f"entries: {summary.entry_count}")
    print(f"valid: {str(summary.valid).lower()}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        0 if the proof is valid, 2 if it is not, 1 on runtime errors
    """
    proof_path = Path(args.proof)

    try:
        item = decode_item(args.item, resolve_encoding(args))
        entries, file_root = load_proof_file(proof_path)
    except (CivisException, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValueError as e:
        print(f"Error: proof file is not valid JSON: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.root:
        root_label, root_source = args.root, "argument"
        if file_root is not None and file_root != args.root:
            logger.warning("Root label in proof file differs from --root; using --root")
    elif file_root is not None:
        root_label, root_source = file_root, "proof file"
        logger.warning("No --root given; trusting the root label stored in the proof file")
    else:
        print("Error: no root label (pass --root)", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    valid = verify(item, entries, root_label)
    summary = VerifySummary(
        proof_path=str(proof_path),
        leaf_label=hash_bytes(item),
        root_label=root_label,
        root_source=root_source,
        entry_count=len(entries) if isinstance(entries, (list, tuple)) else 0,
        valid=valid,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
