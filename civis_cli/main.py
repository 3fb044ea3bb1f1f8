"""
Module 05 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m civis_cli demo [--count N] [--prove K] [--json]
    python -m civis_cli build [ITEM ...] [--file PATH] [--records PATH] [--encoding utf-8|hex] [--json]
    python -m civis_cli prove ITEM [ITEM ...] [--file PATH] [--records PATH] [--out PATH] [--json]
    python -m civis_cli verify ITEM --proof PATH [--root LABEL] [--json]
    python -m civis_cli config --init|--show

Environment Variables:
    CIVIS_ITEM_ENCODING     Encoding of textual items: utf-8 (default) or hex
    CIVIS_MAX_ITEMS         Upper bound on items per tree
    CIVIS_LOG_LEVEL         Log level (default: INFO)
    CIVIS_LOG_FILE          Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from civis_cli import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, __version__
from civis_cli.commands import build, demo, prove, verify
from civis_cli.items import add_encoding_argument, add_item_source_arguments
from core.config.runtime import get_default_config_template, load_config


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="civis",
        description="CivisGrid CLI - Build Merkle trees, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./civis.json or ~/.config/civis/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Build a tree from sample one-byte vectors and prove one of them",
    )
    demo_parser.add_argument(
        "--count", "-n",
        type=int,
        default=8,
        help="Number of sample vectors [1]..[N] (default: 8)",
    )
    demo_parser.add_argument(
        "--prove", "-p",
        type=int,
        default=5,
        help="Sample vector to prove (default: 5)",
    )
    demo_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    demo_parser.set_defaults(func=demo.demo_cmd)

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a tree and print its root label",
        description="Build a Merkle tree from the given items and print the root label and shape.",
    )
    build_parser.add_argument("items", nargs="*", help="Items (text, see --encoding)")
    add_item_source_arguments(build_parser)
    build_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    build_parser.set_defaults(func=build.build_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate the inclusion proof of an item",
        description="Build a tree from the given items and emit the proof for ITEM.",
    )
    prove_parser.add_argument("item", help="Item to prove")
    prove_parser.add_argument("items", nargs="*", help="Items of the tree")
    add_item_source_arguments(prove_parser)
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof JSON to this path",
    )
    prove_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof offline",
        description="Replay a proof from ITEM and compare with the trusted root label.",
    )
    verify_parser.add_argument("item", help="Item the proof is for")
    verify_parser.add_argument(
        "--proof",
        type=str,
        required=True,
        help="Proof JSON file (as written by `civis prove --out`)",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Trusted root label (default: the root recorded in the proof file)",
    )
    add_encoding_argument(verify_parser)
    verify_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="civis.json",
        help="Path for config file (default: civis.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (CIVIS_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: civis config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed / not found)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
