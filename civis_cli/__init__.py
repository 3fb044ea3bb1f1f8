"""
Module 05 - CivisGrid CLI

Command-line driver for the Merkle core.

Usage:
    python -m civis_cli demo
    python -m civis_cli build a b c
    python -m civis_cli prove b a b c --out proof.json
    python -m civis_cli verify b --proof proof.json --root <label>
    python -m civis_cli config --init
"""

__version__ = "0.1.0"

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2
