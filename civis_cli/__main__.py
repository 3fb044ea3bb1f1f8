"""
Module execution entry point.

Allows running with: python -m civis_cli
"""

import sys
from civis_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
