"""
Entry point for module execution (``python -m tagtree``).

This module delegates execution to the CLI handler in ``tagtree.cli.__main__``.
"""

import sys
from tagtree.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
