"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Console isolation so log output from one test never leaks into another.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'tagtree' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from tagtree.utils.console import reset_console  # noqa: E402


@pytest.fixture(autouse=True)
def clean_console():
  """Ensures console is bound to the current stdout for every test."""
  reset_console()
  yield
  reset_console()
