"""
CLI Command Handlers Facade.

Re-exports handlers from `tagtree.cli.handlers` so the dispatcher and tests
have one import location.
"""

from tagtree.cli.handlers.expand import handle_expand
from tagtree.cli.handlers.debug import handle_compile, handle_parse

__all__ = [
  "handle_compile",
  "handle_expand",
  "handle_parse",
]
