"""
Command handler implementations, one module per CLI concern.
"""

from .expand import handle_expand
from .debug import handle_compile, handle_parse

__all__ = [
  "handle_compile",
  "handle_expand",
  "handle_parse",
]
