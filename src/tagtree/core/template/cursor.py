"""
Token Cursor.

A one-token-lookahead view over an immutable token list. The parser never
backtracks; every decision is taken from `peek()` plus local counters.
"""

from typing import List, Optional, Sequence

from tagtree.core.template.tokens import Token


class Cursor:
  """
  Explicit index into a token sequence.

  Attributes:
      tokens (Sequence[Token]): The stream being parsed. Never mutated.
      pos (int): Index of the next token to be returned by `next()`.
  """

  def __init__(self, tokens: Sequence[Token]):
    self.tokens = tuple(tokens)
    self.pos = 0

  def peek(self) -> Optional[Token]:
    """Returns the next token without consuming it, or None at end of input."""
    if self.pos >= len(self.tokens):
      return None
    return self.tokens[self.pos]

  def next(self) -> Optional[Token]:
    """Consumes and returns the next token, or None at end of input."""
    token = self.peek()
    if token is not None:
      self.pos += 1
    return token

  def is_eof(self) -> bool:
    return self.pos >= len(self.tokens)

  def remaining(self) -> List[Token]:
    return list(self.tokens[self.pos :])
