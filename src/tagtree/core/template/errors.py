"""
Template Compilation Errors.

All parser failures are fatal: the first error aborts compilation of the
whole template and no partial output is produced.
"""

from typing import Optional

from tagtree.core.template.tokens import Span


class TemplateSyntaxError(SyntaxError):
  """
  Raised when a template cannot be compiled.

  Attributes:
      message (str): Human readable diagnostic.
      span (Optional[Span]): Location of the offending token. None means the
          error belongs to the invocation site as a whole (e.g. the input ended
          before a required token).
  """

  def __init__(self, message: str, span: Optional[Span] = None):
    super().__init__(message)
    self.message = message
    self.span = span
    if span is not None:
      self.lineno = span.line
      self.offset = span.col + 1

  @property
  def is_call_site(self) -> bool:
    return self.span is None

  def pinned(self, line: int, col: int) -> "TemplateSyntaxError":
    """Returns a copy located at `line`:`col` of an enclosing file."""
    return TemplateSyntaxError(self.message, Span(0, 0, line, col))

  def __str__(self) -> str:
    if self.span is None:
      return self.message
    return f"{self.span.line}:{self.span.col}: {self.message}"
