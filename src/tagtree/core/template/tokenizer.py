"""
Template Tokenizer.

Turns template text into a token tree. Brackets `()`, `[]` and `{}` are folded
into single GROUP tokens so that anything written inside them (including `<`)
is opaque to the parser. Whitespace is dropped; positions are kept on every
token so text runs can be reconstructed from the original source.
"""

import re
from typing import List, Tuple

from tagtree.core.template.errors import TemplateSyntaxError
from tagtree.core.template.tokens import GROUP_DELIMITERS, Span, Token, TokenKind


class Tokenizer:
  PATTERN_DEFS = [
    ("WHITESPACE", r"\s+"),
    ("STRING", r'"(?:[^"\\\n]|\\.)*"|\'(?:[^\'\\\n]|\\.)*\''),
    # A lone apostrophe falls through to PUNCT so prose like "it's" stays text
    ("UNTERMINATED", r'"'),
    ("NUMBER", r"\d+(?:\.\d+)?(?:[eE][+-]?\d+)?"),
    ("IDENT", r"[^\W\d]\w*"),
    ("PATH_SEP", r"::"),
    ("OPEN", r"[(\[{]"),
    ("CLOSE", r"[)\]}]"),
    ("PUNCT", r"[^\w\s]"),
  ]

  _REGEX = re.compile("|".join(f"(?P<{kind}>{pattern})" for kind, pattern in PATTERN_DEFS))

  def __init__(self, text: str):
    self.text = text

  def tokenize(self) -> List[Token]:
    """
    Lexes the whole input.

    Returns:
        List[Token]: Top-level tokens; bracket runs appear as GROUP tokens.

    Raises:
        TemplateSyntaxError: On unbalanced brackets or unterminated strings.
    """
    root: List[Token] = []
    # (opening token, tokens collected inside it)
    stack: List[Tuple[Token, List[Token]]] = []

    line_num = 1
    line_start = 0
    for mo in self._REGEX.finditer(self.text):
      kind = mo.lastgroup
      value = mo.group()
      span = Span(mo.start(), mo.end(), line_num, mo.start() - line_start)
      current = stack[-1][1] if stack else root

      if kind == "WHITESPACE":
        newlines = value.count("\n")
        if newlines:
          line_num += newlines
          line_start = mo.start() + value.rindex("\n") + 1
      elif kind == "UNTERMINATED":
        raise TemplateSyntaxError("Unterminated string literal", span)
      elif kind in ("STRING", "NUMBER"):
        current.append(Token(TokenKind.LITERAL, value, span))
      elif kind == "IDENT":
        current.append(Token(TokenKind.IDENT, value, span))
      elif kind == "OPEN":
        stack.append((Token(TokenKind.GROUP, value, span, delimiter=value), []))
      elif kind == "CLOSE":
        if not stack:
          raise TemplateSyntaxError(f"Unexpected closing delimiter '{value}'", span)
        opener, children = stack.pop()
        if GROUP_DELIMITERS[opener.delimiter] != value:
          raise TemplateSyntaxError(
            f"Mismatched closing delimiter '{value}' for '{opener.delimiter}'",
            span,
          )
        group_span = Span(opener.span.start, span.end, opener.span.line, opener.span.col)
        group = Token(
          TokenKind.GROUP,
          self.text[group_span.start : group_span.end],
          group_span,
          delimiter=opener.delimiter,
          children=children,
        )
        (stack[-1][1] if stack else root).append(group)
      else:
        current.append(Token(TokenKind.PUNCT, value, span))

    if stack:
      opener, _ = stack[-1]
      raise TemplateSyntaxError(f"Unclosed delimiter '{opener.delimiter}'", opener.span)

    return root


def tokenize(text: str) -> List[Token]:
  """Convenience wrapper around `Tokenizer(text).tokenize()`."""
  return Tokenizer(text).tokenize()
