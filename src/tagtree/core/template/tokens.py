"""
Template Token Definitions.

Defines the token kinds, punctuation symbols and source spans shared by the
Tokenizer, the Cursor and the recursive descent parser.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class TokenKind(str, Enum):
  """Enumeration of Lexer Token Types."""

  IDENT = "IDENT"
  LITERAL = "LITERAL"
  PUNCT = "PUNCT"
  GROUP = "GROUP"


class Symbol(str, Enum):
  """Enumeration of Punctuation Symbols with structural meaning."""

  LT = "<"
  GT = ">"
  SLASH = "/"
  DOT = "."
  PATH_SEP = "::"
  COMMA = ","
  LBRACE = "{"
  RBRACE = "}"
  LPAREN = "("
  RPAREN = ")"
  LBRACKET = "["
  RBRACKET = "]"


# Opening delimiter -> closing delimiter for GROUP tokens
GROUP_DELIMITERS = {
  Symbol.LPAREN.value: Symbol.RPAREN.value,
  Symbol.LBRACKET.value: Symbol.RBRACKET.value,
  Symbol.LBRACE.value: Symbol.RBRACE.value,
}


@dataclass(frozen=True)
class Span:
  """
  A location inside template text.

  Attributes:
      start (int): Offset of the first character.
      end (int): Offset one past the last character.
      line (int): 1-based line number of `start`.
      col (int): 0-based column of `start`.
  """

  start: int
  end: int
  line: int
  col: int


@dataclass
class Token:
  """
  A single lexical unit.

  GROUP tokens span a balanced bracket run and keep the tokens between the
  delimiters in `children`; `delimiter` is the opening bracket.
  """

  kind: TokenKind
  text: str
  span: Span
  delimiter: str = ""
  children: List["Token"] = field(default_factory=list)

  def is_punct(self, symbol: str) -> bool:
    return self.kind == TokenKind.PUNCT and self.text == symbol

  def __repr__(self) -> str:
    return f"Token({self.kind.value}, {self.text!r}, {self.span.line}:{self.span.col})"
