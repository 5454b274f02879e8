"""
Element-Type Resolver.

Reads the path that follows `<` (or `</`) and classifies it as a Fragment,
a host TagName or a user ComponentPath.

Accumulation rules:
    - `<` opens a generic argument list and `>` closes one while depth > 0.
    - `.` and `::` belong to the path at any depth.
    - Any other punctuation or a GROUP only belongs to the path inside a
      generic argument list.
    - At depth zero two identifiers in a row end the path (`<Foo bar>`).

The accumulated tokens are then parsed by a small path grammar::

    path     := segment (sep segment)*        sep := "." | "::"
    segment  := IDENT [generics]
    generics := "<" path ("," path)* [","] ">"
"""

from typing import List, Optional, Tuple

from tagtree.core.template.cursor import Cursor
from tagtree.core.template.errors import TemplateSyntaxError
from tagtree.core.template.nodes import (
  ComponentPath,
  ElementType,
  Fragment,
  PathSegment,
  TagName,
  is_tag_name,
)
from tagtree.core.template.tokens import Symbol, Token, TokenKind

_SEPARATORS = (Symbol.DOT.value, Symbol.PATH_SEP.value)


def resolve_element_type(cursor: Cursor) -> ElementType:
  """
  Consumes a tag path from the cursor and classifies it.

  Args:
      cursor: Positioned right after `<` or `</`.

  Returns:
      ElementType: `Fragment` for an empty path, `TagName` for a single
      lowercase identifier, `ComponentPath` otherwise.

  Raises:
      TemplateSyntaxError: If the accumulated tokens are not a valid path.
  """
  path_buf = collect_path_tokens(cursor)
  if not path_buf:
    return Fragment()

  path = PathParser(path_buf).parse()
  if len(path.segments) == 1 and not path.segments[0].generics and is_tag_name(path.segments[0].name):
    return TagName(path.segments[0].name)

  bad = path.keywords()
  if bad:
    raise TemplateSyntaxError(f"Invalid component path '{path}': '{bad[0]}' is a reserved word", path_buf[0].span)
  return path


def collect_path_tokens(cursor: Cursor) -> List[Token]:
  path_buf: List[Token] = []
  angle_brackets = 0
  last_was_ident = False

  while True:
    token = cursor.peek()
    if token is None:
      break

    if token.kind == TokenKind.PUNCT:
      if token.text == Symbol.LT:
        angle_brackets += 1
      elif token.text == Symbol.GT and angle_brackets > 0:
        angle_brackets -= 1
      elif token.text in _SEPARATORS:
        pass
      elif angle_brackets == 0:
        break
    elif token.kind == TokenKind.GROUP:
      if angle_brackets == 0:
        break
    elif token.kind == TokenKind.IDENT:
      if angle_brackets == 0 and last_was_ident:
        break
    else:
      break

    last_was_ident = token.kind == TokenKind.IDENT
    path_buf.append(cursor.next())

  return path_buf


class PathParser:
  """Recursive descent parser for the accumulated path tokens."""

  def __init__(self, tokens: List[Token]):
    self.cursor = Cursor(tokens)
    self.last = tokens[-1]

  def parse(self) -> ComponentPath:
    path = self._parse_path()
    extra = self.cursor.peek()
    if extra is not None:
      raise TemplateSyntaxError(f"Unexpected token '{extra.text}' in path", extra.span)
    return path

  def _error_at(self, token: Optional[Token], what: str) -> TemplateSyntaxError:
    if token is None:
      return TemplateSyntaxError(f"Expected {what}, found end of path", self.last.span)
    return TemplateSyntaxError(f"Expected {what}, found '{token.text}'", token.span)

  def _parse_path(self) -> ComponentPath:
    segments = [self._parse_segment()]
    while True:
      token = self.cursor.peek()
      if token is None or not (token.kind == TokenKind.PUNCT and token.text in _SEPARATORS):
        break
      self.cursor.next()
      segments.append(self._parse_segment())
    return ComponentPath(tuple(segments))

  def _parse_segment(self) -> PathSegment:
    token = self.cursor.next()
    if token is None or token.kind != TokenKind.IDENT:
      raise self._error_at(token, "identifier")

    generics: Tuple[ComponentPath, ...] = ()
    nxt = self.cursor.peek()
    if nxt is not None and nxt.is_punct(Symbol.LT):
      generics = self._parse_generics()
    return PathSegment(token.text, generics)

  def _parse_generics(self) -> Tuple[ComponentPath, ...]:
    self.cursor.next()
    args: List[ComponentPath] = []
    while True:
      token = self.cursor.peek()
      if token is not None and token.is_punct(Symbol.GT) and args:
        self.cursor.next()
        return tuple(args)

      args.append(self._parse_path())

      token = self.cursor.next()
      if token is not None and token.is_punct(Symbol.GT):
        return tuple(args)
      if token is None or not token.is_punct(Symbol.COMMA):
        raise self._error_at(token, "',' or '>'")
