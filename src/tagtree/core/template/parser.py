"""
Template Recursive Descent Parser.

Parses template text into the AST defined in `nodes.py`:

    <Path> content </Path>     element (host tag or component)
    <> content </>             fragment

`content` is free text interleaved with nested elements. Parsing uses a
single token of lookahead; the first error aborts the whole template.

Example:
    >>> parse_template("<a><b>1</b><c>2</c></a>").children[1].ty
    TagName(name='c')
"""

import re
from typing import List

import libcst as cst

from tagtree.core.template.cursor import Cursor
from tagtree.core.template.errors import TemplateSyntaxError
from tagtree.core.template.nodes import ElementNode, ElementType, ExprNode, Node, TextNode
from tagtree.core.template.resolver import resolve_element_type
from tagtree.core.template.tokenizer import Tokenizer
from tagtree.core.template.tokens import Symbol, Token, TokenKind

_WHITESPACE_RUN = re.compile(r"\s+")


class TemplateParser:
  """
  Parses one template.

  Attributes:
      source (str): The template text. Text nodes are sliced from it.
      interpolate (bool): If True, `{expr}` groups in content become
          `ExprNode`s instead of text.
  """

  def __init__(self, source: str, interpolate: bool = False):
    self.source = source
    self.interpolate = interpolate
    self.cursor = Cursor(Tokenizer(source).tokenize())

  def parse(self) -> ElementNode:
    """
    Parses the whole input as a single root element.

    Raises:
        TemplateSyntaxError: On any structural error or trailing input.
    """
    root = self.parse_element()
    extra = self.cursor.peek()
    if extra is not None:
      raise TemplateSyntaxError("Unexpected token after template root", extra.span)
    return root

  def parse_element(self) -> ElementNode:
    token = self.cursor.peek()
    if token is None:
      raise TemplateSyntaxError("Expected template node")
    if not token.is_punct(Symbol.LT):
      raise TemplateSyntaxError("Expected template node", token.span)

    self.cursor.next()
    return self.parse_element_body()

  def parse_element_body(self) -> ElementNode:
    """
    Parses an element whose leading `<` was already consumed.
    """
    start = self.cursor.peek()
    ty = resolve_element_type(self.cursor)

    token = self.cursor.next()
    if token is None:
      raise TemplateSyntaxError("Expected '>'")
    if not token.is_punct(Symbol.GT):
      # Attribute syntax is reserved but not compiled yet.
      raise TemplateSyntaxError(f"Expected '>', found '{token.text}' (attributes are not supported)", token.span)

    children = self.parse_content()
    self.match_end_tag(ty)

    return ElementNode(ty=ty, props=[], children=children, span=start.span if start else None)

  def parse_content(self) -> List[Node]:
    """
    Collects children until the enclosing `</` or the end of input.

    Consecutive free tokens are merged into exactly one TextNode.
    """
    nodes: List[Node] = []
    text_buf: List[Token] = []

    def flush() -> None:
      if text_buf:
        nodes.append(TextNode(self._reconstruct_text(text_buf), text_buf[0].span))
        text_buf.clear()

    while True:
      token = self.cursor.peek()
      if token is None:
        break

      if token.is_punct(Symbol.LT):
        flush()
        self.cursor.next()
        nxt = self.cursor.peek()
        if nxt is not None and nxt.is_punct(Symbol.SLASH):
          self.cursor.next()
          return nodes
        nodes.append(self.parse_element_body())
        continue

      if self.interpolate and token.kind == TokenKind.GROUP and token.delimiter == Symbol.LBRACE:
        flush()
        nodes.append(self._parse_expr(token))
      else:
        text_buf.append(token)
      self.cursor.next()

    flush()
    return nodes

  def match_end_tag(self, expected: ElementType) -> None:
    """
    Consumes the closing path and `>` after `</` and checks it against the
    opening type.
    """
    start = self.cursor.peek()
    if start is None:
      raise TemplateSyntaxError(f"Expected '</{expected}>'")

    found = resolve_element_type(self.cursor)
    if found != expected:
      raise TemplateSyntaxError(f"Expected '</{expected}>'", start.span)

    token = self.cursor.next()
    if token is None:
      raise TemplateSyntaxError(f"Expected '</{expected}>'")
    if not token.is_punct(Symbol.GT):
      raise TemplateSyntaxError("Expected '>'", token.span)

  def _reconstruct_text(self, tokens: List[Token]) -> str:
    raw = self.source[tokens[0].span.start : tokens[-1].span.end]
    return _WHITESPACE_RUN.sub(" ", raw)

  def _parse_expr(self, group: Token) -> ExprNode:
    inner = group.text[1:-1].strip()
    if not inner:
      raise TemplateSyntaxError("Empty expression", group.span)
    try:
      cst.parse_expression(f"({inner})")
    except cst.ParserSyntaxError as e:
      raise TemplateSyntaxError(f"Invalid expression: {e.message}", group.span) from e
    return ExprNode(inner, group.span)


def parse_template(source: str, interpolate: bool = False) -> ElementNode:
  """
  Parses template text into an `ElementNode`.

  Args:
      source: Template text, e.g. `"<span>Hi</span>"`.
      interpolate: Treat `{expr}` groups in content as Python expressions.

  Returns:
      ElementNode: The root element.
  """
  return TemplateParser(source, interpolate=interpolate).parse()
