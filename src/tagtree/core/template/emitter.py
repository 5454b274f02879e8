"""
Template Emitter.

Lowers the template AST into a LibCST expression that builds the runtime
tree when evaluated. The mapping is one-to-one with the AST shape; no
optimization pass runs here (adjacent text was merged by the parser).

Example:
    `<span>Hi</span>` becomes::

        tagtree.ReactElement(ty=tagtree.ReactTagName("span"), props=None, children=[tagtree.ReactText("Hi")])
"""

from typing import List, Union

import libcst as cst

from tagtree.core.template.nodes import (
  ComponentPath,
  ElementNode,
  ExprNode,
  Fragment,
  Node,
  PathSegment,
  TagName,
  TextNode,
)
from tagtree.core.template.parser import parse_template

_TIGHT_EQ = cst.AssignEqual(
  whitespace_before=cst.SimpleWhitespace(""),
  whitespace_after=cst.SimpleWhitespace(""),
)


def create_dotted_name(name_str: str) -> Union[cst.Name, cst.Attribute]:
  """
  Creates a CST node structure for a dotted path string.

  Args:
      name_str (str): Dot-separated path (e.g. "tagtree.runtime").

  Returns:
      Union[cst.Name, cst.Attribute]: The constructed AST node.
  """
  parts = name_str.split(".")
  node = cst.Name(parts[0])
  for part in parts[1:]:
    node = cst.Attribute(value=node, attr=cst.Name(part))
  return node


_NEEDS_PARENS = (cst.Tuple, cst.Yield, cst.GeneratorExp, cst.NamedExpr)


def interpolated_expression(source: str) -> cst.BaseExpression:
  """
  Parses interpolated source as if it were written inside parentheses.

  The added parentheses are dropped again unless the expression spans several
  lines or its node type is only valid when parenthesized.
  """
  expr = cst.parse_expression(f"({source})")
  if "\n" in source or isinstance(expr, _NEEDS_PARENS):
    return expr
  return expr.with_changes(lpar=expr.lpar[1:], rpar=expr.rpar[:-1])


class TemplateEmitter:
  """
  Emits construction code for a parsed template.

  Attributes:
      runtime (str): Module path the emitted code uses to reach the runtime
          types (`tagtree` by default).
  """

  def __init__(self, runtime: str = "tagtree"):
    self.runtime = runtime

  def emit(self, node: Node) -> cst.BaseExpression:
    if isinstance(node, TextNode):
      return self._call("ReactText", [cst.Arg(cst.SimpleString(repr(node.text)))])
    if isinstance(node, ExprNode):
      return self._call("into_node", [cst.Arg(interpolated_expression(node.source))])
    if isinstance(node, ElementNode):
      return self._emit_element(node)
    raise TypeError(f"Cannot emit node of type {type(node).__name__}")

  def emit_code(self, node: Node) -> str:
    """Returns the emitted expression as Python source text."""
    return cst.Module(body=[]).code_for_node(self.emit(node))

  def _emit_element(self, node: ElementNode) -> cst.BaseExpression:
    children = cst.List([cst.Element(self.emit(c)) for c in node.children])

    if isinstance(node.ty, Fragment):
      return self._call("ReactList", [cst.Arg(children)])

    if isinstance(node.ty, TagName):
      ty = self._call("ReactTagName", [cst.Arg(cst.SimpleString(repr(node.ty.name)))])
    elif isinstance(node.ty, ComponentPath):
      ty = self._call("ReactComponent", [cst.Arg(self._emit_path(node.ty))])
    else:
      raise TypeError(f"Unknown element type {node.ty!r}")

    return self._call(
      "ReactElement",
      [
        cst.Arg(keyword=cst.Name("ty"), value=ty, equal=_TIGHT_EQ),
        cst.Arg(keyword=cst.Name("props"), value=cst.Name("None"), equal=_TIGHT_EQ),
        cst.Arg(keyword=cst.Name("children"), value=children, equal=_TIGHT_EQ),
      ],
    )

  def _emit_path(self, path: ComponentPath) -> cst.BaseExpression:
    expr: cst.BaseExpression = self._emit_segment(cst.Name(path.segments[0].name), path.segments[0])
    for seg in path.segments[1:]:
      expr = self._emit_segment(cst.Attribute(value=expr, attr=cst.Name(seg.name)), seg)
    return expr

  def _emit_segment(self, base: cst.BaseExpression, seg: PathSegment) -> cst.BaseExpression:
    if not seg.generics:
      return base
    return cst.Subscript(
      value=base,
      slice=[cst.SubscriptElement(cst.Index(self._emit_path(g))) for g in seg.generics],
    )

  def _call(self, name: str, args: List[cst.Arg]) -> cst.Call:
    return cst.Call(func=create_dotted_name(f"{self.runtime}.{name}"), args=args)


def compile_template(source: str, runtime: str = "tagtree", interpolate: bool = False) -> str:
  """
  Compiles template text into Python source for the construction expression.

  Args:
      source: Template text.
      runtime: Module path used to reference the runtime types.
      interpolate: Treat `{expr}` groups in content as Python expressions.

  Returns:
      str: A Python expression.

  Raises:
      TemplateSyntaxError: If the template is malformed.
  """
  return TemplateEmitter(runtime).emit_code(parse_template(source, interpolate=interpolate))
