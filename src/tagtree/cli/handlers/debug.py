"""
Inspection Command Handlers.

Implements `tagtree compile` (print the emitted construction expression) and
`tagtree parse` (print the template AST as a tree).
"""

from typing import Optional

from rich.markup import escape
from rich.tree import Tree

from tagtree.core.template.emitter import TemplateEmitter
from tagtree.core.template.errors import TemplateSyntaxError
from tagtree.core.template.nodes import ElementNode, ExprNode, Node, TextNode
from tagtree.core.template.parser import parse_template
from tagtree.utils.console import console, log_diagnostic


def handle_compile(source: str, interpolate: bool = False, runtime: str = "tagtree") -> int:
  """
  Compiles a template given on the command line and prints the Python expression.

  Returns:
      int: 0 on success, 1 if the template is malformed.
  """
  try:
    tree = parse_template(source, interpolate=interpolate)
  except TemplateSyntaxError as e:
    log_diagnostic("<template>", str(e))
    return 1

  print(TemplateEmitter(runtime).emit_code(tree))
  return 0


def handle_parse(source: str, interpolate: bool = False) -> int:
  """
  Parses a template and renders its AST.

  Returns:
      int: 0 on success, 1 if the template is malformed.
  """
  try:
    tree = parse_template(source, interpolate=interpolate)
  except TemplateSyntaxError as e:
    log_diagnostic("<template>", str(e))
    return 1

  console.print(build_tree(tree))
  return 0


def build_tree(node: Node, parent: Optional[Tree] = None) -> Tree:
  """Builds a Rich Tree mirroring the AST."""
  label = _label(node)
  branch = Tree(label) if parent is None else parent.add(label)
  if isinstance(node, ElementNode):
    for child in node.children:
      build_tree(child, branch)
  return branch


def _label(node: Node) -> str:
  if isinstance(node, TextNode):
    return f"Text [code]{escape(repr(node.text))}[/code]"
  if isinstance(node, ExprNode):
    return f"Expr [code]{escape(node.source)}[/code]"
  kind = node.to_dict()["kind"]
  if node.is_fragment:
    return f"[tag]{kind}[/tag]"
  return f"[tag]{kind}[/tag] {escape(str(node.ty))}"
