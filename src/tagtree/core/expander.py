"""
Template Expander.

A LibCST transformer that finds template marker calls in a Python module and
replaces each one with the construction expression compiled from its string
argument::

    view = template("<span>Hello</span>")

becomes::

    view = tagtree.ReactElement(ty=tagtree.ReactTagName('span'), props=None, children=[tagtree.ReactText('Hello')])

Diagnostics are relocated from template-relative positions to file positions
with `PositionProvider`. The first failure aborts the whole module.
"""

import re
from typing import List, Union

import libcst as cst
from libcst.metadata import CodeRange, PositionProvider

from tagtree.config import RuntimeConfig
from tagtree.core.template.emitter import TemplateEmitter, create_dotted_name
from tagtree.core.template.errors import TemplateSyntaxError
from tagtree.core.template.parser import parse_template
from tagtree.core.template.tokens import Span


def get_full_name(node: cst.BaseExpression) -> str:
  """
  Resolves a CST Name or Attribute chain to a dot-separated string.

  Returns:
      str: e.g. "tagtree.template", or "" for any other expression.
  """
  if isinstance(node, cst.Name):
    return node.value
  if isinstance(node, cst.Attribute):
    base = get_full_name(node.value)
    return f"{base}.{node.attr.value}" if base else ""
  return ""


class TemplateExpander(cst.CSTTransformer):
  """
  Replaces `template("...")` calls with emitted construction code.

  Attributes:
      config (RuntimeConfig): Marker name, runtime module and parser options.
      expanded (int): Number of calls replaced so far.
  """

  METADATA_DEPENDENCIES = (PositionProvider,)

  def __init__(self, config: RuntimeConfig):
    super().__init__()
    self.config = config
    self.emitter = TemplateEmitter(config.runtime_module)
    self.expanded = 0

  def leave_Call(self, original_node: cst.Call, updated_node: cst.Call) -> cst.BaseExpression:
    if get_full_name(original_node.func) not in self.config.marker_names:
      return updated_node

    call_pos = self.get_metadata(PositionProvider, original_node)
    literal = self._template_literal(original_node, call_pos)
    text = literal.evaluated_value
    if isinstance(text, bytes):
      raise self._at(call_pos, f"{self.config.marker}() does not accept bytes literals")

    try:
      tree = parse_template(text, interpolate=self.config.interpolate)
    except TemplateSyntaxError as e:
      if e.is_call_site:
        raise e.pinned(call_pos.start.line, call_pos.start.column) from e
      raise self._in_literal(literal, e) from e

    self.expanded += 1
    return self.emitter.emit(tree)

  def leave_Module(self, original_node: cst.Module, updated_node: cst.Module) -> cst.Module:
    if not self.expanded or not self.config.inject_import:
      return updated_node
    if any(self._imports_runtime(stmt) for stmt in updated_node.body):
      return updated_node

    import_line = cst.SimpleStatementLine(
      body=[cst.Import(names=[cst.ImportAlias(name=create_dotted_name(self.config.runtime_module))])]
    )
    body: List[Union[cst.SimpleStatementLine, cst.BaseCompoundStatement]] = list(updated_node.body)
    idx = 0
    while idx < len(body) and (_is_docstring(body[idx]) or _is_future_import(body[idx])):
      idx += 1
    body.insert(idx, import_line)
    return updated_node.with_changes(body=body)

  def _template_literal(self, call: cst.Call, call_pos: CodeRange) -> cst.SimpleString:
    if len(call.args) != 1 or call.args[0].keyword is not None or call.args[0].star:
      raise self._at(call_pos, f"{self.config.marker}() takes exactly one string literal argument")
    value = call.args[0].value
    if not isinstance(value, cst.SimpleString):
      raise self._at(call_pos, f"{self.config.marker}() argument must be a plain string literal")
    return value

  def _at(self, pos: CodeRange, message: str) -> TemplateSyntaxError:
    return TemplateSyntaxError(message).pinned(pos.start.line, pos.start.column)

  def _in_literal(self, literal: cst.SimpleString, error: TemplateSyntaxError) -> TemplateSyntaxError:
    """
    Maps a template-relative error to its file position.

    Template offsets index the evaluated string; escape sequences are walked
    back to the characters actually written in the literal.
    """
    start = self.get_metadata(PositionProvider, literal).start
    head = len(literal.prefix) + len(literal.quote)
    body = literal.value[head : len(literal.value) - len(literal.quote)]
    offsets = escape_offsets(body, raw="r" in literal.prefix.lower())

    span = error.span
    raw_start = offsets[min(span.start, len(offsets) - 1)]
    raw_end = offsets[min(span.end, len(offsets) - 1)]
    before = body[:raw_start]
    newlines = before.count("\n")
    if newlines:
      col = raw_start - (before.rindex("\n") + 1)
    else:
      col = start.column + head + raw_start
    return TemplateSyntaxError(error.message, Span(raw_start, raw_end, start.line + newlines, col))

  def _imports_runtime(self, stmt: cst.CSTNode) -> bool:
    if not isinstance(stmt, cst.SimpleStatementLine):
      return False
    return any(
      isinstance(s, cst.Import)
      and any(a.asname is None and _binds(get_full_name(a.name), self.config.runtime_module) for a in s.names)
      for s in stmt.body
    )


def _is_docstring(stmt: cst.CSTNode) -> bool:
  if not isinstance(stmt, cst.SimpleStatementLine) or len(stmt.body) != 1:
    return False
  expr = stmt.body[0]
  return isinstance(expr, cst.Expr) and isinstance(expr.value, (cst.SimpleString, cst.ConcatenatedString))


def _is_future_import(stmt: cst.CSTNode) -> bool:
  if not isinstance(stmt, cst.SimpleStatementLine):
    return False
  return any(
    isinstance(s, cst.ImportFrom) and isinstance(s.module, cst.Name) and s.module.value == "__future__"
    for s in stmt.body
  )


def _binds(imported: str, module: str) -> bool:
  # `import a.b` binds `a` as well
  return imported == module or imported.startswith(module + ".")


_ESCAPE = re.compile(r"\\(N\{[^}]*\}|x[0-9a-fA-F]{2}|u[0-9a-fA-F]{4}|U[0-9a-fA-F]{8}|[0-7]{1,3}|.)", re.DOTALL)
_SINGLE_ESCAPES = "\\'\"abfnrtv01234567"


def escape_offsets(body: str, raw: bool = False) -> List[int]:
  """
  Maps each character of an evaluated string literal to its offset in the
  literal's source body.

  Args:
      body: Literal text between the quotes, as written.
      raw: True for `r"..."` literals, where nothing is unescaped.

  Returns:
      List[int]: One offset per evaluated character plus a final end offset.
  """
  if raw:
    return list(range(len(body) + 1))

  offsets: List[int] = []
  pos = 0
  for mo in _ESCAPE.finditer(body):
    offsets.extend(range(pos, mo.start()))
    seq = mo.group(1)
    if seq == "\n":
      pass
    elif len(seq) > 1 or seq in _SINGLE_ESCAPES:
      offsets.append(mo.start())
    else:
      # Unknown escapes keep the backslash
      offsets.extend([mo.start(), mo.start() + 1])
    pos = mo.end()
  offsets.extend(range(pos, len(body) + 1))
  return offsets
