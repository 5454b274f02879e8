"""
Inline Template Evaluation.

`template()` is the marker the expander looks for. When a module has not
been expanded ahead of time, calling it compiles the template on the spot and
evaluates the construction code in the caller's namespace.

Names resolve lexically: the caller's locals, then the locals of each enclosing
function still running further up the stack, then the caller's globals. A
name from an enclosing function that has already returned is only visible if
the calling function itself references it.
"""

import inspect
from types import CodeType, FrameType
from typing import Any, Dict, List

import tagtree.runtime as runtime
from tagtree.core.template.emitter import compile_template
from tagtree.runtime.node import ReactNode

# Name the emitted code uses for the runtime inside the eval namespace
_RUNTIME_ALIAS = "__tagtree_runtime__"


def template(source: str, interpolate: bool = False) -> ReactNode:
  """
  Compiles and evaluates a template in the caller's scope.

  Args:
      source: Template text, e.g. `"<Card><span>Hi</span></Card>"`.
      interpolate: Treat `{expr}` groups in content as Python expressions
          evaluated against the caller's locals.

  Returns:
      ReactNode: A freshly built tree.

  Raises:
      TemplateSyntaxError: If the template is malformed.
  """
  code = compile_template(source, runtime=_RUNTIME_ALIAS, interpolate=interpolate)

  frame = inspect.currentframe()
  caller = frame.f_back if frame is not None else None
  try:
    namespace = _lexical_namespace(caller) if caller is not None else {}
    namespace[_RUNTIME_ALIAS] = runtime
    return eval(code, namespace)
  finally:
    del frame, caller


def _lexical_namespace(caller: FrameType) -> Dict[str, Any]:
  """Merges globals, enclosing-function locals and caller locals, innermost last."""
  scopes: List[Dict[str, Any]] = [caller.f_locals]
  code = caller.f_code
  outer = caller.f_back
  while outer is not None:
    if _defines(outer.f_code, code):
      scopes.append(outer.f_locals)
      code = outer.f_code
    outer = outer.f_back

  namespace = dict(caller.f_globals)
  for scope in reversed(scopes):
    namespace.update(scope)
  return namespace


def _defines(parent: CodeType, child: CodeType) -> bool:
  # Nested function bodies are stored as constants of the enclosing code object
  return any(const is child for const in parent.co_consts)
