"""
tagtree Package.

Compiles an angle-bracket markup DSL into Python code that constructs a
typed view tree, and provides the runtime node types and component bridge
the generated code relies on.

Usage
-----

Inline Evaluation
^^^^^^^^^^^^^^^^^

.. code-block:: python

    from tagtree import template, component, render_tree

    @component
    def Greeting(props: None):
        return template("<span>Hello</span>")

    tree = template("<div><Greeting></Greeting></div>")
    print(render_tree(tree))

Ahead-of-time Expansion
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from tagtree import ExpansionEngine, RuntimeConfig

    res = ExpansionEngine(RuntimeConfig()).run('view = template("<b>x</b>")')
    print(res.code)
"""

from tagtree.config import RuntimeConfig
from tagtree.core.conversion_result import ConversionResult
from tagtree.core.engine import ExpansionEngine
from tagtree.core.inline import template
from tagtree.core.template import TemplateSyntaxError, compile_template, parse_template
from tagtree.runtime import (
  Component,
  ComponentType,
  FunctionComponent,
  PropsTypeError,
  ReactComponent,
  ReactElement,
  ReactElementType,
  ReactList,
  ReactNode,
  ReactTagName,
  ReactText,
  as_component,
  component,
  into_node,
  render_tree,
)

__version__ = "0.1.0"

__all__ = [
  "Component",
  "ComponentType",
  "ConversionResult",
  "ExpansionEngine",
  "FunctionComponent",
  "PropsTypeError",
  "ReactComponent",
  "ReactElement",
  "ReactElementType",
  "ReactList",
  "ReactNode",
  "ReactTagName",
  "ReactText",
  "RuntimeConfig",
  "TemplateSyntaxError",
  "__version__",
  "as_component",
  "compile_template",
  "component",
  "into_node",
  "parse_template",
  "render_tree",
  "template",
]
