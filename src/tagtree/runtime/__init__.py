"""
Runtime Package.

Node types built by emitted template code and the component dispatch bridge.
"""

from tagtree.runtime.node import (
  ReactComponent,
  ReactElement,
  ReactElementType,
  ReactList,
  ReactNode,
  ReactTagName,
  ReactText,
  into_node,
)
from tagtree.runtime.component import (
  Component,
  ComponentType,
  FunctionComponent,
  PropsTypeError,
  as_component,
  component,
  props_type_of,
)
from tagtree.runtime.render import render_tree

__all__ = [
  "Component",
  "ComponentType",
  "FunctionComponent",
  "PropsTypeError",
  "ReactComponent",
  "ReactElement",
  "ReactElementType",
  "ReactList",
  "ReactNode",
  "ReactTagName",
  "ReactText",
  "as_component",
  "component",
  "into_node",
  "props_type_of",
  "render_tree",
]
