"""
Runtime View Tree.

The tree built when emitted construction code runs. Every child is owned by
exactly one parent; nothing is shared or cached between evaluations.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List

if TYPE_CHECKING:
  from tagtree.runtime.component import Component


class ReactNode:
  """Base class of `ReactText`, `ReactElement` and `ReactList`."""


@dataclass
class ReactText(ReactNode):
  text: str


@dataclass
class ReactList(ReactNode):
  """An ordered run of nodes with no wrapping element (fragments)."""

  children: List[ReactNode] = field(default_factory=list)


class ReactElementType:
  """Base class of `ReactTagName` and `ReactComponent`."""


@dataclass
class ReactTagName(ReactElementType):
  name: str


@dataclass
class ReactComponent(ReactElementType):
  """
  Wraps a component handle.

  Plain callables are accepted and adapted with `as_component`, so emitted
  code can reference a component function directly.
  """

  component: "Component"

  def __post_init__(self) -> None:
    from tagtree.runtime.component import as_component

    self.component = as_component(self.component)


@dataclass
class ReactElement(ReactNode):
  """
  A host tag or component instance.

  Attributes:
      ty (ReactElementType): What to render.
      props (Any): Type-erased properties, owned by this element.
      children (List[ReactNode]): Children in source order.
  """

  ty: ReactElementType
  props: Any = None
  children: List[ReactNode] = field(default_factory=list)

  @property
  def is_component(self) -> bool:
    return isinstance(self.ty, ReactComponent)


def into_node(value: Any) -> ReactNode:
  """
  Converts an interpolated value into a node.

  Args:
      value: A node, string, sequence of values, None, or any object.

  Returns:
      ReactNode: Nodes unchanged, strings as text, sequences as lists,
      None as an empty list and anything else as its `str()`.
  """
  if isinstance(value, ReactNode):
    return value
  if isinstance(value, str):
    return ReactText(value)
  if value is None:
    return ReactList([])
  if isinstance(value, (list, tuple)):
    return ReactList([into_node(v) for v in value])
  return ReactText(str(value))

