"""
Component Dispatch Bridge.

Components with unrelated props types share one dispatch path:

1.  `Component` is the erased capability. A `ReactElement` only ever calls
    `render_untyped(props)` with the props value it owns.
2.  `ComponentType[P]` is the typed capability. Its `render_untyped` downcasts
    the erased value back to `P` and then calls the typed `render`.
3.  `FunctionComponent` makes any one-argument callable a `ComponentType`,
    with `P` taken from the parameter annotation.

A downcast requires the exact props class. A mismatch means the element was
built with props of the wrong type. It raises `PropsTypeError` and is never
coerced.
"""

import functools
import inspect
import typing
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Optional, Type, TypeVar

from tagtree.runtime.node import ReactNode

P = TypeVar("P")

_NONE_TYPE = type(None)


def _runtime_class(annotation: Any) -> Type[Any]:
  if annotation is None:
    return _NONE_TYPE
  if annotation is Any:
    return object
  origin = typing.get_origin(annotation)
  if origin is not None and isinstance(origin, type):
    return origin
  if isinstance(annotation, type):
    return annotation
  return object


def _type_name(cls: Optional[type]) -> str:
  return getattr(cls, "__name__", repr(cls))


class PropsTypeError(TypeError):
  """Raised when erased props do not match the component's declared type."""


class Component(ABC):
  """Erased component capability."""

  @abstractmethod
  def render_untyped(self, props: Any) -> ReactNode:
    pass

  def type_id(self) -> str:
    """Identity of the implementation, for diagnostics only."""
    cls = type(self)
    return f"{cls.__module__}.{cls.__qualname__}"


class ComponentType(Component, Generic[P]):
  """
  Typed component capability.

  Subclasses declare their props type either explicitly through
  `props_type` or through the generic parameter::

      class Counter(ComponentType[CounterProps]):
          def render(self, props: CounterProps) -> ReactNode: ...

  Attributes:
      props_type (type): Exact runtime class of the erased props. Subclasses
          are rejected (`True` is not `int` props); `object` accepts any value.
  """

  props_type: Type[Any] = object

  def __init_subclass__(cls, **kwargs: Any) -> None:
    super().__init_subclass__(**kwargs)
    if "props_type" in cls.__dict__:
      return
    for base in getattr(cls, "__orig_bases__", ()):
      if typing.get_origin(base) is ComponentType:
        args = typing.get_args(base)
        if args and not isinstance(args[0], TypeVar):
          cls.props_type = _runtime_class(args[0])

  @abstractmethod
  def render(self, props: P) -> ReactNode:
    pass

  def render_untyped(self, props: Any) -> ReactNode:
    expected = self.props_type
    if expected is not object and type(props) is not expected:
      raise PropsTypeError(
        f"{self.type_id()} expects props of type {_type_name(expected)}, got {_type_name(type(props))}"
      )
    return self.render(props)


class FunctionComponent(ComponentType[Any]):
  """
  Adapts a callable `fn(props) -> ReactNode` to the typed capability.

  Args:
      func: Callable taking exactly one positional argument.
  """

  def __init__(self, func: Callable[[Any], ReactNode]):
    self.func = func
    self.props_type = props_type_of(func)
    functools.update_wrapper(self, func)

  def render(self, props: Any) -> ReactNode:
    return self.func(props)

  def __call__(self, props: Any) -> ReactNode:
    return self.render_untyped(props)

  def type_id(self) -> str:
    name = getattr(self.func, "__qualname__", type(self.func).__qualname__)
    return f"{getattr(self.func, '__module__', None)}.{name}"

  def __repr__(self) -> str:
    return f"FunctionComponent({self.type_id()}, props={_type_name(self.props_type)})"


def props_type_of(func: Callable[..., Any]) -> Type[Any]:
  """
  Determines the props class of a one-argument component callable.

  Missing or `Any` annotations accept every value; a `None` annotation
  means the component takes no props.

  Raises:
      TypeError: If `func` does not take exactly one positional argument.
  """
  sig = inspect.signature(func)
  params = [
    p for p in sig.parameters.values() if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
  ]
  if len(params) != 1:
    raise TypeError(f"Component {func!r} must take exactly one props argument, takes {len(params)}")
  param = params[0]

  target = func if inspect.isfunction(func) or inspect.ismethod(func) else getattr(func, "__call__", func)
  try:
    hints = typing.get_type_hints(target)
  except (NameError, TypeError):
    # Unresolvable forward reference or an object without annotations
    hints = {}

  annotation = hints.get(param.name, param.annotation)
  if annotation is param.empty or isinstance(annotation, str):
    return object
  return _runtime_class(annotation)


def as_component(obj: Any) -> Component:
  """
  Coerces a component reference into the erased capability.

  Accepts `Component` instances, `Component` subclasses (instantiated with no
  arguments) and one-argument callables.
  """
  if isinstance(obj, Component):
    return obj
  if isinstance(obj, type) and issubclass(obj, Component):
    return obj()
  if callable(obj):
    return FunctionComponent(obj)
  raise TypeError(f"{obj!r} is not a component")


def component(func: Callable[[P], ReactNode]) -> FunctionComponent:
  """
  Decorator turning a render function into a `FunctionComponent`.

  Example:
      >>> @component
      ... def Greeting(props: GreetingProps) -> ReactNode:
      ...     return ReactText(f"Hello {props.name}")
  """
  return FunctionComponent(func)

