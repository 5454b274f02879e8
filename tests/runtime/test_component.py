"""
Tests for the component dispatch bridge.

Verifies:
1. Typed components receive props downcast from the erased value.
2. Mismatched props raise `PropsTypeError` instead of being coerced.
3. Props types are inferred from generics and annotations.
"""

from dataclasses import dataclass
from typing import Any, List

import pytest

from tagtree.runtime import (
  Component,
  ComponentType,
  FunctionComponent,
  PropsTypeError,
  ReactText,
  as_component,
  component,
  props_type_of,
)


@dataclass
class CounterProps:
  count: int


class Counter(ComponentType[CounterProps]):
  def render(self, props: CounterProps):
    return ReactText(str(props.count))


class Explicit(ComponentType[Any]):
  props_type = int

  def render(self, props):
    return ReactText(f"#{props}")


def test_props_type_from_generic():
  assert Counter.props_type is CounterProps


def test_explicit_props_type_wins():
  assert Explicit.props_type is int


def test_render_untyped_downcasts():
  assert Counter().render_untyped(CounterProps(3)) == ReactText("3")


def test_render_untyped_mismatch():
  with pytest.raises(PropsTypeError) as excinfo:
    Counter().render_untyped("3")
  assert "expects props of type CounterProps, got str" in str(excinfo.value)
  assert isinstance(excinfo.value, TypeError)


def test_unrelated_props_types_share_dispatch():
  erased: List[Component] = [Counter(), Explicit()]
  outputs = [c.render_untyped(p) for c, p in zip(erased, [CounterProps(1), 2])]
  assert outputs == [ReactText("1"), ReactText("#2")]


def test_type_id_names_implementation():
  assert Counter().type_id().endswith("Counter")


def test_function_component_decorator():
  @component
  def Badge(props: int):
    """Badge docs."""
    return ReactText(f"badge {props}")

  assert isinstance(Badge, FunctionComponent)
  assert Badge.props_type is int
  assert Badge.__doc__ == "Badge docs."
  assert Badge(4) == ReactText("badge 4")
  with pytest.raises(PropsTypeError):
    Badge("4")


def test_props_type_of_annotations():
  def none_props(props: None): ...

  def any_props(props: Any): ...

  def bare(props): ...

  def generic(props: List[int]): ...

  def with_default(props: int, extra: str = ""): ...

  assert props_type_of(none_props) is type(None)
  assert props_type_of(any_props) is object
  assert props_type_of(bare) is object
  assert props_type_of(generic) is list
  assert props_type_of(with_default) is int


def test_props_type_of_arity():
  def two(a, b): ...

  with pytest.raises(TypeError, match="exactly one props argument"):
    props_type_of(two)


def test_as_component():
  instance = Counter()
  assert as_component(instance) is instance
  assert isinstance(as_component(Counter), Counter)
  assert isinstance(as_component(lambda props: ReactText("")), FunctionComponent)
  with pytest.raises(TypeError, match="is not a component"):
    as_component(5)


def test_downcast_requires_exact_type():
  @component
  def Amount(props: int):
    return ReactText(str(props))

  with pytest.raises(PropsTypeError, match="expects props of type int, got bool"):
    Amount(True)


def test_downcast_rejects_props_subclass():
  @dataclass
  class SpecialProps(CounterProps):
    pass

  with pytest.raises(PropsTypeError):
    Counter().render_untyped(SpecialProps(1))


def test_object_props_accept_anything():
  assert FunctionComponent(lambda props: ReactText("ok"))(True) == ReactText("ok")
