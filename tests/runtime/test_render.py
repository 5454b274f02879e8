"""
Tests for `render_tree` component expansion.
"""

import pytest

from tagtree.runtime import (
  ComponentType,
  PropsTypeError,
  ReactComponent,
  ReactElement,
  ReactList,
  ReactTagName,
  ReactText,
  render_tree,
)


class Title(ComponentType[str]):
  def render(self, props: str):
    return ReactElement(ty=ReactTagName("h1"), children=[ReactText(props)])


class Page(ComponentType[type(None)]):
  def render(self, props):
    return ReactList([ReactElement(ty=ReactComponent(Title), props="Home"), ReactText("body")])


def test_expands_nested_components():
  tree = ReactElement(ty=ReactTagName("main"), children=[ReactElement(ty=ReactComponent(Page))])
  assert render_tree(tree) == ReactElement(
    ty=ReactTagName("main"),
    children=[
      ReactList(
        [
          ReactElement(ty=ReactTagName("h1"), children=[ReactText("Home")]),
          ReactText("body"),
        ]
      )
    ],
  )


def test_component_children_are_dropped():
  tree = ReactElement(ty=ReactComponent(Title), props="T", children=[ReactText("ignored")])
  assert render_tree(tree).children == [ReactText("T")]


def test_host_tree_is_copied():
  tree = ReactElement(ty=ReactTagName("p"), children=[ReactText("x")])
  out = render_tree(tree)
  assert out == tree
  assert out is not tree


def test_wrong_props_raise():
  with pytest.raises(PropsTypeError):
    render_tree(ReactElement(ty=ReactComponent(Title), props=1))
