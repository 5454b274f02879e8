"""
Component Expansion.

Resolves a constructed tree down to host elements by dispatching every
component element through the erased `render_untyped` path.
"""

from tagtree.runtime.node import ReactComponent, ReactElement, ReactList, ReactNode


def render_tree(node: ReactNode) -> ReactNode:
  """
  Recursively replaces component elements by their rendered output.

  Host elements, text and lists are rebuilt with expanded children. The
  children written inside a component element are not passed to it; the
  component output replaces the element.

  Raises:
      PropsTypeError: If an element carries props of the wrong type for its component.
  """
  if isinstance(node, ReactElement):
    if isinstance(node.ty, ReactComponent):
      return render_tree(node.ty.component.render_untyped(node.props))
    return ReactElement(ty=node.ty, props=node.props, children=[render_tree(c) for c in node.children])
  if isinstance(node, ReactList):
    return ReactList([render_tree(c) for c in node.children])
  return node
