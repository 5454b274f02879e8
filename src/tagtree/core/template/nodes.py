"""
Template AST Nodes.

Parse-time representation of one template. Nodes only live for the duration
of a single compilation and are discarded once the construction expression
has been emitted.

Structure:
    - `TextNode`: a merged run of free tokens.
    - `ElementNode`: a tag with its resolved `ElementType` and ordered children.
    - `ExprNode`: a raw Python expression interpolated from a `{...}` group.
"""

import keyword
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from tagtree.core.template.tokens import Span

# --- Element Types ---


@dataclass(frozen=True)
class ElementType(ABC):
  """
  Classification of a tag. Equality is structural and is what the End-Tag
  Matcher uses to pair opening and closing tags.
  """

  @abstractmethod
  def __str__(self) -> str:
    pass


@dataclass(frozen=True)
class Fragment(ElementType):
  """The tag-less grouping form `<> ... </>`."""

  def __str__(self) -> str:
    return ""


@dataclass(frozen=True)
class TagName(ElementType):
  """A host tag such as `span`."""

  name: str

  def __str__(self) -> str:
    return self.name


@dataclass(frozen=True)
class PathSegment:
  """
  One segment of a component path.

  Attributes:
      name (str): The identifier.
      generics (Tuple[ComponentPath, ...]): Angle-bracket arguments, if any.
  """

  name: str
  generics: Tuple["ComponentPath", ...] = ()

  def __str__(self) -> str:
    if not self.generics:
      return self.name
    return f"{self.name}[{', '.join(str(g) for g in self.generics)}]"


@dataclass(frozen=True)
class ComponentPath(ElementType):
  """
  A user component referenced by a (possibly module qualified) path.

  The path is re-emitted verbatim as a Python name/attribute chain; it is
  never resolved at compile time.
  """

  segments: Tuple[PathSegment, ...]

  def __str__(self) -> str:
    return ".".join(str(s) for s in self.segments)

  @property
  def dotted(self) -> str:
    """The path without generic arguments."""
    return ".".join(s.name for s in self.segments)

  def keywords(self) -> List[str]:
    """Returns every segment name that is a reserved Python keyword."""
    found = [s.name for s in self.segments if keyword.iskeyword(s.name)]
    for seg in self.segments:
      for g in seg.generics:
        found.extend(g.keywords())
    return found


def is_tag_name(ident: str) -> bool:
  """
  True if `ident` names a host tag: every character is a lowercase letter.

  Digits and underscores are not lowercase, so `h1` and `my_tag` are
  classified as components.
  """
  return bool(ident) and all(c.islower() for c in ident)


# --- Props ---


class PropValue(ABC):
  """Value of a tag attribute. Attribute syntax is not compiled yet."""


@dataclass
class ActiveProp(PropValue):
  """A bare attribute with no value (`<input disabled>`)."""


@dataclass
class TextProp(PropValue):
  text: str


@dataclass
class ExprProp(PropValue):
  source: str


# --- Nodes ---


@dataclass
class Node(ABC):
  """Abstract base class for all template AST nodes."""

  @abstractmethod
  def to_dict(self) -> Dict[str, Any]:
    pass


@dataclass
class TextNode(Node):
  text: str
  span: Optional[Span] = None

  def to_dict(self) -> Dict[str, Any]:
    return {"type": "Text", "text": self.text}


@dataclass
class ExprNode(Node):
  """A raw host expression. `source` is the text between the braces."""

  source: str
  span: Optional[Span] = None

  def to_dict(self) -> Dict[str, Any]:
    return {"type": "Expr", "source": self.source}


@dataclass
class ElementNode(Node):
  """
  A parsed element.

  Attributes:
      ty (ElementType): Fragment, host tag or component.
      props (List[Tuple[str, PropValue]]): Always empty for now.
      children (List[Node]): Children in source order.
      span (Optional[Span]): Location of the opening path.
  """

  ty: ElementType
  props: List[Tuple[str, PropValue]] = field(default_factory=list)
  children: List[Node] = field(default_factory=list)
  span: Optional[Span] = None

  @property
  def is_fragment(self) -> bool:
    return isinstance(self.ty, Fragment)

  def to_dict(self) -> Dict[str, Any]:
    if isinstance(self.ty, Fragment):
      kind = "Fragment"
    elif isinstance(self.ty, TagName):
      kind = "TagName"
    else:
      kind = "Component"
    return {
      "type": "Element",
      "kind": kind,
      "name": str(self.ty),
      "children": [c.to_dict() for c in self.children],
    }
