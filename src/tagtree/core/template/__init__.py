"""
Template Compiler Package.

Tokenizer, recursive descent parser and emitter for the angle-bracket markup
DSL. The pipeline is::

    text -> Tokenizer -> Cursor -> TemplateParser -> ElementNode -> TemplateEmitter -> Python
"""

from tagtree.core.template.errors import TemplateSyntaxError
from tagtree.core.template.nodes import (
  ComponentPath,
  ElementNode,
  ElementType,
  ExprNode,
  Fragment,
  Node,
  PathSegment,
  TagName,
  TextNode,
)
from tagtree.core.template.parser import TemplateParser, parse_template
from tagtree.core.template.emitter import TemplateEmitter, compile_template

__all__ = [
  "ComponentPath",
  "ElementNode",
  "ElementType",
  "ExprNode",
  "Fragment",
  "Node",
  "PathSegment",
  "TagName",
  "TemplateEmitter",
  "TemplateParser",
  "TemplateSyntaxError",
  "TextNode",
  "compile_template",
  "parse_template",
]
