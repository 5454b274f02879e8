"""
Orchestration Engine for Template Expansion.

The `ExpansionEngine` drives the expansion of a single Python module:

1.  **Ingestion**: parses the module source into a LibCST tree.
2.  **Expansion**: runs `TemplateExpander` with position metadata so every
    marker call is compiled and replaced.
3.  **Emission**: renders the transformed tree back to source.

Any failure returns an unsuccessful `ConversionResult` with no code; a module
is never written half-expanded.
"""

import logging
from typing import Optional

import libcst as cst
from libcst.metadata import MetadataWrapper

from tagtree.config import RuntimeConfig
from tagtree.core.conversion_result import ConversionResult
from tagtree.core.expander import TemplateExpander
from tagtree.core.template.errors import TemplateSyntaxError

logger = logging.getLogger(__name__)


class ExpansionEngine:
  """
  Expands template calls in one unit of code.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None):
    """
    Args:
        config (RuntimeConfig, optional): Expansion settings. Loaded from the
            nearest pyproject.toml if omitted.
    """
    self.config = config or RuntimeConfig.load()

  def run(self, code: str) -> ConversionResult:
    """
    Expands every template call in `code`.

    Args:
        code: Python module source.

    Returns:
        ConversionResult: Expanded code on success, error messages otherwise.
    """
    try:
      module = cst.parse_module(code)
    except cst.ParserSyntaxError as e:
      return ConversionResult(success=False, errors=[f"{e.raw_line}:{e.raw_column}: {e.message}"])

    expander = TemplateExpander(self.config)
    try:
      expanded = MetadataWrapper(module).visit(expander)
    except TemplateSyntaxError as e:
      logger.debug("Template expansion aborted: %s", e)
      return ConversionResult(success=False, errors=[str(e)])

    logger.debug("Expanded %d template call(s)", expander.expanded)
    return ConversionResult(code=expanded.code, expanded=expander.expanded)
