"""
Data structures representing the output of the expansion pipeline.

This module defines the `ConversionResult` Pydantic model, which encapsulates
the expanded code, any errors encountered and the number of templates compiled.
"""

from typing import List

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
  """
  Container for the results of expanding one module.
  """

  code: str = Field(default="", description="The expanded source code. Empty on failure.")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(default=True, description="True if every template compiled.")
  expanded: int = Field(default=0, description="Number of template calls replaced.")

  @property
  def has_errors(self) -> bool:
    return len(self.errors) > 0
