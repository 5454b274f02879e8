"""
Runtime Configuration Store.

Settings for template expansion, read from the `[tool.tagtree]` table of the
nearest `pyproject.toml` and overridden by CLI arguments.

Example pyproject.toml::

    [tool.tagtree]
    marker = "html"
    runtime_module = "myapp.vdom"
    interpolate = true
"""

import re
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

_DOTTED_NAME = re.compile(r"^[A-Za-z_]\w*(\.[A-Za-z_]\w*)*$")


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the template expander.
  """

  marker: str = Field("template", description="Name of the function whose string-literal calls are expanded.")
  runtime_module: str = Field("tagtree", description="Module the emitted code uses to reach the node types.")
  interpolate: bool = Field(False, description="If True, '{expr}' groups in content become Python expressions.")
  inject_import: bool = Field(True, description="Insert 'import <runtime_module>' into expanded modules.")

  @field_validator("marker", "runtime_module")
  @classmethod
  def validate_dotted(cls, v: str) -> str:
    """
    Ensures the value is a dotted Python identifier.

    Raises:
        ValueError: If the value cannot be used as a Python name.
    """
    v_clean = v.strip()
    if not _DOTTED_NAME.match(v_clean):
      raise ValueError(f"'{v}' is not a valid dotted Python name")
    return v_clean

  @property
  def marker_names(self) -> Tuple[str, ...]:
    """
    Call targets recognised as template markers.

    Both the bare marker and its runtime-qualified form match, e.g.
    `template(...)` and `tagtree.template(...)`.
    """
    qualified = f"{self.runtime_module}.{self.marker}"
    if qualified == self.marker:
      return (self.marker,)
    return (self.marker, qualified)

  @classmethod
  def load(
    cls,
    marker: Optional[str] = None,
    runtime_module: Optional[str] = None,
    interpolate: Optional[bool] = None,
    inject_import: Optional[bool] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        marker (Optional[str]): Override for the marker function name.
        runtime_module (Optional[str]): Override for the runtime module path.
        interpolate (Optional[bool]): Override for expression interpolation.
        inject_import (Optional[bool]): Override for runtime import injection.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    overrides: Dict[str, Any] = {
      "marker": marker,
      "runtime_module": runtime_module,
      "interpolate": interpolate,
      "inject_import": inject_import,
    }
    merged = dict(toml_config)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return cls(**{k: v for k, v in merged.items() if k in cls.model_fields})


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches the directory and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except tomllib.TOMLDecodeError:
        return {}, None
      return data.get("tool", {}).get("tagtree", {}), parent

  return {}, None
