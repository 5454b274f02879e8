"""
Tests for RuntimeConfig loading and validation.
"""

import pytest
from pydantic import ValidationError

from tagtree.config import RuntimeConfig


def test_defaults(tmp_path):
  config = RuntimeConfig.load(search_path=tmp_path)
  assert config.marker == "template"
  assert config.runtime_module == "tagtree"
  assert config.interpolate is False
  assert config.inject_import is True


def test_reads_pyproject_table(tmp_path):
  (tmp_path / "pyproject.toml").write_text(
    '[tool.tagtree]\nmarker = "html"\nruntime_module = "app.vdom"\ninterpolate = true\nunknown = 1\n',
    encoding="utf-8",
  )
  nested = tmp_path / "src" / "pkg"
  nested.mkdir(parents=True)

  config = RuntimeConfig.load(search_path=nested)
  assert config.marker == "html"
  assert config.runtime_module == "app.vdom"
  assert config.interpolate is True


def test_cli_overrides_win(tmp_path):
  (tmp_path / "pyproject.toml").write_text('[tool.tagtree]\nmarker = "html"\ninterpolate = true\n', encoding="utf-8")
  config = RuntimeConfig.load(marker="view", interpolate=False, search_path=tmp_path)
  assert config.marker == "view"
  assert config.interpolate is False


def test_none_overrides_ignored(tmp_path):
  (tmp_path / "pyproject.toml").write_text('[tool.tagtree]\nmarker = "html"\n', encoding="utf-8")
  assert RuntimeConfig.load(marker=None, search_path=tmp_path).marker == "html"


def test_broken_toml_falls_back_to_defaults(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.tagtree\n", encoding="utf-8")
  assert RuntimeConfig.load(search_path=tmp_path).marker == "template"


@pytest.mark.parametrize("value", ["", "1abc", "a-b", "a..b"])
def test_invalid_names_rejected(value):
  with pytest.raises(ValidationError):
    RuntimeConfig(marker=value)


def test_names_are_stripped():
  assert RuntimeConfig(runtime_module=" app.vdom ").runtime_module == "app.vdom"


def test_marker_names():
  assert RuntimeConfig().marker_names == ("template", "tagtree.template")
  assert RuntimeConfig(marker="html", runtime_module="vdom").marker_names == ("html", "vdom.html")
