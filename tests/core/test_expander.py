"""
Tests for the Template Expander (LibCST transformer).

Verifies:
1. Marker calls are replaced by construction code; other calls are untouched.
2. The runtime import is injected once, after docstrings and `__future__` imports.
3. Non-literal arguments are rejected at the call site.
4. Template diagnostics are relocated to file line and column.
"""

import libcst as cst
import pytest
from libcst.metadata import MetadataWrapper

from tagtree.config import RuntimeConfig
from tagtree.core.expander import TemplateExpander, escape_offsets, get_full_name
from tagtree.core.template.errors import TemplateSyntaxError


def expand(code: str, **config) -> str:
  expander = TemplateExpander(RuntimeConfig(**config))
  return MetadataWrapper(cst.parse_module(code)).visit(expander).code


def test_replaces_marker_call():
  res = expand('view = template("<b>x</b>")\n')
  assert res == (
    "import tagtree\n"
    "view = tagtree.ReactElement(ty=tagtree.ReactTagName('b'), props=None, children=[tagtree.ReactText('x')])\n"
  )


def test_qualified_marker_call():
  res = expand('import tagtree\nview = tagtree.template("<b>x</b>")\n')
  assert "tagtree.template" not in res
  assert res.count("import tagtree") == 1


def test_other_calls_untouched():
  code = 'print("<b>x</b>")\nother.template("<b>x</b>")\n'
  assert expand(code) == code


def test_no_import_without_templates():
  code = "x = 1\n"
  assert expand(code) == code


def test_import_after_docstring_and_future():
  code = '"""Doc."""\nfrom __future__ import annotations\n\nview = template("<b>x</b>")\n'
  lines = expand(code).splitlines()
  assert lines[0] == '"""Doc."""'
  assert lines[1] == "from __future__ import annotations"
  assert lines[2] == "import tagtree"


def test_inject_import_disabled():
  res = expand('view = template("<b>x</b>")\n', inject_import=False)
  assert not res.startswith("import")


def test_custom_marker_and_runtime():
  res = expand('view = html("<b>x</b>")\n', marker="html", runtime_module="myapp.vdom")
  assert res.startswith("import myapp.vdom\n")
  assert "myapp.vdom.ReactTagName('b')" in res


def test_nested_calls_all_expanded():
  code = 'def view():\n    return [template("<a>1</a>"), template("<b>2</b>")]\n'
  expander = TemplateExpander(RuntimeConfig())
  MetadataWrapper(cst.parse_module(code)).visit(expander)
  assert expander.expanded == 2


@pytest.mark.parametrize(
  "call, message",
  [
    ("template(name)", "argument must be a plain string literal"),
    ('template(f"<b>{x}</b>")', "argument must be a plain string literal"),
    ('template("<b>" "x</b>")', "argument must be a plain string literal"),
    ('template("<b>x</b>", 1)', "takes exactly one string literal argument"),
    ('template(source="<b>x</b>")', "takes exactly one string literal argument"),
    ('template(b"<b>x</b>")', "does not accept bytes literals"),
  ],
)
def test_rejects_non_literal_arguments(call, message):
  with pytest.raises(TemplateSyntaxError, match=message) as excinfo:
    expand(f"v = {call}\n")
  assert str(excinfo.value).startswith("1:4: ")


def test_error_relocated_to_file_position():
  with pytest.raises(TemplateSyntaxError) as excinfo:
    expand('x = 1\nview = template("<a>x</b>")\n')
  assert str(excinfo.value) == "2:23: Expected '</a>'"


def test_error_relocation_accounts_for_prefix():
  with pytest.raises(TemplateSyntaxError) as excinfo:
    expand('v = template(r"<a>x</b>")\n')
  assert str(excinfo.value) == "1:21: Expected '</a>'"


def test_error_in_later_template_line():
  with pytest.raises(TemplateSyntaxError) as excinfo:
    expand('v = template("""<a>\n  x\n</b>""")\n')
  assert str(excinfo.value) == "3:2: Expected '</a>'"


def test_call_site_error_points_at_call():
  with pytest.raises(TemplateSyntaxError) as excinfo:
    expand('view = template("")\n')
  assert str(excinfo.value) == "1:7: Expected template node"


def test_get_full_name():
  assert get_full_name(cst.parse_expression("a.b.c")) == "a.b.c"
  assert get_full_name(cst.parse_expression("f().b")) == ""


def test_nested_runtime_import_does_not_count():
  code = 'def f():\n    import tagtree\n\nx = template("<a>x</a>")\n'
  res = expand(code)
  assert res.startswith("import tagtree\n")
  namespace = {}
  exec(res, namespace)
  assert namespace["x"].children[0].text == "x"


def test_submodule_import_binds_runtime():
  res = expand('import tagtree.runtime\nview = template("<b>x</b>")\n')
  assert res.count("import tagtree") == 1


def test_aliased_runtime_import_does_not_count():
  res = expand('import tagtree as tt\nview = template("<b>x</b>")\n')
  assert res.startswith("import tagtree\n")


def test_error_column_counts_escape_sequences():
  with pytest.raises(TemplateSyntaxError) as excinfo:
    expand('v = template("<a>\\tx</b>")\n')
  assert str(excinfo.value) == "1:22: Expected '</a>'"


def test_escaped_newline_stays_on_source_line():
  with pytest.raises(TemplateSyntaxError) as excinfo:
    expand('v = template("<a>\\n x</b>")\n')
  assert str(excinfo.value) == "1:23: Expected '</a>'"


def test_escape_offsets():
  assert escape_offsets("ab") == [0, 1, 2]
  assert escape_offsets("a\\tb") == [0, 1, 3, 4]
  assert escape_offsets("\\x41\\u00e9c") == [0, 4, 10, 11]
  assert escape_offsets("\\d") == [0, 1, 2]
  assert escape_offsets("a\\\nb") == [0, 3, 4]
  assert escape_offsets("a\\tb", raw=True) == [0, 1, 2, 3, 4]
