"""
Tests for the console proxy and the `tagtree` logger.

Verifies:
1. The proxy forwards to the bound Rich console.
2. `set_console` rebinds printing and logging together.
3. Logging stays on the package logger and never touches the root logger.
"""

import io
import logging

from rich.console import Console
from rich.logging import RichHandler

from tagtree.config import RuntimeConfig
from tagtree.core.engine import ExpansionEngine
from tagtree.utils.console import (
  SUCCESS,
  console,
  get_console,
  log_diagnostic,
  log_error,
  log_info,
  log_success,
  log_warning,
  logger,
  reset_console,
  set_console,
  set_verbose,
)


def recording_console() -> Console:
  return Console(record=True, width=200, file=io.StringIO())


def test_proxy_forwards_attributes():
  assert callable(console.print)
  assert hasattr(console, "export_text")
  assert isinstance(get_console(), Console)


def test_print_goes_to_bound_console():
  capture = recording_console()
  set_console(capture)
  console.print("[tag]div[/tag] rendered")
  assert "div rendered" in capture.export_text()


def test_log_helpers():
  capture = recording_console()
  set_console(capture)

  log_info("info line")
  log_success("success line")
  log_warning("warning line")
  log_error("error line")

  out = capture.export_text()
  for marker, text in [("ℹ️", "info line"), ("✅", "success line"), ("⚠️", "warning line"), ("❌", "error line")]:
    assert marker in out
    assert text in out


def test_log_diagnostic_escapes_markup():
  capture = recording_console()
  set_console(capture)
  log_diagnostic("views/[x].py", "1:6: Expected '</a>'")
  assert "views/[x].py:1:6: Expected '</a>'" in capture.export_text()


def test_one_handler_after_rebinding():
  set_console(recording_console())
  set_console(recording_console())
  handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
  assert len(handlers) == 1
  assert handlers[0].console is get_console()


def test_root_logger_untouched():
  set_console(recording_console())
  assert not any(isinstance(h, RichHandler) for h in logging.getLogger().handlers)
  assert logger.propagate is False


def test_verbose_shows_engine_debug():
  capture = recording_console()
  set_console(capture)
  engine = ExpansionEngine(RuntimeConfig())

  engine.run('v = template("<b>x</b>")\n')
  assert "Expanded 1 template call(s)" not in capture.export_text(clear=False)

  set_verbose(True)
  engine.run('v = template("<b>x</b>")\n')
  assert "Expanded 1 template call(s)" in capture.export_text()


def test_reset_restores_fresh_backend_and_level():
  temp = recording_console()
  set_console(temp)
  set_verbose(True)
  reset_console()
  assert get_console() is not temp
  assert logger.level == logging.INFO


def test_success_level_registered():
  assert logging.getLevelName(SUCCESS) == "SUCCESS"
