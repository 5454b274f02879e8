"""
Console and Logging.

Diagnostics are written through the `tagtree` logger and rendered by a
`RichHandler` bound to the active Rich console. The handler lives on the
package logger, which does not propagate, so applications that embed the
compiler keep full control of their root logging setup.

`console` is a stable proxy: `set_console` rebinds both printing and the log
handler, which is how tests capture CLI output with a recording console.
"""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.theme import Theme

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

logger = logging.getLogger("tagtree")
logger.propagate = False

_THEME = Theme(
  {
    "logging.level.success": "green",
    "path": "bold blue",
    "code": "bold magenta",
    "tag": "bold cyan",
  }
)

_MARKERS = {
  logging.INFO: "ℹ️ ",
  SUCCESS: "✅",
  logging.WARNING: "⚠️ ",
  logging.ERROR: "❌",
}


class _ConsoleProxy:
  """
  Stable handle on the active Rich console.

  Attribute access falls through to the bound console, so `console.print`
  and `console.export_text` behave like the real thing.
  """

  def __init__(self) -> None:
    self._handler: Optional[RichHandler] = None
    self._backend = Console(theme=_THEME)
    self.bind(self._backend)

  @property
  def backend(self) -> Console:
    return self._backend

  def bind(self, backend: Console) -> None:
    """Points printing and the `tagtree` log handler at `backend`."""
    if self._handler is not None:
      logger.removeHandler(self._handler)
    self._backend = backend
    self._handler = RichHandler(
      console=backend,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
    logger.addHandler(self._handler)
    if logger.level == logging.NOTSET:
      logger.setLevel(logging.INFO)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  console.bind(new_console)


def reset_console() -> None:
  """Rebinds output to a fresh stdout console and restores INFO verbosity."""
  console.bind(Console(theme=_THEME))
  logger.setLevel(logging.INFO)


def get_console() -> Console:
  return console.backend


def set_verbose(verbose: bool) -> None:
  """Enables DEBUG records (e.g. per-module expansion details) when True."""
  logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _log(level: int, msg: str) -> None:
  logger.log(level, f"{_MARKERS[level]} {msg}", extra={"markup": True})


def log_info(msg: str) -> None:
  """
  Logs an informational line. `msg` may contain Rich markup such as
  `[path]...[/path]`; escape user-controlled text first.
  """
  _log(logging.INFO, msg)


def log_success(msg: str) -> None:
  _log(SUCCESS, msg)


def log_warning(msg: str) -> None:
  _log(logging.WARNING, msg)


def log_error(msg: str) -> None:
  _log(logging.ERROR, msg)


def log_diagnostic(origin: str, error: str) -> None:
  """
  Logs a compile error as `origin:line:col: message`.

  Args:
      origin: File path, or a label such as `<template>` for inline input.
      error: The rendered `TemplateSyntaxError`.
  """
  log_error(f"[path]{escape(origin)}[/path]:{escape(error)}")
