"""
Expand Command Handler.

This module implements the logic for the `tagtree expand` command.
It orchestrates:
1. Configuration loading (pyproject.toml + CLI overrides).
2. Template expansion via the Engine, per file.
3. Output writing, `--check` reporting and the batch summary.
"""

from pathlib import Path
from typing import Dict, Optional

from rich.markup import escape
from rich.table import Table

from tagtree.config import RuntimeConfig
from tagtree.core.engine import ConversionResult, ExpansionEngine
from tagtree.utils.console import console, log_diagnostic, log_error, log_info, log_success, log_warning


def handle_expand(
  input_path: Path,
  output_path: Optional[Path],
  check: bool = False,
  interpolate: Optional[bool] = None,
  marker: Optional[str] = None,
) -> int:
  """
  Handles the 'expand' command execution.

  Args:
      input_path: Python file or directory containing template calls.
      output_path: Destination file or directory. A single file is printed
          to stdout if omitted.
      check: Only report whether files would change; write nothing.
      interpolate: Override for `{expr}` interpolation.
      marker: Override for the marker function name.

  Returns:
      int: Exit code (0 for success, 1 for failures or, with `check`, pending changes).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  config = RuntimeConfig.load(
    marker=marker,
    interpolate=interpolate,
    search_path=input_path if input_path.is_dir() else input_path.parent,
  )
  engine = ExpansionEngine(config)
  batch_results: Dict[str, ConversionResult] = {}
  pending = 0

  if input_path.is_file():
    result = _expand_single_file(input_path, output_path, engine, check)
    batch_results[input_path.name] = result
    pending += int(check and _would_change(result))
  else:
    if not output_path and not check:
      log_error("Directory expansion requires --out destination directory.")
      return 1

    py_files = sorted(input_path.rglob("*.py"))
    if not py_files:
      log_warning(f"No .py files found in {input_path}")
      return 0

    log_info(f"Processing {len(py_files)} files from [path]{escape(str(input_path))}[/path]...")
    for src_file in py_files:
      rel_path = src_file.relative_to(input_path)
      dest_file = output_path / rel_path if output_path else None
      result = _expand_single_file(src_file, dest_file, engine, check)
      batch_results[str(rel_path)] = result
      pending += int(check and _would_change(result))

  _print_batch_summary(batch_results)

  if any(not r.success for r in batch_results.values()):
    return 1
  if check and pending:
    log_warning(f"{pending} file(s) contain unexpanded templates.")
    return 1
  return 0


def _expand_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: ExpansionEngine,
  check: bool,
) -> ConversionResult:
  """
  Expands one file and writes or prints the result.

  Args:
      input_path: Source file path.
      output_path: Destination file path, or None for stdout.
      engine: Configured expansion engine.
      check: If True, nothing is written.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    code = input_path.read_text(encoding="utf-8")
  except OSError as e:
    log_error(f"Failed to read {escape(str(input_path))}: {e}")
    return ConversionResult(success=False, errors=[str(e)])

  result = engine.run(code)
  if not result.success:
    for err in result.errors:
      log_diagnostic(str(input_path), err)
    return result

  if check:
    return result

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.code, encoding="utf-8")
    src, dst = escape(str(input_path)), escape(str(output_path))
    log_success(f"Expanded {result.expanded} template(s): [path]{src}[/path] -> [path]{dst}[/path]")
  else:
    print(result.code, end="")

  return result


def _would_change(result: ConversionResult) -> bool:
  return result.success and result.expanded > 0


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Renders a summary table of expansion results to the console.

  Args:
      results: Dictionary mapping filenames to results.
  """
  total = len(results)
  failures = sum(1 for r in results.values() if not r.success)
  templates = sum(r.expanded for r in results.values())

  if failures == 0:
    log_success(f"Batch Complete: {total} file(s), {templates} template(s) expanded.")
    return

  table = Table(title="Expansion Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.success:
      continue
    table.add_row(escape(filename), "❌ Failed", escape("; ".join(res.errors) or "Unknown Error"))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {total - failures} Passed, {failures} Failed.")
