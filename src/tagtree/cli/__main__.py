"""
Main Entry Point for the tagtree CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `tagtree.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from tagtree import __version__
from tagtree.cli import commands
from tagtree.utils.console import set_verbose


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="tagtree: Markup Template Compiler")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: EXPAND ---
  cmd_exp = subparsers.add_parser("expand", help="Expand template() calls in a Python file or directory")
  cmd_exp.add_argument("path", type=Path, help="Input source file or directory")
  cmd_exp.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_exp.add_argument(
    "--check",
    action="store_true",
    help="Write nothing; exit 1 if any file still contains templates",
  )
  cmd_exp.add_argument(
    "--interpolate",
    action="store_true",
    default=None,
    help="Compile '{expr}' groups in content as Python expressions (Overrides config)",
  )
  cmd_exp.add_argument("--marker", default=None, help="Marker function name (default: from toml or 'template')")

  # --- Command: COMPILE ---
  cmd_comp = subparsers.add_parser("compile", help="Print the Python expression for a template")
  cmd_comp.add_argument("template", help="Template text, e.g. '<span>Hi</span>'")
  cmd_comp.add_argument("--interpolate", action="store_true", help="Compile '{expr}' groups as expressions")
  cmd_comp.add_argument("--runtime", default="tagtree", help="Module referenced by the emitted code")

  # --- Command: PARSE ---
  cmd_parse = subparsers.add_parser("parse", help="Print the parsed template tree")
  cmd_parse.add_argument("template", help="Template text")
  cmd_parse.add_argument("--interpolate", action="store_true", help="Parse '{expr}' groups as expressions")

  args = parser.parse_args(argv)
  set_verbose(args.verbose)

  if args.command == "expand":
    return commands.handle_expand(args.path, args.out, args.check, args.interpolate, args.marker)

  elif args.command == "compile":
    return commands.handle_compile(args.template, args.interpolate, args.runtime)

  elif args.command == "parse":
    return commands.handle_parse(args.template, args.interpolate)

  return 0


if __name__ == "__main__":
  sys.exit(main())
