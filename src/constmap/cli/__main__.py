"""
Main Entry Point for the constmap CLI.

This module handles argument parsing and dispatches to the generate handler
defined in `constmap.cli.handlers`.

The single-dash long spellings (``-type``, ``-output``, ``-stdout``) are
accepted alongside the double-dash ones so existing ``go:generate``
directives keep working.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from constmap import __version__
from constmap.cli import handlers
from constmap.config import FORMATTER_CHOICES, LANGUAGE_CHOICES
from constmap.utils.console import console


def build_parser() -> argparse.ArgumentParser:
  """
  Builds the argument parser.

  Returns:
      argparse.ArgumentParser: The configured parser.
  """
  parser = argparse.ArgumentParser(
    prog="constmap",
    description="constmap: Generate lookup tables and validators for typed constants",
  )
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  parser.add_argument(
    "pattern",
    nargs="?",
    default=".",
    help="Package directory, source file or 'dir/...' (default: .)",
  )
  parser.add_argument("-t", "-type", "--type", dest="type_name", default=None, help="Type name (required)")
  parser.add_argument(
    "-o",
    "-output",
    "--output",
    dest="output",
    type=Path,
    default=None,
    help="Output file name; default: <type>map.go (or .py)",
  )
  parser.add_argument(
    "-stdout",
    "--stdout",
    dest="stdout",
    action="store_true",
    help="Output generated content to stdout",
  )
  parser.add_argument(
    "--language",
    choices=LANGUAGE_CHOICES,
    default=None,
    help="Host language of the input (default: from toml, else auto-detected)",
  )
  parser.add_argument(
    "--formatter",
    choices=FORMATTER_CHOICES,
    default=None,
    help="Formatter for Go output (default: gofmt when installed, else built-in validation)",
  )

  values = parser.add_mutually_exclusive_group()
  values.add_argument(
    "--int-values",
    dest="int_values",
    action="store_const",
    const=True,
    default=None,
    help="Convert constants to integers (default: inferred from the type declaration)",
  )
  values.add_argument(
    "--string-values",
    dest="int_values",
    action="store_const",
    const=False,
    help="Convert constants to strings",
  )
  parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
  return parser


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  args = build_parser().parse_args(argv)

  if args.verbose:
    console.set_level(logging.DEBUG)

  return handlers.handle_generate(
    type_name=args.type_name,
    pattern=args.pattern,
    output=args.output,
    stdout=args.stdout,
    language=args.language,
    formatter=args.formatter,
    int_values=args.int_values,
    verbose=args.verbose,
  )


if __name__ == "__main__":
  sys.exit(main())
