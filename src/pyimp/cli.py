#!/usr/bin/env python3
"""
IMP Python CLI

A command-line interface for running the bundled IMP reference programs.

Usage:
    python -m pyimp.cli <program> [options]
    pyimp <program> [options]

Examples:
    pyimp factorial --set In=5
    pyimp square_root --set A=10 --show
    pyimp fibonacci --set In=6 --trace
    pyimp --list
"""

from __future__ import annotations

import argparse
import logging
import sys

from pyimp.desugar import desugar
from pyimp.env import ValueEnv
from pyimp.errors import IMPError
from pyimp.evaluator import EvalOptions, execute
from pyimp.pretty import format_env, format_statement
from pyimp.programs import PROGRAMS, Program

logger = logging.getLogger(__name__)


#==============================================================================
# CLI Output Formatting
#==============================================================================

class Colors:
    """ANSI color codes for terminal output"""
    RESET = "\x1b[0m"
    BOLD = "\x1b[1m"
    DIM = "\x1b[2m"
    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    CYAN = "\x1b[36m"


def print_msg(msg: str, color: str = Colors.RESET) -> None:
    """Print a message with optional color"""
    print(f"{color}{msg}{Colors.RESET}")


#==============================================================================
# Input Parsing
#==============================================================================

def parse_binding(text: str) -> tuple[str, int]:
    """
    Parse a NAME=VALUE binding.

    Examples:
        "In=5" -> ("In", 5)
        "A=-3" -> ("A", -3)
    """
    name, sep, value = text.partition("=")
    name = name.strip()
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    try:
        return name, int(value.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"value for {name} must be an integer, got {value!r}") from None


#==============================================================================
# Program Execution
#==============================================================================

def list_programs() -> int:
    """Print the bundled programs"""
    print_msg(f"{Colors.BOLD}Programs:{Colors.RESET}")
    for program in PROGRAMS.values():
        print(f"  {Colors.CYAN}{program.name:<12}{Colors.RESET} "
              f"{program.input_var} -> {program.output_var}  {Colors.DIM}{program.description}{Colors.RESET}")
    return 0


def show_program(program: Program) -> None:
    """Print a program and its desugared core form"""
    print_msg(f"{Colors.BOLD}Source:{Colors.RESET}")
    print(format_statement(program.statement))
    print()
    print_msg(f"{Colors.BOLD}Core:{Colors.RESET}")
    print(format_statement(desugar(program.statement)))
    print()


def run_program(
    name: str,
    bindings: list[tuple[str, int]] | None = None,
    show: bool = False,
    max_steps: int | None = None,
    trace: bool = False,
) -> int:
    """
    Run a bundled program.

    Args:
        name: Program name
        bindings: Initial NAME=VALUE bindings
        show: Print the program and its core form first
        max_steps: Optional step bound
        trace: Log every executed step

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    program = PROGRAMS.get(name)
    if program is None:
        print_msg(f"Error: Unknown program: {name}", Colors.RED)
        return 1

    if show:
        show_program(program)

    env = ValueEnv().extend_many(bindings or [])
    options = EvalOptions(max_steps=max_steps, trace=trace)
    logger.info("running %s from %s", program.name, format_env(env))

    try:
        result = execute(env, program.statement, options)
    except IMPError as e:
        print_msg(f"{Colors.RED}Evaluation error:{Colors.RESET} {e.code.value}", Colors.RED)
        print_msg(f"  {e.message}", Colors.RED)
        return 1

    print_msg(f"{Colors.GREEN}✓ {program.output_var}: {result.lookup(program.output_var)}{Colors.RESET}")
    print(format_env(result))
    return 0


#==============================================================================
# Main CLI
#==============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyimp",
        description="IMP Python CLI - Run the bundled IMP programs",
    )
    parser.add_argument(
        "program",
        nargs="?",
        help="Name of the program to run (see --list)",
    )
    parser.add_argument(
        "--set",
        dest="bindings",
        action="append",
        type=parse_binding,
        default=[],
        metavar="NAME=VALUE",
        help="Initial variable binding (repeatable)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the bundled programs",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the program and its desugared core form",
    )
    parser.add_argument(
        "--max-steps",
        dest="max_steps",
        type=int,
        help="Abort with NonTermination after this many steps",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Log every executed step",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed output",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.trace else (logging.INFO if args.verbose else logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.list:
        return list_programs()

    if not args.program:
        parser.print_help()
        return 0

    return run_program(
        args.program,
        bindings=args.bindings,
        show=args.show,
        max_steps=args.max_steps,
        trace=args.trace,
    )


if __name__ == "__main__":
    sys.exit(main())
