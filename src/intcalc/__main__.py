#!/usr/bin/env python3
"""
CLI for the intcalc interpreter.

Usage:
    intcalc PROGRAM [--tokens | --ast | --format] [--json] [--no-source]
    python -m intcalc PROGRAM

The whole program is passed as a single argument. Printed values go to
standard output, diagnostics to standard error.

Examples:
    # Run a program
    intcalc "x = 5; print(x * x)"

    # Show the token stream
    intcalc --tokens "print(1 + 2)"

    # Show the parsed program without running it
    intcalc --format "print((1+2)*3)"

Exit status:
    0  success
    1  internal error
    2  wrong number of arguments
    3  lexical error
    4  syntax error
    5  undeclared variable
    6  runtime error (division by zero)
"""

import argparse
import json
import sys
from typing import List, Optional

from .errors import CalcError, error_argument_count


def cmd_tokens(source: str) -> int:
    """Print the token stream, one token per line."""
    from .lexer import Scanner

    for token in Scanner(source).tokenize():
        print(token)
    return 0


def cmd_ast(source: str) -> int:
    """Print the structure of the parsed program."""
    from .parser import parse
    from .ast import print_ast

    print_ast(parse(source), sys.stdout)
    return 0


def cmd_format(source: str) -> int:
    """Print the parsed program in normalized form."""
    from .parser import parse
    from .ast import format_program

    print(format_program(parse(source)))
    return 0


def cmd_run(source: str) -> int:
    """Parse the whole program, then execute it."""
    from .parser import parse
    from .runtime import Interpreter

    program = parse(source)
    Interpreter().run(program, source)
    return 0


def report_error(error: CalcError, as_json: bool = False, show_source: bool = True) -> None:
    """Write a diagnostic to standard error."""
    if as_json:
        print(json.dumps(error.diagnostic.to_json()), file=sys.stderr)
    else:
        print(error.diagnostic.format(show_source), file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='intcalc',
        description='Run a straight-line integer calculator program',
    )
    parser.add_argument('program', nargs='*',
                        help='program text, passed as a single quoted argument')

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--tokens', action='store_true',
                      help='print the token stream instead of running')
    mode.add_argument('--ast', action='store_true',
                      help='print the syntax tree instead of running')
    mode.add_argument('--format', action='store_true',
                      help='print the normalized program instead of running')

    parser.add_argument('--json', action='store_true',
                        help='report errors as JSON on standard error')
    parser.add_argument('--no-source', action='store_true',
                        help='omit the source excerpt from error reports')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        if len(args.program) != 1:
            raise error_argument_count(len(args.program))
        source = args.program[0]

        if args.tokens:
            return cmd_tokens(source)
        elif args.ast:
            return cmd_ast(source)
        elif args.format:
            return cmd_format(source)
        return cmd_run(source)

    except CalcError as e:
        report_error(e, as_json=args.json, show_source=not args.no_source)
        return e.exit_code

    except Exception as e:
        print(f"internal error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
