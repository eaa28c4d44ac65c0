"""string-math CLI: strmath eval, strmath check, strmath run."""
import logging
import sys
import os

from strmath.config import get_config, parser_from_config
from strmath.errors import StrMathError
from strmath.evaluator import evaluate
from strmath.parser import ExpressionParser

USAGE = "Usage: strmath <command> <expression|file> [name=value ...]"


def bind_assignments(parser: ExpressionParser, assignments: list[str]) -> None:
    """Register ``name=expr`` pairs, each evaluated against the variables bound so far."""
    for assignment in assignments:
        name, sep, text = assignment.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"bad variable assignment: {assignment!r} (expected name=value)")
        value = ExpressionParser(text, parser.variables, parser.max_depth).parse()
        parser.set_variable(name, evaluate(value))


def format_value(value: float, precision: int | None) -> str:
    if precision is not None:
        value = round(value, precision)
    return str(value)


def main():
    if len(sys.argv) < 2:
        print(USAGE, file=sys.stderr)
        print("Commands: eval, check, run", file=sys.stderr)
        sys.exit(1)

    command = sys.argv[1]

    if command not in ("eval", "check", "run"):
        print(f"Unknown command: {command}", file=sys.stderr)
        sys.exit(1)

    if len(sys.argv) < 3:
        target = "<file>" if command == "run" else "<expression>"
        print(f"Usage: strmath {command} {target} [name=value ...]", file=sys.stderr)
        sys.exit(1)

    try:
        config = get_config()
    except StrMathError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    logging.basicConfig(level=config["logging"]["level"])

    source = sys.argv[2]
    if command == "run":
        if not os.path.exists(source):
            print(f"Error: file not found: {source}", file=sys.stderr)
            sys.exit(1)
        with open(source) as f:
            source = f.read().strip()

    try:
        parser = parser_from_config(source, config)
        bind_assignments(parser, sys.argv[3:])
        tree = parser.parse()

        if command == "check":
            print("OK")
            sys.exit(0)

        print(format_value(evaluate(tree), config["output"]["precision"]))

    except (StrMathError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
