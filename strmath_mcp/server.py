"""string-math MCP Server: exposes the expression evaluator via MCP protocol."""

from mcp.server.fastmcp import FastMCP

from strmath.config import get_config, parser_from_config
from strmath.errors import StrMathError
from strmath.evaluator import evaluate
from strmath.functions import FUNCTIONS, METHODS

mcp = FastMCP("strmath")


def _build_parser(expression: str, variables: dict | None):
    parser = parser_from_config(expression, get_config())
    for name, value in (variables or {}).items():
        parser.set_variable(name, value)
    return parser


@mcp.tool()
def strmath_evaluate(expression: str, variables: dict[str, float] | None = None) -> str:
    """Evaluate an arithmetic expression and return its numeric value.

    Args:
        expression: The expression to evaluate (e.g. "x + sqrt(16) * 2")
        variables: Optional mapping of variable names to numbers (e.g. {"x": 4})
    """
    return evaluate_expression(expression, variables)


def evaluate_expression(expression: str, variables: dict | None = None) -> str:
    """Core logic for evaluating an expression, testable without MCP."""
    try:
        parser = _build_parser(expression, variables)
        return str(evaluate(parser.parse()))
    except (StrMathError, TypeError) as e:
        return f"Error: {e}"


@mcp.tool()
def strmath_check(expression: str, variables: dict[str, float] | None = None) -> str:
    """Check expression syntax without evaluating it.

    Args:
        expression: The expression to check
        variables: Optional mapping of variable names the expression may use
    """
    return check_expression(expression, variables)


def check_expression(expression: str, variables: dict | None = None) -> str:
    """Core logic for checking an expression, testable without MCP.

    Unknown variable names are reported unless *variables* binds them.
    """
    try:
        parser = _build_parser(expression, variables)
        parser.parse()
        return "OK"
    except (StrMathError, TypeError) as e:
        return f"Error: {e}"


STRMATH_GUIDE = f"""\
# Writing string-math expressions

Use the strmath_evaluate tool to compute a value and strmath_check to
validate syntax.

## Operators (loosest to tightest)
```
a + b    a - b        left-associative
a * b    a / b        left-associative
-a   +a               unary, may be chained: --a
a ^ b                 right-associative: 2^3^2 = 512
```

Exponentiation applies after a call or group: `sqrt(4)^2` is 4.
A leading minus wraps the whole power: `-2^2` is -4.

## Names
- Variables: lowercase letters only (`x`, `rate`). Built in: `e`, `pi`.
- Functions (one argument): {", ".join(sorted(FUNCTIONS))}
- Methods (no argument): {", ".join(f"{name}()" for name in sorted(METHODS))}

## Rules
1. Numbers are decimal literals: `3`, `2.5`, `.5` (no exponent notation)
2. No implicit multiplication: write `2*x`, not `2x`
3. Functions take exactly one argument
4. Spaces are ignored between tokens; tabs and newlines are not allowed
5. Division by zero gives inf or nan rather than an error
"""


@mcp.prompt()
def strmath_guide() -> str:
    """Reference for writing string-math expressions."""
    return STRMATH_GUIDE


if __name__ == "__main__":
    mcp.run(transport="stdio")
