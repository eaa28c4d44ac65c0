"""string-math parser: recursive-descent parser producing an expression tree.

Grammar, loosest to tightest binding::

    expression := term { ("+" | "-") term }
    term       := factor { ("*" | "/") factor }
    factor     := ("+" | "-") factor
                | base [ "^" factor ]
    base       := "(" expression ")"
                | number
                | name                      -- variable
                | name "(" ")"              -- method
                | name "(" expression ")"   -- function

The exponent is parsed at factor level, so ``^`` is right-associative and
applies to the result of a call or group: ``2^3^2`` is ``2^(3^2)``,
``sqrt(4)^2`` is ``(sqrt(4))^2`` and ``-2^2`` is ``-(2^2)``.
"""

from __future__ import annotations

import logging

from strmath.lexer import Cursor, EOF
from strmath.errors import (
    UnexpectedCharacter,
    UnclosedGroup,
    MalformedNumber,
    UnknownIdentifier,
    TrailingInput,
    NestingTooDeep,
)
from strmath.ast_nodes import (
    Node,
    Constant,
    VariableRef,
    MethodCall,
    UnaryOp,
    BinaryOp,
    FunctionCall,
)
from strmath.functions import FUNCTIONS, METHODS
from strmath.variables import VariableTable, VariableValue

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100


class ExpressionParser:
    """Recursive-descent parser for arithmetic expressions.

    Variable names are resolved against ``variables`` while parsing; the
    producer found at that moment is stored in the tree.  ``parse()`` may be
    called again to pick up later changes to the table.
    """

    def __init__(
        self,
        expression: str,
        variables: VariableTable | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._expression = expression
        self.variables = variables if variables is not None else VariableTable()
        self.max_depth = max_depth
        self.cursor = Cursor(expression)
        self.depth: int = 0

    @property
    def expression(self) -> str:
        return self._expression

    # -- Variables ---------------------------------------------------------

    def set_variable(self, name: str, value: VariableValue) -> None:
        """Bind *name* to a number, an expression node or a zero-argument callable."""
        self.variables.set(name, value)

    def get_variable(self, name: str) -> Node | None:
        return self.variables.get(name)

    # -- Navigation helpers ------------------------------------------------

    def match(self, *chars: str) -> str | None:
        """Eat the first of *chars* that is present and return it, else None."""
        for ch in chars:
            if self.cursor.eat(ch):
                return ch
        return None

    def _describe_current(self) -> str:
        if self.cursor.current == EOF:
            return "Unexpected end of input"
        return f"Unexpected: '{self.cursor.current}'"

    # -- Top-level ---------------------------------------------------------

    def parse(self) -> Node:
        """Parse the whole source into an expression tree."""
        self.cursor.reset()
        self.depth = 0
        self.cursor.advance()
        node = self.parse_expression()

        if not self.cursor.at_end():
            raise TrailingInput(self._describe_current(), self.cursor.pos)

        logger.debug("parsed %r -> %r", self._expression, node)
        return node

    # -- Grammar rules -----------------------------------------------------

    def parse_expression(self) -> Node:
        """Parse ``+`` and ``-`` (lowest precedence)."""
        node = self.parse_term()
        while True:
            op = self.match("+", "-")
            if op is None:
                return node
            pos = self.cursor.pos - 1
            node = BinaryOp(left=node, op=op, right=self.parse_term(), pos=pos)

    def parse_term(self) -> Node:
        """Parse ``*`` and ``/``."""
        node = self.parse_factor()
        while True:
            op = self.match("*", "/")
            if op is None:
                return node
            pos = self.cursor.pos - 1
            node = BinaryOp(left=node, op=op, right=self.parse_factor(), pos=pos)

    def parse_factor(self) -> Node:
        """Parse unary ``+``/``-`` chains and right-associative ``^``."""
        self.depth += 1
        try:
            if self.depth > self.max_depth:
                raise NestingTooDeep(
                    f"Expression nested deeper than {self.max_depth} levels",
                    self.cursor.pos,
                )

            op = self.match("+", "-")
            if op is not None:
                pos = self.cursor.pos - 1
                return UnaryOp(op=op, operand=self.parse_factor(), pos=pos)

            node = self.parse_base()

            # Exponent binds after the call or group above has been parsed:
            # sqrt(4)^2 raises the call's result, not its argument.
            if self.cursor.eat("^"):
                pos = self.cursor.pos - 1
                return BinaryOp(left=node, op="^", right=self.parse_factor(), pos=pos)

            return node
        finally:
            self.depth -= 1

    def parse_base(self) -> Node:
        """Parse a group, number literal or identifier."""
        if self.cursor.eat("("):
            open_pos = self.cursor.pos - 1
            node = self.parse_expression()
            if not self.cursor.eat(")"):
                raise UnclosedGroup(
                    f"Missing ')' (group opened at index {open_pos})",
                    self.cursor.pos,
                )
            return node

        if self.cursor.is_numeric():
            return self._parse_number()
        if self.cursor.is_alphabetic():
            return self._parse_identifier()

        raise UnexpectedCharacter(self._describe_current(), self.cursor.pos)

    # -- Literals and names ------------------------------------------------

    def _parse_number(self) -> Constant:
        start = self.cursor.pos
        text = self.cursor.scan(self.cursor.is_numeric)
        try:
            value = float(text)
        except ValueError:
            raise MalformedNumber(f"Malformed number: '{text}'", start) from None
        return Constant(value=value, pos=start)

    def _parse_identifier(self) -> Node:
        start = self.cursor.pos
        name = self.cursor.scan(self.cursor.is_alphabetic)

        # Without brackets the name can only be a variable.
        if not self.cursor.eat("("):
            return self._parse_variable(name, start)

        # Brackets closed straight away make it a method.
        if self.cursor.eat(")"):
            return self._parse_method(name, start)

        return self._parse_function(name, start)

    def _parse_variable(self, name: str, start: int) -> VariableRef:
        producer = self.variables.resolve(name, start)
        return VariableRef(name=name, producer=producer, pos=start)

    def _parse_method(self, name: str, start: int) -> MethodCall:
        if name not in METHODS:
            raise UnknownIdentifier(f"Unknown method: {name}", name, start)
        return MethodCall(name=name, pos=start)

    def _parse_function(self, name: str, start: int) -> FunctionCall:
        argument = self.parse_expression()
        if not self.cursor.eat(")"):
            raise UnclosedGroup(f"Missing ')' after argument to {name}", self.cursor.pos)
        if name not in FUNCTIONS:
            raise UnknownIdentifier(f"Unknown function: {name}", name, start)
        return FunctionCall(name=name, argument=argument, pos=start)
