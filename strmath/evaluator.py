"""string-math evaluator: walks an expression tree and computes its value."""

from __future__ import annotations

from strmath.ast_nodes import (
    Node,
    Constant,
    Supplier,
    VariableRef,
    MethodCall,
    UnaryOp,
    BinaryOp,
    FunctionCall,
)
from strmath.functions import FUNCTIONS, METHODS, divide, power


_BINARY_OPS = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": divide,
    "^": power,
}


def evaluate(node: Node) -> float:
    """Compute the numeric value of *node*.

    The tree is walked in post-order with an explicit stack, so long
    operator chains do not consume Python call frames.  Operands are
    evaluated left to right.

    Nothing is cached: impure leaves (``random()``, callable suppliers)
    produce a fresh value on every call.
    """
    values: list[float] = []
    # (node, children_done) pairs still to visit
    pending: list[tuple[Node, bool]] = [(node, False)]

    while pending:
        current, children_done = pending.pop()

        if isinstance(current, Constant):
            values.append(current.value)
        elif isinstance(current, VariableRef):
            pending.append((current.producer, False))
        elif isinstance(current, MethodCall):
            values.append(METHODS[current.name]())
        elif isinstance(current, Supplier):
            values.append(float(current.func()))
        elif isinstance(current, BinaryOp):
            if children_done:
                right = values.pop()
                left = values.pop()
                values.append(_BINARY_OPS[current.op](left, right))
            else:
                pending.append((current, True))
                pending.append((current.right, False))
                pending.append((current.left, False))
        elif isinstance(current, UnaryOp):
            if children_done:
                operand = values.pop()
                values.append(-operand if current.op == "-" else +operand)
            else:
                pending.append((current, True))
                pending.append((current.operand, False))
        elif isinstance(current, FunctionCall):
            if children_done:
                values.append(float(FUNCTIONS[current.name](values.pop())))
            else:
                pending.append((current, True))
                pending.append((current.argument, False))
        else:
            raise TypeError(f"Cannot evaluate {type(current).__name__}")

    return values.pop()
