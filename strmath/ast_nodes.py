"""string-math expression node definitions.

Every node is a frozen dataclass carrying ``pos``, the source index where
the node starts.  Nodes never change after the parser builds them; the
only thing that happens later is evaluation of their children.

Each node is also a zero-argument callable returning its value, so any
node can be registered as the producer behind a variable name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable


# ── Base ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Node:
    """Base class for every expression node."""
    pos: int = 0

    def evaluate(self) -> float:
        from strmath.evaluator import evaluate
        return evaluate(self)

    def __call__(self) -> float:
        return self.evaluate()


# ── Leaves ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Constant(Node):
    value: float = 0.0


@dataclass(frozen=True)
class Supplier(Node):
    """A producer backed by a plain Python callable, e.g. ``random.random``."""
    func: Callable[[], float] = field(default=lambda: 0.0, compare=False)
    label: str = ""


@dataclass(frozen=True)
class VariableRef(Node):
    name: str = ""
    producer: Any = None


@dataclass(frozen=True)
class MethodCall(Node):
    name: str = ""


# ── Operators ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class UnaryOp(Node):
    op: str = ""
    operand: Any = None


@dataclass(frozen=True)
class BinaryOp(Node):
    left: Any = None
    op: str = ""
    right: Any = None


@dataclass(frozen=True)
class FunctionCall(Node):
    name: str = ""
    argument: Any = None
