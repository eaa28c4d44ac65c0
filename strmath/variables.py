"""Variable table: name -> producer node, safe to share across threads."""

from __future__ import annotations

import logging
import math
import threading
from typing import Callable, Union

from strmath.ast_nodes import Node, Constant, Supplier
from strmath.errors import UnknownIdentifier

logger = logging.getLogger(__name__)

VariableValue = Union[Node, float, int, Callable[[], float]]

# "Ï€" is how older callers spelled the pi alias; keep the key verbatim.
LEGACY_PI_KEY = "Ï€"


def as_producer(value: VariableValue, label: str = "") -> Node:
    """Wrap a number or zero-argument callable as an expression node."""
    if isinstance(value, Node):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Variable {label!r} must be numeric, not bool")
    if isinstance(value, (int, float)):
        return Constant(value=float(value))
    if callable(value):
        return Supplier(func=value, label=label)
    raise TypeError(
        f"Variable {label!r} must be a number, node or callable, not {type(value).__name__}"
    )


class VariableTable:
    """Mutable mapping of variable names to producers.

    Parsers read it while resolving bare identifiers; a node built from a
    lookup keeps the producer it saw, so later ``set`` calls only affect
    subsequent parses.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, Node] = {
            "e": Constant(value=math.e),
            LEGACY_PI_KEY: Constant(value=math.pi),
            "pi": Constant(value=math.pi),
        }

    def set(self, name: str, value: VariableValue) -> None:
        producer = as_producer(value, name)
        with self._lock:
            self._entries[name] = producer
        logger.debug("variable %r bound to %r", name, producer)

    def get(self, name: str) -> Node | None:
        with self._lock:
            return self._entries.get(name)

    def resolve(self, name: str, position: int = -1) -> Node:
        """Return the producer for *name* or raise ``UnknownIdentifier``."""
        producer = self.get(name)
        if producer is None:
            raise UnknownIdentifier(f"Unknown variable: {name}", name, position)
        return producer

    def names(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        return f"VariableTable({self.names()!r})"
