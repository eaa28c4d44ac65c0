"""string-math cursor: scans source text one character at a time.

There is no token stream: the parser asks the cursor to classify and
consume characters as each grammar rule needs them.
"""

from __future__ import annotations

from typing import Callable


# Sentinel held in ``Cursor.current`` once the source is exhausted.
EOF = ""


class Cursor:
    """Position plus current character over an expression string."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos: int = -1
        self.current: str = EOF

    # -- Movement ----------------------------------------------------------

    def reset(self) -> None:
        """Rewind to before the first character. Call ``advance()`` to prime."""
        self.pos = -1
        self.current = EOF

    def advance(self) -> None:
        """Step forward one character; past the end ``current`` stays EOF."""
        self.pos += 1
        if self.pos < len(self.source):
            self.current = self.source[self.pos]
        else:
            self.current = EOF

    def eat(self, expected: str) -> bool:
        """Skip spaces, then consume *expected* if it is the current character.

        The space-skip is kept even when *expected* does not match.
        """
        while self.current == " ":
            self.advance()
        if self.current != expected:
            return False
        self.advance()
        return True

    def scan(self, predicate: Callable[[], bool]) -> str:
        """Consume characters while *predicate* holds and return them."""
        start = self.pos
        while predicate():
            self.advance()
        return self.source[start:self.pos]

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    # -- Classification ----------------------------------------------------

    def is_numeric(self) -> bool:
        ch = self.current
        return "0" <= ch <= "9" or ch == "."

    def is_alphabetic(self) -> bool:
        ch = self.current
        return "a" <= ch <= "z"

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, current={self.current!r})"
