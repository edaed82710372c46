"""Ordered, de-duplicated collection of TypeScript import statements.

One :class:`ImportSet` is created per descriptor and threaded through the
type mapper and the emitter, so imports from one generated file can never
show up in the next.
"""

from __future__ import annotations

from typing import Iterator


def format_import(short_name: str, module: str) -> str:
    """Return the statement binding *short_name* from *module*.

    Example::

        >>> format_import("Animal", "com.example")
        "import { Animal } from 'com.example'"
    """
    return f"import {{ {short_name} }} from '{module}'"


class ImportSet:
    """Insertion-ordered set of import statements, unique by exact text."""

    def __init__(self) -> None:
        # dict keys keep insertion order
        self._statements: dict[str, None] = {}

    def register(self, statement: str) -> None:
        """Add *statement*. Registering the same text again is a no-op."""
        self._statements.setdefault(statement, None)

    def register_binding(self, short_name: str, module: str) -> None:
        """Register ``import { short_name } from 'module'``."""
        self.register(format_import(short_name, module))

    def render_all(self) -> str:
        """Render every statement on its own line, each followed by a newline.

        An empty set renders as ``""``.
        """
        return "".join(f"{statement}\n" for statement in self._statements)

    def clear(self) -> None:
        """Remove all statements."""
        self._statements.clear()

    def __iter__(self) -> Iterator[str]:
        return iter(self._statements)

    def __len__(self) -> int:
        return len(self._statements)

    def __contains__(self, statement: object) -> bool:
        return statement in self._statements

    def __repr__(self) -> str:
        return f"ImportSet({list(self._statements)!r})"
