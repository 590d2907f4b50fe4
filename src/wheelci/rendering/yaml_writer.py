# topmark:header:start
#
#   project      : WheelCI
#   file         : yaml_writer.py
#   file_relpath : src/wheelci/rendering/yaml_writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line-oriented YAML emitter.

The generated pipelines are hand-laid-out YAML documents with a fixed key
order, blank separator lines and literal blocks. A general serializer would
reorder or requote them, so renderers build their output line by line through
`YamlWriter`, which only tracks the current indentation.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

INDENT: Final[str] = "  "


class YamlWriter:
    """Accumulates YAML lines at a tracked indentation level."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._depth: int = 0

    @property
    def prefix(self) -> str:
        """Leading whitespace of the current level."""
        return INDENT * self._depth

    def line(self, text: str) -> None:
        """Append one line at the current indentation."""
        self._lines.append(f"{self.prefix}{text}")

    def blank(self) -> None:
        """Append an empty separator line."""
        self._lines.append("")

    def key(self, name: str, value: str | None = None) -> None:
        """Append ``name:`` or ``name: value``."""
        self.line(f"{name}:" if value is None else f"{name}: {value}")

    def literal(self, name: str, lines: Iterable[str]) -> None:
        """Append a ``name: |`` literal block, its body one level deeper."""
        self.line(f"{name}: |")
        with self.indented():
            for text in lines:
                self.line(text)

    @contextmanager
    def indented(self, levels: int = 1) -> Iterator[None]:
        """Indent every line written inside the block."""
        self._depth += levels
        try:
            yield
        finally:
            self._depth -= levels

    @contextmanager
    def mapping(self, name: str) -> Iterator[None]:
        """Write ``name:`` and indent the block's lines beneath it."""
        self.key(name)
        with self.indented():
            yield

    @contextmanager
    def item(self, first: str) -> Iterator[None]:
        """Write a ``- first`` sequence item; following lines align with ``first``."""
        self.line(f"- {first}")
        with self.indented():
            yield

    def getvalue(self) -> str:
        """Return the document text, newline-terminated."""
        return "\n".join(self._lines) + "\n"
