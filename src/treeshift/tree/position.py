# topmark:header:start
#
#   project      : TreeShift
#   file         : position.py
#   file_relpath : src/treeshift/tree/position.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Source positions and original inputs.

Sections:
    * Position: 1-based line/column pair with an optional 0-based offset.
    * Input: the original text a tree was parsed from, plus its file identity.
    * NodeSource: where a node came from (input, start, end).

Notes:
    `NodeSource.end` is exclusive: it points just past the node's last
    character, so ``input.css[start.offset:end.offset]`` is the node's raw text.
"""

from __future__ import annotations

import itertools
from bisect import bisect_right
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class Position:
    """A location in a text.

    Attributes:
        line: 1-based line number.
        column: 1-based column number.
        offset: 0-based character offset, when known.
    """

    line: int
    column: int
    offset: int | None = None

    def advanced_by(self, text: str, index: int) -> Position:
        """Return this position moved forward over ``text[:index]``.

        Every newline increments the line and resets the column to 1; every
        other character increments the column.

        Args:
            text: Text that starts at this position.
            index: Number of characters of ``text`` to walk over.

        Returns:
            The position of ``text[index]``.
        """
        line: int = self.line
        column: int = self.column
        for ch in text[:index]:
            if ch == "\n":
                line += 1
                column = 1
            else:
                column += 1
        offset: int | None = None if self.offset is None else self.offset + index
        return Position(line=line, column=column, offset=offset)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class Input:
    """Original input text with an optional file identity.

    Inputs without a ``file`` receive a stable anonymous id
    (``<input css N>``) so they can still be told apart in diagnostics, but
    they cannot be named in a source map unless the run supplies ``from_path``.
    """

    _anonymous_ids: ClassVar[itertools.count[int]] = itertools.count(1)

    def __init__(self, css: str, file: str | None = None) -> None:
        self.css: str = css
        self.file: str | None = file
        self.id: str | None = None if file else f"<input css {next(self._anonymous_ids)}>"
        self._line_starts: list[int] | None = None

    @property
    def has_identity(self) -> bool:
        """Return True if this input is backed by a named file."""
        return bool(self.file)

    @property
    def name(self) -> str:
        """Return the file name, or the anonymous id for unnamed inputs."""
        return self.file or self.id or ""

    def position_at(self, offset: int) -> Position:
        """Return the line/column position of a 0-based character offset."""
        if self._line_starts is None:
            starts: list[int] = [0]
            starts.extend(i + 1 for i, ch in enumerate(self.css) if ch == "\n")
            self._line_starts = starts
        line_index: int = bisect_right(self._line_starts, offset) - 1
        column: int = offset - self._line_starts[line_index] + 1
        return Position(line=line_index + 1, column=column, offset=offset)

    def __repr__(self) -> str:
        return f"Input(name={self.name!r}, length={len(self.css)})"


@dataclass(frozen=True, slots=True)
class NodeSource:
    """Origin of a node inside an `Input`.

    Attributes:
        input: The input the node was read from, if any.
        start: Position of the node's first character.
        end: Position just past the node's last character.
    """

    input: Input | None = None
    start: Position | None = None
    end: Position | None = None

    @classmethod
    def from_offsets(cls, source_input: Input, start: int, end: int) -> NodeSource:
        """Build a source span from 0-based offsets into ``source_input``."""
        return cls(
            input=source_input,
            start=source_input.position_at(start),
            end=source_input.position_at(end),
        )
