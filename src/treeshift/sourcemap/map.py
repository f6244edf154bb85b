# topmark:header:start
#
#   project      : TreeShift
#   file         : map.py
#   file_relpath : src/treeshift/sourcemap/map.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Source-map artifact and the builder that records it.

Sections:
    * Mapping: one generated-to-original position pair.
    * SourceMap: immutable, queryable version 3 source map.
    * MapBuilder: mutable recorder fed by the stringification walk.

Conventions:
    Lines are 1-based and columns are 0-based, as in the version 3 source-map
    format and its common tooling.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from treeshift.sourcemap import vlq


@dataclass(frozen=True, slots=True, order=True)
class Mapping:
    """A single position mapping.

    Attributes:
        generated_line: 1-based line in the output text.
        generated_column: 0-based column in the output text.
        source: Name of the original source.
        original_line: 1-based line in the original source.
        original_column: 0-based column in the original source.
    """

    generated_line: int
    generated_column: int
    source: str
    original_line: int
    original_column: int


@dataclass(frozen=True)
class SourceMap:
    """Immutable version 3 source map.

    Attributes:
        file: Name of the generated file, if known.
        sources: Original source names, in index order.
        sources_content: Original texts aligned with ``sources``, or ``None``
            when contents were not requested.
        mappings: Mappings sorted by generated position.
    """

    file: str | None
    sources: tuple[str, ...]
    sources_content: tuple[str | None, ...] | None
    mappings: tuple[Mapping, ...]
    version: int = 3

    def encoded_mappings(self) -> str:
        """Return the VLQ-encoded ``mappings`` string."""
        source_index: dict[str, int] = {name: i for i, name in enumerate(self.sources)}
        lines: list[str] = []
        segments: list[str] = []
        current_line: int = 1
        prev_gen_col = prev_src = prev_orig_line = prev_orig_col = 0
        previous: Mapping | None = None

        for m in self.mappings:
            if m == previous:
                continue
            while current_line < m.generated_line:
                lines.append(",".join(segments))
                segments = []
                current_line += 1
                prev_gen_col = 0
            src: int = source_index[m.source]
            segments.append(
                vlq.encode_segment(
                    (
                        m.generated_column - prev_gen_col,
                        src - prev_src,
                        (m.original_line - 1) - prev_orig_line,
                        m.original_column - prev_orig_col,
                    )
                )
            )
            prev_gen_col = m.generated_column
            prev_src = src
            prev_orig_line = m.original_line - 1
            prev_orig_col = m.original_column
            previous = m
        lines.append(",".join(segments))

        return ";".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping in the version 3 layout."""
        data: dict[str, Any] = {
            "version": self.version,
            "sources": list(self.sources),
            "names": [],
            "mappings": self.encoded_mappings(),
        }
        if self.file is not None:
            data["file"] = self.file
        if self.sources_content is not None:
            data["sourcesContent"] = list(self.sources_content)
        return data

    def to_json(self) -> str:
        """Return the compact JSON form of this map."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    def __str__(self) -> str:
        return self.to_json()

    def original_position_for(self, line: int, column: int) -> Mapping | None:
        """Return the mapping covering a generated position.

        This is the last mapping on ``line`` whose generated column is at or
        before ``column``.

        Args:
            line: 1-based generated line.
            column: 0-based generated column.

        Returns:
            The covering mapping, or ``None`` if the position is unmapped.
        """
        best: Mapping | None = None
        for m in self.mappings:
            if m.generated_line != line:
                if m.generated_line > line:
                    break
                continue
            if m.generated_column <= column:
                best = m
            else:
                break
        return best

    def generated_positions_for(self, source: str, original_line: int) -> tuple[Mapping, ...]:
        """Return every mapping that points into ``source`` at ``original_line``."""
        return tuple(
            m for m in self.mappings if m.source == source and m.original_line == original_line
        )


class MapBuilder:
    """Records mappings and source contents during a stringification walk."""

    def __init__(self) -> None:
        self._mappings: list[Mapping] = []
        self._sources: dict[str, None] = {}
        self._contents: dict[str, str] = {}

    def add_mapping(
        self,
        *,
        generated_line: int,
        generated_column: int,
        source: str,
        original_line: int,
        original_column: int,
    ) -> None:
        """Record one generated-to-original mapping."""
        self._sources.setdefault(source)
        self._mappings.append(
            Mapping(
                generated_line=generated_line,
                generated_column=generated_column,
                source=source,
                original_line=original_line,
                original_column=max(original_column, 0),
            )
        )

    def set_source_content(self, source: str, content: str) -> None:
        """Attach the original text of ``source``."""
        self._sources.setdefault(source)
        self._contents[source] = content

    def __len__(self) -> int:
        return len(self._mappings)

    def build(self, file: str | None = None, *, sources_content: bool = True) -> SourceMap:
        """Freeze the recorded data into a `SourceMap`."""
        sources: tuple[str, ...] = tuple(self._sources)
        contents: tuple[str | None, ...] | None = (
            tuple(self._contents.get(s) for s in sources) if sources_content else None
        )
        return SourceMap(
            file=file,
            sources=sources,
            sources_content=contents,
            mappings=tuple(sorted(self._mappings)),
        )
