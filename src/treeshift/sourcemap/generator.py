# topmark:header:start
#
#   project      : TreeShift
#   file         : generator.py
#   file_relpath : src/treeshift/sourcemap/generator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Produce output text and its source map from one stringification walk.

`MapGenerator` binds a tree to the run's `ProcessOptions`. Its `generate()`
method drives the `Stringifier` exactly once: every chunk is appended to the
output and, when a map was requested, the generated line/column at that
point is recorded against the originating node's source position. Text and
map therefore cannot disagree.

Configuration is validated before the walk starts:
    - every `Input` reachable from the tree must have a file identity, unless
      ``from_path`` names the input for the whole run;
    - an external map with ``annotation=True`` needs ``to_path`` to derive the
      annotation URL.
"""

from __future__ import annotations

import base64
import os
from typing import TYPE_CHECKING

from treeshift.config.logging import get_logger
from treeshift.errors import InvalidConfigError
from treeshift.sourcemap.map import MapBuilder
from treeshift.tree.nodes import Container
from treeshift.tree.stringifier import Stringifier, stringify

if TYPE_CHECKING:
    from treeshift.config.logging import TreeshiftLogger
    from treeshift.config.options import MapOptions, ProcessOptions
    from treeshift.sourcemap.map import SourceMap
    from treeshift.tree.nodes import Node
    from treeshift.tree.position import Input
    from treeshift.tree.stringifier import Edge

logger: TreeshiftLogger = get_logger(__name__)


class MapGenerator:
    """Serialize a tree and, if requested, build its source map in the same pass."""

    def __init__(self, root: Node, opts: ProcessOptions) -> None:
        self.root = root
        self.opts = opts

    def generate(self) -> tuple[str, SourceMap | None]:
        """Return ``(text, source_map)``; ``source_map`` is ``None`` if not requested.

        Raises:
            InvalidConfigError: If the options request a map that cannot be built.
            SerializationError: If the tree cannot be serialized.
        """
        map_opts: MapOptions | None = self.opts.map
        if map_opts is None:
            return stringify(self.root), None

        self.validate(map_opts)
        text, builder = self._generate_string()
        source_map: SourceMap = builder.build(
            self.output_file(), sources_content=map_opts.sources_content
        )
        annotation: str | None = self.annotation(map_opts, source_map)
        if annotation:
            text += annotation
        logger.debug(
            "Generated %d mapping(s) over %d source(s)",
            len(source_map.mappings),
            len(source_map.sources),
        )
        return text, source_map

    def inputs(self) -> list[Input]:
        """Return the distinct inputs referenced by the tree, in walk order."""
        seen: dict[int, Input] = {}
        nodes: list[Node] = [self.root]
        if isinstance(self.root, Container):
            nodes.extend(self.root.walk())
        for node in nodes:
            if node.source is not None and node.source.input is not None:
                seen.setdefault(id(node.source.input), node.source.input)
        return list(seen.values())

    def validate(self, map_opts: MapOptions) -> None:
        """Check that the options carry everything the requested map needs.

        Raises:
            InvalidConfigError: On a missing input identity or output path.
        """
        if self.opts.from_path is None:
            anonymous: list[str] = [i.name for i in self.inputs() if not i.has_identity]
            if anonymous:
                raise InvalidConfigError(
                    "Source map requested but input has no file identity "
                    f"({', '.join(anonymous)}); set 'from_path'"
                )
        if not map_opts.inline and map_opts.annotation is True and self.opts.to_path is None:
            raise InvalidConfigError(
                "External source map annotation requires 'to_path' to derive the map URL"
            )

    def output_file(self) -> str | None:
        """Return the name recorded as the map's ``file``."""
        if self.opts.to_path:
            return os.path.basename(self.opts.to_path)
        if self.opts.from_path:
            return os.path.basename(self.opts.from_path)
        return None

    def source_name(self, source_input: Input) -> str:
        """Return the name under which ``source_input`` is listed in ``sources``.

        Names are made relative to the directory of ``to_path`` when it is set.
        """
        name: str = source_input.file or self.opts.from_path or source_input.name
        if self.opts.to_path:
            base: str = os.path.dirname(os.path.abspath(self.opts.to_path))
            name = os.path.relpath(os.path.abspath(name), base)
        return name.replace(os.sep, "/")

    def annotation(self, map_opts: MapOptions, source_map: SourceMap) -> str | None:
        """Return the ``sourceMappingURL`` comment to append, if any."""
        if map_opts.inline:
            payload: str = base64.b64encode(source_map.to_json().encode("utf-8")).decode("ascii")
            url: str = f"data:application/json;base64,{payload}"
        elif isinstance(map_opts.annotation, str):
            url = map_opts.annotation
        elif map_opts.annotation and self.opts.to_path:
            url = os.path.basename(self.opts.to_path) + ".map"
        else:
            return None
        return f"\n/*# sourceMappingURL={url} */"

    def _generate_string(self) -> tuple[str, MapBuilder]:
        builder = MapBuilder()
        chunks: list[str] = []
        line: int = 1
        column: int = 0

        def _emit(chunk: str, node: Node | None, edge: Edge | None) -> None:
            nonlocal line, column
            chunks.append(chunk)
            src = node.source if node is not None else None

            if src is not None and src.input is not None and edge != "end" and src.start:
                builder.add_mapping(
                    generated_line=line,
                    generated_column=column,
                    source=self.source_name(src.input),
                    original_line=src.start.line,
                    original_column=src.start.column - 1,
                )

            newlines: int = chunk.count("\n")
            if newlines:
                line += newlines
                column = len(chunk) - chunk.rfind("\n") - 1
            else:
                column += len(chunk)

            if src is not None and src.input is not None and edge != "start" and src.end and column:
                builder.add_mapping(
                    generated_line=line,
                    generated_column=column - 1,
                    source=self.source_name(src.input),
                    original_line=src.end.line,
                    original_column=src.end.column - 2,
                )

        Stringifier(_emit).stringify(self.root)

        for source_input in self.inputs():
            builder.set_source_content(self.source_name(source_input), source_input.css)

        return "".join(chunks), builder
