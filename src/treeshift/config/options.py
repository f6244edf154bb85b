# topmark:header:start
#
#   project      : TreeShift
#   file         : options.py
#   file_relpath : src/treeshift/config/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run options for a TreeShift transformation.

`ProcessOptions` is the immutable bundle handed to `Processor.process()` and
stored on the resulting `Result`. It controls serialization (input/output
identity and source-map generation) and carries default attribution for
diagnostics: the node blamed for warnings that name none, and the plugin
name used when no plugin is currently executing.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from treeshift.tree.nodes import Node


@dataclass(frozen=True, slots=True)
class MapOptions:
    """Source-map generation options.

    Attributes:
        inline: Embed the map in the output text as a base64 ``data:`` URI.
        annotation: For external maps, append a ``sourceMappingURL`` comment.
            ``True`` derives the URL from ``to_path``; a string is used verbatim.
        sources_content: Include the original input text in the map.
    """

    inline: bool = True
    annotation: bool | str = True
    sources_content: bool = True


@dataclass(frozen=True, slots=True)
class ProcessOptions:
    """Options used to produce one `Result`.

    Attributes:
        from_path: Identity of the input file; names anonymous inputs in maps.
        to_path: Path the output text is destined for.
        map: Source-map options, or ``None`` to skip map generation.
        node: Node blamed by default for warnings that do not name one.
        plugin: Plugin name stamped on warnings when no plugin is executing.
    """

    from_path: str | None = None
    to_path: str | None = None
    map: MapOptions | None = None
    node: Node | None = field(default=None, compare=False)
    plugin: str | None = None

    @property
    def requests_map(self) -> bool:
        """Return True if a source map should be generated."""
        return self.map is not None

    def with_plugin(self, name: str | None) -> ProcessOptions:
        """Return a copy attributed to plugin ``name``."""
        return replace(self, plugin=name)

    def with_node(self, node: Node | None) -> ProcessOptions:
        """Return a copy that blames ``node`` for unattributed warnings."""
        return replace(self, node=node)
