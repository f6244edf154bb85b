# topmark:header:start
#
#   project      : TreeShift
#   file         : result.py
#   file_relpath : src/treeshift/result.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Result of one TreeShift transformation run.

A [`Result`][treeshift.result.Result] aggregates what a run produced:

- the final tree (``root``), referenced, never copied;
- the options used for the run and the owning `Processor`;
- an append-only log of plugin messages (warnings and custom kinds);
- the serialized text and optional source map, computed lazily.

Output caching:
    ``text`` and ``source_map`` come from a single stringification walk that
    runs at most once per result, on first access of either. The walk runs
    under a lock, so concurrent first readers share one computation and never
    observe a partial value. A failing walk (`InvalidConfigError`,
    `SerializationError`) caches nothing, so the access may be retried after
    the caller repairs the tree or options.

    Messages appended after the output was computed do not invalidate it, and
    mutating the tree after the output was computed does not change it.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from treeshift.config.logging import get_logger
from treeshift.config.options import ProcessOptions
from treeshift.diagnostic.model import WARNING, Message, MessageLog, PluginWarning
from treeshift.sourcemap.generator import MapGenerator

if TYPE_CHECKING:
    from treeshift.config.logging import TreeshiftLogger
    from treeshift.processor import Processor
    from treeshift.sourcemap.map import SourceMap
    from treeshift.tree.nodes import Node

logger: TreeshiftLogger = get_logger(__name__)

__all__: list[str] = [
    "Result",
]


class Result:
    """Output and diagnostics of one transformation run.

    Attributes:
        processor (Processor): Pipeline configuration that produced this result.
        root (Node): Tree after all transformations.
        opts (ProcessOptions): Options used for the run.
        messages (MessageLog): Append-only log of plugin messages.
        current_plugin (str | None): Name of the plugin currently executing;
            set by the processor and used to attribute warnings.
    """

    def __init__(
        self,
        processor: Processor,
        root: Node,
        opts: ProcessOptions | None = None,
    ) -> None:
        self.processor: Processor = processor
        self.root: Node = root
        self.opts: ProcessOptions = opts if opts is not None else ProcessOptions()
        self.messages: MessageLog = MessageLog()
        self.current_plugin: str | None = None

        self._lock = threading.Lock()
        self._computed: bool = False
        self._text: str = ""
        self._map: SourceMap | None = None
        logger.debug("Result created for %s (map requested: %s)", root.type, self.opts.requests_map)

    # --- Output ---

    @property
    def text(self) -> str:
        """Serialized output of ``root``.

        Raises:
            InvalidConfigError: If the options request an unproducible map.
            SerializationError: If the tree cannot be serialized.
        """
        self._compute()
        return self._text

    @property
    def css(self) -> str:
        """Alias for `text`."""
        return self.text

    @property
    def content(self) -> str:
        """Alias for `text`, for syntaxes whose output is not a stylesheet."""
        return self.text

    @property
    def source_map(self) -> SourceMap | None:
        """Source map built in the same walk as `text`, or ``None`` if not requested.

        Raises:
            InvalidConfigError: If the options request an unproducible map.
            SerializationError: If the tree cannot be serialized.
        """
        self._compute()
        return self._map

    @property
    def map(self) -> SourceMap | None:
        """Alias for `source_map`."""
        return self.source_map

    @property
    def is_computed(self) -> bool:
        """Return True once the output has been computed and cached."""
        return self._computed

    def __str__(self) -> str:
        return self.text

    def _compute(self) -> None:
        if self._computed:
            return
        with self._lock:
            if self._computed:
                return
            logger.debug("Stringifying %s", self.root.type)
            text, source_map = MapGenerator(self.root, self.opts).generate()
            self._text = text
            self._map = source_map
            self._computed = True
            logger.trace("Cached %d character(s) of output", len(text))

    # --- Diagnostics ---

    def warn(
        self,
        text: str,
        *,
        plugin: str | None = None,
        node: Node | None = None,
        word: str | None = None,
        index: int | None = None,
        end_index: int | None = None,
        **extra: Any,
    ) -> PluginWarning:
        """Create a `PluginWarning` and append it to `messages`.

        Args:
            text: Warning message; must not be empty.
            plugin: Originating plugin. Defaults to the currently executing
                plugin, then to ``opts.plugin``.
            node: Node that caused the warning. Defaults to ``opts.node``.
            word: Substring of the node's raw text to point at.
            index: Character offset inside the node's raw text.
            end_index: Character offset of the range end inside the node's raw text.
            **extra: Plugin-defined extension fields.

        Returns:
            The appended warning.

        Raises:
            ValueError: If ``text`` is empty or an extension field reuses a
                warning field name.
        """
        warning: PluginWarning = PluginWarning.create(
            text,
            plugin=self._attributed_plugin(plugin),
            node=node if node is not None else self.opts.node,
            word=word,
            index=index,
            end_index=end_index,
            **extra,
        )
        self.messages.append(warning)
        return warning

    def add_message(self, kind: str, *, plugin: str | None = None, **fields: Any) -> Message:
        """Append a custom message of ``kind`` with extension ``fields``.

        The plugin defaults like it does for `warn`.
        """
        message = Message(
            kind=kind,
            plugin=self._attributed_plugin(plugin),
            extra=fields,
        )
        return self.messages.append(message)

    def _attributed_plugin(self, plugin: str | None) -> str | None:
        if plugin is not None:
            return plugin
        if self.current_plugin is not None:
            return self.current_plugin
        return self.opts.plugin

    def diagnostics(self) -> tuple[Message, ...]:
        """Return every message in append order."""
        return self.messages.items

    def diagnostics_of_kind(self, kind: str) -> tuple[Message, ...]:
        """Return the messages of ``kind`` in append order."""
        return self.messages.of_kind(kind)

    def warnings(self) -> tuple[PluginWarning, ...]:
        """Return the warnings in append order."""
        return tuple(m for m in self.messages.of_kind(WARNING) if isinstance(m, PluginWarning))

    def __repr__(self) -> str:
        return (
            f"Result(root={self.root.type}, messages={len(self.messages)}, "
            f"computed={self._computed})"
        )
