# topmark:header:start
#
#   project      : TreeShift
#   file         : model.py
#   file_relpath : src/treeshift/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic messages emitted by plugins.

Sections:
    * Message: tagged record with a closed core (``kind``, ``plugin``) and an
      open mapping of plugin-defined extension fields.
    * PluginWarning: the ``"warning"`` kind, with text, resolved source
      position, and a weak reference to the node that caused it.
    * MessageStats: per-kind counts.
    * MessageLog: append-only, per-result collection.
    * FrozenMessageLog: immutable snapshot of a log.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from treeshift.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from treeshift.config.logging import TreeshiftLogger
    from treeshift.tree.nodes import Node
    from treeshift.tree.position import Position


logger: TreeshiftLogger = get_logger(__name__)

WARNING: Final[str] = "warning"

_HIDDEN_FIELDS: Final[frozenset[str]] = frozenset({"extra", "node_ref"})


@dataclass(frozen=True, kw_only=True, eq=False)
class Message:
    """A diagnostic record attached to a `Result`.

    Attributes:
        kind: Discriminator, e.g. ``"warning"`` or a plugin-defined kind such
            as ``"dependency"``.
        plugin: Name of the plugin that emitted the message.
        extra: Plugin-defined extension fields (read-only view).
    """

    kind: str
    plugin: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        clash: set[str] = self.field_names() & set(self.extra)
        if clash:
            raise ValueError(f"Extension fields shadow core fields: {sorted(clash)}")
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Return the names of the record's own fields, readable by key."""
        return frozenset(f.name for f in fields(cls)) - _HIDDEN_FIELDS

    def __getitem__(self, key: str) -> Any:
        if key in self.field_names():
            return getattr(self, key)
        return self.extra[key]

    def get(self, key: str, default: Any = None) -> Any:
        """Return a core or extension field, or ``default`` if absent."""
        try:
            return self[key]
        except KeyError:
            return default

    def to_dict(self) -> dict[str, Any]:
        """Return a flat, JSON-friendly dict of core and extension fields."""
        return {"kind": self.kind, "plugin": self.plugin, **self.extra}


@dataclass(frozen=True, kw_only=True, eq=False)
class PluginWarning(Message):
    """A human-readable warning raised by a plugin.

    Positions are resolved once, when the warning is created, from the node's
    recorded source start and raw text (see `Node.range_by`). The node itself
    is only weakly referenced: discarding the tree does not keep it alive and
    does not change the resolved position.

    Attributes:
        text: Warning message.
        line: 1-based line of the warned-about location, if known.
        column: 1-based column of the warned-about location, if known.
        end_line: Line just past the warned-about range, if known.
        end_column: Column just past the warned-about range, if known.
        word: Substring used to narrow the location, if given.
        file: File identity of the node's input, if known.
    """

    kind: str = WARNING
    text: str
    line: int | None = None
    column: int | None = None
    end_line: int | None = None
    end_column: int | None = None
    word: str | None = None
    file: str | None = None
    node_ref: weakref.ReferenceType[Node] | None = field(default=None, repr=False, compare=False)

    @classmethod
    def create(
        cls,
        text: str,
        *,
        plugin: str | None = None,
        node: Node | None = None,
        word: str | None = None,
        index: int | None = None,
        end_index: int | None = None,
        **extra: Any,
    ) -> PluginWarning:
        """Build a warning, resolving its position from ``node``.

        Args:
            text: Warning message; must not be empty.
            plugin: Originating plugin name.
            node: Node that caused the warning.
            word: Substring of the node's raw text to point at. A word that is
                not found falls back to ``index``, then to the node's start.
            index: Character offset inside the node's raw text.
            end_index: Character offset of the range end inside the node's raw text.
            **extra: Plugin-defined extension fields.

        Returns:
            The new warning.

        Raises:
            ValueError: If ``text`` is empty or an extension field reuses the
                name of a warning field (``line``, ``text``, ...).
        """
        if not text:
            raise ValueError("Warning text must not be empty")

        start: Position | None = None
        end: Position | None = None
        file: str | None = None
        if node is not None:
            start, end = node.range_by(word=word, index=index, end_index=end_index)
            if node.source is not None and node.source.input is not None:
                file = node.source.input.file

        return cls(
            text=text,
            plugin=plugin,
            extra=extra,
            line=start.line if start else None,
            column=start.column if start else None,
            end_line=end.line if end else None,
            end_column=end.column if end else None,
            word=word,
            file=file,
            node_ref=weakref.ref(node) if node is not None else None,
        )

    @property
    def node(self) -> Node | None:
        """The node that caused this warning, while its tree is alive."""
        return self.node_ref() if self.node_ref is not None else None

    @property
    def has_position(self) -> bool:
        """Return True if a line/column pair was resolved."""
        return self.line is not None and self.column is not None

    def to_dict(self) -> dict[str, Any]:
        """Return a flat, JSON-friendly dict including text and position."""
        data: dict[str, Any] = super().to_dict()
        data.update(
            text=self.text,
            line=self.line,
            column=self.column,
            end_line=self.end_line,
            end_column=self.end_column,
            word=self.word,
            file=self.file,
        )
        return data

    def __str__(self) -> str:
        prefix: str = ""
        if self.has_position:
            prefix = f"{self.line}:{self.column}: "
            if self.file:
                prefix = f"{self.file}:{prefix}"
        suffix: str = f" ({self.plugin})" if self.plugin else ""
        return f"{prefix}{self.text}{suffix}"


@dataclass(frozen=True)
class MessageStats:
    """Counts of messages by kind, in order of first appearance."""

    counts: Mapping[str, int]

    @property
    def total(self) -> int:
        """Return the total count of messages."""
        return sum(self.counts.values())

    @property
    def n_warning(self) -> int:
        """Return the number of warnings."""
        return self.counts.get(WARNING, 0)


class MessageLog:
    """Append-only, per-result collection of messages.

    Insertion order reflects plugin execution order and is preserved exactly;
    nothing is ever removed or reordered. Read access returns tuples so
    callers cannot mutate the log behind its back.
    """

    def __init__(self, messages: Iterable[Message] = ()) -> None:
        self._items: list[Message] = list(messages)

    @property
    def items(self) -> tuple[Message, ...]:
        """All messages in append order."""
        return tuple(self._items)

    def append(self, message: Message) -> Message:
        """Append ``message`` to the log and return it."""
        self._items.append(message)
        logger.trace("Adding [%s] from %s: %s", message.kind, message.plugin, message)
        return message

    def of_kind(self, kind: str) -> tuple[Message, ...]:
        """Return the messages of ``kind``, in append order."""
        return tuple(m for m in self._items if m.kind == kind)

    def warnings(self) -> tuple[PluginWarning, ...]:
        """Return the warnings in append order."""
        return tuple(m for m in self._items if isinstance(m, PluginWarning))

    def has_kind(self, kind: str) -> bool:
        """Return True if at least one message of ``kind`` was appended."""
        return any(m.kind == kind for m in self._items)

    def stats(self) -> MessageStats:
        """Return per-kind counts for this log."""
        return compute_message_stats(self._items)

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts by kind."""
        return dict(self.stats().counts)

    def freeze(self) -> FrozenMessageLog:
        """Return an immutable snapshot of the log's current contents."""
        return FrozenMessageLog(items=tuple(self._items))

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)


@dataclass(frozen=True, slots=True)
class FrozenMessageLog:
    """Immutable snapshot of a `MessageLog`."""

    items: tuple[Message, ...]

    def __iter__(self) -> Iterator[Message]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def of_kind(self, kind: str) -> tuple[Message, ...]:
        """Return the messages of ``kind``, in append order."""
        return tuple(m for m in self.items if m.kind == kind)

    def stats(self) -> MessageStats:
        """Return per-kind counts for the contained messages."""
        return compute_message_stats(self.items)

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts by kind."""
        return dict(self.stats().counts)


def compute_message_stats(messages: Iterable[Message]) -> MessageStats:
    """Return per-kind counts for a sequence of messages.

    Args:
        messages: Messages to count.

    Returns:
        Counts keyed by kind, in order of first appearance.
    """
    counts: dict[str, int] = {}
    for m in messages:
        counts[m.kind] = counts.get(m.kind, 0) + 1
    return MessageStats(counts=MappingProxyType(counts))
