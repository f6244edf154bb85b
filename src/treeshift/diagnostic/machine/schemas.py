# topmark:header:start
#
#   project      : TreeShift
#   file         : schemas.py
#   file_relpath : src/treeshift/diagnostic/machine/schemas.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typed payload schemas for machine-readable diagnostics.

- `MachineMessageEntry` represents a single message (kind, plugin, optional
  text and position, and extension fields).
- `MachineMessageCounts` represents aggregated per-kind counts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from treeshift.diagnostic.model import PluginWarning, compute_message_stats

if TYPE_CHECKING:
    from collections.abc import Iterable

    from treeshift.diagnostic.model import Message


@dataclass(slots=True)
class MachineMessageEntry:
    """Machine-readable message entry.

    Attributes:
        kind: Message kind (e.g. ``"warning"``).
        plugin: Originating plugin name, if any.
        text: Warning text (warnings only).
        line: 1-based line (warnings with a resolved position only).
        column: 1-based column (warnings with a resolved position only).
        fields: Plugin-defined extension fields.
    """

    kind: str
    plugin: str | None
    text: str | None = None
    line: int | None = None
    column: int | None = None
    fields: dict[str, Any] = field(default_factory=lambda: {})

    @classmethod
    def from_message(cls, m: Message) -> MachineMessageEntry:
        """Create a machine-readable entry from an internal message."""
        if isinstance(m, PluginWarning):
            return cls(
                kind=m.kind,
                plugin=m.plugin,
                text=m.text,
                line=m.line,
                column=m.column,
                fields=dict(m.extra),
            )
        return cls(kind=m.kind, plugin=m.plugin, fields=dict(m.extra))

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly dict, omitting unset optional members."""
        data: dict[str, Any] = {"kind": self.kind, "plugin": self.plugin}
        if self.text is not None:
            data["text"] = self.text
        if self.line is not None:
            data["line"] = self.line
            data["column"] = self.column
        if self.fields:
            data["fields"] = self.fields
        return data


@dataclass(slots=True)
class MachineMessageCounts:
    """Aggregated per-kind counts for machine output.

    Attributes:
        counts: Number of messages per kind.
        total: Total number of messages.
    """

    counts: dict[str, int]
    total: int

    @classmethod
    def from_iterable(cls, messages: Iterable[Message]) -> MachineMessageCounts:
        """Compute per-kind counts from an iterable of internal messages."""
        stats = compute_message_stats(messages)
        return cls(counts=dict(stats.counts), total=stats.total)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly dict of the counts."""
        return {"counts": self.counts, "total": self.total}
