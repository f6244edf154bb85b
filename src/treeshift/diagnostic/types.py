# topmark:header:start
#
#   project      : TreeShift
#   file         : types.py
#   file_relpath : src/treeshift/diagnostic/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared typing helpers for TreeShift diagnostics.

`MessagesLike` expresses "message-carrying" objects structurally so
renderers accept either a live `MessageLog` or a `FrozenMessageLog`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterator

    from treeshift.diagnostic.model import Message, MessageStats


class MessagesLike(Protocol):
    """Structural interface for objects that carry messages."""

    def __iter__(self) -> Iterator[Message]:
        """Iterate over contained messages in append order."""
        ...

    def of_kind(self, kind: str) -> tuple[Message, ...]:
        """Return the messages of ``kind`` in append order."""
        ...

    def stats(self) -> MessageStats:
        """Return aggregated per-kind counts."""
        ...
