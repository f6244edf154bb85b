# topmark:header:start
#
#   project      : TreeShift
#   file         : __init__.py
#   file_relpath : src/treeshift/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic messages and helpers.

Design:
    - Plugins attach immutable `Message` records to a `Result`; warnings are
      the `PluginWarning` kind and carry a resolved source position.
    - Each result accumulates messages in an append-only `MessageLog`.
    - Snapshots for reporting are taken with `MessageLog.freeze()`.
"""

from __future__ import annotations

from treeshift.diagnostic.model import (
    WARNING,
    FrozenMessageLog,
    Message,
    MessageLog,
    MessageStats,
    PluginWarning,
    compute_message_stats,
)
from treeshift.diagnostic.types import MessagesLike

__all__ = [
    "WARNING",
    "FrozenMessageLog",
    "Message",
    "MessageLog",
    "MessageStats",
    "MessagesLike",
    "PluginWarning",
    "compute_message_stats",
]
