# topmark:header:start
#
#   project      : TreeShift
#   file         : errors.py
#   file_relpath : src/treeshift/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by TreeShift.

Usage:
    Both concrete errors surface at the first access of `Result.text` or
    `Result.source_map`, never at `Result` construction. They propagate to the
    immediate caller; the result keeps no partial output so the access can be
    retried once the caller has repaired the tree or the options.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from treeshift.tree.nodes import Node


class TreeshiftError(Exception):
    """Base class for all TreeShift errors."""


class InvalidConfigError(TreeshiftError):
    """Options request an artifact (e.g. a source map) that cannot be produced."""


class SerializationError(TreeshiftError):
    """A tree cannot be serialized (unknown or malformed node).

    Attributes:
        node: The offending node.
    """

    def __init__(self, message: str, node: Node | None = None) -> None:
        super().__init__(message)
        self.node: Node | None = node
