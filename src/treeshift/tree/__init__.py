# topmark:header:start
#
#   project      : TreeShift
#   file         : __init__.py
#   file_relpath : src/treeshift/tree/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Document tree model and serializer.

TreeShift does not parse text itself: trees are built by a parser (or by
hand) and handed to a `Processor`. This package provides the node types,
their source positions, and the `Stringifier` that turns a tree back into
text.
"""

from __future__ import annotations

from treeshift.tree.nodes import AtRule, Comment, Container, Declaration, Node, Root, Rule
from treeshift.tree.position import Input, NodeSource, Position
from treeshift.tree.stringifier import Stringifier, stringify

__all__ = [
    "AtRule",
    "Comment",
    "Container",
    "Declaration",
    "Input",
    "Node",
    "NodeSource",
    "Position",
    "Root",
    "Rule",
    "Stringifier",
    "stringify",
]
