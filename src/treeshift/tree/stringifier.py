# topmark:header:start
#
#   project      : TreeShift
#   file         : stringifier.py
#   file_relpath : src/treeshift/tree/stringifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Serialize a document tree to text.

The `Stringifier` walks the tree once and hands every emitted chunk to a
*builder* callback together with the node that produced it and an edge
marker:

    builder(chunk, node, edge)

``edge`` is ``"start"`` for the opening chunk of a block (``a {``), ``"end"``
for its closing brace, and ``None`` for whole nodes and raw whitespace. The
source-map generator uses these markers to record position mappings during
the same walk that produces the text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, Literal

from treeshift.config.logging import get_logger
from treeshift.errors import SerializationError
from treeshift.tree.nodes import AtRule, Comment, Container, Declaration, Root, Rule

if TYPE_CHECKING:
    from collections.abc import Callable

    from treeshift.config.logging import TreeshiftLogger
    from treeshift.tree.nodes import Node

logger: TreeshiftLogger = get_logger(__name__)

Edge = Literal["start", "end"]

DEFAULT_INDENT: Final[str] = "    "

DEFAULT_RAWS: Final[dict[str, Any]] = {
    "colon": ": ",
    "before_open": " ",
    "after_name": " ",
    "comment_left": " ",
    "comment_right": " ",
    "important": " !important",
    "semicolon": False,
}


class Stringifier:
    """Tree walker that emits text chunks through a builder callback."""

    def __init__(self, builder: Callable[[str, Node | None, Edge | None], None]) -> None:
        self.builder = builder

    def stringify(self, node: Node, semicolon: bool = False) -> None:
        """Emit ``node`` through the builder.

        Raises:
            SerializationError: If the node kind is unknown or the node is malformed.
        """
        if isinstance(node, Root):
            self.root(node)
        elif isinstance(node, Rule):
            self.rule(node)
        elif isinstance(node, AtRule):
            self.atrule(node, semicolon)
        elif isinstance(node, Declaration):
            self.decl(node, semicolon)
        elif isinstance(node, Comment):
            self.comment(node)
        else:
            raise SerializationError(f"Unknown node type: {node.type!r}", node)

    def root(self, node: Root) -> None:
        self.body(node)
        after: str | None = node.raws.get("after")
        if after:
            self.builder(after, None, None)

    def comment(self, node: Comment) -> None:
        left: str = self.raw(node, "left", "comment_left")
        right: str = self.raw(node, "right", "comment_right")
        self.builder(f"/*{left}{node.text}{right}*/", node, None)

    def decl(self, node: Declaration, semicolon: bool) -> None:
        if not node.prop:
            raise SerializationError("Declaration without a property name", node)
        text: str = node.prop + self.raw(node, "between", "colon") + node.value
        if node.important:
            text += self.raw(node, "important", "important")
        if semicolon:
            text += ";"
        self.builder(text, node, None)

    def rule(self, node: Rule) -> None:
        if not node.selector:
            raise SerializationError("Rule without a selector", node)
        self.block(node, node.selector + self.raw(node, "between", "before_open"))

    def atrule(self, node: AtRule, semicolon: bool) -> None:
        if not node.name:
            raise SerializationError("At-rule without a name", node)
        text: str = "@" + node.name
        if node.params:
            text += self.raw(node, "after_name", "after_name") + node.params
        if node.block:
            self.block(node, text + self.raw(node, "between", "before_open"))
            return
        text += node.raws.get("between", "")
        if semicolon:
            text += ";"
        self.builder(text, node, None)

    def body(self, node: Container) -> None:
        """Emit the children of ``node`` with their leading whitespace."""
        last: int = len(node.nodes) - 1
        while last > 0 and isinstance(node.nodes[last], Comment):
            last -= 1
        semicolon: bool = bool(self.raw(node, "semicolon", "semicolon"))
        for i, child in enumerate(node.nodes):
            before: str = self.before(child)
            if before:
                self.builder(before, None, None)
            self.stringify(child, last != i or semicolon)

    def block(self, node: Container, start: str) -> None:
        self.builder(start + "{", node, "start")
        if node.nodes:
            self.body(node)
            after: str = node.raws.get("after", "\n" + DEFAULT_INDENT * self.depth(node))
        else:
            after = node.raws.get("after", "")
        if after:
            self.builder(after, None, None)
        self.builder("}", node, "end")

    def raw(self, node: Node, own: str, detect: str) -> Any:
        """Return ``node.raws[own]`` or the default registered under ``detect``."""
        if own in node.raws:
            return node.raws[own]
        return DEFAULT_RAWS[detect]

    def before(self, node: Node) -> str:
        """Return the whitespace emitted before ``node``."""
        if "before" in node.raws:
            return node.raws["before"]
        parent: Container | None = node.parent
        if parent is None:
            return ""
        if isinstance(parent, Root):
            return "" if parent.first is node else "\n"
        return "\n" + DEFAULT_INDENT * (self.depth(parent) + 1)

    @staticmethod
    def depth(node: Node) -> int:
        """Return the nesting depth of ``node`` below the root (root children are 0)."""
        depth: int = 0
        parent: Container | None = node.parent
        while parent is not None and not isinstance(parent, Root):
            depth += 1
            parent = parent.parent
        return depth


def stringify(node: Node) -> str:
    """Serialize ``node`` and return the resulting text."""
    chunks: list[str] = []

    def _collect(chunk: str, _node: Node | None, _edge: Edge | None) -> None:
        chunks.append(chunk)

    Stringifier(_collect).stringify(node)
    logger.trace("Stringified %s into %d chunk(s)", node.type, len(chunks))
    return "".join(chunks)
