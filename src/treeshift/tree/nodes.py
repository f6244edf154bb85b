# topmark:header:start
#
#   project      : TreeShift
#   file         : nodes.py
#   file_relpath : src/treeshift/tree/nodes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Document tree node types.

The tree is a small stylesheet-shaped model: a `Root` holds `Rule`,
`AtRule`, `Declaration` and `Comment` nodes. Nodes keep formatting hints in
``raws`` (``before``, ``between``, ``after``, ``semicolon``, ``important``)
and an optional `NodeSource` recorded by whatever built the tree.

Nodes are plain classes (not slotted) so diagnostics can hold weak
references to them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from treeshift.errors import SerializationError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from treeshift.config.options import ProcessOptions
    from treeshift.result import Result
    from treeshift.tree.position import NodeSource, Position


class Node:
    """Base class of every tree node."""

    type: ClassVar[str] = "node"

    def __init__(
        self,
        *,
        raws: dict[str, Any] | None = None,
        source: NodeSource | None = None,
    ) -> None:
        self.parent: Container | None = None
        self.raws: dict[str, Any] = dict(raws or {})
        self.source: NodeSource | None = source

    def to_string(self) -> str:
        """Serialize this node (and its children) to text."""
        from treeshift.tree.stringifier import stringify

        return stringify(self)

    def __str__(self) -> str:
        return self.to_string()

    def root(self) -> Node:
        """Return the top-most ancestor of this node."""
        node: Node = self
        while node.parent is not None:
            node = node.parent
        return node

    def remove(self) -> Node:
        """Detach this node from its parent and return it."""
        if self.parent is not None:
            self.parent.remove_child(self)
        return self

    def next(self) -> Node | None:
        """Return the next sibling, if any."""
        if self.parent is None:
            return None
        index: int = self.parent.index(self)
        return self.parent.nodes[index + 1] if index + 1 < len(self.parent.nodes) else None

    def prev(self) -> Node | None:
        """Return the previous sibling, if any."""
        if self.parent is None:
            return None
        index: int = self.parent.index(self)
        return self.parent.nodes[index - 1] if index > 0 else None

    def source_text(self) -> str:
        """Return the node's raw source text.

        This is the slice of the original input covered by the node when the
        node carries source offsets, and its serialized form otherwise.
        """
        src: NodeSource | None = self.source
        if (
            src is not None
            and src.input is not None
            and src.start is not None
            and src.end is not None
            and src.start.offset is not None
            and src.end.offset is not None
        ):
            return src.input.css[src.start.offset : src.end.offset]
        return self.to_string()

    def _raw_text(self) -> str | None:
        """Return `source_text()`, or ``None`` if the node cannot be serialized."""
        try:
            return self.source_text()
        except SerializationError:
            return None

    def position_inside(self, index: int) -> Position | None:
        """Return the position of the ``index``-th character of the node's text."""
        if self.source is None or self.source.start is None:
            return None
        text: str | None = self._raw_text()
        if text is None:
            return self.source.start
        return self.source.start.advanced_by(text, index)

    def position_by(self, *, word: str | None = None, index: int | None = None) -> Position | None:
        """Resolve the position a diagnostic about this node points at.

        Resolution order:
            1. No recorded start: ``None``.
            2. ``word`` found in the node's raw text: start advanced to the
               first occurrence of ``word``.
            3. ``index`` given: start advanced by ``index`` characters.
            4. Otherwise (including an unresolvable ``word``): the start.

        The raw text is only read when ``word`` or ``index`` needs it. A node
        whose text cannot be produced resolves to its start.

        Args:
            word: Substring of the node's raw text to point at.
            index: Character offset inside the node's raw text.

        Returns:
            The resolved position, or ``None`` without source information.
        """
        return self.range_by(word=word, index=index)[0]

    def range_by(
        self,
        *,
        word: str | None = None,
        index: int | None = None,
        end_index: int | None = None,
    ) -> tuple[Position | None, Position | None]:
        """Resolve a ``(start, end)`` position pair for a diagnostic.

        The start follows the matched ``word``, then ``index``, then the
        node's recorded start. The end is exclusive; it follows the matched
        ``word``, then ``end_index``, then the node's recorded end.

        Args:
            word: Substring of the node's raw text to point at.
            index: Character offset of the range start inside the node's raw text.
            end_index: Character offset of the range end inside the node's raw text.

        Returns:
            The ``(start, end)`` pair; either side may be ``None``.
        """
        if self.source is None or self.source.start is None:
            return None, None
        start: Position = self.source.start
        end: Position | None = self.source.end
        if not word and index is None and end_index is None:
            return start, end

        text: str | None = self._raw_text()
        if text is None:
            return start, end
        if word:
            k: int = text.find(word)
            if k >= 0:
                return start.advanced_by(text, k), start.advanced_by(text, k + len(word))
        if index is not None:
            start = self.source.start.advanced_by(text, index)
        if end_index is not None:
            end = self.source.start.advanced_by(text, end_index)
        return start, end

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Container(Node):
    """A node holding an ordered list of child nodes."""

    def __init__(self, nodes: Iterable[Node] | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.nodes: list[Node] = []
        if nodes is not None:
            self.append(*nodes)

    def append(self, *children: Node) -> Container:
        """Append children, re-parenting them, and return ``self``."""
        for child in children:
            child.remove()
            child.parent = self
            self.nodes.append(child)
        return self

    def prepend(self, *children: Node) -> Container:
        """Insert children at the front, preserving their order, and return ``self``."""
        for child in reversed(children):
            child.remove()
            child.parent = self
            self.nodes.insert(0, child)
        return self

    def remove_child(self, child: Node) -> Container:
        """Remove ``child`` from this container and return ``self``."""
        self.nodes.remove(child)
        child.parent = None
        return self

    def index(self, child: Node) -> int:
        """Return the position of ``child`` among this container's children."""
        for i, node in enumerate(self.nodes):
            if node is child:
                return i
        raise ValueError(f"{child!r} is not a child of {self!r}")

    @property
    def first(self) -> Node | None:
        """First child, if any."""
        return self.nodes[0] if self.nodes else None

    @property
    def last(self) -> Node | None:
        """Last child, if any."""
        return self.nodes[-1] if self.nodes else None

    def each(self, callback: Callable[[Node], object]) -> None:
        """Call ``callback`` for every direct child (on a snapshot of the list)."""
        for child in list(self.nodes):
            callback(child)

    def walk(self, kind: type[Node] | None = None) -> Iterator[Node]:
        """Yield descendants depth-first, optionally only those of a given class."""
        for child in list(self.nodes):
            if kind is None or isinstance(child, kind):
                yield child
            if isinstance(child, Container):
                yield from child.walk(kind)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)


class Root(Container):
    """Top of a document tree."""

    type: ClassVar[str] = "root"

    def to_result(self, opts: ProcessOptions | None = None) -> Result:
        """Wrap this tree in a `Result` bound to an empty `Processor`."""
        from treeshift.processor import Processor
        from treeshift.result import Result

        return Result(Processor(), self, opts)


class Rule(Container):
    """A selector followed by a declaration block."""

    type: ClassVar[str] = "rule"

    def __init__(self, selector: str = "", nodes: Iterable[Node] | None = None, **kwargs: Any) -> None:
        super().__init__(nodes, **kwargs)
        self.selector: str = selector

    def __repr__(self) -> str:
        return f"Rule(selector={self.selector!r})"


class AtRule(Container):
    """An at-rule such as ``@media screen { ... }`` or ``@import "a.css";``.

    An at-rule built with ``block=False`` has no body and is serialized as a
    statement terminated by ``;``.
    """

    type: ClassVar[str] = "atrule"

    def __init__(
        self,
        name: str = "",
        params: str = "",
        nodes: Iterable[Node] | None = None,
        *,
        block: bool = True,
        **kwargs: Any,
    ) -> None:
        super().__init__(nodes, **kwargs)
        self.name: str = name
        self.params: str = params
        self.block: bool = block or bool(self.nodes)

    def __repr__(self) -> str:
        return f"AtRule(name={self.name!r}, params={self.params!r})"


class Declaration(Node):
    """A ``prop: value`` pair."""

    type: ClassVar[str] = "decl"

    def __init__(self, prop: str = "", value: str = "", *, important: bool = False, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.prop: str = prop
        self.value: str = value
        self.important: bool = important

    def __repr__(self) -> str:
        return f"Declaration(prop={self.prop!r}, value={self.value!r})"


class Comment(Node):
    """A ``/* ... */`` comment."""

    type: ClassVar[str] = "comment"

    def __init__(self, text: str = "", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.text: str = text
