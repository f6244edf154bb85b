# topmark:header:start
#
#   project      : TreeShift
#   file         : __init__.py
#   file_relpath : src/treeshift/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TreeShift: collect the outcome of a plugin-driven tree transformation.

A `Processor` runs plugins over a document tree and returns a `Result` that
holds the final tree, the plugins' messages (warnings and custom kinds), and
lazily computed output text with an optional source map.

Example:
    ```python
    from treeshift import Declaration, Processor, Root, Rule, plugin

    @plugin("no-red")
    def no_red(root, result):
        for decl in root.walk(Declaration):
            if decl.value == "red":
                result.warn("bad value", node=decl, word="red")

    root = Root([Rule("a", [Declaration("color", "red")])])
    result = Processor([no_red]).process(root)
    print(result.text)
    for w in result.warnings():
        print(w)
    ```
"""

from __future__ import annotations

from treeshift.config.options import MapOptions, ProcessOptions
from treeshift.diagnostic.model import WARNING, Message, MessageLog, PluginWarning
from treeshift.errors import InvalidConfigError, SerializationError, TreeshiftError
from treeshift.processor import BasePlugin, Plugin, Processor, plugin
from treeshift.result import Result
from treeshift.sourcemap.map import SourceMap
from treeshift.tree import (
    AtRule,
    Comment,
    Declaration,
    Input,
    Node,
    NodeSource,
    Position,
    Root,
    Rule,
)

__all__ = [
    "WARNING",
    "AtRule",
    "BasePlugin",
    "Comment",
    "Declaration",
    "Input",
    "InvalidConfigError",
    "MapOptions",
    "Message",
    "MessageLog",
    "Node",
    "NodeSource",
    "Plugin",
    "PluginWarning",
    "Position",
    "ProcessOptions",
    "Processor",
    "Result",
    "Root",
    "Rule",
    "SerializationError",
    "SourceMap",
    "TreeshiftError",
    "plugin",
]
