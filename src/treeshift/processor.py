# topmark:header:start
#
#   project      : TreeShift
#   file         : processor.py
#   file_relpath : src/treeshift/processor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Plugin contracts and the sequential processor.

Plugins are callables invoked as ``plugin(root, result)``. They mutate the
tree in place and report through the result (`Result.warn`,
`Result.add_message`).

Lifecycle
---------
1) `Processor.process()` builds one `Result` for the run.
2) Each plugin is invoked in registration order. `BasePlugin.__call__`
   stamps ``result.current_plugin`` so warnings are attributed without the
   plugin naming itself, then calls ``run()``.
3) After the last plugin, ``current_plugin`` is cleared and the result is
   returned. Output is not computed here: it is produced lazily on first
   access of `Result.text` / `Result.source_map`.

Exceptions raised by a plugin propagate unchanged; the remaining plugins do
not run.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from treeshift.config.logging import get_logger
from treeshift.config.options import ProcessOptions
from treeshift.constants import TREESHIFT_VERSION
from treeshift.result import Result

if TYPE_CHECKING:
    from collections.abc import Iterable

    from treeshift.config.logging import TreeshiftLogger
    from treeshift.tree.nodes import Node

logger: TreeshiftLogger = get_logger(__name__)

PluginFunc = Callable[["Node", Result], None]


@runtime_checkable
class Plugin(Protocol):
    """Protocol for a single plugin.

    A plugin is a named callable that mutates the tree and may attach
    messages to the result. Implementations typically subclass
    [`BasePlugin`][treeshift.processor.BasePlugin] or use the
    [`plugin`][treeshift.processor.plugin] decorator.
    """

    name: str

    def __call__(self, root: Node, result: Result) -> None:
        """Run the plugin against ``root``, reporting through ``result``."""
        ...


@dataclass
class BasePlugin:
    """Reusable foundation for plugins.

    Subclass this and override ``run()``. Do not override ``__call__`` unless
    you need custom lifecycle behavior.

    Attributes:
        name (str): Stable plugin identifier, stamped on the plugin's warnings.
    """

    name: str

    def __call__(self, root: Node, result: Result) -> None:
        """Attribute ``result`` to this plugin, then run it."""
        previous: str | None = result.current_plugin
        result.current_plugin = self.name
        logger.info("Plugin %s - running", self.name)
        try:
            self.run(root, result)
        finally:
            result.current_plugin = previous

    def run(self, root: Node, result: Result) -> None:
        """Perform the plugin's work, mutating ``root`` in place.

        Args:
            root (Node): Tree being transformed.
            result (Result): Result collecting the run's messages.
        """
        pass


@dataclass
class FunctionPlugin(BasePlugin):
    """Adapter turning a plain function into a plugin."""

    func: PluginFunc | None = None

    def run(self, root: Node, result: Result) -> None:
        if self.func is not None:
            self.func(root, result)


def plugin(name: str) -> Callable[[PluginFunc], FunctionPlugin]:
    """Decorate a ``(root, result)`` function as a named plugin.

    Example:
        ```python
        @plugin("no-important")
        def no_important(root, result):
            for decl in root.walk(Declaration):
                if decl.important:
                    result.warn("Avoid !important", node=decl, word="!important")
        ```
    """

    def _decorator(func: PluginFunc) -> FunctionPlugin:
        return FunctionPlugin(name=name, func=func)

    return _decorator


class Processor:
    """Ordered set of plugins applied to a tree.

    Attributes:
        plugins (list[Plugin]): Plugins in execution order.
        version (str): Installed TreeShift version.
    """

    version: str = TREESHIFT_VERSION

    def __init__(self, plugins: Iterable[Plugin] = ()) -> None:
        self.plugins: list[Plugin] = []
        for p in plugins:
            self.use(p)

    def use(self, p: Plugin) -> Processor:
        """Append a plugin and return ``self`` for chaining.

        Raises:
            TypeError: If ``p`` is not a named callable.
        """
        if not isinstance(p, Plugin):
            raise TypeError(f"{p!r} is not a TreeShift plugin (needs 'name' and '__call__')")
        self.plugins.append(p)
        return self

    def process(self, root: Node, opts: ProcessOptions | None = None) -> Result:
        """Run every plugin over ``root`` and return the run's `Result`.

        Args:
            root (Node): Tree to transform (mutated in place).
            opts (ProcessOptions | None): Options for the run; defaults apply
                when omitted.

        Returns:
            Result: The result of the run. Its text is computed on first access.
        """
        result = Result(self, root, opts if opts is not None else ProcessOptions())
        logger.info("Processing %s with %d plugin(s)", root.type, len(self.plugins))
        for p in self.plugins:
            if isinstance(p, BasePlugin):
                p(root, result)
                continue
            # Third-party callables: attribute the run ourselves.
            result.current_plugin = p.name
            logger.info("Plugin %s - running", p.name)
            try:
                p(root, result)
            finally:
                result.current_plugin = None
        logger.debug("Processing done: %d message(s)", len(result.messages))
        return result
