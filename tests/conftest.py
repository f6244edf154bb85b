# topmark:header:start
#
#   project      : TreeShift
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the TreeShift test suite.

This file sets up global fixtures, typed pytest wrappers, and small tree
builders shared across test modules. Logging is configured at TRACE level so
failures come with the full diagnostic trail.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, cast

import pytest

from treeshift.config import logging
from treeshift.tree import Declaration, Input, NodeSource, Position, Root, Rule

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.pipeline`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_sourcemap: DecoratorType[Any] = as_typed_mark(pytest.mark.sourcemap)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_treeshift_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure TRACE logging for the whole test session.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def decl_at(prop: str, value: str, line: int, column: int, **kwargs: Any) -> Declaration:
    """Return a declaration whose recorded source starts at ``line:column``.

    The declaration has no `Input`, so its raw text is its serialized form.
    """
    return Declaration(
        prop,
        value,
        source=NodeSource(start=Position(line=line, column=column)),
        **kwargs,
    )


def make_two_node_tree() -> tuple[Root, Declaration, Declaration]:
    """Return ``(root, first, second)`` for a rule holding two declarations.

    The second declaration serializes to ``"color: red"`` and is recorded at
    line 3, column 1.
    """
    first: Declaration = decl_at("display", "block", 2, 1)
    second: Declaration = decl_at("color", "red", 3, 1)
    root = Root([Rule("a", [first, second])])
    return root, first, second


def make_sourced_tree(css: str = "a {\n    color: red\n}\n", file: str | None = "src/a.css") -> Root:
    """Return a tree for ``a { color: red }`` whose nodes point into an `Input`.

    Offsets are computed from ``css``, which must contain ``a {`` and
    ``color: red``.
    """
    source_input = Input(css, file=file)
    rule_start: int = css.index("a {")
    decl_start: int = css.index("color: red")
    rule_end: int = css.index("}") + 1

    decl = Declaration(
        "color",
        "red",
        source=NodeSource.from_offsets(source_input, decl_start, decl_start + len("color: red")),
    )
    rule = Rule("a", [decl], source=NodeSource.from_offsets(source_input, rule_start, rule_end))
    return Root([rule], source=NodeSource(input=source_input, start=source_input.position_at(0)))
