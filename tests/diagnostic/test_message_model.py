# topmark:header:start
#
#   project      : TreeShift
#   file         : test_message_model.py
#   file_relpath : tests/diagnostic/test_message_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the message model: `Message`, `PluginWarning`, and `MessageLog`."""

from __future__ import annotations

import dataclasses

import pytest

from tests.conftest import decl_at, parametrize
from treeshift.diagnostic.model import (
    WARNING,
    FrozenMessageLog,
    Message,
    MessageLog,
    PluginWarning,
    compute_message_stats,
)
from treeshift.tree import Declaration, Input, NodeSource


def test_message_extension_fields_are_read_only() -> None:
    """Extension fields are exposed through a read-only mapping."""
    m = Message(kind="dependency", plugin="deps", extra={"file": "a.css"})

    assert m["kind"] == "dependency"
    assert m["plugin"] == "deps"
    assert m["file"] == "a.css"
    assert m.get("missing", "default") == "default"
    with pytest.raises(TypeError):
        m.extra["file"] = "b.css"  # type: ignore[index]
    with pytest.raises(dataclasses.FrozenInstanceError):
        m.kind = "other"  # type: ignore[misc]


def test_message_rejects_core_field_shadowing() -> None:
    """Extension fields may not redefine ``kind`` or ``plugin``."""
    with pytest.raises(ValueError):
        Message(kind="dependency", extra={"plugin": "x"})


def test_message_to_dict_is_flat() -> None:
    """Extension fields sit next to core fields in the dict form."""
    m = Message(kind="dependency", plugin="deps", extra={"file": "a.css"})

    assert m.to_dict() == {"kind": "dependency", "plugin": "deps", "file": "a.css"}


@parametrize(
    ("word", "index", "expected"),
    [
        ("red", None, (3, 8)),
        ("color", None, (3, 1)),
        ("absent", None, (3, 1)),
        ("absent", 2, (3, 3)),
        ("red", 2, (3, 8)),
        (None, 2, (3, 3)),
        (None, None, (3, 1)),
    ],
)
def test_warning_position_resolution(
    word: str | None, index: int | None, expected: tuple[int, int]
) -> None:
    """A found word beats index; a missing word falls back to index, then the start."""
    decl: Declaration = decl_at("color", "red", 3, 1)

    w: PluginWarning = PluginWarning.create("x", node=decl, word=word, index=index)

    assert (w.line, w.column) == expected


def test_warning_position_across_lines() -> None:
    """Newlines in the raw text move the position to the next line."""
    css = "a {\n  color:\n    red\n}"
    source_input = Input(css, file="multi.css")
    start: int = css.index("color")
    end: int = css.index("red") + 3
    decl = Declaration("color", "red", source=NodeSource.from_offsets(source_input, start, end))

    w: PluginWarning = PluginWarning.create("x", node=decl, word="red")

    assert (w.line, w.column) == (3, 5)
    assert (w.end_line, w.end_column) == (3, 8)
    assert w.file == "multi.css"
    assert str(w) == "multi.css:3:5: x"


def test_warning_index_range() -> None:
    """``index`` and ``end_index`` select a range inside the node's text."""
    decl: Declaration = decl_at("color", "red", 5, 3)

    w: PluginWarning = PluginWarning.create("x", node=decl, index=0, end_index=5)

    assert (w.line, w.column) == (5, 3)
    assert (w.end_line, w.end_column) == (5, 8)


def test_warning_string_form() -> None:
    """Warnings print ``line:column: text (plugin)``."""
    w: PluginWarning = PluginWarning.create(
        "bad value", plugin="no-red", node=decl_at("color", "red", 3, 1), word="red"
    )

    assert str(w) == "3:8: bad value (no-red)"
    assert w.kind == WARNING
    assert w.has_position


def test_warning_to_dict_includes_position_and_extras() -> None:
    w: PluginWarning = PluginWarning.create(
        "x", plugin="p", node=decl_at("color", "red", 1, 1), word="red", rule="color-named"
    )

    data = w.to_dict()

    assert data["kind"] == WARNING
    assert data["plugin"] == "p"
    assert data["text"] == "x"
    assert (data["line"], data["column"]) == (1, 8)
    assert data["rule"] == "color-named"


def test_log_preserves_order_and_counts_kinds() -> None:
    log = MessageLog()
    first = log.append(PluginWarning.create("a"))
    dep = log.append(Message(kind="dependency", extra={"file": "x.css"}))
    second = log.append(PluginWarning.create("b"))

    assert log.items == (first, dep, second)
    assert log.of_kind(WARNING) == (first, second)
    assert log.warnings() == (first, second)
    assert log.has_kind("dependency")
    assert not log.has_kind("error")
    assert log.to_dict() == {WARNING: 2, "dependency": 1}
    assert log.stats().total == 3
    assert log.stats().n_warning == 2
    assert len(log) == 3
    assert bool(log)


def test_log_items_cannot_be_mutated_by_callers() -> None:
    log = MessageLog()
    log.append(PluginWarning.create("a"))

    items = log.items
    assert isinstance(items, tuple)
    assert len(log) == 1


def test_frozen_snapshot_does_not_see_later_appends() -> None:
    log = MessageLog()
    log.append(PluginWarning.create("a"))

    snapshot: FrozenMessageLog = log.freeze()
    log.append(PluginWarning.create("b"))

    assert len(snapshot) == 1
    assert len(log) == 2
    assert snapshot.to_dict() == {WARNING: 1}


def test_compute_stats_on_empty_input() -> None:
    stats = compute_message_stats([])

    assert stats.total == 0
    assert stats.n_warning == 0
    assert dict(stats.counts) == {}


def test_position_by_matches_warning_start() -> None:
    decl: Declaration = decl_at("color", "red", 3, 1)

    pos = decl.position_by(word="absent", index=2)

    assert pos is not None
    assert (pos.line, pos.column) == (3, 3)


def test_subclass_fields_cannot_be_shadowed_by_extras() -> None:
    with pytest.raises(ValueError):
        PluginWarning(text="x", extra={"column": 4})
