# topmark:header:start
#
#   project      : TreeShift
#   file         : test_stringifier.py
#   file_relpath : tests/tree/test_stringifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for tree serialization."""

from __future__ import annotations

import pytest

from tests.conftest import parametrize
from treeshift.errors import SerializationError
from treeshift.tree import AtRule, Comment, Declaration, Root, Rule
from treeshift.tree.nodes import Node
from treeshift.tree.stringifier import Stringifier, stringify


def test_nested_blocks_are_indented() -> None:
    root = Root(
        [
            AtRule("media", "screen", [Rule("a", [Declaration("color", "red")])]),
            Rule("b", [Declaration("margin", "0", important=True)]),
        ]
    )

    assert stringify(root) == (
        "@media screen {\n"
        "    a {\n"
        "        color: red\n"
        "    }\n"
        "}\n"
        "b {\n"
        "    margin: 0 !important\n"
        "}"
    )


def test_statement_at_rule_and_comment() -> None:
    root = Root([AtRule("import", '"a.css"', block=False), Comment("note"), Rule("a")])

    assert stringify(root) == '@import "a.css";\n/* note */\na {}'


def test_trailing_comment_is_not_the_last_declaration() -> None:
    rule = Rule("a", [Declaration("color", "red"), Comment("end")])

    assert stringify(Root([rule])) == "a {\n    color: red\n    /* end */\n}"


def test_raws_override_defaults() -> None:
    decl = Declaration("color", "red", raws={"between": ":", "before": " "})
    rule = Rule("a", [decl], raws={"between": "", "after": " ", "semicolon": True})

    assert stringify(Root([rule], raws={"after": "\n"})) == "a{ color:red; }\n"


def test_standalone_declaration() -> None:
    assert stringify(Declaration("color", "red")) == "color: red"
    assert str(Declaration("color", "red")) == "color: red"


@parametrize(
    "node",
    [Declaration("", "red"), Rule(""), AtRule("")],
    ids=["decl-without-prop", "rule-without-selector", "atrule-without-name"],
)
def test_malformed_nodes_raise(node: Node) -> None:
    with pytest.raises(SerializationError) as excinfo:
        stringify(Root([node]))
    assert excinfo.value.node is node


def test_builder_receives_block_edges() -> None:
    rule = Rule("a", [Declaration("color", "red")])
    seen: list[tuple[str, str | None, str | None]] = []

    def _record(chunk: str, node: Node | None, edge: str | None) -> None:
        seen.append((chunk, node.type if node is not None else None, edge))

    Stringifier(_record).stringify(Root([rule]))

    assert seen == [
        ("a {", "rule", "start"),
        ("\n    ", None, None),
        ("color: red", "decl", None),
        ("\n", None, None),
        ("}", "rule", "end"),
    ]
