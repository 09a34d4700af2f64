"""Contract tests for the JSON AST loader boundary."""

from __future__ import annotations

import dataclasses

import pytest

from enumlint.host import schema_registry
from enumlint.services.ast_loader import (
    SourceBuffer,
    SourceTooLargeError,
    load_document,
)
from enumlint.services.lint_config import DEFAULT_LINT_CONFIG
from enumlint.services.syntax_tree import (
    HashNode,
    NodeKind,
    OtherNode,
    SendNode,
    walk,
)


def _node(node_type: str, begin: int, end: int, *children: object) -> dict:
    return {
        "type": node_type,
        "loc": {"begin": begin, "end": end},
        "children": list(children),
    }


def test_example_document_loads_into_typed_nodes() -> None:
    document = schema_registry.get_example("ast_document_example_min")

    loaded = load_document(document, DEFAULT_LINT_CONFIG)

    root = loaded.root
    assert isinstance(root, SendNode)
    assert root.receiver is None
    assert root.method == "enum"
    assert isinstance(root.arguments[0], HashNode)
    assert loaded.source == document["source"]


def test_walk_is_depth_first_pre_order() -> None:
    document = schema_registry.get_example("ast_document_example_min")
    root = load_document(document, DEFAULT_LINT_CONFIG).root

    kinds = [node.kind for node in walk(root)]

    assert kinds[:5] == [
        NodeKind.SEND,
        NodeKind.HASH,
        NodeKind.PAIR,
        NodeKind.SYM,
        NodeKind.HASH,
    ]
    assert [node.source for node in walk(root) if node.kind is NodeKind.SYM] == [
        "status:",
        "active:",
        "not_active:",
    ]


def test_null_ast_yields_empty_tree() -> None:
    loaded = load_document(
        {"source": "# comment only\n", "ast": None}, DEFAULT_LINT_CONFIG
    )

    assert loaded.root is None
    assert list(walk(loaded.root)) == []


def test_locations_carry_line_and_column(ruby) -> None:
    source = "class User\n  enum status: { not_active: 1 }\nend\n"
    r = ruby(source)
    value = r.load(r.int_("1"))

    assert value.loc.line == 2
    assert value.loc.column == source.index("1") - (source.index("\n") + 1)


def test_source_buffer_line_index() -> None:
    buffer = SourceBuffer.from_text("a\nbc\n\nd")

    assert buffer.line_starts == (0, 2, 5, 6)
    span = buffer.span(6, 7)
    assert (span.line, span.column) == (4, 0)


def test_unknown_node_types_keep_nested_nodes() -> None:
    source = "foo(1)"
    root = _node("block", 0, 6, _node("int", 4, 5, 1), "ignored", None, 3)

    loaded = load_document({"source": source, "ast": root}, DEFAULT_LINT_CONFIG)

    assert isinstance(loaded.root, OtherNode)
    assert loaded.root.type == "block"
    assert [child.source for child in loaded.root.children] == ["1"]


def test_oversized_source_is_rejected() -> None:
    config = dataclasses.replace(DEFAULT_LINT_CONFIG, max_source_bytes=4)

    with pytest.raises(SourceTooLargeError):
        load_document({"source": "enum x: 1", "ast": None}, config)


def test_deep_nesting_is_rejected_before_building() -> None:
    config = dataclasses.replace(DEFAULT_LINT_CONFIG, max_depth=3)
    leaf = _node("int", 0, 1, 1)
    root = _node("begin", 0, 1, _node("begin", 0, 1, _node("begin", 0, 1, leaf)))

    with pytest.raises(ValueError, match="depth"):
        load_document({"source": "1", "ast": root}, config)


@pytest.mark.parametrize(
    "root",
    [
        _node("int", 0, 99, 1),
        _node("int", 3, 2, 1),
        {"type": "int", "children": [1]},
        {"type": "int", "loc": {"begin": 0, "end": 1}, "children": [1], "extra": 1},
        _node("", 0, 1),
        _node("sym", 0, 1, 7),
        _node("sym", 0, 1),
        _node("pair", 0, 1, _node("int", 0, 1, 1)),
        _node("send", 0, 1, None),
        _node("send", 0, 1, None, 5),
        _node("send", 0, 1, None, "enum", "not-a-node"),
    ],
)
def test_malformed_nodes_raise_value_error(root: dict) -> None:
    with pytest.raises(ValueError):
        load_document({"source": "1", "ast": root}, DEFAULT_LINT_CONFIG)


def test_malformed_document_envelope_is_rejected() -> None:
    with pytest.raises(ValueError):
        load_document({"ast": None}, DEFAULT_LINT_CONFIG)


def test_error_messages_do_not_echo_source() -> None:
    secret = "API_TOKEN = 'do-not-leak'"
    root = _node("str", 0, 999, "do-not-leak")

    with pytest.raises(ValueError) as excinfo:
        load_document({"source": secret, "ast": root}, DEFAULT_LINT_CONFIG)

    assert "do-not-leak" not in str(excinfo.value)
