"""Turn a JSON AST document into typed syntax-tree nodes.

Documents follow the shape emitted by the Ruby ``parser`` gem's JSON dump:
every node is ``{"type": str, "children": [...], "loc": {"begin", "end"}}``
and offsets index into the accompanying ``source`` string.

Loader invariants:
1. The source buffer is bounded by :attr:`LintConfig.max_source_bytes`.
2. Nesting deeper than :attr:`LintConfig.max_depth` is rejected before any
   node is built.
3. Every node is schema-checked on its own and every ``loc`` lies inside the
   source buffer.
4. Error messages never echo source text.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from ..domain.models import SourceRange
from ..host import schema_registry
from ..host.schema_registry import SchemaValidationError
from .lint_config import LintConfig
from .syntax_tree import (
    ArrayNode,
    HashNode,
    Node,
    OtherNode,
    PairNode,
    SendNode,
    StrNode,
    SymNode,
)

_LOG = logging.getLogger(__name__)

DOCUMENT_SCHEMA = "ast_document_v0.1"
NODE_SCHEMA = "ast_node_v0.1"


class SourceTooLargeError(ValueError):
    """Raised when a source buffer exceeds the sanctioned size."""


@dataclass(frozen=True)
class SourceBuffer:
    """Source text plus a line index for offset -> line/column lookups."""

    text: str
    line_starts: tuple[int, ...]

    @classmethod
    def from_text(cls, text: str) -> "SourceBuffer":
        starts = [0]
        for index, char in enumerate(text):
            if char == "\n":
                starts.append(index + 1)
        return cls(text=text, line_starts=tuple(starts))

    def span(self, begin: int, end: int) -> SourceRange:
        line_index = bisect.bisect_right(self.line_starts, begin) - 1
        return SourceRange(
            begin=begin,
            end=end,
            line=line_index + 1,
            column=begin - self.line_starts[line_index],
        )

    def slice(self, loc: SourceRange) -> str:
        return self.text[loc.begin : loc.end]


@dataclass(frozen=True)
class LoadedDocument:
    """A validated buffer and its typed root node (``None`` for empty files)."""

    buffer: SourceBuffer
    root: Node | None

    @property
    def source(self) -> str:
        return self.buffer.text


def load_document(
    document: Mapping[str, Any], config: LintConfig | None = None
) -> LoadedDocument:
    """
    Validate a JSON AST document and build its typed tree.

    Raises:
        SourceTooLargeError: the source exceeds the configured byte limit.
        ValueError: the document or any node is malformed.
    """

    config = config or LintConfig.from_env()
    try:
        schema_registry.validate(DOCUMENT_SCHEMA, document)
    except SchemaValidationError as exc:
        raise ValueError("AST document failed validation.") from exc

    text = document["source"]
    byte_count = len(text.encode("utf-8"))
    if byte_count > config.max_source_bytes:
        _LOG.info(
            "Rejected source buffer of %d bytes (limit %d)",
            byte_count,
            config.max_source_bytes,
        )
        raise SourceTooLargeError("Source exceeds maximum allowed size.")

    raw_root = document["ast"]
    if raw_root is None:
        return LoadedDocument(buffer=SourceBuffer.from_text(text), root=None)

    depth = _measure_depth(raw_root)
    if depth > config.max_depth:
        _LOG.info("Rejected AST of depth %d (limit %d)", depth, config.max_depth)
        raise ValueError("AST nesting exceeds the maximum allowed depth.")

    buffer = SourceBuffer.from_text(text)
    return LoadedDocument(buffer=buffer, root=_build(raw_root, buffer))


def _measure_depth(raw_root: Mapping[str, Any]) -> int:
    deepest = 0
    stack: list[tuple[Any, int]] = [(raw_root, 1)]
    while stack:
        raw, depth = stack.pop()
        deepest = max(deepest, depth)
        children = raw.get("children") if isinstance(raw, Mapping) else None
        if not isinstance(children, list):
            continue
        for child in children:
            if isinstance(child, Mapping):
                stack.append((child, depth + 1))
    return deepest


def _build(raw: Any, buffer: SourceBuffer) -> Node:
    if not isinstance(raw, Mapping):
        raise ValueError("AST node must be an object.")
    try:
        schema_registry.validate(NODE_SCHEMA, raw)
    except SchemaValidationError as exc:
        raise ValueError("AST node failed validation.") from exc

    begin = raw["loc"]["begin"]
    end = raw["loc"]["end"]
    if begin > end or end > len(buffer.text):
        raise ValueError("AST node location lies outside the source.")
    loc = buffer.span(begin, end)
    source = buffer.slice(loc)
    node_type = raw["type"]
    children = raw["children"]

    if node_type == "send":
        return _build_send(children, loc, source, buffer)
    if node_type == "hash":
        return HashNode(
            pairs=_build_all(children, buffer), loc=loc, source=source
        )
    if node_type == "pair":
        if len(children) != 2:
            raise ValueError("Pair node must have exactly two children.")
        key, value = _build_all(children, buffer)
        return PairNode(key=key, value=value, loc=loc, source=source)
    if node_type == "array":
        return ArrayNode(
            elements=_build_all(children, buffer), loc=loc, source=source
        )
    if node_type in ("sym", "str"):
        if len(children) != 1 or not isinstance(children[0], str):
            raise ValueError("Literal node must carry exactly one string value.")
        literal_cls = SymNode if node_type == "sym" else StrNode
        return literal_cls(value=children[0], loc=loc, source=source)

    nested = tuple(
        _build(child, buffer) for child in children if isinstance(child, Mapping)
    )
    return OtherNode(type=node_type, children=nested, loc=loc, source=source)


def _build_all(children: list[Any], buffer: SourceBuffer) -> tuple[Node, ...]:
    return tuple(_build(child, buffer) for child in children)


def _build_send(
    children: list[Any], loc: SourceRange, source: str, buffer: SourceBuffer
) -> SendNode:
    if len(children) < 2:
        raise ValueError("Send node must carry a receiver slot and a method name.")
    raw_receiver, method, *raw_arguments = children
    if not isinstance(method, str):
        raise ValueError("Send node method name must be a string.")
    receiver = None if raw_receiver is None else _build(raw_receiver, buffer)
    return SendNode(
        receiver=receiver,
        method=method,
        arguments=_build_all(raw_arguments, buffer),
        loc=loc,
        source=source,
    )
