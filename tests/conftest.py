"""Shared fixtures that build parser-gem style JSON ASTs for test sources."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from enumlint.services.ast_loader import load_document
from enumlint.services.lint_config import DEFAULT_LINT_CONFIG

RawNode = dict[str, Any]


def _node(node_type: str, begin: int, end: int, *children: Any) -> RawNode:
    return {
        "type": node_type,
        "loc": {"begin": begin, "end": end},
        "children": list(children),
    }


def _begin(raw: RawNode) -> int:
    return raw["loc"]["begin"]


def _end(raw: RawNode) -> int:
    return raw["loc"]["end"]


class RubyAst:
    """Builds JSON nodes whose locations are found by searching the source."""

    def __init__(self, source: str) -> None:
        self.source = source

    def span(self, fragment: str, after: int = 0) -> tuple[int, int]:
        begin = self.source.index(fragment, after)
        return begin, begin + len(fragment)

    def sym(self, fragment: str, value: str | None = None, after: int = 0) -> RawNode:
        begin, end = self.span(fragment, after)
        if value is None:
            value = fragment.strip(":")
        return _node("sym", begin, end, value)

    def str_(self, fragment: str, value: str, after: int = 0) -> RawNode:
        begin, end = self.span(fragment, after)
        return _node("str", begin, end, value)

    def int_(self, fragment: str, after: int = 0) -> RawNode:
        begin, end = self.span(fragment, after)
        return _node("int", begin, end, int(fragment))

    def other(
        self, node_type: str, fragment: str, *children: Any, after: int = 0
    ) -> RawNode:
        begin, end = self.span(fragment, after)
        return _node(node_type, begin, end, *children)

    def pair(self, key: RawNode, value: RawNode) -> RawNode:
        return _node("pair", _begin(key), _end(value), key, value)

    def hash_(self, *pairs: RawNode, braces: bool = True) -> RawNode:
        begin, end = _begin(pairs[0]), _end(pairs[-1])
        if braces:
            begin = self.source.rindex("{", 0, begin)
            end = self.source.index("}", end) + 1
        return _node("hash", begin, end, *pairs)

    def array(self, *elements: RawNode) -> RawNode:
        begin = self.source.rindex("[", 0, _begin(elements[0]))
        end = self.source.index("]", _end(elements[-1])) + 1
        return _node("array", begin, end, *elements)

    def send(
        self, receiver: RawNode | None, method: str, *arguments: RawNode
    ) -> RawNode:
        if receiver is not None:
            begin = _begin(receiver)
            method_end = self.source.index(method, _end(receiver)) + len(method)
        else:
            begin, method_end = self.span(method)
        end = _end(arguments[-1]) if arguments else method_end
        if end < len(self.source) and self.source[end : end + 1] == ")":
            end += 1
        return _node("send", begin, end, receiver, method, *arguments)

    def document(self, root: RawNode | None) -> dict[str, Any]:
        return {"source": self.source, "ast": root}

    def load(self, root: RawNode):
        """Return the typed root node for ``root``."""

        return load_document(self.document(root), DEFAULT_LINT_CONFIG).root


@pytest.fixture
def ruby() -> Callable[[str], RubyAst]:
    """Factory returning an AST builder bound to one Ruby source string."""

    return RubyAst
