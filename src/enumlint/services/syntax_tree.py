"""Typed node variants for the externally produced Ruby syntax tree.

The inspector never sees raw parser output. The loader narrows every node to
one of a closed set of shapes:

* ``send``  -> :class:`SendNode`  (method call, optional receiver)
* ``hash``  -> :class:`HashNode`  (hash literal of pairs)
* ``pair``  -> :class:`PairNode`  (one ``key => value`` entry)
* ``array`` -> :class:`ArrayNode` (array literal)
* ``sym``   -> :class:`SymNode`   (plain symbol literal)
* ``str``   -> :class:`StrNode`   (plain string literal)
* anything else -> :class:`OtherNode`, keeping the parser's type tag.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

from ..domain.models import SourceRange


class NodeKind(Enum):
    """Tag identifying which node variant a value is."""

    SEND = "send"
    HASH = "hash"
    PAIR = "pair"
    ARRAY = "array"
    SYM = "sym"
    STR = "str"
    OTHER = "other"


@dataclass(frozen=True)
class SendNode:
    receiver: Node | None
    method: str
    arguments: tuple[Node, ...]
    loc: SourceRange
    source: str

    kind = NodeKind.SEND

    @property
    def children(self) -> tuple[Node, ...]:
        if self.receiver is None:
            return self.arguments
        return (self.receiver, *self.arguments)


@dataclass(frozen=True)
class HashNode:
    pairs: tuple[Node, ...]
    loc: SourceRange
    source: str

    kind = NodeKind.HASH

    @property
    def children(self) -> tuple[Node, ...]:
        return self.pairs


@dataclass(frozen=True)
class PairNode:
    key: Node
    value: Node
    loc: SourceRange
    source: str

    kind = NodeKind.PAIR

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.key, self.value)


@dataclass(frozen=True)
class ArrayNode:
    elements: tuple[Node, ...]
    loc: SourceRange
    source: str

    kind = NodeKind.ARRAY

    @property
    def children(self) -> tuple[Node, ...]:
        return self.elements


@dataclass(frozen=True)
class SymNode:
    value: str
    loc: SourceRange
    source: str

    kind = NodeKind.SYM

    @property
    def children(self) -> tuple[Node, ...]:
        return ()


@dataclass(frozen=True)
class StrNode:
    value: str
    loc: SourceRange
    source: str

    kind = NodeKind.STR

    @property
    def children(self) -> tuple[Node, ...]:
        return ()


@dataclass(frozen=True)
class OtherNode:
    """Any node shape the inspector does not interpret (ints, constants, blocks)."""

    type: str
    children: tuple[Node, ...]
    loc: SourceRange
    source: str

    kind = NodeKind.OTHER


Node = Union[SendNode, HashNode, PairNode, ArrayNode, SymNode, StrNode, OtherNode]
"""Union of every node variant the loader can produce."""

LITERAL_KINDS = frozenset({NodeKind.SYM, NodeKind.STR})
"""Kinds whose ``value`` holds the literal text of the node."""


def literal_name(node: Node) -> str:
    """Return a symbol/string literal's value, or the node's raw source."""

    if node.kind in LITERAL_KINDS:
        return node.value  # type: ignore[union-attr]
    return node.source


def walk(root: Node | None) -> Iterator[Node]:
    """Yield ``root`` and every descendant, depth-first and pre-order."""

    if root is None:
        return
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
