"""Core entities without I/O for enumlint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..services.syntax_tree import Node


@dataclass(frozen=True)
class SourceRange:
    """Half-open character span inside the linted source buffer."""

    begin: int
    end: int
    line: int = 1
    column: int = 0

    def overlaps(self, other: "SourceRange") -> bool:
        return self.begin < other.end and other.begin < self.end


@dataclass(frozen=True)
class Finding:
    """One offense anchored at a node of the inspected tree."""

    node: "Node"
    enum_name: str
    message: str
    severity: str
    cop_name: str

    @property
    def loc(self) -> SourceRange:
        return self.node.loc

    def to_mapping(self) -> dict[str, object]:
        loc = self.loc
        return {
            "cop": self.cop_name,
            "severity": self.severity,
            "message": self.message,
            "enum_name": self.enum_name,
            "begin": loc.begin,
            "end": loc.end,
            "line": loc.line,
            "column": loc.column,
            "source": self.node.source,
        }


@dataclass(frozen=True)
class Correction:
    """Replacement text for a single source span."""

    loc: SourceRange
    replacement: str
