"""Detect enum values prefixed with ``not_``.

Since Rails 6 every enum value gets a negated scope generated with a ``not_``
prefix. Declaring a value that already starts with ``not_`` lets the generated
scope shadow it::

    # bad
    enum status: { active: 0, not_active: 1, sometimes_active: 2 }

    # good
    enum status: { active: 0, inactive: 1, sometimes_active: 2 }

Offenses are anchored at the value paired with the offending key. Array value
sets are anchored at the array itself and can be autocorrected into an
explicit, index-keyed hash.
"""

from __future__ import annotations

from typing import Sequence

from ..domain.models import Correction, Finding
from .diagnostics import DiagnosticSink
from .lint_config import DEFAULT_SEVERITY
from .ruby_literal import dump_string, inspect_symbol
from .syntax_tree import ArrayNode, Node, NodeKind, PairNode, literal_name

COP_NAME = "Rails/EnumNegative"

FORBIDDEN_PREFIX = "not_"

MSG = (
    "Enum contains values starting with 'not_'. "
    "Avoid using 'not_*' named enum values."
)


class EnumValueInspector:
    """Matcher, offense collector and autocorrector for ``enum`` declarations."""

    cop_name = COP_NAME

    def __init__(self, severity: str = DEFAULT_SEVERITY) -> None:
        self.severity = severity

    def match(self, node: Node) -> tuple[Node, ...] | None:
        """Return the hash argument's entries when ``node`` is ``enum {...}``."""

        if node.kind is not NodeKind.SEND:
            return None
        if node.receiver is not None:  # type: ignore[union-attr]
            return None
        if node.method != "enum":  # type: ignore[union-attr]
            return None
        arguments = node.arguments  # type: ignore[union-attr]
        if len(arguments) != 1 or arguments[0].kind is not NodeKind.HASH:
            return None
        return arguments[0].pairs  # type: ignore[union-attr]

    def inspect(self, pairs: Sequence[Node]) -> list[Finding]:
        """Return findings for ``not_``-named values, in declaration order.

        Each value node is reported at most once. An array value set is
        reported under its first ``not_`` element.
        """

        findings: list[Finding] = []
        for pair in pairs:
            if not isinstance(pair, PairNode):
                continue
            self._check_pair(pair, findings)
            value_set = pair.value
            if value_set.kind is NodeKind.HASH:
                for inner in value_set.pairs:  # type: ignore[union-attr]
                    if isinstance(inner, PairNode):
                        self._check_pair(inner, findings)
            elif value_set.kind is NodeKind.ARRAY:
                for element in value_set.elements:  # type: ignore[union-attr]
                    name = literal_name(element)
                    if name.startswith(FORBIDDEN_PREFIX):
                        self._record(value_set, name, findings)
                        break
        return findings

    def rewrite(self, array: ArrayNode) -> str:
        """Render ``array`` as a hash mapping each element to its index."""

        rendered = ", ".join(
            f"{self.render_element(element)} => {index}"
            for index, element in enumerate(array.elements)
        )
        return "{" + rendered + "}"

    @staticmethod
    def render_element(element: Node) -> str:
        if element.kind is NodeKind.STR:
            return dump_string(element.value)  # type: ignore[union-attr]
        if element.kind is NodeKind.SYM:
            return inspect_symbol(element.value)  # type: ignore[union-attr]
        return element.source

    def on_send(self, node: Node, sink: DiagnosticSink) -> list[Finding]:
        """Host hook called once per call node during a tree walk."""

        pairs = self.match(node)
        if pairs is None:
            return []
        findings = self.inspect(pairs)
        for finding in findings:
            sink.emit(finding)
        return findings

    def autocorrect(self, finding: Finding) -> Correction | None:
        """Return a replacement for array-anchored findings, else ``None``."""

        node = finding.node
        if not isinstance(node, ArrayNode):
            return None
        return Correction(loc=node.loc, replacement=self.rewrite(node))

    def _check_pair(self, pair: PairNode, findings: list[Finding]) -> None:
        name = literal_name(pair.key)
        if name.startswith(FORBIDDEN_PREFIX):
            self._record(pair.value, name, findings)

    def _record(self, anchor: Node, enum_name: str, findings: list[Finding]) -> None:
        if any(finding.node is anchor for finding in findings):
            return
        findings.append(self._finding(anchor, enum_name))

    def _finding(self, anchor: Node, enum_name: str) -> Finding:
        return Finding(
            node=anchor,
            enum_name=enum_name,
            message=MSG,
            severity=self.severity,
            cop_name=self.cop_name,
        )
