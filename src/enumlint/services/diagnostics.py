"""Diagnostic sinks and the text corrector handed to cops by the host."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import MutableSequence, Protocol

from ..domain.models import Correction, Finding

_LOG = logging.getLogger(__name__)


class DiagnosticSink(Protocol):
    """Protocol describing where cops report findings."""

    def emit(self, finding: Finding) -> None:  # pragma: no cover - trivial
        ...


@dataclass
class InMemoryDiagnosticSink:
    """Simple sink used for tests and for building reports."""

    findings: MutableSequence[Finding] = field(default_factory=list)

    def emit(self, finding: Finding) -> None:
        self.findings.append(finding)

    def clear(self) -> None:
        del self.findings[:]


class LoggingDiagnosticSink:
    """Sink that writes one warning line per finding."""

    __slots__ = ("path",)

    def __init__(self, path: str = "(source)") -> None:
        self.path = path

    def emit(self, finding: Finding) -> None:
        loc = finding.loc
        _LOG.warning(
            "%s:%d:%d: %s: %s: %s",
            self.path,
            loc.line,
            loc.column + 1,
            finding.severity[:1].upper(),
            finding.cop_name,
            finding.message,
        )


class FanOutDiagnosticSink:
    """Forward every finding to several sinks in order."""

    __slots__ = ("_sinks",)

    def __init__(self, *sinks: DiagnosticSink) -> None:
        self._sinks = sinks

    def emit(self, finding: Finding) -> None:
        for sink in self._sinks:
            sink.emit(finding)


class ClobberingError(ValueError):
    """Raised when two corrections rewrite overlapping spans differently."""


class Corrector:
    """Collects textual replacements and applies them to a source buffer."""

    def __init__(self) -> None:
        self._corrections: list[Correction] = []

    @property
    def corrections(self) -> tuple[Correction, ...]:
        return tuple(self._corrections)

    def __len__(self) -> int:
        return len(self._corrections)

    def replace(self, correction: Correction) -> None:
        """Queue ``correction``; identical duplicates are dropped."""

        for existing in self._corrections:
            if existing == correction:
                return
            if existing.loc.overlaps(correction.loc):
                raise ClobberingError("Corrections overlap with different text.")
        self._corrections.append(correction)

    def apply(self, source: str) -> str:
        """Return ``source`` with every queued replacement applied."""

        result = source
        for correction in sorted(
            self._corrections, key=lambda item: item.loc.begin, reverse=True
        ):
            loc = correction.loc
            result = result[: loc.begin] + correction.replacement + result[loc.end :]
        return result
