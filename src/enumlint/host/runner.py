"""Minimal host that walks an AST document and runs the registered cops."""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Mapping

from ..services.ast_loader import SourceTooLargeError, load_document
from ..services.diagnostics import (
    ClobberingError,
    Corrector,
    DiagnosticSink,
    FanOutDiagnosticSink,
    InMemoryDiagnosticSink,
)
from ..services.enum_negative import COP_NAME, EnumValueInspector
from ..services.lint_config import LintConfig
from ..services.syntax_tree import NodeKind, walk
from . import reason_codes, schema_registry
from .schema_registry import SchemaValidationError

_LOG = logging.getLogger(__name__)

REQUEST_SCHEMA = "lint_request_v0.1"
REPORT_SCHEMA = "lint_report_v0.1"

CopFactory = Callable[[LintConfig], EnumValueInspector]

COP_REGISTRY: dict[str, CopFactory] = {
    COP_NAME: lambda config: EnumValueInspector(severity=config.severity),
}
"""Cops the host runs, keyed by their reported name."""


def _error(reason: str, detail: str) -> dict[str, str]:
    """Return an error payload with a stable reason code."""

    return {"status": "error", "reason": reason, "detail": detail}


def _enabled_cops(config: LintConfig) -> dict[str, EnumValueInspector]:
    if not config.enabled:
        return {}
    return {name: factory(config) for name, factory in COP_REGISTRY.items()}


def lint_document(
    request: Mapping[str, Any],
    sink: DiagnosticSink | None = None,
    config: LintConfig | None = None,
) -> dict[str, Any]:
    """
    Lint one AST document and return a schema-checked report.

    Args:
        request: ``{"source", "ast"}`` plus optional ``autocorrect`` and ``path``.
        sink: Extra sink that sees every finding as it is emitted.
        config: Settings; read from the environment when omitted.

    Returns:
        A report mapping, or an error payload with a reason code.
    """

    config = config or LintConfig.from_env()
    try:
        schema_registry.validate(REQUEST_SCHEMA, request)
    except SchemaValidationError:
        return _error(reason_codes.INVALID_INPUT, "Request failed validation.")

    try:
        document = load_document(request, config)
    except SourceTooLargeError:
        return _error(
            reason_codes.PAYLOAD_TOO_LARGE, "Source exceeds the allowed size."
        )
    except ValueError:
        return _error(reason_codes.INVALID_INPUT, "Unable to load the AST document.")

    collected = InMemoryDiagnosticSink()
    target: DiagnosticSink = (
        collected if sink is None else FanOutDiagnosticSink(collected, sink)
    )
    cops = _enabled_cops(config)
    for node in walk(document.root):
        if node.kind is not NodeKind.SEND:
            continue
        for cop in cops.values():
            cop.on_send(node, target)

    wants_correction = bool(request.get("autocorrect")) and config.autocorrect
    corrector = Corrector()
    correctable: list[bool] = []
    for finding in collected.findings:
        correction = None
        if wants_correction:
            correction = cops[finding.cop_name].autocorrect(finding)
        correctable.append(correction is not None)
        if correction is None:
            continue
        try:
            corrector.replace(correction)
        except ClobberingError:
            return _error(
                reason_codes.CORRECTION_CONFLICT,
                "Autocorrections overlap and cannot be applied together.",
            )

    findings = []
    for finding, can_correct in zip(collected.findings, correctable):
        entry = finding.to_mapping()
        entry["correctable"] = can_correct
        findings.append(entry)

    response: dict[str, Any] = {
        "operation": "enum_lint",
        "status": "offenses" if findings else "clean",
        "findings_count": len(findings),
        "findings": findings,
    }
    if "path" in request:
        response["path"] = request["path"]
    if wants_correction:
        response["corrections_count"] = len(corrector)
        response["corrected_source"] = corrector.apply(document.source)

    try:
        schema_registry.validate(REPORT_SCHEMA, response)
    except SchemaValidationError:
        return _error(
            reason_codes.RESPONSE_VALIDATION_FAILED,
            "Lint report did not meet the report contract.",
        )

    _LOG.debug("Linted document with %d finding(s)", len(findings))
    return response


def main() -> None:
    """Print the registered cops and the active configuration."""

    config = LintConfig.from_env()
    sys.stdout.write("enumlint host initialized with cops:\n\n")
    for name in COP_REGISTRY:
        state = "enabled" if config.enabled else "disabled"
        sys.stdout.write(f"- {name}: {state}, severity={config.severity}\n")


if __name__ == "__main__":
    main()
