"""Reason codes used for lint error reports."""

from __future__ import annotations

PAYLOAD_TOO_LARGE = "payload_too_large"
"""Input rejected because the source buffer exceeded the sanctioned size bound."""

INVALID_INPUT = "invalid_input"
"""Input failed schema validation or AST shape checks."""

CORRECTION_CONFLICT = "correction_conflict"
"""Two autocorrections tried to rewrite overlapping spans differently."""

RESPONSE_VALIDATION_FAILED = "response_validation_failed"
"""The runner produced a report that violated the report schema."""
