"""LOCAL CLI to lint one JSON AST document for ``not_``-prefixed enum values."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT.parent / "src"))

SINK_CHOICES = ("memory", "log")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Lint a parsed Ruby AST document for not_-prefixed enum values.",
    )
    parser.add_argument(
        "document_path",
        type=Path,
        help="Path to the JSON AST document ({'source': ..., 'ast': ...}).",
    )
    parser.add_argument(
        "--autocorrect",
        action="store_true",
        help="Include the autocorrected source in the report.",
    )
    parser.add_argument(
        "--sink",
        choices=SINK_CHOICES,
        default="memory",
        help="Where findings are additionally reported while linting.",
    )
    return parser.parse_args(argv)


def load_request(path: Path, autocorrect: bool) -> dict[str, object]:
    request = json.loads(path.read_text(encoding="utf-8"))
    if autocorrect:
        request["autocorrect"] = True
    request.setdefault("path", path.name)
    return request


def build_sink(name: str, path: str):
    if name == "log":
        from enumlint.services.diagnostics import LoggingDiagnosticSink

        return LoggingDiagnosticSink(path)
    return None


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    request = load_request(args.document_path, args.autocorrect)
    sink = build_sink(args.sink, str(request["path"]))

    from enumlint.host.runner import lint_document

    report = lint_document(request, sink=sink)
    sys.stdout.write(json.dumps(report, ensure_ascii=False))
    sys.stdout.write("\n")
    if report.get("status") == "error":
        return 2
    return 1 if report["findings_count"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
