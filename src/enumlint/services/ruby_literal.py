"""Render Python strings as Ruby literals.

``dump_string`` mirrors Ruby's ``String#dump`` (ASCII-only output) and
``inspect_symbol`` mirrors ``Symbol#inspect``. Autocorrect output uses these
so quoting is normalized regardless of how the original literal was written.
"""

from __future__ import annotations

import re

_NAMED_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\f": "\\f",
    "\v": "\\v",
    "\b": "\\b",
    "\a": "\\a",
    "\x1b": "\\e",
}

_INTERPOLATION_SIGILS = frozenset("{$@")

_IDENT_CHAR = r"(?:[A-Za-z0-9_]|[^\x00-\x7f])"
_IDENT_START = r"(?:[A-Za-z_]|[^\x00-\x7f])"

_PLAIN_SYMBOL = re.compile(
    rf"""
    \A(?:
        {_IDENT_START}{_IDENT_CHAR}*(?:[?!=])?   # method, local, or Constant
      | @@?{_IDENT_START}{_IDENT_CHAR}*          # instance or class variable
      | \${_IDENT_START}{_IDENT_CHAR}*           # global variable
      | \$[~*$?!@/\\;,.=:<>"&`'+0_]              # special global
      | \$[1-9][0-9]*                            # match reference
      | \$-[A-Za-z0-9_]                          # option global
    )\Z
    """,
    re.VERBOSE,
)

_OPERATOR_SYMBOLS = frozenset(
    {
        "+", "-", "*", "/", "%", "**", "==", "===", "!=", "=~", "!~", "!",
        "<", ">", "<=", ">=", "<=>", "<<", ">>", "&", "|", "^", "~",
        "+@", "-@", "[]", "[]=", "`",
    }
)


def _escape(value: str, *, ascii_only: bool) -> str:
    parts: list[str] = []
    for index, char in enumerate(value):
        code = ord(char)
        if char in _NAMED_ESCAPES:
            parts.append(_NAMED_ESCAPES[char])
        elif char == "#":
            following = value[index + 1 : index + 2]
            parts.append("\\#" if following in _INTERPOLATION_SIGILS else "#")
        elif 0x20 <= code < 0x7F:
            parts.append(char)
        elif code < 0x80:
            parts.append(f"\\x{code:02X}")
        elif not ascii_only and char.isprintable():
            parts.append(char)
        elif code <= 0xFFFF:
            parts.append(f"\\u{code:04X}")
        else:
            parts.append(f"\\u{{{code:X}}}")
    return '"' + "".join(parts) + '"'


def dump_string(value: str) -> str:
    """Return the double-quoted, ASCII-only literal Ruby's ``String#dump`` gives."""

    return _escape(value, ascii_only=True)


def inspect_string(value: str) -> str:
    """Return the literal Ruby's ``String#inspect`` gives (printable text kept)."""

    return _escape(value, ascii_only=False)


def inspect_symbol(value: str) -> str:
    """Return ``:name`` for plain symbols and ``:"..."`` for everything else."""

    if value in _OPERATOR_SYMBOLS or _PLAIN_SYMBOL.match(value):
        return ":" + value
    return ":" + inspect_string(value)
