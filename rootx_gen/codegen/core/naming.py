"""
Naming utilities for generated Go code.

Derives receiver variables and interface names from role type strings and
checks generated identifiers against Go's reserved words.
"""

import re
from typing import Set

GO_RESERVED: Set[str] = {
    "break", "case", "chan", "const", "continue", "default", "defer",
    "else", "fallthrough", "for", "func", "go", "goto", "if", "import",
    "interface", "map", "package", "range", "return", "select", "struct",
    "switch", "type", "var",
}

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def receiver_variable(type_name: str) -> str:
    """
    Variable name a method body uses to reach its receiver.

    ``(r *Reader)`` and ``r *Reader`` both give ``r``.
    """
    stripped = type_name.lstrip("(")
    parts = stripped.split()
    return parts[0] if parts else ""


def receiver_clause(type_name: str) -> str:
    """Receiver clause for a method declaration, always parenthesized."""
    type_name = type_name.strip()
    if not type_name or type_name.startswith("("):
        return type_name
    return f"({type_name})"


def interface_name(type_name: str) -> str:
    """
    Bare type name used to declare a role interface.

    ``(r *Reader)`` gives ``Reader``; a plain ``Reader`` is returned as is.
    """
    stripped = type_name.strip().strip("()").strip()
    parts = stripped.split()
    if not parts:
        return ""
    return parts[-1].lstrip("*")


def is_go_identifier(name: str) -> bool:
    """Check that a name is a syntactically valid Go identifier."""
    return bool(_IDENTIFIER.match(name))


def is_go_reserved(name: str) -> bool:
    return name in GO_RESERVED
