"""
String Manipulation Utilities for tsemit.

General-purpose text helpers shared by the writer buffer, the doc
emitter and the formatter.
"""

from __future__ import annotations

import json
from typing import List


# =============================================================================
# Text Formatting and Indentation
# =============================================================================

def indent_text(text: str, level: int = 1, indent_str: str = "  ") -> str:
    """
    Indent text by the specified level.

    Blank lines are left empty so the output never carries trailing
    whitespace.

    Args:
        text: Text to indent
        level: Indentation level (number of indent_str to prepend)
        indent_str: String to use for each indentation level

    Returns:
        Indented text
    """
    if not text or level <= 0:
        return text

    indent = indent_str * level
    lines = text.split("\n")
    indented_lines = [f"{indent}{line}" if line.strip() else line for line in lines]
    return "\n".join(indented_lines)


def normalize_newlines(text: str) -> str:
    """Convert ``\\r\\n`` and lone ``\\r`` line endings to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_lines(text: str) -> List[str]:
    """Split text into lines after normalizing line endings."""
    return normalize_newlines(text).split("\n")


def strip_trailing_whitespace(text: str) -> str:
    """Remove trailing spaces and tabs from every line."""
    return "\n".join(line.rstrip(" \t") for line in text.split("\n"))


def strip_leading_blank_lines(text: str) -> str:
    """Drop blank lines at the start of text, keeping indentation of the first real line."""
    lines = text.split("\n")
    index = 0
    while index < len(lines) and not lines[index].strip():
        index += 1
    return "\n".join(lines[index:])


# =============================================================================
# Literals
# =============================================================================

def quote_string(value: str, quote: str = '"') -> str:
    """
    Render value as a quoted string literal.

    Args:
        value: Raw string contents
        quote: Quote character, ``"`` or ``'``

    Returns:
        The escaped literal including surrounding quotes
    """
    literal = json.dumps(value, ensure_ascii=False)
    if quote == '"':
        return literal
    inner = literal[1:-1].replace('\\"', '"').replace("'", "\\'")
    return f"'{inner}'"
