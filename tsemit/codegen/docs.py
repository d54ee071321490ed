"""
Doc comment emitter.

Turns raw text into a ``/** ... */`` block whose content can neither
close the comment early nor be read as a template directive.
"""

from __future__ import annotations

from typing import List

from ..utils.constants import (
    COMMENT_CLOSE,
    DIRECTIVE_CHAR,
    DOC_CLOSE,
    DOC_LINE_PREFIX,
    DOC_OPEN,
    ESCAPED_COMMENT_CLOSE,
    ESCAPED_DIRECTIVE,
)
from ..utils.string_utils import split_lines


def escape_doc_text(text: str) -> str:
    """Neutralize comment terminators in raw doc text."""
    return text.replace(COMMENT_CLOSE, ESCAPED_COMMENT_CLOSE)


def escape_directives(text: str) -> str:
    """Double every ``$`` so the text expands to itself through the formatter."""
    return text.replace(DIRECTIVE_CHAR, ESCAPED_DIRECTIVE)


def doc_lines(text: str) -> List[str]:
    """
    Render ``text`` as the lines of a doc comment.

    Empty input yields just the open and close delimiters. Lines are
    right-stripped, and empty lines carry a bare ``*`` marker.
    """
    lines = [DOC_OPEN]
    if text:
        for line in split_lines(escape_doc_text(text)):
            line = line.rstrip()
            lines.append((DOC_LINE_PREFIX + line) if line else DOC_LINE_PREFIX.rstrip())
    lines.append(DOC_CLOSE)
    return lines


def render_docs(text: str) -> str:
    """Render ``text`` as a finished doc comment (no trailing newline)."""
    return "\n".join(doc_lines(text))


def docs_template(text: str) -> str:
    """Render ``text`` as a doc comment that is safe to pass through the formatter."""
    return escape_directives(render_docs(text))
