"""
Constants for the tsemit package.

Single source of truth for directive characters, comment delimiters,
import-statement vocabulary and configuration defaults.
"""

from __future__ import annotations


# =============================================================================
# Directive Syntax
# =============================================================================

DIRECTIVE_CHAR = "$"
ESCAPED_DIRECTIVE = DIRECTIVE_CHAR * 2

LITERAL_DIRECTIVE = "L"
STRING_DIRECTIVE = "S"
SYMBOL_DIRECTIVE = "T"
REFERENCE_DIRECTIVE = "R"


# =============================================================================
# Doc Comments
# =============================================================================

DOC_OPEN = "/**"
DOC_LINE_PREFIX = " * "
DOC_CLOSE = " */"
COMMENT_CLOSE = "*/"
ESCAPED_COMMENT_CLOSE = "*\\/"


# =============================================================================
# Imports
# =============================================================================

DEFAULT_IMPORT_NAME = "default"
NAMESPACE_IMPORT_NAME = "*"


# =============================================================================
# Configuration Defaults
# =============================================================================

DEFAULT_INDENT_SIZE = 2
DEFAULT_PROVENANCE_HEADER = "// Code generated by tsemit. DO NOT EDIT."
DEFAULT_MAX_IMPORT_LINE_LENGTH = 120
DEFAULT_QUOTE = '"'
DEFAULT_LOG_FILE = "tsemit.log"
