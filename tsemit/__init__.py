"""
tsemit: Symbol-aware TypeScript source emission

A small engine for code generators that build TypeScript files
programmatically. Templates are expanded through a directive formatter,
referenced symbols are collected into a per-file import registry, and
rendering produces a single deduplicated, sorted import block merged
with any import statements written by hand.

Usage:
    from tsemit import TypeScriptWriter, Symbol

    writer = TypeScriptWriter("models/index")
    writer.write_docs("A greeting.")
    writer.write("export const greet = (who: $T): string => `hi $${who}`;",
                 Symbol("Person", module="./models/person"))
    print(writer)
"""

__version__ = "0.1.0"
__author__ = "tsemit Team"
__email__ = "tsemit@example.com"

# Public API exports
from .codegen import (
    Symbol,
    SymbolReference,
    ImportEntry,
    TypeScriptWriter,
)

from .utils.config import (
    get_config,
    TsEmitConfig,
)

from .utils.exceptions import (
    TsEmitError,
    MalformedTemplate,
    UnknownDirective,
    ArityMismatch,
)

__all__ = [
    "Symbol",
    "SymbolReference",
    "ImportEntry",
    "TypeScriptWriter",
    "get_config",
    "TsEmitConfig",
    "TsEmitError",
    "MalformedTemplate",
    "UnknownDirective",
    "ArityMismatch",
]
