"""
Code generation core for tsemit.

Components, leaves first:
- symbols.py: Symbol, SymbolReference, ImportEntry and the per-writer SymbolRegistry
- formatter.py: directive-based template expansion ($L, $S, $T, $R)
- buffer.py: indentation-aware segment buffer with marker splicing
- docs.py: doc comment rendering and escaping
- imports.py: import scanning, merging and rendering
- writer.py: TypeScriptWriter, which wires the above together per file
"""

from .symbols import Symbol, SymbolReference, ImportEntry, SymbolRegistry
from .formatter import (
    DirectiveTable,
    Expansion,
    FormatResult,
    Formatter,
)
from .buffer import Marker, Segment, WriterBuffer
from .docs import render_docs, docs_template
from .imports import (
    ImportMerger,
    MergeResult,
    find_alias_collisions,
    merge_imports,
    render_imports,
    scan_imports,
)
from .writer import TypeScriptWriter

__all__ = [
    # Symbols
    "Symbol",
    "SymbolReference",
    "ImportEntry",
    "SymbolRegistry",
    # Formatting
    "DirectiveTable",
    "Expansion",
    "FormatResult",
    "Formatter",
    # Buffer
    "Marker",
    "Segment",
    "WriterBuffer",
    # Docs
    "render_docs",
    "docs_template",
    # Imports
    "ImportMerger",
    "MergeResult",
    "find_alias_collisions",
    "merge_imports",
    "render_imports",
    "scan_imports",
    # Writer
    "TypeScriptWriter",
]
