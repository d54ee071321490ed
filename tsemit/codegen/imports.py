"""
Import Merge Engine.

Reconciles imports registered on a writer with import statements the
caller wrote by hand into the body, and renders one canonical,
deduplicated and sorted import block:

1. ``scan_imports`` lifts recognized import statements out of the body.
2. ``merge_imports`` unions them with registered entries by
   ``(module, imported_name, alias)``.
3. ``render_imports`` groups by module and emits statements in a
   deterministic order.
"""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..utils.constants import (
    DEFAULT_IMPORT_NAME,
    DEFAULT_MAX_IMPORT_LINE_LENGTH,
    DEFAULT_QUOTE,
    NAMESPACE_IMPORT_NAME,
)
from ..utils.logging import EmitterLogger
from .symbols import ImportEntry, SymbolRegistry

_IDENT = r"[A-Za-z_$][\w$]*"

_IMPORT_STATEMENT = re.compile(
    r"^import[ \t]+(?P<clause>[^'\"{};\n]*?(?:\{[^{}]*\})?)[ \t]*\bfrom[ \t]*"
    r"(?P<quote>['\"])(?P<module>[^'\"\n]+)(?P=quote)[ \t]*;?[ \t]*(?:\n|\Z)",
    re.MULTILINE,
)
_DEFAULT_BINDING = re.compile(rf"({_IDENT})\s*(,|$)")
_NAMESPACE_CLAUSE = re.compile(rf"\*\s+as\s+({_IDENT})")
_NAMED_CLAUSE = re.compile(r"\{([^{}]*)\}")
_SPECIFIER = re.compile(rf"({_IDENT})(?:\s+as\s+({_IDENT}))?")


# =============================================================================
# Scanning
# =============================================================================

def parse_import_clause(clause: str, module: str) -> Optional[List[ImportEntry]]:
    """
    Parse the part of an import statement between ``import`` and ``from``.

    Returns None for shapes that are not recognized (type-only imports,
    empty braces, malformed specifiers); such statements stay in the body.
    """
    rest = clause.strip()
    entries: List[ImportEntry] = []

    match = _DEFAULT_BINDING.match(rest)
    if match:
        entries.append(ImportEntry(module, DEFAULT_IMPORT_NAME, match.group(1)))
        rest = rest[match.end():].strip()
        if not rest:
            return entries if match.group(2) != "," else None

    match = _NAMESPACE_CLAUSE.fullmatch(rest)
    if match:
        entries.append(ImportEntry(module, NAMESPACE_IMPORT_NAME, match.group(1)))
        return entries

    match = _NAMED_CLAUSE.fullmatch(rest)
    if not match:
        return None

    specifiers = [item.strip() for item in match.group(1).split(",")]
    if specifiers and not specifiers[-1]:
        specifiers.pop()  # trailing comma
    if not specifiers:
        return None

    for specifier in specifiers:
        spec_match = _SPECIFIER.fullmatch(specifier)
        if not spec_match:
            return None
        entries.append(ImportEntry(module, spec_match.group(1), spec_match.group(2) or ""))
    return entries


def scan_imports(text: str) -> Tuple[List[ImportEntry], str]:
    """
    Lift recognized import statements out of ``text``.

    Returns:
        The parsed entries in source order, and the text with every
        recognized statement (including its line break) removed
    """
    found: List[ImportEntry] = []

    def _lift(match: "re.Match[str]") -> str:
        entries = parse_import_clause(match.group("clause"), match.group("module"))
        if entries is None:
            return match.group(0)
        found.extend(entries)
        return ""

    remaining = _IMPORT_STATEMENT.sub(_lift, text)
    return found, remaining


# =============================================================================
# Merging and Rendering
# =============================================================================

def merge_imports(*groups: Iterable[ImportEntry]) -> List[ImportEntry]:
    """Union entry groups by ``(module, imported_name, alias)``, sorted."""
    unique: Dict[Tuple[str, str, str], ImportEntry] = {}
    for group in groups:
        for entry in group:
            unique.setdefault(entry.key, entry)
    return sorted(unique.values())


def find_alias_collisions(entries: Iterable[ImportEntry]) -> Dict[str, List[str]]:
    """
    Find local names bound by imports from more than one module.

    The merge engine keeps such imports as they are; this report exists
    for callers that want to lint generated files.
    """
    modules_by_name: Dict[str, set] = defaultdict(set)
    for entry in entries:
        modules_by_name[entry.local_name].add(entry.module)
    return {
        name: sorted(modules)
        for name, modules in sorted(modules_by_name.items())
        if len(modules) > 1
    }


def _render_specifier(entry: ImportEntry) -> str:
    if entry.alias:
        return f"{entry.imported_name} as {entry.alias}"
    return entry.imported_name


def render_imports(
    entries: Iterable[ImportEntry],
    max_line_length: int = DEFAULT_MAX_IMPORT_LINE_LENGTH,
    quote: str = DEFAULT_QUOTE,
    indent: str = "  ",
) -> List[str]:
    """
    Render entries as import statements.

    Modules are emitted in lexicographic order. Per module, default
    imports come first, then namespace imports, then a single named
    clause sorted by imported name (aliased forms by their original name).
    """
    by_module: Dict[str, List[ImportEntry]] = defaultdict(list)
    for entry in entries:
        by_module[entry.module].append(entry)

    statements: List[str] = []
    for module in sorted(by_module):
        literal = f"{quote}{module}{quote}"
        module_entries = sorted(by_module[module], key=lambda e: (e.imported_name, e.alias))

        for entry in module_entries:
            if entry.is_default:
                statements.append(f"import {entry.alias} from {literal};")
        for entry in module_entries:
            if entry.is_namespace:
                statements.append(f"import * as {entry.local_name} from {literal};")

        specifiers = [
            _render_specifier(entry)
            for entry in module_entries
            if not entry.is_default and not entry.is_namespace
        ]
        if not specifiers:
            continue

        line = f"import {{ {', '.join(specifiers)} }} from {literal};"
        if len(line) > max_line_length and len(specifiers) > 1:
            body = "\n".join(f"{indent}{specifier}," for specifier in specifiers)
            line = f"import {{\n{body}\n}} from {literal};"
        statements.append(line)

    return statements


@dataclass(frozen=True)
class MergeResult:
    """Rendered import statements plus the body with hand-written imports removed."""
    statements: Tuple[str, ...]
    body: str
    entries: Tuple[ImportEntry, ...] = ()
    collisions: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def import_block(self) -> str:
        return "\n".join(self.statements)


class ImportMerger:
    """
    Runs the scan/merge/render pipeline for one writer render.

    Merging never mutates the registry or the buffer, so a writer can be
    rendered any number of times with the same result.
    """

    def __init__(
        self,
        registry: SymbolRegistry,
        max_line_length: int = DEFAULT_MAX_IMPORT_LINE_LENGTH,
        quote: str = DEFAULT_QUOTE,
        indent: str = "  ",
    ):
        self._registry = registry
        self._max_line_length = max_line_length
        self._quote = quote
        self._indent = indent
        self._logger = EmitterLogger(__name__)

    def merge(self, body_text: str) -> MergeResult:
        explicit, body = scan_imports(body_text)
        registered = self._registry.all_entries()
        merged = merge_imports(explicit, registered)
        self._logger.log_import_merge(len(explicit), len(registered), len(merged))

        collisions = find_alias_collisions(merged)
        for local_name, modules in collisions.items():
            self._logger.log_alias_collision(local_name, modules)

        statements = render_imports(merged, self._max_line_length, self._quote, self._indent or "  ")
        return MergeResult(tuple(statements), body, tuple(merged), collisions)
