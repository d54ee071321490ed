"""
Symbols and the per-writer import registry.

A ``Symbol`` names something a generated file refers to; when it lives
in another module it needs an import. The ``SymbolRegistry`` collects
those imports for one writer, keyed by ``(module, name, alias)``.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from ..utils.constants import DEFAULT_IMPORT_NAME, NAMESPACE_IMPORT_NAME
from ..utils.logging import get_logger

logger = get_logger(__name__)

ImportKey = Tuple[str, str, str]


def _normalize_alias(name: str, alias: Optional[str]) -> str:
    if not alias or alias == name:
        return ""
    return alias


@dataclass(frozen=True)
class Symbol:
    """An importable name as seen at a use site."""
    name: str
    namespace: str = ""
    module: str = ""
    alias: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "alias", _normalize_alias(self.name, self.alias) or None)

    @property
    def local_name(self) -> str:
        """The identifier this symbol is bound to in the generated file."""
        return self.alias or self.name

    @property
    def import_key(self) -> ImportKey:
        return (self.module, self.name, self.alias or "")

    @property
    def requires_import(self) -> bool:
        return bool(self.module)

    def to_entry(self) -> "ImportEntry":
        return ImportEntry(self.module, self.name, self.alias or "")


@dataclass(frozen=True)
class SymbolReference:
    """
    A reference to a symbol, optionally re-aliased at the use site.

    The reference alias wins over the symbol's own alias for both the
    emitted identifier and the import binding.
    """
    symbol: Symbol
    alias: Optional[str] = None

    @property
    def local_name(self) -> str:
        return self.alias or self.symbol.local_name

    def resolve(self) -> Symbol:
        """Return the symbol this reference imports, carrying the reference alias."""
        if not self.alias:
            return self.symbol
        return Symbol(self.symbol.name, self.symbol.namespace, self.symbol.module, self.alias)


@dataclass(frozen=True, order=True)
class ImportEntry:
    """
    One binding introduced by an import statement.

    ``imported_name`` is the exported name, or ``"default"`` / ``"*"`` for
    default and namespace imports; ``alias`` is the local binding when it
    differs from the imported name.
    """
    module: str
    imported_name: str
    alias: str = ""

    def __post_init__(self):
        object.__setattr__(self, "alias", _normalize_alias(self.imported_name, self.alias))

    @property
    def key(self) -> ImportKey:
        return (self.module, self.imported_name, self.alias)

    @property
    def local_name(self) -> str:
        return self.alias or self.imported_name

    @property
    def is_default(self) -> bool:
        return self.imported_name == DEFAULT_IMPORT_NAME and bool(self.alias)

    @property
    def is_namespace(self) -> bool:
        return self.imported_name == NAMESPACE_IMPORT_NAME


@dataclass
class SymbolRegistry:
    """
    Deduplicating store of the imports one writer needs.

    Args:
        module_path: Path of the file being generated (e.g. ``models/index``),
            used to rewrite ``./``-prefixed module literals relative to it.
            Leave empty to keep module literals verbatim.
    """

    module_path: str = ""
    _entries: Dict[ImportKey, ImportEntry] = field(default_factory=dict)

    def register(self, symbol: Symbol) -> Optional[ImportEntry]:
        """Insert or confirm the import for ``symbol``; returns the stored entry."""
        if not symbol.requires_import:
            return None
        return self._add(ImportEntry(symbol.module, symbol.name, symbol.alias or ""))

    def register_explicit(
        self,
        module_name: str,
        imported_name: str,
        module_literal: str,
        alias: Optional[str] = None,
    ) -> Optional[ImportEntry]:
        """
        Register an import outside of template expansion.

        Args:
            module_name: Local binding requested by the caller
            imported_name: Name exported by the module
            module_literal: Module path to import from
            alias: Explicit alias; overrides ``module_name`` when given

        Returns:
            The stored entry, or None when the import points at this file
        """
        binding = alias if alias else module_name
        return self._add(ImportEntry(module_literal, imported_name, binding))

    def register_default(self, local_name: str, module: str) -> Optional[ImportEntry]:
        """Register ``import local_name from "module"``."""
        return self._add(ImportEntry(module, DEFAULT_IMPORT_NAME, local_name))

    def register_namespace(self, local_name: str, module: str) -> Optional[ImportEntry]:
        """Register ``import * as local_name from "module"``."""
        return self._add(ImportEntry(module, NAMESPACE_IMPORT_NAME, local_name))

    def _add(self, entry: ImportEntry) -> Optional[ImportEntry]:
        module = self.resolve_module(entry.module)
        if module is None:
            logger.debug(f"Skipping self-import of '{entry.imported_name}' from '{entry.module}'")
            return None
        if module != entry.module:
            entry = ImportEntry(module, entry.imported_name, entry.alias)
        return self._entries.setdefault(entry.key, entry)

    def resolve_module(self, module: str) -> Optional[str]:
        """
        Rewrite a project-root-relative module literal for this file.

        Returns None when the literal names the file being generated.
        """
        if not self.module_path or not module.startswith("./"):
            return module

        own_path = posixpath.normpath(self.module_path)
        target = posixpath.normpath(module[2:])
        if target == own_path:
            return None

        relative = posixpath.relpath(target, posixpath.dirname(own_path) or ".")
        if not relative.startswith("../"):
            relative = "./" + relative
        return relative

    def all_entries(self) -> List[ImportEntry]:
        return sorted(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ImportEntry]:
        return iter(self.all_entries())

    def __contains__(self, item) -> bool:
        if isinstance(item, Symbol):
            item = item.to_entry()
        if not isinstance(item, ImportEntry):
            return False
        module = self.resolve_module(item.module)
        return (module, item.imported_name, item.alias) in self._entries
