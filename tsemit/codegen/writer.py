"""
Symbol-aware TypeScript writer.

``TypeScriptWriter`` coordinates the formatter, the symbol registry,
the writer buffer, the doc emitter and the import merge engine for one
generated file. Callers write templates; the writer records every
symbol they reference and, at render time, produces the provenance
header, one merged import block and the body.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional

from ..utils.config import TsEmitConfig, get_config
from ..utils.exceptions import FormatterError
from ..utils.logging import EmitterLogger
from ..utils.string_utils import strip_leading_blank_lines
from .buffer import Marker, WriterBuffer
from .docs import docs_template
from .formatter import DirectiveTable, FormatResult, Formatter, Handler
from .imports import ImportMerger, MergeResult
from .symbols import ImportEntry, SymbolRegistry


class TypeScriptWriter:
    """
    Accumulates one TypeScript source file.

    Args:
        module_name: Path of the generated file without extension
            (e.g. ``models/index``); ``./`` imports are resolved against it
        generated: Emit the provenance header; defaults to the configuration
        config: Configuration to copy; defaults to the global configuration
        handlers: Extra or overriding directive handlers, keyed by selector

    Example:
        >>> from tsemit.codegen import Symbol
        >>> writer = TypeScriptWriter("models/index")
        >>> with writer.block("export interface $L {", "}", "Foo"):
        ...     writer.write("bar: $T;", Symbol("Bar", module="./models/bar"))
        >>> print(writer)
    """

    def __init__(
        self,
        module_name: str,
        generated: Optional[bool] = None,
        config: Optional[TsEmitConfig] = None,
        handlers: Optional[Mapping[str, Handler]] = None,
    ):
        self.module_name = module_name
        self.config = (config or get_config()).copy()
        self.generated = self.config.writer.generated if generated is None else generated

        self._buffer = WriterBuffer(self.config.writer.indent_text)
        self._registry = SymbolRegistry(module_path=module_name)
        self._formatter = Formatter(DirectiveTable(handlers))
        self._context: Dict[str, Any] = {}
        self._logger = EmitterLogger(__name__)

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    def put_handler(self, selector: str, handler: Handler) -> "TypeScriptWriter":
        """Add or override a directive handler for this writer only."""
        self._formatter.table.put_handler(selector, handler)
        return self

    def put_context(self, key: str, value: Any) -> "TypeScriptWriter":
        """Set a value available to ``$key:X`` directives."""
        self._context[key] = value
        return self

    def get_context(self, key: str, default: Any = None) -> Any:
        return self._context.get(key, default)

    def _expand(self, template: str, args: tuple, named: Dict[str, Any]) -> FormatResult:
        try:
            result = self._formatter.format(template, *args, **{**self._context, **named})
        except FormatterError as e:
            self._logger.log_format_failure(template, e)
            raise
        for symbol in result.symbols:
            self._registry.register(symbol)
        return result

    def format(self, template: str, *args: Any, **named: Any) -> str:
        """Expand a template, recording its symbols, without writing it."""
        return self._expand(template, args, named).text

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def write(self, template: str, *args: Any, **named: Any) -> "TypeScriptWriter":
        """Expand a template and append it followed by a newline."""
        text = self._expand(template, args, named).text
        self._buffer.append(text + "\n")
        return self

    def write_inline(self, template: str, *args: Any, **named: Any) -> "TypeScriptWriter":
        """Expand a template and append it without a trailing newline."""
        text = self._expand(template, args, named).text
        self._buffer.append(text)
        return self

    def indent(self, levels: int = 1) -> "TypeScriptWriter":
        self._buffer.indent(levels)
        return self

    def dedent(self, levels: int = 1) -> "TypeScriptWriter":
        self._buffer.dedent(levels)
        return self

    def open_block(self, template: str, *args: Any, **named: Any) -> "TypeScriptWriter":
        """Write an opening line and indent what follows."""
        self.write(template, *args, **named)
        return self.indent()

    def close_block(self, template: str, *args: Any, **named: Any) -> "TypeScriptWriter":
        """Dedent and write a closing line."""
        self.dedent()
        return self.write(template, *args, **named)

    @contextmanager
    def block(
        self, open_template: str, close_template: str = "}", *args: Any, **named: Any
    ) -> Iterator["TypeScriptWriter"]:
        """
        Write ``open_template``, indent the ``with`` body, then write ``close_template``.

        ``args`` and ``named`` are consumed by ``open_template``; the
        closing template takes no arguments. If the body raises, the
        indentation is restored and the closing line is not written.
        """
        self.open_block(open_template, *args, **named)
        try:
            yield self
        finally:
            self.dedent()
        self.write(close_template)

    def write_docs(self, text: str) -> "TypeScriptWriter":
        """Write ``text`` as a ``/** ... */`` doc comment at the current indentation."""
        return self.write(docs_template(text))

    docs = write_docs

    def mark(self) -> Marker:
        return self._buffer.mark()

    def insert_before(self, marker: Marker, template: str, *args: Any, **named: Any) -> "TypeScriptWriter":
        """Expand a template and splice it, with a newline, before content written after ``marker``."""
        text = self._expand(template, args, named).text
        self._buffer.insert_before(marker, text + "\n")
        return self

    # -------------------------------------------------------------------------
    # Imports
    # -------------------------------------------------------------------------

    def add_import(self, name: str, as_name: Optional[str], from_module: str) -> "TypeScriptWriter":
        """
        Import ``name`` from ``from_module``, bound locally as ``as_name``.

        Passing ``as_name`` equal to ``name`` (or None) imports it unaliased.
        """
        self._registry.register_explicit(as_name or name, name, from_module)
        return self

    def add_default_import(self, name: str, from_module: str) -> "TypeScriptWriter":
        self._registry.register_default(name, from_module)
        return self

    def add_namespace_import(self, name: str, from_module: str) -> "TypeScriptWriter":
        self._registry.register_namespace(name, from_module)
        return self

    @property
    def registry(self) -> SymbolRegistry:
        return self._registry

    @property
    def imports(self) -> List[ImportEntry]:
        """Registered import entries (hand-written import lines are not included)."""
        return self._registry.all_entries()

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def merge_imports(self) -> MergeResult:
        merger = ImportMerger(
            self._registry,
            max_line_length=self.config.imports.max_line_length,
            quote=self.config.imports.quote,
            indent=self.config.writer.indent_text,
        )
        return merger.merge(self._buffer.render())

    def to_string(self) -> str:
        """
        Render the file: provenance header, merged imports, then the body.

        Rendering does not consume the writer; it can be called repeatedly.
        """
        merged = self.merge_imports()
        body = strip_leading_blank_lines(merged.body).rstrip("\n")

        sections: List[str] = []
        if self.generated:
            sections.append(self.config.writer.provenance_header + "\n")
        if merged.statements:
            sections.append(merged.import_block + "\n")
            if body:
                sections.append("\n")
        if body:
            sections.append(body + "\n")

        self._logger.log_render(self.module_name, len(merged.statements), len(body))
        return "".join(sections)

    def __str__(self) -> str:
        return self.to_string()

    def __len__(self) -> int:
        return len(self._buffer)
