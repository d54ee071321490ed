"""
Directive-based template formatter.

Templates use ``$`` to introduce a directive whose selector letter picks
a handler: ``$L`` (literal), ``$S`` (quoted string), ``$T`` (type symbol)
and ``$R`` (symbol reference). ``$$`` is a literal dollar sign.

Arguments are addressed relatively (``$L``), by 1-based position
(``$2L``) or by name (``$name:L``). Formatting is side-effect free:
``Formatter.format`` returns the expanded text together with every
symbol the template referenced, and the caller decides what to do with
them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from ..utils.constants import (
    DIRECTIVE_CHAR,
    LITERAL_DIRECTIVE,
    REFERENCE_DIRECTIVE,
    STRING_DIRECTIVE,
    SYMBOL_DIRECTIVE,
)
from ..utils.exceptions import ArityMismatch, MalformedTemplate, UnknownDirective
from ..utils.string_utils import quote_string
from .symbols import Symbol, SymbolReference


@dataclass(frozen=True)
class Expansion:
    """Text produced by a handler plus the symbols it referenced."""
    text: str
    symbols: Tuple[Symbol, ...] = ()


@dataclass(frozen=True)
class FormatResult:
    """Outcome of expanding one template."""
    text: str
    symbols: Tuple[Symbol, ...] = ()


Handler = Callable[[Any], Union[str, Expansion]]


# =============================================================================
# Default Handlers
# =============================================================================

def format_literal(value: Any) -> str:
    return "" if value is None else str(value)


def format_string(value: Any) -> str:
    return quote_string(format_literal(value))


def format_symbol(value: Any) -> Expansion:
    if isinstance(value, SymbolReference):
        value = value.symbol
    if not isinstance(value, Symbol):
        raise TypeError(f"expected Symbol, got {type(value).__name__}")
    return Expansion(value.local_name, (value,))


def format_reference(value: Any) -> Expansion:
    if isinstance(value, Symbol):
        value = SymbolReference(value)
    if not isinstance(value, SymbolReference):
        raise TypeError(f"expected SymbolReference, got {type(value).__name__}")
    return Expansion(value.local_name, (value.resolve(),))


class DirectiveTable:
    """
    Selector-to-handler mapping owned by a single writer.

    Each table starts from the default handlers; changes made through
    ``put_handler`` never leak into other tables.
    """

    def __init__(self, handlers: Optional[Mapping[str, Handler]] = None):
        self._handlers: Dict[str, Handler] = {
            LITERAL_DIRECTIVE: format_literal,
            STRING_DIRECTIVE: format_string,
            SYMBOL_DIRECTIVE: format_symbol,
            REFERENCE_DIRECTIVE: format_reference,
        }
        for selector, handler in (handlers or {}).items():
            self.put_handler(selector, handler)

    def put_handler(self, selector: str, handler: Handler) -> None:
        if len(selector) != 1 or not ("A" <= selector <= "Z"):
            raise ValueError(f"Directive selector must be one uppercase ASCII letter, got {selector!r}")
        self._handlers[selector] = handler

    def get(self, selector: str) -> Optional[Handler]:
        return self._handlers.get(selector)

    def __contains__(self, selector: str) -> bool:
        return selector in self._handlers

    def copy(self) -> "DirectiveTable":
        table = DirectiveTable()
        table._handlers = dict(self._handlers)
        return table


# =============================================================================
# Template Parsing
# =============================================================================

_NAMED = re.compile(r"([a-z_][A-Za-z0-9_]*):([A-Za-z])")
_POSITIONAL = re.compile(r"([0-9]+)([A-Za-z])")


@dataclass(frozen=True)
class _Directive:
    start: int
    end: int
    selector: str
    index: Optional[int] = None  # 0-based positional index
    name: Optional[str] = None


def _parse(template: str) -> List[Union[str, _Directive]]:
    """Split a template into literal chunks and directives."""
    parts: List[Union[str, _Directive]] = []
    literal: List[str] = []
    pos = 0
    length = len(template)

    while pos < length:
        char = template[pos]
        if char != DIRECTIVE_CHAR:
            literal.append(char)
            pos += 1
            continue

        if pos + 1 >= length:
            raise MalformedTemplate("dangling '$' at end of template", template, pos)

        following = template[pos + 1]
        if following == DIRECTIVE_CHAR:
            literal.append(DIRECTIVE_CHAR)
            pos += 2
            continue

        if literal:
            parts.append("".join(literal))
            literal = []

        named = _NAMED.match(template, pos + 1)
        positional = _POSITIONAL.match(template, pos + 1)
        if named:
            parts.append(_Directive(pos, named.end(), named.group(2), name=named.group(1)))
            pos = named.end()
        elif positional:
            index = int(positional.group(1))
            if index < 1:
                raise MalformedTemplate("positional arguments start at 1", template, pos)
            parts.append(_Directive(pos, positional.end(), positional.group(2), index=index - 1))
            pos = positional.end()
        elif following.isascii() and following.isalpha():
            parts.append(_Directive(pos, pos + 2, following))
            pos += 2
        else:
            raise MalformedTemplate(
                f"'$' must be followed by a directive or escaped as '$$', found {following!r}",
                template,
                pos,
            )

    if literal:
        parts.append("".join(literal))
    return parts


class Formatter:
    """
    Expands templates against a ``DirectiveTable``.

    The formatter holds no state beyond its handler table, so a single
    instance can serve every write of a writer.
    """

    def __init__(self, table: Optional[DirectiveTable] = None):
        self.table = table or DirectiveTable()

    def format(self, template: str, *args: Any, **named: Any) -> FormatResult:
        """
        Expand ``template`` with positional and named arguments.

        Raises:
            MalformedTemplate: On an unescaped ``$`` or mixed argument addressing
            UnknownDirective: On a selector with no handler
            ArityMismatch: On missing, unused or ill-typed arguments
        """
        parts = _parse(template)
        directives = [part for part in parts if isinstance(part, _Directive)]

        for directive in directives:
            if directive.selector not in self.table:
                raise UnknownDirective(directive.selector, directive.start, template)

        relative = [d for d in directives if d.index is None and d.name is None]
        positional = [d for d in directives if d.index is not None]
        if relative and positional:
            raise MalformedTemplate("cannot mix relative and positional arguments", template)

        if relative and len(relative) != len(args):
            raise ArityMismatch(
                f"Template consumes {len(relative)} argument(s) but {len(args)} were given",
                template,
                expected=len(relative),
                actual=len(args),
            )
        if positional:
            used = {d.index for d in positional}
            highest = max(used) + 1
            if highest > len(args):
                raise ArityMismatch(
                    f"Template references argument {highest} but only {len(args)} were given",
                    template,
                    expected=highest,
                    actual=len(args),
                )
            unused = sorted(set(range(len(args))) - used)
            if unused:
                raise ArityMismatch(
                    f"Positional argument(s) {[i + 1 for i in unused]} are never used",
                    template,
                    expected=len(used),
                    actual=len(args),
                )
        if not relative and not positional and args:
            raise ArityMismatch(
                f"Template takes no positional arguments but {len(args)} were given",
                template,
                expected=0,
                actual=len(args),
            )

        chunks: List[str] = []
        symbols: List[Symbol] = []
        next_arg = iter(args)

        for part in parts:
            if isinstance(part, str):
                chunks.append(part)
                continue

            if part.name is not None:
                if part.name not in named:
                    raise ArityMismatch(f"Missing named argument '{part.name}'", template, expected=part.name)
                value = named[part.name]
            elif part.index is not None:
                value = args[part.index]
            else:
                value = next(next_arg)

            expansion = self._expand(part, value, template)
            chunks.append(expansion.text)
            symbols.extend(expansion.symbols)

        return FormatResult("".join(chunks), tuple(symbols))

    def _expand(self, directive: _Directive, value: Any, template: str) -> Expansion:
        handler = self.table.get(directive.selector)
        try:
            result = handler(value)
        except TypeError as e:
            raise ArityMismatch(
                f"Argument for '${directive.selector}' at position {directive.start} has the wrong type: {e}",
                template,
                actual=type(value).__name__,
            )
        if isinstance(result, Expansion):
            return result
        return Expansion(str(result))
