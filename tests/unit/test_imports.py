"""
Unit tests for the import merge engine.

Tests scanning of hand-written import statements, union with registry
entries, deterministic rendering and alias collision reporting.
"""

import pytest
from unittest.mock import patch

from tsemit.codegen.imports import (
    ImportMerger,
    find_alias_collisions,
    merge_imports,
    parse_import_clause,
    render_imports,
    scan_imports,
)
from tsemit.codegen.symbols import ImportEntry, Symbol, SymbolRegistry


class TestScanImports:
    """Test lifting import statements out of body text."""

    def test_named_import(self):
        entries, remaining = scan_imports('import { Foo } from "baz";\nconst x = 1;\n')

        assert entries == [ImportEntry("baz", "Foo")]
        assert remaining == "const x = 1;\n"

    def test_aliases_and_single_quotes(self):
        entries, _ = scan_imports("import { A, B as C } from './m';\n")

        assert entries == [ImportEntry("./m", "A"), ImportEntry("./m", "B", "C")]

    def test_multiline_named_import(self):
        text = 'import {\n  A,\n  B as C,\n} from "./m";\nfoo();\n'
        entries, remaining = scan_imports(text)

        assert entries == [ImportEntry("./m", "A"), ImportEntry("./m", "B", "C")]
        assert remaining == "foo();\n"

    def test_default_import(self):
        entries, remaining = scan_imports('import React from "react";')

        assert entries == [ImportEntry("react", "default", "React")]
        assert remaining == ""

    def test_namespace_import(self):
        entries, _ = scan_imports('import * as path from "path";\n')

        assert entries == [ImportEntry("path", "*", "path")]

    def test_default_with_named(self):
        entries, _ = scan_imports("import React, { useState } from 'react';\n")

        assert entries == [
            ImportEntry("react", "default", "React"),
            ImportEntry("react", "useState"),
        ]

    def test_missing_semicolon(self):
        entries, remaining = scan_imports('import { A } from "a"\nx\n')

        assert entries == [ImportEntry("a", "A")]
        assert remaining == "x\n"

    @pytest.mark.parametrize("line", [
        'import type { X } from "t";\n',
        '  import { X } from "y";\n',
        'import "side-effect";\n',
        'import {} from "x";\n',
        'export { A } from "b";\n',
        'import { A } from "a"; // trailing comment\n',
        ' * import { A } from "a";\n',
    ])
    def test_unrecognized_shapes_stay_in_body(self, line):
        text = "before\n" + line + "after\n"
        entries, remaining = scan_imports(text)

        assert entries == []
        assert remaining == text

    def test_preserves_body_order(self):
        text = 'const a = 1;\nimport { X } from "x";\nconst b = 2;\nimport { Y } from "y";\nconst c = 3;\n'
        entries, remaining = scan_imports(text)

        assert [e.imported_name for e in entries] == ["X", "Y"]
        assert remaining == "const a = 1;\nconst b = 2;\nconst c = 3;\n"

    def test_parse_clause_rejects_trailing_default_comma(self):
        assert parse_import_clause("React,", "react") is None


class TestMergeImports:
    """Test the union step."""

    def test_dedup_across_origins(self):
        explicit = [ImportEntry("m", "Foo"), ImportEntry("m", "Foo")]
        registered = [ImportEntry("m", "Foo"), ImportEntry("m", "Bar")]

        assert merge_imports(explicit, registered) == [ImportEntry("m", "Bar"), ImportEntry("m", "Foo")]

    def test_aliases_not_collapsed(self):
        merged = merge_imports([ImportEntry("m", "Foo", "A")], [ImportEntry("m", "Foo", "B")])

        assert len(merged) == 2


class TestRenderImports:
    """Test statement rendering and ordering."""

    def test_modules_sorted(self):
        entries = [ImportEntry("hello", "Baz"), ImportEntry("baz", "Foo")]

        assert render_imports(entries) == [
            'import { Foo } from "baz";',
            'import { Baz } from "hello";',
        ]

    def test_names_sorted_with_aliases(self):
        entries = [ImportEntry("m", "B", "Z"), ImportEntry("m", "A")]

        assert render_imports(entries) == ['import { A, B as Z } from "m";']

    def test_same_name_two_aliases_share_clause(self):
        entries = [ImportEntry("m", "Foo", "F1"), ImportEntry("m", "Foo")]

        assert render_imports(entries) == ['import { Foo, Foo as F1 } from "m";']

    def test_default_namespace_and_named(self):
        entries = [
            ImportEntry("react", "useState"),
            ImportEntry("react", "*", "R"),
            ImportEntry("react", "default", "React"),
        ]

        assert render_imports(entries) == [
            'import React from "react";',
            'import * as R from "react";',
            'import { useState } from "react";',
        ]

    def test_wraps_long_clause(self):
        entries = [ImportEntry("m", "A"), ImportEntry("m", "B")]

        assert render_imports(entries, max_line_length=20) == ['import {\n  A,\n  B,\n} from "m";']

    def test_single_name_never_wraps(self):
        entries = [ImportEntry("a-very-long-module-name", "AVeryLongName")]

        assert render_imports(entries, max_line_length=10) == [
            'import { AVeryLongName } from "a-very-long-module-name";'
        ]

    def test_single_quotes(self):
        assert render_imports([ImportEntry("m", "A")], quote="'") == ["import { A } from 'm';"]

    def test_empty(self):
        assert render_imports([]) == []


class TestAliasCollisions:
    """Test cross-module collision reporting."""

    def test_same_local_name_from_two_modules(self):
        entries = [ImportEntry("a", "Foo"), ImportEntry("b", "Bar", "Foo"), ImportEntry("c", "Baz")]

        assert find_alias_collisions(entries) == {"Foo": ["a", "b"]}

    def test_collisions_are_still_rendered(self):
        entries = [ImportEntry("a", "Foo"), ImportEntry("b", "Bar", "Foo")]

        assert render_imports(entries) == [
            'import { Foo } from "a";',
            'import { Bar as Foo } from "b";',
        ]

    def test_no_collisions(self):
        assert find_alias_collisions([ImportEntry("a", "Foo"), ImportEntry("a", "Foo", "F")]) == {}


class TestImportMerger:
    """Test the full scan/merge/render pipeline."""

    def test_merge_with_registry(self):
        registry = SymbolRegistry()
        registry.register(Symbol("Baz", module="hello"))
        merger = ImportMerger(registry)

        result = merger.merge('import { Foo } from "baz";\nexport const x = 1;\n')

        assert result.statements == ('import { Foo } from "baz";', 'import { Baz } from "hello";')
        assert result.body == "export const x = 1;\n"
        assert result.import_block == 'import { Foo } from "baz";\nimport { Baz } from "hello";'

    def test_merge_does_not_touch_registry(self):
        registry = SymbolRegistry()
        merger = ImportMerger(registry)
        merger.merge('import { Foo } from "baz";\n')

        assert len(registry) == 0

    def test_empty_merge(self):
        result = ImportMerger(SymbolRegistry()).merge("const a = 1;\n")

        assert result.statements == ()
        assert result.import_block == ""

    def test_collisions_logged_not_raised(self):
        registry = SymbolRegistry()
        registry.register(Symbol("Foo", module="a"))
        registry.register(Symbol("Foo", module="b"))
        merger = ImportMerger(registry)

        with patch.object(merger._logger, "log_alias_collision") as mock_log:
            result = merger.merge("")

        mock_log.assert_called_once_with("Foo", ["a", "b"])
        assert result.collisions == {"Foo": ["a", "b"]}
        assert len(result.statements) == 2
