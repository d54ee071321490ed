"""
Test package structure and basic imports.

This test module verifies that the package is properly structured
and all modules can be imported without errors.
"""

import pytest
import sys
from pathlib import Path

# Add the project root to the path for testing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def test_main_package_import():
    """Test that the main tsemit package can be imported."""
    import tsemit

    # Check basic attributes
    assert hasattr(tsemit, '__version__')
    assert hasattr(tsemit, '__author__')
    assert hasattr(tsemit, 'TypeScriptWriter')
    assert hasattr(tsemit, 'Symbol')


def test_codegen_imports():
    """Test that codegen submodules can be imported."""
    from tsemit.codegen import (
        Symbol,
        SymbolReference,
        ImportEntry,
        SymbolRegistry,
        DirectiveTable,
        Formatter,
        WriterBuffer,
        ImportMerger,
        TypeScriptWriter,
        render_docs,
    )

    assert Symbol is not None
    assert SymbolReference is not None
    assert ImportEntry is not None
    assert SymbolRegistry is not None
    assert DirectiveTable is not None
    assert Formatter is not None
    assert WriterBuffer is not None
    assert ImportMerger is not None
    assert TypeScriptWriter is not None
    assert render_docs is not None


def test_utils_imports():
    """Test that utility modules can be imported."""
    from tsemit.utils import (
        get_logger,
        setup_logging,
        EmitterLogger,
        TsEmitConfig,
        get_config,
        TsEmitError,
        WriterStateError,
    )

    assert get_logger is not None
    assert setup_logging is not None
    assert EmitterLogger is not None
    assert TsEmitConfig is not None
    assert get_config is not None
    assert TsEmitError is not None
    assert WriterStateError is not None


def test_exception_hierarchy():
    """Test that custom exceptions have proper hierarchy."""
    from tsemit.utils.exceptions import (
        TsEmitError,
        FormatterError,
        MalformedTemplate,
        UnknownDirective,
        ArityMismatch,
    )

    assert issubclass(FormatterError, TsEmitError)
    assert issubclass(MalformedTemplate, FormatterError)
    assert issubclass(UnknownDirective, FormatterError)
    assert issubclass(ArityMismatch, FormatterError)
    assert issubclass(TsEmitError, Exception)


def test_package_version():
    """Test that package version is properly defined."""
    import tsemit

    assert isinstance(tsemit.__version__, str)
    assert len(tsemit.__version__) > 0
    assert '.' in tsemit.__version__


@pytest.mark.parametrize("module_name", [
    "tsemit.codegen.symbols",
    "tsemit.codegen.formatter",
    "tsemit.codegen.imports",
    "tsemit.codegen.buffer",
    "tsemit.codegen.docs",
    "tsemit.codegen.writer",
    "tsemit.utils.config",
    "tsemit.utils.constants",
    "tsemit.utils.string_utils",
])
def test_submodule_imports(module_name):
    """Test that each submodule imports on its own."""
    import importlib

    assert importlib.import_module(module_name) is not None
