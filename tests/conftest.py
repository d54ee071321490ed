"""
Pytest configuration and shared fixtures for tsemit tests.

This module provides common test fixtures, configuration, and utilities
used across the test suite.
"""

import pytest

from tsemit.codegen import Symbol, SymbolRegistry, TypeScriptWriter
from tsemit.utils.config import TsEmitConfig, set_config
from tsemit.utils.constants import DEFAULT_PROVENANCE_HEADER

PROVENANCE = DEFAULT_PROVENANCE_HEADER + "\n"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep environment overrides and the global config out of every test."""
    for var in ("TSEMIT_INDENT_SIZE", "TSEMIT_NO_HEADER", "TSEMIT_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    set_config(None)
    yield
    set_config(None)


# Configuration fixtures
@pytest.fixture
def default_config(tmp_path):
    """A configuration built purely from defaults (no file on disk)."""
    return TsEmitConfig(str(tmp_path / "tsemit.json"))


# Writer fixtures
@pytest.fixture
def writer(default_config):
    """A fresh writer for a top-level generated file."""
    return TypeScriptWriter("foo", config=default_config)


@pytest.fixture
def plain_writer(default_config):
    """A writer that does not emit the provenance header."""
    return TypeScriptWriter("foo", generated=False, config=default_config)


# Symbol fixtures
@pytest.fixture
def registry():
    """A registry without module-relative resolution."""
    return SymbolRegistry()


@pytest.fixture
def sample_symbols():
    """A set of symbols from different modules."""
    return {
        'foo': Symbol("Foo", namespace="models", module="@scope/types"),
        'bar': Symbol("Bar", namespace="models", module="@scope/types"),
        'client': Symbol("Client", namespace="client", module="@scope/client"),
        'aliased': Symbol("Foo", namespace="other", module="@scope/other", alias="OtherFoo"),
        'builtin': Symbol("string"),
    }
