"""Tests for repolog.languages."""

from __future__ import annotations

import pytest

from repolog.errors import UnsupportedLanguageError
from repolog.languages import (
    DEFAULT_REGISTRY,
    PYTHON,
    RUST,
    Language,
    LanguageRegistry,
    resolve,
)


def test_resolve_returns_known_languages() -> None:
    assert resolve("rust") is RUST
    assert resolve("python") is PYTHON
    assert RUST.extension == "rs"
    assert RUST.comment_symbol == "//"
    assert PYTHON.extension == "py"
    assert PYTHON.comment_symbol == "#"


def test_resolve_rejects_unknown_identifier() -> None:
    with pytest.raises(UnsupportedLanguageError) as excinfo:
        resolve("java")
    assert excinfo.value.identifier == "java"
    assert "Unsupported language: java" in str(excinfo.value)
    assert "rust, python" in str(excinfo.value)


def test_resolve_is_case_sensitive() -> None:
    with pytest.raises(UnsupportedLanguageError):
        resolve("Rust")


def test_language_suffix_includes_dot() -> None:
    assert RUST.suffix == ".rs"


def test_language_is_immutable() -> None:
    with pytest.raises(AttributeError):
        RUST.extension = "rust"  # type: ignore[misc]


def test_registry_table_cannot_be_mutated() -> None:
    with pytest.raises(TypeError):
        DEFAULT_REGISTRY._table["java"] = Language("java", "java", "//")  # type: ignore[index]
    assert "java" not in DEFAULT_REGISTRY
    assert len(DEFAULT_REGISTRY) == 2


def test_registry_accepts_extra_entries() -> None:
    go = Language(name="go", extension="go", comment_symbol="//")
    registry = LanguageRegistry((RUST, PYTHON, go))
    assert registry.resolve("go") is go
    assert registry.names() == ["rust", "python", "go"]


def test_registry_rejects_duplicate_identifiers() -> None:
    with pytest.raises(ValueError):
        LanguageRegistry((RUST, Language(name="rust", extension="rlib", comment_symbol="//")))
