"""Supported languages and their file conventions."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping

from .errors import UnsupportedLanguageError


@dataclass(frozen=True)
class Language:
    """A language identifier with its file extension and line-comment symbol."""

    name: str
    extension: str
    comment_symbol: str

    @property
    def suffix(self) -> str:
        """Path suffix, including the leading dot, matched by the walker."""
        return f".{self.extension}"


class LanguageRegistry:
    """Read-only lookup table of languages keyed by identifier."""

    def __init__(self, languages: Iterable[Language]) -> None:
        table = {}
        for language in languages:
            if language.name in table:
                raise ValueError(f"Duplicate language identifier: {language.name}")
            table[language.name] = language
        self._table: Mapping[str, Language] = MappingProxyType(table)

    def resolve(self, identifier: str) -> Language:
        """Return the language for ``identifier`` or raise UnsupportedLanguageError."""
        try:
            return self._table[identifier]
        except KeyError:
            raise UnsupportedLanguageError(identifier, self.names()) from None

    def names(self) -> List[str]:
        return list(self._table)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._table

    def __len__(self) -> int:
        return len(self._table)


RUST = Language(name="rust", extension="rs", comment_symbol="//")
PYTHON = Language(name="python", extension="py", comment_symbol="#")

DEFAULT_REGISTRY = LanguageRegistry((RUST, PYTHON))


def resolve(identifier: str) -> Language:
    """Resolve ``identifier`` against the default registry."""
    return DEFAULT_REGISTRY.resolve(identifier)


__all__ = ["DEFAULT_REGISTRY", "Language", "LanguageRegistry", "PYTHON", "RUST", "resolve"]
