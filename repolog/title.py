"""Title comment detection and generation."""

from __future__ import annotations

import re
from pathlib import Path, PurePath
from typing import Dict, Optional, Pattern

from .errors import InvalidPathEncodingError
from .languages import Language

# A word character, a dot and a word character occur together exactly when the
# line holds a dotted identifier of the form word(.word)+.
_DOTTED_IDENTIFIER = r"[A-Za-z0-9_]\.[A-Za-z0-9_]"
_SEPARATORS = re.compile(r"[/\\]")


class TitleEngine:
    """Decides whether a file carries a title comment and builds one when missing.

    A title is a single comment line holding the file's dotted path relative to a
    base directory, e.g. ``// src.foo.bar`` for ``src/foo/bar.rs``. Inserting a
    title is idempotent: the inserted line always satisfies :meth:`has_title`.
    """

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern[str]] = {}

    def has_title(self, content: str, language: Language) -> bool:
        """Return True when the first line is a comment containing a dotted identifier.

        This is a heuristic: an ordinary first-line comment such as
        ``// see README.md`` also counts as a title.
        """
        return self._pattern(language).match(content) is not None

    def generate_title(
        self, path: PurePath, language: Language, base_path: PurePath = Path(".")
    ) -> str:
        """Return the title line for ``path``.

        Paths outside ``base_path`` are used as given.
        """
        try:
            relative = path.relative_to(base_path)
        except ValueError:
            relative = path
        if relative.suffix:
            relative = relative.with_suffix("")

        text = str(relative)
        try:
            text.encode("utf-8")
        except UnicodeEncodeError:
            raise InvalidPathEncodingError(path) from None

        dotted = _SEPARATORS.sub(".", text)
        return f"{language.comment_symbol} {dotted}"

    def ensure_title(
        self,
        content: str,
        path: PurePath,
        language: Language,
        base_path: PurePath = Path("."),
    ) -> Optional[str]:
        """Return ``content`` with a title prepended, or None if it already has one."""
        if self.has_title(content, language):
            return None
        title = self.generate_title(path, language, base_path)
        # Titles of top-level files have no dot and never satisfy has_title.
        if content.partition("\n")[0] == title:
            return None
        return f"{title}\n\n{content}"

    def _pattern(self, language: Language) -> Pattern[str]:
        pattern = self._patterns.get(language.comment_symbol)
        if pattern is None:
            # re.match anchors at the start of content; the lazy class stays on the
            # first line and keeps matching linear in the line length.
            pattern = re.compile(
                f"{re.escape(language.comment_symbol)}[^\n]*?{_DOTTED_IDENTIFIER}"
            )
            self._patterns[language.comment_symbol] = pattern
        return pattern


__all__ = ["TitleEngine"]
