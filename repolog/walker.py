"""Directory traversal yielding the source files of one language."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .languages import Language
from .logging import get_logger
from .models import SourceFile

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
}


@dataclass
class ExcludeRule:
    """A gitignore-style glob taken from the ``exclude_paths`` setting."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            return fnmatchcase(rel_path, self.pattern)

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_exclude_rule(pattern: str) -> ExcludeRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern.rstrip("/")

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern.lstrip("/")

    return ExcludeRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def _is_excluded(rel_path: str, is_dir: bool, rules: Sequence[ExcludeRule]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


class FileWalker:
    """Walks a directory tree in filesystem order and yields matching files.

    Entries the traversal cannot read, such as a subdirectory without list
    permission, are excluded rather than reported. Symlinks are not followed.
    """

    def __init__(self, exclude_paths: Iterable[str] = ()) -> None:
        self.rules: List[ExcludeRule] = []
        for pattern in exclude_paths:
            rule = build_exclude_rule(pattern)
            if rule is not None:
                self.rules.append(rule)
        self.logger = get_logger("walker")

    def walk(
        self, root: Path, language: Language, *, skip: Iterable[Path] = ()
    ) -> Iterator[SourceFile]:
        """Yield files under ``root`` whose suffix matches ``language``.

        Paths in ``skip`` are never yielded, which keeps an export output file
        inside the tree from being read back into itself.
        """
        if not root.exists():
            raise FileNotFoundError(f"Path not found: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {root}")

        skipped = {path.resolve() for path in skip}

        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept_dirs = []
            for name in dirnames:
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if name in _EXCLUDED_DIRS or _is_excluded(rel_path, True, self.rules):
                    self.logger.debug("Skipping directory %s", rel_path)
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for filename in filenames:
                path = current_dir / filename
                if path.suffix != language.suffix:
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _is_excluded(rel_path, False, self.rules):
                    continue
                if path.is_symlink() or not path.is_file():
                    continue
                if skipped and path.resolve() in skipped:
                    self.logger.debug("Skipping %s (output file)", path)
                    continue
                yield SourceFile(path=path)


__all__ = ["ExcludeRule", "FileWalker", "build_exclude_rule"]
