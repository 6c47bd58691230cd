"""Core data models shared across repolog components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .errors import FileReadError, FileWriteError


@dataclass(frozen=True)
class SourceFile:
    """A matched file on disk; content is read on demand and never cached."""

    path: Path

    def read(self) -> str:
        """Return the full file content with line endings preserved."""
        try:
            with self.path.open("r", encoding="utf-8", newline="") as handle:
                return handle.read()
        except UnicodeDecodeError as exc:
            raise FileReadError(self.path, "not valid UTF-8") from exc
        except OSError as exc:
            raise FileReadError(self.path, exc.strerror) from exc

    def write(self, content: str) -> None:
        """Replace the full file content."""
        try:
            with self.path.open("w", encoding="utf-8", newline="") as handle:
                handle.write(content)
        except OSError as exc:
            raise FileWriteError(self.path, exc.strerror) from exc


@dataclass
class FileOutcome:
    """Result of processing a single file during a run."""

    path: Path
    changed: bool = False
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RunReport:
    """Aggregate of per-file outcomes for a title or export run."""

    outcomes: List[FileOutcome] = field(default_factory=list)

    def record(self, outcome: FileOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def processed(self) -> int:
        return len(self.outcomes)

    @property
    def changed(self) -> List[Path]:
        return [outcome.path for outcome in self.outcomes if outcome.changed]

    @property
    def failures(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def ok(self) -> bool:
        return not self.failures
