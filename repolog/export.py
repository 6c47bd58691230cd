"""Concatenation of source files into a single headered stream."""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Iterable, Iterator, Optional, TextIO

from .errors import FileReadError, FileWriteError
from .languages import Language
from .logging import get_logger
from .models import FileOutcome, RunReport, SourceFile

SEPARATOR_WIDTH = 60


class ExportEngine:
    """Renders matched files, in the order given, each behind a file header."""

    def __init__(self) -> None:
        self.logger = get_logger("export")

    def render_header(self, path: PurePath, language: Language) -> str:
        separator = f"{language.comment_symbol} {'=' * SEPARATOR_WIDTH}"
        return f"{separator}\n{language.comment_symbol} File: {path}\n{separator}"

    def render_file(self, source: SourceFile, language: Language) -> str:
        """Return one file's block: header, verbatim content, newline, blank line."""
        content = source.read()
        return f"{self.render_header(source.path, language)}\n{content}\n\n"

    def render(
        self,
        files: Iterable[SourceFile],
        language: Language,
        *,
        report: Optional[RunReport] = None,
        keep_going: bool = False,
    ) -> Iterator[str]:
        """Yield one block per readable file, in input order.

        A read failure propagates immediately unless ``keep_going`` is set, in which
        case the file is left out and the failure recorded on ``report``.
        """
        for source in files:
            try:
                block = self.render_file(source, language)
            except FileReadError as exc:
                if not keep_going:
                    raise
                self.logger.error("%s", exc)
                if report is not None:
                    report.record(FileOutcome(path=source.path, error=exc))
                continue
            self.logger.debug("Exported %s", source.path)
            if report is not None:
                report.record(FileOutcome(path=source.path, changed=True))
            yield block

    def export(
        self,
        files: Iterable[SourceFile],
        language: Language,
        sink: TextIO,
        *,
        report: Optional[RunReport] = None,
        keep_going: bool = False,
    ) -> int:
        """Write the export stream to ``sink`` and return the number of files written.

        Blocks already written stay in the sink when a later file fails.
        """
        count = 0
        for block in self.render(files, language, report=report, keep_going=keep_going):
            try:
                sink.write(block)
            except OSError as exc:
                raise FileWriteError(_sink_path(sink), exc.strerror) from exc
            except UnicodeEncodeError as exc:
                raise FileWriteError(_sink_path(sink), f"cannot encode: {exc.reason}") from exc
            count += 1
        return count


def _sink_path(sink: TextIO) -> Path:
    return Path(str(getattr(sink, "name", "<output>")))


__all__ = ["ExportEngine", "SEPARATOR_WIDTH"]
