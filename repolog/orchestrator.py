"""Sequential drivers for the title and export commands."""

from __future__ import annotations

import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Optional, TextIO

from .config import RepologConfig, load_config
from .errors import FileWriteError, RepologError
from .export import ExportEngine
from .languages import DEFAULT_REGISTRY, Language, LanguageRegistry
from .logging import get_logger
from .models import FileOutcome, RunReport, SourceFile
from .title import TitleEngine
from .walker import FileWalker


class Orchestrator:
    """Folds the title and export engines over a walked directory tree.

    Every file is read, transformed and written before the next one is visited.
    By default the first failure aborts the run; with ``keep_going`` failures are
    recorded on the returned report and the remaining files are still processed.
    """

    def __init__(
        self,
        registry: LanguageRegistry | None = None,
        title_engine: TitleEngine | None = None,
        export_engine: ExportEngine | None = None,
    ) -> None:
        self.registry = registry or DEFAULT_REGISTRY
        self.title_engine = title_engine or TitleEngine()
        self.export_engine = export_engine or ExportEngine()
        self.logger = get_logger("orchestrator")

    def run_title(
        self,
        path: str | Path,
        language: Optional[str] = None,
        *,
        base_path: str | Path = ".",
        keep_going: Optional[bool] = None,
        dry_run: bool = False,
    ) -> RunReport:
        """Insert a title into every matching file under ``path`` that lacks one."""
        resolved = self.registry.resolve(language) if language else None
        root = Path(path)
        config = self._load_config(root)
        resolved = resolved or self._default_language(config)
        keep_going = config.keep_going if keep_going is None else keep_going
        base = Path(base_path)

        self.logger.info("Adding %s titles under %s", resolved.name, root)
        report = RunReport()
        walker = FileWalker(config.exclude_paths)
        for source in walker.walk(root, resolved):
            try:
                changed = self._title_file(source, resolved, base, dry_run=dry_run)
            except RepologError as exc:
                if not keep_going:
                    raise
                self.logger.error("%s", exc)
                report.record(FileOutcome(path=source.path, error=exc))
                continue
            report.record(FileOutcome(path=source.path, changed=changed))

        self.logger.info(
            "%s %d of %d files",
            "Would title" if dry_run else "Titled",
            len(report.changed),
            report.processed,
        )
        return report

    def run_export(
        self,
        path: str | Path,
        language: Optional[str] = None,
        *,
        output: str | Path | None = None,
        keep_going: Optional[bool] = None,
        stdout: TextIO | None = None,
    ) -> RunReport:
        """Concatenate every matching file under ``path`` into ``output`` or stdout."""
        resolved = self.registry.resolve(language) if language else None
        root = Path(path)
        config = self._load_config(root)
        resolved = resolved or self._default_language(config)
        keep_going = config.keep_going if keep_going is None else keep_going
        output_path = Path(output) if output is not None else None

        report = RunReport()
        walker = FileWalker(config.exclude_paths)
        with ExitStack() as stack:
            if output_path is None:
                sink = stdout or sys.stdout
            else:
                sink = stack.enter_context(self._open_output(output_path))
            files = walker.walk(root, resolved, skip=[output_path] if output_path else ())
            count = self.export_engine.export(
                files, resolved, sink, report=report, keep_going=keep_going
            )

        self.logger.info(
            "Exported %d %s files to %s",
            count,
            resolved.name,
            output_path if output_path is not None else "stdout",
        )
        return report

    def _title_file(
        self, source: SourceFile, language: Language, base_path: Path, *, dry_run: bool
    ) -> bool:
        content = source.read()
        updated = self.title_engine.ensure_title(content, source.path, language, base_path)
        if updated is None:
            self.logger.debug("Title present in %s", source.path)
            return False
        if dry_run:
            self.logger.info("Would add title to %s", source.path)
            return True
        source.write(updated)
        self.logger.debug("Added title to %s", source.path)
        return True

    def _open_output(self, output_path: Path) -> TextIO:
        try:
            return output_path.open("w", encoding="utf-8", newline="")
        except OSError as exc:
            raise FileWriteError(output_path, exc.strerror) from exc

    def _load_config(self, root: Path) -> RepologConfig:
        if not root.exists():
            raise FileNotFoundError(f"Path not found: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {root}")
        return load_config(root)

    def _default_language(self, config: RepologConfig) -> Language:
        chosen = config.default_language
        if not chosen:
            raise RepologError(
                "No language given; pass --lang or set default_language in .repolog.yml"
            )
        return self.registry.resolve(chosen)


__all__ = ["Orchestrator"]
