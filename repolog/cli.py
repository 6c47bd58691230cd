"""CLI entrypoints for repolog commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import RepologError
from .languages import DEFAULT_REGISTRY
from .logging import configure_logging
from .models import RunReport
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    _add_verbose_option(parser, suppress_default=True)
    parser.add_argument(
        "-l",
        "--lang",
        help=(
            "Language to process "
            f"({', '.join(DEFAULT_REGISTRY.names())}); "
            "defaults to default_language from .repolog.yml."
        ),
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        default=None,
        help="Process remaining files after a failure and report all failures at the end.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the directory to process (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repolog",
        description="Add path titles to source files and export them as one stream.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write log records, with timestamps, to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    title_parser = subparsers.add_parser(
        "title",
        help="Add a title comment to files of a language that lack one.",
    )
    _add_common_options(title_parser)
    title_parser.add_argument(
        "--base",
        default=".",
        help="Directory titles are made relative to (defaults to current directory).",
    )
    title_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List files that would receive a title without writing them.",
    )

    export_parser = subparsers.add_parser(
        "export",
        help="Concatenate files of a language into one headered stream.",
    )
    _add_common_options(export_parser)
    export_parser.add_argument(
        "-o",
        "--output",
        help="Path to the output file (defaults to stdout).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for repolog commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    except OSError as exc:
        parser.exit(1, f"repolog: cannot open log file: {exc}\n")

    orchestrator = Orchestrator()

    try:
        if args.command == "title":
            dry_run = bool(args.dry_run)
            report = orchestrator.run_title(
                args.path,
                args.lang,
                base_path=args.base,
                keep_going=args.keep_going,
                dry_run=dry_run,
            )
            for path in report.changed:
                print(f"{'Would title' if dry_run else 'Titled'} {_relativize(path)}")
        elif args.command == "export":
            report = orchestrator.run_export(
                args.path,
                args.lang,
                output=args.output,
                keep_going=args.keep_going,
            )
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (RepologError, OSError) as exc:
        parser.exit(1, f"repolog {args.command} failed: {exc}\n")

    _exit_for_report(parser, report)


def _exit_for_report(parser: argparse.ArgumentParser, report: RunReport) -> None:
    failures = report.failures
    if not failures:
        return
    lines = [f"{len(failures)} of {report.processed} files failed:"]
    lines.extend(f"  {outcome.error}" for outcome in failures)
    parser.exit(1, "\n".join(lines) + "\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
