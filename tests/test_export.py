"""Tests for repolog.export."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from repolog.errors import FileReadError, FileWriteError
from repolog.export import ExportEngine
from repolog.languages import PYTHON, RUST
from repolog.models import RunReport, SourceFile

SEP_PY = "# " + "=" * 60
SEP_RS = "// " + "=" * 60


def test_export_single_file_matches_exact_format(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    Path("a.py").write_text("print(1)\n", encoding="utf-8")

    sink = io.StringIO()
    count = ExportEngine().export([SourceFile(Path("a.py"))], PYTHON, sink)

    assert count == 1
    assert sink.getvalue() == (
        "# ============================================================\n"
        "# File: a.py\n"
        "# ============================================================\n"
        "print(1)\n"
        "\n"
        "\n"
    )


def test_render_header_uses_language_comment_symbol() -> None:
    header = ExportEngine().render_header(Path("src/lib.rs"), RUST)
    assert header.splitlines() == [SEP_RS, "// File: src/lib.rs", SEP_RS]


def test_export_preserves_input_order(tmp_path: Path) -> None:
    second = tmp_path / "b.py"
    first = tmp_path / "a.py"
    second.write_text("b = 2", encoding="utf-8")
    first.write_text("a = 1", encoding="utf-8")

    sink = io.StringIO()
    ExportEngine().export([SourceFile(second), SourceFile(first)], PYTHON, sink)

    output = sink.getvalue()
    assert output.index(f"# File: {second}") < output.index(f"# File: {first}")
    assert f"{SEP_PY}\nb = 2\n\n{SEP_PY}" in output


def test_export_keeps_content_verbatim(tmp_path: Path) -> None:
    target = tmp_path / "crlf.py"
    target.write_bytes(b"x = 1\r\ny = 2\r\n")

    sink = io.StringIO(newline="")
    ExportEngine().export([SourceFile(target)], PYTHON, sink)

    assert "x = 1\r\ny = 2\r\n\n\n" in sink.getvalue()


def test_export_with_no_files_writes_nothing() -> None:
    sink = io.StringIO()
    assert ExportEngine().export([], PYTHON, sink) == 0
    assert sink.getvalue() == ""


def test_export_aborts_on_unreadable_file(tmp_path: Path) -> None:
    good = tmp_path / "good.py"
    good.write_text("ok = True\n", encoding="utf-8")
    missing = tmp_path / "missing.py"

    sink = io.StringIO()
    with pytest.raises(FileReadError) as excinfo:
        ExportEngine().export([SourceFile(good), SourceFile(missing)], PYTHON, sink)

    assert excinfo.value.path == missing
    assert "ok = True" in sink.getvalue()


def test_export_rejects_non_utf8_content(tmp_path: Path) -> None:
    binary = tmp_path / "blob.py"
    binary.write_bytes(b"\xff\xfe\x00")

    with pytest.raises(FileReadError, match="not valid UTF-8"):
        ExportEngine().export([SourceFile(binary)], PYTHON, io.StringIO())


def test_export_keep_going_records_failures(tmp_path: Path) -> None:
    missing = tmp_path / "missing.py"
    good = tmp_path / "good.py"
    good.write_text("ok = True\n", encoding="utf-8")

    report = RunReport()
    sink = io.StringIO()
    count = ExportEngine().export(
        [SourceFile(missing), SourceFile(good)],
        PYTHON,
        sink,
        report=report,
        keep_going=True,
    )

    assert count == 1
    assert report.processed == 2
    assert [outcome.path for outcome in report.failures] == [missing]
    assert str(missing) not in sink.getvalue()
    assert f"# File: {good}" in sink.getvalue()


class _BrokenSink(io.StringIO):
    name = "broken.txt"

    def write(self, text: str) -> int:
        raise OSError(28, "No space left on device")


def test_export_wraps_sink_failures(tmp_path: Path) -> None:
    source = tmp_path / "a.py"
    source.write_text("a = 1\n", encoding="utf-8")

    with pytest.raises(FileWriteError) as excinfo:
        ExportEngine().export([SourceFile(source)], PYTHON, _BrokenSink())

    assert excinfo.value.path == Path("broken.txt")


def test_render_yields_blocks_in_input_order(tmp_path: Path) -> None:
    first = tmp_path / "one.py"
    second = tmp_path / "two.py"
    first.write_text("one = 1", encoding="utf-8")
    second.write_text("two = 2", encoding="utf-8")

    blocks = list(ExportEngine().render([SourceFile(second), SourceFile(first)], PYTHON))

    assert len(blocks) == 2
    assert blocks[0].endswith("two = 2\n\n")
    assert blocks[1].endswith("one = 1\n\n")


def test_export_wraps_unencodable_output(tmp_path: Path) -> None:
    source = tmp_path / "greeting.py"
    source.write_text("print('héllo')\n", encoding="utf-8")
    sink = io.TextIOWrapper(io.BytesIO(), encoding="ascii")

    with pytest.raises(FileWriteError, match="cannot encode") as excinfo:
        ExportEngine().export([SourceFile(source)], PYTHON, sink)

    assert excinfo.value.path == Path("<output>")
