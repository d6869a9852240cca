from __future__ import annotations

from pathlib import Path

import pytest

from tanglesmith.core.documents import split_document
from tanglesmith.core.exceptions import UndefinedSnippetError
from tanglesmith.core.materializer import FileMaterializer, write_output_file
from tanglesmith.core.scanner import scan_document


def _materialize(text: str, output_dir: Path, **kwargs):
    store = scan_document(split_document(text))
    return FileMaterializer(store, output_dir=output_dir, **kwargs).materialize()


def test_materializer_writes_single_file(tmp_path: Path) -> None:
    results = _materialize('```\n{"filename": "a.txt"}\nhello\n```\n', tmp_path)

    assert (tmp_path / "a.txt").read_bytes() == b"hello\n"
    assert [entry.key for entry in results] == ["a.txt"]
    assert results[0].lines == 1
    assert results[0].size == 6


def test_materializer_creates_missing_parent_directories(tmp_path: Path) -> None:
    _materialize('```\n{"filename": "sub/dir/out.txt"}\ncontent\n```\n', tmp_path)

    assert (tmp_path / "sub" / "dir").is_dir()
    assert (tmp_path / "sub" / "dir" / "out.txt").read_text(encoding="utf-8") == "content\n"


def test_materializer_overwrites_existing_files(tmp_path: Path) -> None:
    target = tmp_path / "a.txt"
    target.write_text("stale content that is longer\n", encoding="utf-8")

    _materialize('```\n{"filename": "a.txt"}\nfresh\n```\n', tmp_path)

    assert target.read_text(encoding="utf-8") == "fresh\n"


def test_materializer_preserves_line_terminators(tmp_path: Path) -> None:
    text = '```\n{"filename": "mixed.txt"}\ncrlf\r\nlf\n```\n'

    _materialize(text, tmp_path)

    assert (tmp_path / "mixed.txt").read_bytes() == b"crlf\r\nlf\n"


def test_materializer_writes_empty_segment_as_empty_file(tmp_path: Path) -> None:
    _materialize('```\n{"filename": "empty.txt"}\n```\n', tmp_path)

    assert (tmp_path / "empty.txt").read_bytes() == b""


def test_materializer_skips_snippet_only_segments(tmp_path: Path) -> None:
    results = _materialize('```\n{"name": "inc"}\nX\n```\n', tmp_path)

    assert results == []
    assert list(tmp_path.iterdir()) == []


def test_materializer_keeps_files_written_before_a_failure(tmp_path: Path) -> None:
    text = (
        '```\n{"filename": "good.txt"}\nok\n```\n'
        '```\n{"filename": "bad.txt"}\n<<missing>>\n```\n'
        '```\n{"filename": "later.txt"}\nnever\n```\n'
    )

    with pytest.raises(UndefinedSnippetError):
        _materialize(text, tmp_path)

    assert (tmp_path / "good.txt").read_text(encoding="utf-8") == "ok\n"
    assert not (tmp_path / "bad.txt").exists()
    assert not (tmp_path / "later.txt").exists()


def test_materializer_dry_run_writes_nothing(tmp_path: Path) -> None:
    results = _materialize('```\n{"filename": "a/b.txt"}\nx\n```\n', tmp_path, dry_run=True)

    assert list(tmp_path.iterdir()) == []
    assert results[0].written is False
    assert results[0].path == tmp_path / "a" / "b.txt"


def test_materializer_encodes_with_configured_encoding(tmp_path: Path) -> None:
    _materialize('```\n{"filename": "latin.txt"}\ncafé\n```\n', tmp_path, encoding="latin-1")

    assert (tmp_path / "latin.txt").read_bytes() == "café\n".encode("latin-1")


def test_materializer_emits_file_written_events(tmp_path: Path) -> None:
    events: list[tuple[str, dict]] = []

    class Recorder:
        debug_enabled = False

        def warning(self, message: str, exc: BaseException | None = None) -> None:
            return

        def error(self, message: str, exc: BaseException | None = None) -> None:
            return

        def event(self, name: str, payload) -> None:
            events.append((name, dict(payload)))

    _materialize('```\n{"filename": "a.txt"}\nhello\n```\n', tmp_path, emitter=Recorder())

    assert events == [
        (
            "file_written",
            {"path": str(tmp_path / "a.txt"), "lines": 1, "bytes": 6, "dry_run": False},
        )
    ]


def test_write_output_file_reports_target_on_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(OSError, match="blocker"):
        write_output_file(blocker / "child.txt", b"data")


def test_write_output_file_keeps_previous_content_when_replace_fails(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    target = tmp_path / "out.txt"
    target.write_bytes(b"previous\n")

    def _refuse(self: Path, other: Path) -> Path:
        raise OSError("device busy")

    monkeypatch.setattr(Path, "replace", _refuse)

    with pytest.raises(OSError, match="device busy"):
        write_output_file(target, b"next\n")

    assert target.read_bytes() == b"previous\n"
    assert [path.name for path in tmp_path.iterdir()] == ["out.txt"]


def test_write_output_file_keeps_existing_permissions(tmp_path: Path) -> None:
    target = tmp_path / "run.sh"
    target.write_bytes(b"#!/bin/sh\n")
    target.chmod(0o755)

    write_output_file(target, b"#!/bin/sh\necho hi\n")

    assert target.read_bytes() == b"#!/bin/sh\necho hi\n"
    assert target.stat().st_mode & 0o777 == 0o755
