from __future__ import annotations

import textwrap

import pytest

from tanglesmith.core.documents import split_document
from tanglesmith.core.exceptions import ScannerInvariantError, UnterminatedFenceError
from tanglesmith.core.scanner import (
    FenceScanner,
    ScanAction,
    ScanState,
    scan_document,
    step,
)
from tanglesmith.core.segments import SegmentKind


def _scan(source: str, **kwargs):
    return scan_document(split_document(textwrap.dedent(source)), **kwargs)


class RecordingEmitter:
    def __init__(self) -> None:
        self.debug_enabled = False
        self.warnings: list[str] = []
        self.events: list[tuple[str, dict]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        raise AssertionError(message)

    def event(self, name: str, payload) -> None:
        self.events.append((name, dict(payload)))


@pytest.mark.parametrize("marker", ["```", "````", "~~~", "~~~~"])
def test_step_opens_on_fence_markers(marker: str) -> None:
    transition = step(ScanState.OUTSIDE, None, f"{marker}python\n")

    assert transition.state is ScanState.OPENING
    assert transition.action is ScanAction.OPEN
    assert transition.marker == marker


@pytest.mark.parametrize("line", ["``\n", "~~\n", " ```\n", "`~`\n", "text ```\n", "\n"])
def test_step_ignores_non_fence_lines(line: str) -> None:
    transition = step(ScanState.OUTSIDE, None, line)

    assert transition.state is ScanState.OUTSIDE
    assert transition.action is ScanAction.SKIP


def test_step_captures_at_most_four_characters() -> None:
    transition = step(ScanState.OUTSIDE, None, "`````\n")

    assert transition.marker == "````"


def test_step_mixed_characters_capture_only_identical_run() -> None:
    transition = step(ScanState.OUTSIDE, None, "```~\n")

    assert transition.marker == "```"


def test_step_opening_followed_by_marker_is_empty_region() -> None:
    transition = step(ScanState.OPENING, "```", "```\n")

    assert transition.state is ScanState.OUTSIDE
    assert transition.action is ScanAction.EMPTY


def test_step_opening_with_metadata_tracks_region() -> None:
    transition = step(ScanState.OPENING, "```", '{"filename": "a.txt"}\n')

    assert transition.state is ScanState.TRACKED
    assert transition.metadata is not None
    assert transition.metadata.filename == "a.txt"


def test_step_opening_without_metadata_is_untracked() -> None:
    transition = step(ScanState.OPENING, "```", "print('hi')\n")

    assert transition.state is ScanState.UNTRACKED
    assert transition.action is ScanAction.UNTRACK


def test_step_closing_is_a_prefix_match() -> None:
    transition = step(ScanState.TRACKED, "```", "```` trailing text\n")

    assert transition.state is ScanState.OUTSIDE
    assert transition.action is ScanAction.CLOSE


def test_step_without_marker_inside_region_is_an_invariant_violation() -> None:
    with pytest.raises(ScannerInvariantError):
        step(ScanState.TRACKED, None, "content\n")


def test_step_rejects_unknown_states() -> None:
    with pytest.raises(ScannerInvariantError):
        step("sideways", "```", "content\n")  # type: ignore[arg-type]


def test_scan_registers_file_segment_verbatim() -> None:
    store = _scan(
        """\
        Some prose.

        ```
        {"filename": "a.txt"}
        hello
          indented\twith tab
        ```
        """
    )

    segment = store.lookup(SegmentKind.FILE, "a.txt")
    assert segment is not None
    assert segment.lines == ("hello\n", "  indented\twith tab\n")
    assert segment.closed
    assert segment.origin == 3


def test_scan_registers_segment_under_both_keys() -> None:
    store = _scan(
        """\
        ~~~
        {"filename": "both.txt", "name": "shared", "language": "python"}
        body
        ~~~
        """
    )

    assert store.lookup(SegmentKind.FILE, "both.txt") is store.lookup(
        SegmentKind.SNIPPET, "shared"
    )
    assert len(store.segments) == 1


def test_scan_keeps_orphan_segments_out_of_both_indexes() -> None:
    store = _scan(
        """\
        ```
        {"language": "python"}
        x = 1
        ```
        """
    )

    assert store.files == {}
    assert store.snippets == {}
    assert [segment.lines for segment in store.orphans()] == [("x = 1\n",)]


def test_scan_discards_untracked_regions() -> None:
    store = _scan(
        """\
        ```python
        print("not metadata")
        {"filename": "hidden.txt"}
        ```
        """
    )

    assert store.files == {}
    assert store.snippets == {}
    assert store.segments == []


def test_scan_empty_region_creates_nothing() -> None:
    store = _scan(
        """\
        ```
        ```
        {"filename": "outside.txt"}
        """
    )

    assert store.segments == []


def test_scan_four_character_fence_is_not_closed_by_three() -> None:
    store = _scan(
        """\
        ````
        {"filename": "doc.md"}
        ```python
        code
        ```
        ````
        """
    )

    segment = store.lookup(SegmentKind.FILE, "doc.md")
    assert segment is not None
    assert segment.lines == ("```python\n", "code\n", "```\n")


def test_scan_tilde_region_ignores_backtick_lines() -> None:
    store = _scan(
        """\
        ~~~
        {"name": "snippet"}
        ```
        ~~~
        """
    )

    segment = store.lookup(SegmentKind.SNIPPET, "snippet")
    assert segment is not None
    assert segment.lines == ("```\n",)


def test_scan_later_registration_overwrites_earlier() -> None:
    store = _scan(
        """\
        ```
        {"filename": "a.txt"}
        first
        ```

        ```
        {"filename": "a.txt"}
        second
        ```
        """
    )

    segment = store.lookup(SegmentKind.FILE, "a.txt")
    assert segment is not None
    assert segment.lines == ("second\n",)
    assert store.keys(SegmentKind.FILE) == ["a.txt"]


def test_scan_preserves_crlf_terminators() -> None:
    text = '```\r\n{"filename": "win.txt"}\r\nline one\r\nline two\r\n```\r\n'

    store = scan_document(split_document(text))

    segment = store.lookup(SegmentKind.FILE, "win.txt")
    assert segment is not None
    assert segment.lines == ("line one\r\n", "line two\r\n")


@pytest.mark.parametrize(
    ("source", "state"),
    [
        ("```\n", "opening"),
        ('```\n{"filename": "a.txt"}\ncontent\n', "tracked"),
        ("```\nplain\n", "untracked"),
    ],
)
def test_scan_rejects_unterminated_regions(source: str, state: str) -> None:
    with pytest.raises(UnterminatedFenceError) as excinfo:
        scan_document(split_document("intro\n" + source))

    assert excinfo.value.line == 2
    assert excinfo.value.state == state
    assert "line 2" in str(excinfo.value)


def test_scan_lenient_drops_unterminated_region() -> None:
    emitter = RecordingEmitter()
    text = '```\n{"filename": "kept.txt"}\nkept\n```\n```\n{"filename": "lost.txt"}\nlost\n'

    store = scan_document(split_document(text), emitter=emitter, strict=False)

    assert store.keys(SegmentKind.FILE) == ["kept.txt"]
    assert len(emitter.warnings) == 1
    assert "unterminated" in emitter.warnings[0]


def test_scanner_reports_registered_regions() -> None:
    emitter = RecordingEmitter()
    scanner = FenceScanner(emitter=emitter)
    text = '```\n{"name": "inc"}\nX\n```\n```\nplain\n```\n'

    scanner.scan(split_document(text))

    names = [name for name, _ in emitter.events]
    assert names == ["segment_registered", "region_untracked"]
    assert emitter.events[0][1] == {"line": 1, "filename": None, "name": "inc"}
    assert emitter.events[1][1] == {"line": 5}


def test_scan_lenient_keeps_earlier_region_under_the_same_key() -> None:
    text = (
        '```\n{"name": "inc"}\nX\n```\n'
        '```\n{"filename": "a.txt"}\ncomplete\n```\n'
        '```\n{"name": "inc", "filename": "a.txt"}\ndangling\n'
    )

    store = scan_document(split_document(text), strict=False)

    assert store.lookup(SegmentKind.SNIPPET, "inc").lines == ("X\n",)
    assert store.lookup(SegmentKind.FILE, "a.txt").lines == ("complete\n",)
