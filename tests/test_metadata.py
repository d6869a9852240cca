from __future__ import annotations

import pytest

from tanglesmith.core.metadata import SegmentMetadata, parse_metadata_line


def test_parse_metadata_reads_filename_and_name() -> None:
    metadata = parse_metadata_line('{"filename": "src/app.py", "name": "app"}\n')

    assert metadata == SegmentMetadata(filename="src/app.py", name="app")
    assert not metadata.is_orphan


def test_parse_metadata_ignores_unknown_keys() -> None:
    metadata = parse_metadata_line('{"name": "helper", "language": "python", "tags": [1, 2]}\n')

    assert metadata is not None
    assert metadata.name == "helper"
    assert metadata.filename is None


def test_parse_metadata_without_known_keys_is_orphan() -> None:
    metadata = parse_metadata_line("{}\n")

    assert metadata is not None
    assert metadata.is_orphan


@pytest.mark.parametrize(
    "line",
    [
        "print('hello')\n",
        "\n",
        "",
        '{"filename": "a.txt"\n',
        '["filename", "a.txt"]\n',
        '"a.txt"\n',
        "42\n",
        "null\n",
    ],
)
def test_parse_metadata_rejects_non_objects(line: str) -> None:
    assert parse_metadata_line(line) is None


@pytest.mark.parametrize(
    "line",
    ['{"filename": 3}\n', '{"name": ["a"]}\n', '{"filename": null, "name": {"x": 1}}\n'],
)
def test_parse_metadata_rejects_non_string_fields(line: str) -> None:
    assert parse_metadata_line(line) is None


def test_parse_metadata_tolerates_surrounding_whitespace() -> None:
    metadata = parse_metadata_line('   {"filename": "a.txt"}   \r\n')

    assert metadata is not None
    assert metadata.filename == "a.txt"
