"""Unit tests for multipart file name helpers."""

from types import SimpleNamespace

import pytest

from doccontrol.interfaces.api.resources.multipart import (
    MultipartForm,
    _decode_filename,
    _filename_star,
    part_filename,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("report.pdf", "report.pdf"),
        ("  spaced.pdf ", "spaced.pdf"),
        ("Ã©tude.pdf", "étude.pdf"),
        ("étude.pdf", "étude.pdf"),
        ("日本語.docx", "日本語.docx"),
    ],
)
def test_decode_filename(raw: str, expected: str) -> None:
    assert _decode_filename(raw) == expected


def test_filename_star_decodes_percent_encoding() -> None:
    header = b"form-data; name=\"file\"; filename*=UTF-8''%E6%97%A5%E6%9C%AC.pdf"

    assert _filename_star(header) == "日本.pdf"


def test_filename_star_missing_or_malformed() -> None:
    assert _filename_star(b'form-data; name="file"; filename="a.pdf"') is None
    assert _filename_star(b"form-data; filename*=no-quotes") is None
    assert _filename_star(b"form-data; filename*=bogus-charset''abc") is None


def test_part_filename_prefers_plain_filename() -> None:
    part = SimpleNamespace(filename="a.pdf", _headers={})

    assert part_filename(part) == "a.pdf"


def test_part_filename_falls_back_to_filename_star() -> None:
    part = SimpleNamespace(
        filename=None,
        _headers={b"content-disposition": b"form-data; name=\"file\"; filename*=UTF-8''SOP%201.pdf"},
    )

    assert part_filename(part) == "SOP 1.pdf"


def test_part_filename_empty_when_absent() -> None:
    assert part_filename(SimpleNamespace(filename="")) == ""


def test_form_accessors() -> None:
    form = MultipartForm(fields={"tags": ["a", "b"], "title": ["SOP"]})

    assert form.get("title") == "SOP"
    assert form.get("missing", "x") == "x"
    assert form.get_list("tags") == ["a", "b"]
    assert form.get_list("missing") == []
