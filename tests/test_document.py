from __future__ import annotations

import pytest

from jate.buffer import Document, FileStoreError

from conftest import MemoryFileStore


def make_document(*lines: str) -> Document:
    return Document.from_lines(lines, filename="doc.txt")


def test_from_lines_strips_line_endings() -> None:
    document = Document.from_lines(["one\n", "two\r\n", "three\r"])

    assert document.snapshot() == ("one", "two", "three")
    assert document.dirty == 0
    assert not document.modified


def test_load_reads_store_and_stays_clean() -> None:
    store = MemoryFileStore({"a.txt": b"hi\nbye\n"})

    document = Document.load(store, "a.txt")

    assert document.filename == "a.txt"
    assert document.snapshot() == ("hi", "bye")
    assert document.dirty == 0


def test_load_keeps_control_characters_inside_a_row() -> None:
    store = MemoryFileStore({"a.txt": b"page\x0cbreak\rhere\nnext\r\n"})

    document = Document.load(store, "a.txt")

    assert document.snapshot() == ("page\x0cbreak\rhere", "next")
    assert document.serialize() == b"page\x0cbreak\rhere\nnext\n"


def test_load_propagates_missing_file() -> None:
    with pytest.raises(FileStoreError) as excinfo:
        Document.load(MemoryFileStore(), "missing.txt")

    assert excinfo.value.reason == "No such file or directory"


def test_serialize_terminates_every_line() -> None:
    document = make_document("hi", "", "bye")

    assert document.serialize() == b"hi\n\nbye\n"
    assert Document().serialize() == b""


def test_serialize_round_trips_non_utf8_bytes() -> None:
    raw = b"caf\xe9\n\xff\xfe\n"
    store = MemoryFileStore({"bin": raw})

    document = Document.load(store, "bin")

    assert document.serialize() == raw


def test_insert_and_delete_row_bounds() -> None:
    document = make_document("a")

    assert document.insert_row(2) is False
    assert document.insert_row(-1) is False
    assert document.delete_row(1) is False
    assert document.dirty == 0

    assert document.insert_row(1, "b") is True
    assert document.snapshot() == ("a", "b")
    assert document.delete_row(0) is True
    assert document.snapshot() == ("b",)
    assert document.dirty == 2


def test_insert_char_on_virtual_line_appends_row() -> None:
    document = Document()

    cursor = document.insert_char(0, 0, "x")

    assert cursor == (0, 1)
    assert document.snapshot() == ("x",)
    # One change for the new row, one for the character.
    assert document.dirty == 2


def test_insert_char_clamps_column() -> None:
    document = make_document("ab")

    cursor = document.insert_char(0, 99, "c")

    assert document.snapshot() == ("abc",)
    assert cursor == (0, 3)


def test_insert_newline_splits_line() -> None:
    document = make_document("hello world")

    cursor = document.insert_newline(0, 5)

    assert cursor == (1, 0)
    assert document.snapshot() == ("hello", " world")


def test_insert_newline_at_column_zero_inserts_blank_row_above() -> None:
    document = make_document("abc")

    cursor = document.insert_newline(0, 0)

    assert cursor == (1, 0)
    assert document.snapshot() == ("", "abc")


def test_delete_char_removes_left_of_cursor() -> None:
    document = make_document("abc")

    cursor = document.delete_char(0, 2)

    assert cursor == (0, 1)
    assert document.snapshot() == ("ac",)


def test_delete_char_joins_lines_at_column_zero() -> None:
    document = make_document("foo", "bar")

    cursor = document.delete_char(1, 0)

    assert cursor == (0, 3)
    assert document.snapshot() == ("foobar",)


def test_delete_char_is_noop_at_origin_and_past_end() -> None:
    document = make_document("abc")

    assert document.delete_char(0, 0) == (0, 0)
    assert document.delete_char(1, 0) == (1, 0)
    assert document.snapshot() == ("abc",)
    assert document.dirty == 0


def test_newline_then_delete_restores_text() -> None:
    document = make_document("hello world", "next")

    row, col = document.insert_newline(0, 5)
    document.delete_char(row, col)

    assert document.snapshot() == ("hello world", "next")
    assert document.modified


def test_insert_then_delete_restores_text() -> None:
    document = make_document("abc")

    row, col = document.insert_char(0, 1, "x")
    document.delete_char(row, col)

    assert document.snapshot() == ("abc",)
    assert document.dirty == 2


def test_mark_saved_clears_dirty() -> None:
    document = make_document("abc")
    document.insert_char(0, 0, "x")

    document.mark_saved()

    assert document.dirty == 0


def test_render_helpers_follow_tabs() -> None:
    document = make_document("\tab")

    assert document.render_column(0, 1) == 8
    assert document.render_column(5, 3) == 0
    assert document.rendered_slice(0, 7, 3) == " ab"
    assert document.rendered_slice(0, 50, 3) == ""
    assert document.line_size(0) == 3
    assert document.line_size(1) == 0
