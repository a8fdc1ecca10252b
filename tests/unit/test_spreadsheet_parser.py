"""Tests for workbook decoding and structural checks."""

from __future__ import annotations

import datetime

import pytest

from taskdesk.core.exceptions import EmptyFileError, MissingColumnsError, UnreadableWorkbookError
from taskdesk.task_import.spreadsheet_parser import parse_workbook
from tests.fakes import build_workbook, truncate_sheet


def test_rows_are_keyed_by_field():
    data = build_workbook([
        ["Thiết kế trang chủ", "Website Redesign", "Nguyễn Văn An", "Hoàn thành", "Cao", "25/12/2024", "Ghi chú"],
    ])

    [row] = parse_workbook(data)

    assert row.title == "Thiết kế trang chủ"
    assert row.project_name == "Website Redesign"
    assert row.assignee_name == "Nguyễn Văn An"
    assert row.status_label == "Hoàn thành"
    assert row.priority_label == "Cao"
    assert row.due_date_raw == "25/12/2024"
    assert row.description == "Ghi chú"


def test_order_is_preserved_and_blank_rows_skipped():
    data = build_workbook([
        ["A", "P1"],
        [None, None, None],
        ["B", "P2"],
    ])
    assert [r.title for r in parse_workbook(data)] == ["A", "B"]


def test_optional_cells_may_be_empty():
    [row] = parse_workbook(build_workbook([["Only title", "P1", None, None, None, None, None]]))
    assert row.assignee_name is None
    assert row.due_date_raw is None


def test_numeric_and_date_cells_keep_their_type():
    data = build_workbook([[101, "P1", None, None, None, datetime.date(2024, 12, 25)]])
    [row] = parse_workbook(data)
    assert row.title == "101"
    assert isinstance(row.due_date_raw, datetime.datetime)


def test_extra_columns_are_ignored():
    data = build_workbook([["A", "P1", "ignored"]], headers=["Tiêu đề", "Dự án", "Ghi chú nội bộ"])
    [row] = parse_workbook(data)
    assert row.title == "A"


def test_missing_required_columns():
    data = build_workbook([["A", "Nguyễn Văn An"]], headers=["Tiêu đề", "Người thực hiện"])
    with pytest.raises(MissingColumnsError) as exc_info:
        parse_workbook(data)
    assert exc_info.value.columns == ["Dự án"]
    assert str(exc_info.value) == "Thiếu cột bắt buộc: Dự án"


def test_header_only_file_is_empty():
    with pytest.raises(EmptyFileError):
        parse_workbook(build_workbook([]))


def test_empty_check_precedes_column_check():
    with pytest.raises(EmptyFileError):
        parse_workbook(build_workbook([], headers=["Something else"]))


@pytest.mark.parametrize("data", [b"", b"not a spreadsheet", b"PK\x03\x04garbage"])
def test_unreadable_bytes(data):
    with pytest.raises(UnreadableWorkbookError):
        parse_workbook(data)


def test_corrupt_worksheet_inside_valid_zip():
    data = truncate_sheet(build_workbook([[f"Task {i}", "Website Redesign"] for i in range(40)]))
    with pytest.raises(UnreadableWorkbookError):
        parse_workbook(data)
