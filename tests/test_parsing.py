"""
Unit tests for workbook loading and merge normalization.
"""
from datetime import date, datetime

import pytest
from openpyxl import Workbook

from core.exceptions import FormatError
from core.parsing import SheetGrid, cell_to_text, iter_sheets, unmerge_all


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        ("REF1", "REF1"),
        (100.0, "100"),
        (-1234.5, "-1234.5"),
        (42, "42"),
        (True, "TRUE"),
        (date(2024, 3, 1), "2024-03-01"),
        (datetime(2024, 3, 1, 9, 30), "2024-03-01T09:30:00"),
    ],
)
def test_cell_to_text(value, expected):
    assert cell_to_text(value) == expected


@pytest.mark.parametrize(
    "value, number_format, expected",
    [
        (0.05, "0%", "5%"),
        (-0.125, "0.00%", "-12.50%"),
        (1, "0%", "100%"),
        (-1234.5, "#,##0.00", "-1234.5"),
        ("text", "0%", "text"),
    ],
)
def test_cell_to_text_number_formats(value, number_format, expected):
    assert cell_to_text(value, number_format) == expected


def test_remove_row_reindexes_live_rows():
    """Each removal shifts the following rows up."""
    sheet = SheetGrid("S", [["a"], ["b"], ["c"], ["d"]])
    sheet.remove_row(1)
    sheet.remove_row(2)
    assert sheet.rows == [["b"], ["d"]]


def test_remove_row_past_end_is_ignored():
    sheet = SheetGrid("S", [["a"]])
    sheet.remove_row(5)
    assert sheet.rows == [["a"]]


def test_remove_row_below_one_raises():
    sheet = SheetGrid("S", [["a"]])
    with pytest.raises(FormatError):
        sheet.remove_row(0)


def test_unmerge_keeps_top_left_value():
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.append(["title", "", ""])
    worksheet.append(["a", "b", "c"])
    worksheet.merge_cells("A1:C1")
    worksheet.merge_cells("B2:C2")

    assert unmerge_all(worksheet) == 2
    assert not worksheet.merged_cells.ranges
    assert worksheet["A1"].value == "title"
    assert worksheet["B1"].value is None
    assert worksheet["B2"].value == "b"
    assert worksheet["C2"].value is None
    # Former merged cells accept writes again
    worksheet["C1"] = "free"
    assert worksheet["C1"].value == "free"


def test_iter_sheets_reads_all_sheets_in_order(make_workbook):
    path = make_workbook({
        "First": [["a", 1.0], ["b", 2.5]],
        "Second": [["c", None, "x"]],
    })

    sheets = list(iter_sheets(str(path)))

    assert [sheet.name for sheet in sheets] == ["First", "Second"]
    assert sheets[0].rows == [["a", "1"], ["b", "2.5"]]
    assert sheets[1].rows == [["c", "", "x"]]


def test_iter_sheets_normalizes_merges(make_workbook):
    path = make_workbook(
        {"Sheet1": [["Bank statement", "", ""], ["r", "m", "1"]]},
        merges={"Sheet1": ["A1:C1"]},
    )

    sheet = next(iter_sheets(str(path)))

    assert sheet.rows[0] == ["Bank statement"]
    assert sheet.rows[1] == ["r", "m", "1"]


def test_iter_sheets_empty_sheet_has_no_rows(make_workbook):
    path = make_workbook({"Empty": []})

    sheet = next(iter_sheets(str(path)))

    assert sheet.rows == []


def test_iter_sheets_missing_file():
    with pytest.raises(FormatError) as exc_info:
        list(iter_sheets("/nonexistent/statement.xlsx"))
    assert exc_info.value.details["file_path"] == "/nonexistent/statement.xlsx"


def test_iter_sheets_not_a_workbook(tmp_path):
    path = tmp_path / "statement.xlsx"
    path.write_bytes(b"this is not a spreadsheet")

    with pytest.raises(FormatError) as exc_info:
        list(iter_sheets(str(path)))
    assert exc_info.value.message == "Invalid workbook format"
    assert "error" in exc_info.value.details


def test_iter_sheets_rows_end_at_last_filled_cell(make_workbook):
    """Trailing blank cells do not count towards a row's width."""
    path = make_workbook({"Sheet1": [
        ["a", "b", "c", "d"],
        ["e", None, "", None],
        [None, None, None, "f"],
        [],
        ["g"],
    ]})

    sheet = next(iter_sheets(str(path)))

    assert sheet.rows == [["a", "b", "c", "d"], ["e"], ["", "", "", "f"], [], ["g"]]


def test_iter_sheets_applies_percent_format(make_workbook):
    path = make_workbook({"Sheet1": [["rate", 0.05]]}, formats={"Sheet1": {"B1": "0%"}})

    sheet = next(iter_sheets(str(path)))

    assert sheet.rows == [["rate", "5%"]]
