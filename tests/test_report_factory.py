from __future__ import annotations

import pytest
from openpyxl.formatting.rule import CellIsRule
from openpyxl.styles import PatternFill
from openpyxl.worksheet.datavalidation import DataValidation

from conftest import FOOTER_ROW, SHEET_NAME, make_template_workbook, sample_request
from pydantic_models.config.templates_config import TemplatesConfig
from pydantic_models.data.report_request import ReportRequest
from shared_modules.exceptions import InvalidDateRange
from time_reports.modules.report_factory import AttendanceReportFactory


def populate(payload, templates_cfg=None, wb=None):
    wb = wb or make_template_workbook()
    ws = wb[SHEET_NAME]
    factory = AttendanceReportFactory(templates_cfg or TemplatesConfig())
    factory.populate(ws, ReportRequest.model_validate(payload))
    return ws


def items(count):
    return [{"uid": i, "name": f"Person {i}", "time_offs": {}} for i in range(count)]


def shaded_rows(ws, count):
    return {row for row in range(11, 11 + count) if ws.cell(row=row, column=1).fill.patternType == "lightGray"}


def test_rows_keep_request_order():
    ws = populate(sample_request())

    assert [ws.cell(row=r, column=1).value for r in (11, 12, 13)] == [7, 8, "x9"]
    assert [ws.cell(row=r, column=2).value for r in (11, 12, 13)] == ["Alice", "Bob", "Cecilia"]


def test_template_rows_below_anchor_move_down():
    ws = populate(sample_request())

    footer = FOOTER_ROW + 3
    assert ws.cell(row=footer, column=1).value == "Summa"
    assert ws.row_dimensions[footer].height == 30
    assert f"A{footer}:B{footer}" in {str(r) for r in ws.merged_cells.ranges}


def test_time_off_codes_land_in_day_columns():
    ws = populate(sample_request(items=[{"uid": 7, "name": "Alice", "time_offs": {"1": "V", "15": "S"}}]))

    assert ws.cell(row=11, column=3).value == "V"
    assert ws.cell(row=11, column=17).value == "S"
    others = [ws.cell(row=11, column=2 + day).value for day in range(1, 32) if day not in (1, 15)]
    assert others == [None] * 29


def test_time_off_keys_out_of_order_are_placed_by_day():
    ws = populate(sample_request(items=[{"uid": 1, "name": "A", "time_offs": {"20": "S", "2": "V", "10": None}}]))

    assert ws.cell(row=11, column=4).value == "V"
    assert ws.cell(row=11, column=12).value is None
    assert ws.cell(row=11, column=22).value == "S"


def test_numeric_codes_and_null_names_are_written_as_is():
    ws = populate(sample_request(items=[{"uid": None, "name": None, "time_offs": {"1": 8, "2": "V"}}]))

    assert ws.cell(row=11, column=1).value is None
    assert ws.cell(row=11, column=2).value is None
    assert ws.cell(row=11, column=3).value == 8
    assert ws.cell(row=11, column=4).value == "V"


def test_rows_are_styled():
    ws = populate(sample_request())

    for row in (11, 12, 13):
        assert ws.row_dimensions[row].height == 20
        cell = ws.cell(row=row, column=33)
        assert cell.border.top.style == "thin"
        assert cell.border.bottom.style == "thin"
        assert cell.alignment.vertical == "center"
        assert cell.alignment.horizontal == "left"


@pytest.mark.parametrize(
    "count, expected",
    [
        (1, set()),
        (2, {11}),
        (3, {12}),
        (4, {11, 13}),
        (5, {12, 14}),
    ],
)
def test_shading_follows_reversed_index_parity(count, expected):
    ws = populate(sample_request(items=items(count)))

    assert shaded_rows(ws, count) == expected
    for row in expected:
        fill = ws.cell(row=row, column=33).fill
        assert fill.bgColor.rgb == "FFC0D0F8"


def test_inclusive_day_count_blanks_trailing_days():
    ws = populate(sample_request(dateFrom="2023-04-01", dateTo="2023-04-30"))

    assert [ws.cell(row=10, column=2 + day).value for day in range(1, 31)] == list(range(1, 31))
    assert ws.cell(row=10, column=33).value is None


def test_february_header_has_28_days():
    ws = populate(sample_request(dateFrom="2023-02-01", dateTo="2023-02-28"))

    assert ws.cell(row=10, column=30).value == 28
    assert [ws.cell(row=10, column=2 + day).value for day in (29, 30, 31)] == [None, None, None]


def test_header_cells():
    ws = populate(sample_request(dateFrom="2023-05-10T00:00:00Z", dateTo="2023-05-31T00:00:00Z"))

    assert ws["C5"].value == "Kontor Nord"
    assert ws["C6"].value == "Maj"
    assert ws["C8"].value == "2023-05-10 - 2023-05-31"


def test_date_range_text_uses_first_ten_characters():
    ws = populate(sample_request())

    assert ws["C8"].value == "2023-05-01 - 2023-05-31"


def test_column_widths():
    ws = populate(sample_request())

    assert ws.column_dimensions["A"].width == 5
    assert ws.column_dimensions["B"].width == 30


def test_empty_item_list_only_fills_header():
    ws = populate(sample_request(items=[]))

    assert ws.cell(row=11, column=1).value is None
    assert ws.cell(row=FOOTER_ROW, column=1).value == "Summa"
    assert ws["C6"].value == "Maj"


@pytest.mark.parametrize(
    "date_from, date_to",
    [
        ("not-a-date", "2023-05-31"),
        ("2023-05-01", ""),
        ("2023-05-31", "2023-05-01"),
    ],
)
def test_invalid_date_range_fails_fast(date_from, date_to):
    wb = make_template_workbook()
    with pytest.raises(InvalidDateRange):
        populate(sample_request(dateFrom=date_from, dateTo=date_to), wb=wb)

    assert wb[SHEET_NAME].cell(row=11, column=1).value is None


def test_sample_rows_are_removed_before_insert():
    wb = make_template_workbook()
    ws = wb[SHEET_NAME]
    ws.insert_rows(11, 2)
    ws["A11"] = "Exempel 1"
    ws["A12"] = "Exempel 2"
    ws.merged_cells.remove("A12:B12")
    ws.merge_cells("A14:B14")
    ws.row_dimensions[14].height = 30

    ws = populate(sample_request(), templates_cfg=TemplatesConfig(sample_row_count=2), wb=wb)

    # Zeile 13 der Vorlage war leer und rückt zwischen Daten und Fusszeile
    values = [ws.cell(row=r, column=1).value for r in range(11, 16)]
    assert values == [7, 8, "x9", None, "Summa"]
    assert ws.row_dimensions[15].height == 30
    assert "A15:B15" in {str(r) for r in ws.merged_cells.ranges}


def add_rules(ws, validation_cell, *cf_ranges):
    dv = DataValidation(type="list", formula1='"V,S,F"')
    ws.add_data_validation(dv)
    dv.add(validation_cell)
    for cf_range in cf_ranges:
        ws.conditional_formatting.add(
            cf_range, CellIsRule(operator="equal", formula=['"S"'], fill=PatternFill(bgColor="FFFF0000"))
        )
    return dv


def test_validations_and_conditional_formats_move_with_rows():
    wb = make_template_workbook()
    dv = add_rules(wb[SHEET_NAME], "C12", "A12:B12", "C10:AG20", "C5")

    ws = populate(sample_request(), wb=wb)

    assert str(dv.sqref) == "C15"
    assert ws.data_validations.dataValidation == [dv]
    ranges = {str(cf.sqref) for cf in ws.conditional_formatting}
    assert ranges == {"A15:B15", "C10:AG23", "C5"}
    assert all(len(cf.rules) == 1 for cf in ws.conditional_formatting)


def test_rules_on_removed_sample_rows_are_dropped():
    wb = make_template_workbook()
    ws = wb[SHEET_NAME]
    ws.insert_rows(11, 2)
    ws.merged_cells.remove("A12:B12")
    ws.merge_cells("A14:B14")
    add_rules(ws, "D11", "C11:AG12")
    footer_dv = add_rules(ws, "C14", "A14:B14")

    ws = populate(sample_request(), templates_cfg=TemplatesConfig(sample_row_count=2), wb=wb)

    assert ws.data_validations.dataValidation == [footer_dv]
    assert str(footer_dv.sqref) == "C15"
    assert {str(cf.sqref) for cf in ws.conditional_formatting} == {"A15:B15"}


def test_custom_header_cells_from_config():
    cfg = TemplatesConfig(header_cells={"office_name": "d5", "month_name": "D6", "date_range": "D8"})
    ws = populate(sample_request(), templates_cfg=cfg)

    assert ws["D5"].value == "Kontor Nord"
    assert ws["D6"].value == "Maj"
