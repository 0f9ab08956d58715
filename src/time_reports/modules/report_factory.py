from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from loguru import logger
from openpyxl.formatting.formatting import ConditionalFormattingList
from openpyxl.styles import Alignment, Border, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.cell_range import CellRange, MultiCellRange
from openpyxl.worksheet.worksheet import Worksheet

from pydantic_models.config.templates_config import TemplatesConfig
from pydantic_models.data.report_header_cells import ReportHeaderCells
from pydantic_models.data.report_request import EmployeeRecord, ReportRequest
from pydantic_models.data.report_row_layout import ReportRowLayout
from shared_modules.utils import date_range_text, inclusive_day_count, month_name, parse_iso_datetime


class AttendanceReportFactory:
    """
    Befüllt das Blatt EG7 der Visma-Vorlage mit den Daten einer Anfrage.
    Arbeitet ausschließlich im Speicher auf dem übergebenen Worksheet.
    """

    def __init__(self, templates_cfg: TemplatesConfig) -> None:
        self.header_cells: ReportHeaderCells = templates_cfg.header_cells
        self.layout: ReportRowLayout = templates_cfg.row_layout
        self.sample_row_count: int = templates_cfg.sample_row_count

        side = Side(style=self.layout.border_style)
        self._border = Border(top=side, left=side, bottom=side, right=side)
        self._alignment = Alignment(
            vertical=self.layout.vertical_alignment,
            horizontal=self.layout.horizontal_alignment,
        )
        self._shade = PatternFill(patternType=self.layout.shade_pattern, bgColor=self.layout.shade_color)

    def populate(self, ws: Worksheet, request: ReportRequest) -> None:
        """
        Schreibt Mitarbeiterzeilen, Kopfzellen, Tageskopf und Spaltenbreiten.

        Raises:
            InvalidDateRange: Wenn dateFrom/dateTo nicht lesbar sind oder dateTo vor dateFrom liegt.
        """
        date_from = parse_iso_datetime(request.date_from)
        date_to = parse_iso_datetime(request.date_to)
        days_in_month = inclusive_day_count(date_from, date_to)
        logger.debug(f"Zeitraum {request.date_from} bis {request.date_to}: {days_in_month} Tage")

        if self.sample_row_count:
            self.remove_sample_rows(ws)
        self.insert_employee_rows(ws, request.items)

        cells = self.header_cells
        ws[cells.office_name] = request.office_name
        ws[cells.month_name] = month_name(date_from)
        ws[cells.date_range] = date_range_text(request.date_from, request.date_to)

        self.write_day_header(ws, days_in_month)
        self.apply_column_widths(ws)
        logger.info(f"Report für '{request.office_name}' mit {len(request.items)} Zeilen befüllt.")

    # --------------------------------------------------------------------- #
    # Mitarbeiterzeilen
    # --------------------------------------------------------------------- #

    def build_row_values(self, record: EmployeeRecord) -> Dict[int, Any]:
        """Spalte -> Wert für eine Mitarbeiterzeile (leere Tage fehlen)."""
        values: Dict[int, Any] = {1: record.uid, 2: record.name}
        for day, code in record.codes_by_day():
            values[self.layout.day_column(day)] = code
        return values

    def insert_employee_rows(self, ws: Worksheet, items: Sequence[EmployeeRecord]) -> None:
        """
        Fügt die Zeilen in umgekehrter Reihenfolge immer an der Ankerzeile ein.
        Danach steht items[j] in Zeile anchor_row + j. Schattiert wird nach dem
        Index der umgekehrten Liste (ungerade = schattiert), nicht nach der Zielzeile.
        """
        anchor = self.layout.anchor_row
        for index, record in enumerate(reversed(items)):
            self.insert_anchor_row(ws)
            for column, value in self.build_row_values(record).items():
                ws.cell(row=anchor, column=column, value=value)
            self.style_row(ws, anchor, shaded=bool(index % 2))

    def insert_anchor_row(self, ws: Worksheet) -> None:
        """
        Leere Zeile an der Ankerzeile einfügen. openpyxl verschiebt nur Zellen;
        Zeilenhöhen, verbundene Bereiche, bedingte Formate und Gültigkeitsregeln
        werden hier nachgezogen.
        """
        anchor = self.layout.anchor_row
        ws.insert_rows(anchor)
        _shift_row_dimensions(ws, anchor, 1)
        _shift_merged_ranges(ws, anchor, 1)
        _shift_conditional_formats(ws, anchor, 1)
        _shift_data_validations(ws, anchor, 1)

    def style_row(self, ws: Worksheet, row: int, shaded: bool) -> None:
        dim = ws.row_dimensions[row]
        dim.height = self.layout.row_height
        dim.alignment = self._alignment
        dim.border = self._border
        if shaded:
            dim.fill = self._shade

        for column in range(1, self.layout.last_column + 1):
            cell = ws.cell(row=row, column=column)
            cell.alignment = self._alignment
            cell.border = self._border
            if shaded:
                cell.fill = self._shade

    def remove_sample_rows(self, ws: Worksheet) -> None:
        """Entfernt die Beispielzeilen der Vorlage ab der Ankerzeile."""
        anchor = self.layout.anchor_row
        logger.debug(f"Entferne {self.sample_row_count} Beispielzeilen ab Zeile {anchor}")
        ws.delete_rows(anchor, self.sample_row_count)
        _shift_row_dimensions(ws, anchor, -self.sample_row_count)
        _shift_merged_ranges(ws, anchor, -self.sample_row_count)
        _shift_conditional_formats(ws, anchor, -self.sample_row_count)
        _shift_data_validations(ws, anchor, -self.sample_row_count)

    # --------------------------------------------------------------------- #
    # Kopfbereich
    # --------------------------------------------------------------------- #

    def write_day_header(self, ws: Worksheet, days_in_month: int) -> None:
        """Tage 1..31 in die Kopfzeile; Tage nach days_in_month werden geleert."""
        row = self.layout.day_header_row
        for day in range(1, self.layout.max_days + 1):
            ws.cell(row=row, column=self.layout.day_column(day)).value = day if day <= days_in_month else None

    def apply_column_widths(self, ws: Worksheet) -> None:
        if self.layout.uid_column_width is not None:
            ws.column_dimensions[get_column_letter(1)].width = self.layout.uid_column_width
        if self.layout.name_column_width is not None:
            ws.column_dimensions[get_column_letter(2)].width = self.layout.name_column_width


def _shift_row_dimensions(ws: Worksheet, start: int, amount: int) -> None:
    """Verschiebt Zeilenformate ab `start` um `amount` Zeilen (negativ = nach oben)."""
    dims = ws.row_dimensions
    if amount < 0:
        for idx in range(start, start - amount):
            dims.pop(idx, None)
    rows: List[int] = sorted((idx for idx in dims if idx >= start), reverse=amount > 0)
    for idx in rows:
        dim = dims.pop(idx)
        dim.index = idx + amount
        dims[idx + amount] = dim


def _shift_merged_ranges(ws: Worksheet, start: int, amount: int) -> None:
    """Verschiebt verbundene Bereiche ab `start`; Bereiche in gelöschten Zeilen werden aufgelöst."""
    for merged in list(ws.merged_cells.ranges):
        if merged.min_row < start:
            continue
        ws.merged_cells.remove(merged)
        if amount < 0 and merged.min_row < start - amount:
            continue
        merged.shift(0, amount)
        ws.merged_cells.add(merged)


def _shift_cell_range(cell_range: CellRange, start: int, amount: int) -> Optional[CellRange]:
    """
    Neue Zeilengrenzen eines Bereichs nach Einfügen (amount > 0) oder Löschen
    (amount < 0) ab `start`. Bereiche über `start` hinweg wachsen bzw. schrumpfen,
    vollständig gelöschte Bereiche ergeben None.
    """
    min_row, max_row = cell_range.min_row, cell_range.max_row
    if amount > 0:
        if min_row >= start:
            min_row += amount
        if max_row >= start:
            max_row += amount
    else:
        end = start - amount
        if min_row >= end:
            min_row += amount
        elif min_row >= start:
            min_row = start
        if max_row >= end:
            max_row += amount
        elif max_row >= start:
            max_row = start - 1
        if min_row > max_row:
            return None
    return CellRange(min_col=cell_range.min_col, min_row=min_row, max_col=cell_range.max_col, max_row=max_row)


def _shift_sqref(sqref: Any, start: int, amount: int) -> str:
    """Verschiebt alle Bereiche einer sqref-Angabe ("A12:B12 C15"); leer, wenn nichts übrig bleibt."""
    shifted = (_shift_cell_range(r, start, amount) for r in MultiCellRange(str(sqref)).ranges)
    return " ".join(str(r) for r in shifted if r is not None)


def _shift_conditional_formats(ws: Worksheet, start: int, amount: int) -> None:
    shifted = ConditionalFormattingList()
    for cf in ws.conditional_formatting:
        sqref = _shift_sqref(cf.sqref, start, amount)
        if not sqref:
            logger.debug(f"Bedingtes Format {cf.sqref} entfällt mit den gelöschten Zeilen")
            continue
        for rule in cf.rules:
            shifted.add(sqref, rule)
    ws.conditional_formatting = shifted


def _shift_data_validations(ws: Worksheet, start: int, amount: int) -> None:
    kept = []
    for dv in ws.data_validations.dataValidation:
        sqref = _shift_sqref(dv.sqref, start, amount)
        if not sqref:
            logger.debug(f"Gültigkeitsregel {dv.sqref} entfällt mit den gelöschten Zeilen")
            continue
        dv.sqref = MultiCellRange(sqref)
        kept.append(dv)
    ws.data_validations.dataValidation = kept
