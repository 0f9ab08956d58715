from openpyxl.utils.cell import coordinate_from_string
from openpyxl.utils.exceptions import CellCoordinatesException
from pydantic import BaseModel, field_validator


class ReportHeaderCells(BaseModel):
    """
    Zelladressen im Blatt EG7 für die Kopfwerte.
    Diese Adressen müssen mit der Vorlage visma.xlsx übereinstimmen.
    """
    office_name: str = "C5"     # Büro, unverändert übernommen
    month_name: str = "C6"      # Monatsname aus dateFrom
    date_range: str = "C8"      # "YYYY-MM-DD - YYYY-MM-DD"

    @field_validator("office_name", "month_name", "date_range")
    @classmethod
    def must_be_cell_address(cls, v: str) -> str:
        addr = v.strip().upper()
        try:
            coordinate_from_string(addr)
        except CellCoordinatesException as exc:
            raise ValueError(f"Ungültige Zelladresse: {v}") from exc
        return addr
