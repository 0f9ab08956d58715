from typing import Optional

from pydantic import BaseModel, Field


class ReportRowLayout(BaseModel):
    """
    Zeilen- und Spaltenlayout der Mitarbeitertabelle.

    Spalte 1 = uid, Spalte 2 = Name, Tag d liegt in Spalte first_day_column + d - 1.
    Neue Zeilen werden immer an anchor_row eingefügt.
    """

    day_header_row: int = Field(default=10, ge=1)
    first_day_column: int = Field(default=3, ge=3)
    max_days: int = 31
    anchor_row: int = Field(default=11, ge=2)

    row_height: float = 20
    border_style: str = "thin"
    vertical_alignment: str = "center"
    horizontal_alignment: str = "left"
    shade_pattern: str = "lightGray"
    shade_color: str = "FFC0D0F8"

    uid_column_width: Optional[float] = 5
    name_column_width: Optional[float] = 30

    @property
    def last_column(self) -> int:
        """Letzte gestylte Spalte (Tag 31)."""
        return self.day_column(self.max_days)

    def day_column(self, day: int) -> int:
        return self.first_day_column + day - 1
