from pydantic import BaseModel, Field

from pydantic_models.data.report_header_cells import ReportHeaderCells
from pydantic_models.data.report_row_layout import ReportRowLayout

class TemplatesConfig(BaseModel):
    """
    Template-Vertrag für den Visma-Export.
    Die Defaults entsprechen exakt der Vorlage visma.xlsx (Blatt EG7).
    """
    report_template: str = "visma.xlsx"
    sheet_name: str = "EG7"
    sample_row_count: int = Field(default=0, ge=0)   # Beispielzeilen der Vorlage ab Ankerzeile
    cache_template: bool = False                     # nur die Dateibytes, Workbook immer neu
    header_cells: ReportHeaderCells = Field(default_factory=ReportHeaderCells)
    row_layout: ReportRowLayout = Field(default_factory=ReportRowLayout)
