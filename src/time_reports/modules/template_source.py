from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Optional, Tuple

from loguru import logger
from openpyxl import load_workbook
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from shared_modules.exceptions import TemplateStructureError


class TemplateSource:
    """
    Lädt die Excel-Vorlage für jede Anfrage als eigenes Workbook.
    Mit cache_template werden nur die Dateibytes einmal gelesen, das Workbook
    selbst entsteht trotzdem bei jedem Aufruf neu.
    """

    def __init__(self, template_file: Path, sheet_name: str, cache_template: bool = False) -> None:
        self.template_file: Path = template_file
        self.sheet_name: str = sheet_name
        self.cache_template: bool = cache_template
        self._cached_bytes: Optional[bytes] = None

    def _template_bytes(self) -> bytes:
        if self._cached_bytes is not None:
            return self._cached_bytes
        try:
            data = self.template_file.read_bytes()
        except OSError as exc:
            logger.error(f"Template-Datei nicht lesbar: {self.template_file}: {exc}")
            raise TemplateStructureError(f"Template-Datei nicht lesbar: {self.template_file.name}") from exc
        if self.cache_template:
            logger.debug(f"Template {self.template_file.name} im Speicher abgelegt.")
            self._cached_bytes = data
        return data

    def load(self) -> Tuple[Workbook, Worksheet]:
        """
        Gibt ein frisches Workbook und das Zielblatt zurück.

        Raises:
            TemplateStructureError: Wenn die Vorlage nicht lesbar ist oder das Blatt fehlt.
        """
        data = self._template_bytes()
        try:
            wb: Workbook = load_workbook(BytesIO(data))
        except Exception as exc:
            logger.error(f"Fehler beim Laden des Templates {self.template_file.name}: {exc}")
            raise TemplateStructureError(f"Fehler beim Laden des Templates: {exc}") from exc

        if self.sheet_name not in wb.sheetnames:
            logger.error(f"Sheet '{self.sheet_name}' fehlt im Template {self.template_file.name}.")
            raise TemplateStructureError(f"Sheet '{self.sheet_name}' fehlt im Template.")
        return wb, wb[self.sheet_name]
