from io import BytesIO

from loguru import logger
from openpyxl.workbook.workbook import Workbook

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def encode_workbook(wb: Workbook) -> bytes:
    """Serialisiert das Workbook vollständig im Speicher als xlsx."""
    buffer = BytesIO()
    wb.save(buffer)
    data = buffer.getvalue()
    logger.debug(f"Workbook serialisiert ({len(data)} Bytes).")
    return data
