class ReportError(Exception):
    """Basisklasse für alle Fehler bei der Report-Erzeugung."""


class RequestDecodeError(ReportError):
    """Anfrage ist kein gültiges JSON oder Pflichtfelder fehlen."""


class TemplateStructureError(ReportError):
    """Template ist nicht lesbar oder das erwartete Arbeitsblatt fehlt."""


class InvalidDateRange(ReportError):
    """dateFrom/dateTo sind nicht lesbar oder das Ende liegt vor dem Anfang."""
