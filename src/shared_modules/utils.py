import math
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from .exceptions import InvalidDateRange

# Monatsnamen der Vorlage (Schwedisch), Januar = Index 0
MONTH_NAMES: tuple[str, ...] = (
    "Januari", "Februari", "Mars", "April", "Maj", "Juni",
    "Juli", "Augusti", "September", "Oktober", "November", "December",
)

SECONDS_PER_DAY = 24 * 3600


def ensure_dir(path: Path) -> Path:
    """Erzeugt ein Verzeichnis (rekursiv), falls es fehlt, und gibt den Pfad zurück."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def parse_iso_datetime(value: str) -> datetime:
    """
    Liest ein ISO-8601-Datum ("2023-05-01" oder "2023-05-01T00:00:00Z").
    Angaben ohne Zeitzone gelten als UTC.

    Raises:
        InvalidDateRange: Wenn der Text kein ISO-Datum ist.
    """
    text = (value or "").strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        logger.error(f"Ungültiges Datum: {value!r}")
        raise InvalidDateRange(f"Ungültiges Datum: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def inclusive_day_count(date_from: datetime, date_to: datetime) -> int:
    """
    Anzahl Tage zwischen zwei Daten inklusive beider Grenzen:
    floor((date_to - date_from) in Tagen) + 1.
    """
    if date_to < date_from:
        logger.error(f"Enddatum {date_to.isoformat()} liegt vor Startdatum {date_from.isoformat()}")
        raise InvalidDateRange(
            f"dateTo ({date_to.isoformat()}) liegt vor dateFrom ({date_from.isoformat()})"
        )
    return math.floor((date_to - date_from).total_seconds() / SECONDS_PER_DAY) + 1


def month_name(moment: datetime) -> str:
    return MONTH_NAMES[moment.month - 1]


def date_range_text(date_from: str, date_to: str) -> str:
    """'2023-05-01T00:00:00Z', '2023-05-31T00:00:00Z' -> '2023-05-01 - 2023-05-31'"""
    return f"{date_from[:10]} - {date_to[:10]}"

