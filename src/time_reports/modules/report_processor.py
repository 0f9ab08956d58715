from __future__ import annotations

from loguru import logger
from pydantic import ValidationError

from pydantic_models.data.report_request import ReportRequest
from shared_modules.config import Config
from shared_modules.exceptions import RequestDecodeError
from time_reports.modules.document_encoder import encode_workbook
from time_reports.modules.report_factory import AttendanceReportFactory
from time_reports.modules.template_source import TemplateSource


def decode_request(body: bytes) -> ReportRequest:
    """
    JSON-Body -> ReportRequest.

    Raises:
        RequestDecodeError: Ungültiges JSON oder fehlende/ungültige Felder.
    """
    try:
        return ReportRequest.model_validate_json(body)
    except ValidationError as exc:
        logger.error(f"Ungültige Anfrage: {exc}")
        raise RequestDecodeError(str(exc)) from exc


class ReportProcessor:
    """
    Erzeugt einen Report pro Anfrage: Vorlage laden, Blatt befüllen, als xlsx serialisieren.
    Hält keinen Zustand zwischen Anfragen außer der Konfiguration.
    """

    def __init__(self, config: Config, template_source: TemplateSource | None = None) -> None:
        self.config: Config = config
        templates_cfg = self.config.templates
        self.template_source: TemplateSource = template_source or TemplateSource(
            self.config.template_file,
            templates_cfg.sheet_name,
            cache_template=templates_cfg.cache_template,
        )
        self.report_factory = AttendanceReportFactory(templates_cfg)

    def run(self, request: ReportRequest) -> bytes:
        wb, ws = self.template_source.load()
        self.report_factory.populate(ws, request)
        data = encode_workbook(wb)
        logger.info(
            f"Report erzeugt für {request.office_name} ({request.date_from[:10]} - {request.date_to[:10]}), "
            f"{len(request.items)} Mitarbeitende, {len(data)} Bytes."
        )
        return data
