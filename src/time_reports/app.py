from __future__ import annotations

from typing import Optional

from flask import Flask, Response, jsonify, request
from loguru import logger
from werkzeug.exceptions import NotFound

from shared_modules.config import Config
from shared_modules.exceptions import ReportError
from time_reports.modules.document_encoder import XLSX_MIMETYPE
from time_reports.modules.report_processor import ReportProcessor, decode_request

GENERATE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def error_response(message: str) -> Response:
    response = jsonify({"error": message})
    response.status_code = 500
    return response


def not_found(_exc: Exception) -> Response:
    return Response("Not Found", status=404, mimetype="text/plain")


def create_app(config: Config, processor: Optional[ReportProcessor] = None) -> Flask:
    """
    Flask-App mit genau einer Route: /generate, unabhängig von der HTTP-Methode.
    Andere Pfade liefern 404 "Not Found" als text/plain.
    """
    app = Flask(__name__)
    report_processor = processor or ReportProcessor(config)

    @app.route("/generate", methods=GENERATE_METHODS, provide_automatic_options=False)
    def generate():
        try:
            report_request = decode_request(request.get_data())
            logger.debug(f"Anfrage für '{report_request.office_name}' mit {len(report_request.items)} Zeilen")
            data = report_processor.run(report_request)
        except ReportError as exc:
            logger.error(f"Report konnte nicht erzeugt werden: {exc}")
            return error_response(str(exc))
        except Exception as exc:
            logger.exception(f"Unerwarteter Fehler bei der Report-Erzeugung: {exc}")
            return error_response(str(exc))
        return Response(data, status=200, mimetype=XLSX_MIMETYPE)

    app.register_error_handler(NotFound, not_found)
    return app
