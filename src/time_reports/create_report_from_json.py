import argparse
import os
from pathlib import Path
from typing import List, Optional

from loguru import logger

from pydantic_models.data.report_request import ReportRequest
from shared_modules.config import Config
from shared_modules.utils import ensure_dir
from time_reports.modules.report_processor import ReportProcessor, decode_request
from time_reports.run_server import DEFAULT_CONFIG_PATH


def report_filename(report_request: ReportRequest) -> str:
    """'Kontor Nord', '2023-05-01' -> 'Kontor Nord_2023-05.xlsx'"""
    office = "".join(ch for ch in report_request.office_name if ch not in '\\/:*?"<>|').strip() or "report"
    return f"{office}_{report_request.date_from[:7]}.xlsx"


def run(argv: Optional[List[str]] = None) -> Path:
    """
    Erzeugt einen Report aus einer JSON-Datei (gleiches Format wie POST /generate)
    und legt ihn im Ausgabeverzeichnis ab.
    """
    parser = argparse.ArgumentParser(description="Visma-Anwesenheitsreport aus JSON erzeugen.")
    parser.add_argument("request_file", type=Path, help="JSON-Datei mit officeName, dateFrom, dateTo, items")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Zielverzeichnis (Default: structure.output_path)")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Pfad zur YAML-Konfiguration")
    args = parser.parse_args(argv)

    config_path = args.config or Path(os.getenv("VISMA_CONFIG", str(DEFAULT_CONFIG_PATH)))
    config = Config(config_path)

    report_request = decode_request(args.request_file.read_bytes())
    data = ReportProcessor(config).run(report_request)

    target_dir = ensure_dir(args.output or config.output_dir)
    target_file = target_dir / report_filename(report_request)
    target_file.write_bytes(data)
    logger.info(f"Report gespeichert: {target_file}")
    return target_file


def main(argv: Optional[List[str]] = None) -> None:
    run(argv)


if __name__ == "__main__":
    main()
