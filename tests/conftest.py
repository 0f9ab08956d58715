from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import pytest
import yaml
from openpyxl import Workbook

from shared_modules.config import Config

SHEET_NAME = "EG7"
FOOTER_ROW = 12


def make_template_workbook(sheet_name: str = SHEET_NAME) -> Workbook:
    """Nachbau der Visma-Vorlage: Kopfzellen, Tageskopf in Zeile 10, Fusszeile in Zeile 12."""
    wb = Workbook()
    wb.active.title = "Info"
    ws = wb.create_sheet(sheet_name)
    ws["A5"] = "Kontor"
    ws["A6"] = "Månad"
    ws["A8"] = "Period"
    ws["A10"] = "Nr"
    ws["B10"] = "Namn"
    for day in range(1, 32):
        ws.cell(row=10, column=2 + day, value=day)
    ws["A12"] = "Summa"
    ws.merge_cells("A12:B12")
    ws.row_dimensions[FOOTER_ROW].height = 30
    return wb


def sample_request(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "officeName": "Kontor Nord",
        "dateFrom": "2023-05-01T00:00:00Z",
        "dateTo": "2023-05-31T00:00:00Z",
        "items": [
            {"uid": 7, "name": "Alice", "time_offs": {"1": "V", "15": "S"}},
            {"uid": 8, "name": "Bob", "time_offs": {}},
            {"uid": "x9", "name": "Cecilia", "time_offs": {"31": "F"}},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def template_file(tmp_path: Path) -> Path:
    template_dir = tmp_path / "templates"
    template_dir.mkdir()
    target = template_dir / "visma.xlsx"
    make_template_workbook().save(target)
    return target


@pytest.fixture
def write_config(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("PORT", raising=False)

    def _write(templates: Optional[Dict[str, Any]] = None, **sections: Any) -> Path:
        raw: Dict[str, Any] = {
            "logging": {"log_level": "DEBUG"},
            "structure": {"prj_root": str(tmp_path), "template_path": "templates", "output_path": "output"},
            "templates": templates or {},
        }
        raw.update(sections)
        config_dir = tmp_path / ".config"
        config_dir.mkdir(exist_ok=True)
        config_path = config_dir / "visma_config.yaml"
        config_path.write_text(yaml.safe_dump(raw))
        return config_path

    return _write


@pytest.fixture
def config(template_file: Path, write_config) -> Config:
    return Config(write_config())
