from typing import Optional
from pydantic import BaseModel

class StructureConfig(BaseModel):
    """
    Modell für die Struktur-Konfiguration des Projekts.

    Attribute:
        prj_root (str): Wurzelverzeichnis des Projekts (Standard: aktuelles Verzeichnis).
        template_path (Optional[str]): Pfad zum Template-Verzeichnis (Standard: "templates").
        output_path (Optional[str]): Pfad zum Ausgabeverzeichnis für die CLI (Standard: "output").
    """
    prj_root: str = "."
    template_path: Optional[str] = "templates"
    output_path: Optional[str] = "output"
