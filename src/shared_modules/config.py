import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Type

import yaml
from loguru import logger
from pydantic import BaseModel

from pydantic_models.config.logging_config import LoggingConfig
from pydantic_models.config.server_config import ServerConfig
from pydantic_models.config.structure_config import StructureConfig
from pydantic_models.config.templates_config import TemplatesConfig


class Config:
    """
    Singleton für das Laden und Prüfen der Konfiguration.
    Nutzt statische Pydantic-Modelle für alle Abschnitte.
    Fehlt die YAML-Datei, gelten die Defaultwerte der Modelle.
    Der Port kann über die Umgebungsvariable PORT überschrieben werden.
    """

    _instance: Optional["Config"] = None

    def __new__(cls, config_path: Optional[Path] = None):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None):
        # Fallback-Logger für Fehler beim Laden der Config
        logger.remove()
        logger.add(sys.stderr, level="WARNING")
        self.config_path = config_path
        self._base_dir = Path.cwd()
        try:
            self.raw_config: Dict[str, Any] = self._load_config()
            self.logging = self._parse_section(self.raw_config, "logging", LoggingConfig)
            self._setup_logging()
            logger.debug(f"Lade Konfiguration von {config_path}")
        except Exception as e:
            logger.error(f"Fehler beim Laden der Konfiguration: {e}")
            raise

        self.server = self._parse_section(self.raw_config, "server", ServerConfig)
        self.structure = self._parse_section(self.raw_config, "structure", StructureConfig)
        self.templates = self._parse_section(self.raw_config, "templates", TemplatesConfig)

        self._apply_env_overrides()
        self._validate_structure_and_paths()
        logger.debug("Konfiguration erfolgreich geladen und validiert.")
        self._initialized = True

    def _setup_logging(self) -> None:
        """
        Initialisiert loguru mit den Einstellungen aus der Config-Datei.
        """
        logger.remove()
        log_file = getattr(self.logging, "log_file", None)
        log_level = getattr(self.logging, "log_level", "INFO")
        if log_file:
            logger.add(log_file, level=log_level)
        logger.add(sys.stderr, level=log_level)

    def _load_config(self) -> Dict[str, Any]:
        """
        Lädt die YAML-Konfigurationsdatei. Ohne Datei wird mit Defaults gearbeitet.
        """
        if self.config_path is None or not Path(self.config_path).exists():
            logger.warning(f"Keine Konfigurationsdatei gefunden ({self.config_path}), nutze Defaults.")
            return {}
        # Relative Pfade beziehen sich auf den Ordner über .config/
        self._base_dir = Path(self.config_path).resolve().parent.parent
        with open(self.config_path, "r") as f:
            return yaml.safe_load(f) or {}

    def _parse_section(self, config: Dict[str, Any], section: str, model: Type[BaseModel]) -> Any:
        """
        Parst einen Abschnitt der Config mit dem passenden Pydantic-Modell.
        """
        data = config.get(section) or {}
        logger.debug(f"Parsiere Abschnitt '{section}': {data}")
        return model(**data)

    def _apply_env_overrides(self) -> None:
        port = self.get_env("PORT")
        if port:
            try:
                self.server.port = int(port)
            except ValueError as exc:
                logger.error(f"Ungültiger Port in PORT: {port}")
                raise ValueError(f"Ungültiger Port in PORT: {port}") from exc
        logger.debug(f"Server-Port: {self.server.port}")

    def _validate_structure_and_paths(self) -> None:
        """
        Prüft Projektwurzel und Template. Ein fehlendes Template ist nur eine Warnung,
        da es pro Anfrage neu geladen und dort als Fehler gemeldet wird.
        """
        prj_root = self.project_root
        if not prj_root.exists():
            logger.error(f"Projektwurzel existiert nicht: {prj_root}")
            raise FileNotFoundError(f"Projektwurzel nicht gefunden: {prj_root}")

        if not self.templates.report_template:
            logger.error("templates.report_template ist nicht gesetzt.")
            raise ValueError("templates.report_template ist Pflicht.")

        if not self.template_file.exists():
            logger.warning(f"Report-Template nicht gefunden: {self.template_file}")

    @property
    def project_root(self) -> Path:
        root = Path(self.structure.prj_root).expanduser()
        if not root.is_absolute():
            root = self._base_dir / root
        return root.resolve()

    @property
    def template_dir(self) -> Path:
        return self.project_root / (self.structure.template_path or "templates")

    @property
    def output_dir(self) -> Path:
        return self.project_root / (self.structure.output_path or "output")

    @property
    def template_file(self) -> Path:
        return self.template_dir / self.templates.report_template

    def get_env(self, key: str, default: Any = None) -> Optional[str]:
        """
        Gibt einen Wert aus den Umgebungsvariablen zurück.
        """
        logger.debug(f"Lese '{key}' aus Umgebungsvariablen.")
        return os.getenv(key, default)


if __name__ == "__main__":
    config_path = Path(__file__).parent.parent.parent / ".config" / "visma_config.yaml"
    config = Config(config_path)
    logger.info("Projektwurzel: {}", config.project_root)
