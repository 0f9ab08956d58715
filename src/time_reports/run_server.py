import os
from pathlib import Path

from loguru import logger
from rich.traceback import install

from shared_modules.config import Config
from time_reports.app import create_app

HOST = "0.0.0.0"
DEFAULT_CONFIG_PATH: Path = Path(__file__).parents[2] / ".config" / "visma_config.yaml"


def main() -> None:
    """
    Einstiegspunkt für den XLSX-Generator.
    Lädt die Config (VISMA_CONFIG oder .config/visma_config.yaml), baut die Flask-App
    und startet den Server auf allen Interfaces.
    """
    install(show_locals=False)

    config_path = Path(os.getenv("VISMA_CONFIG", str(DEFAULT_CONFIG_PATH)))
    config = Config(config_path)
    app = create_app(config)

    port = config.server.port
    logger.info(f"XLSX generator is running on http://{HOST}:{port}...")
    app.run(host=HOST, port=port)


if __name__ == "__main__":
    main()
