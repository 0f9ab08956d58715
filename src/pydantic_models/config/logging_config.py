from typing import Optional
from pydantic import BaseModel

class LoggingConfig(BaseModel):
    log_file: Optional[str] = None              # nur stderr, wenn leer
    log_level: Optional[str] = "INFO"           # Defaultwert
