from pydantic import BaseModel, Field

class ServerConfig(BaseModel):
    """
    Modell für den HTTP-Server. Gebunden wird immer an alle Interfaces.

    Attribute:
        port (int): Port (Standard: 4999, überschreibbar per Umgebungsvariable PORT).
    """
    port: int = Field(default=4999, ge=1, le=65535)
