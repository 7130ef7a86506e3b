from typing import Optional

from fastapi import Request

from .pixup_client import PixupClient
from .settings import PixupSettings, load_pixup_settings

def get_pixup_settings(request: Request) -> PixupSettings:
    """Configuration construite par le lifespan (app.state.pixup_settings)."""
    settings = getattr(request.app.state, "pixup_settings", None)
    if settings is None:
        settings = load_pixup_settings()
        request.app.state.pixup_settings = settings
    return settings

def get_pixup_client(request: Request) -> Optional[PixupClient]:
    """Client PixUp partagé, None hors production sans identifiants."""
    return getattr(request.app.state, "pixup_client", None)
