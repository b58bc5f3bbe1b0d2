"""FastAPI application serving a game folder over HTTP."""

from .app import create_app
from .settings import ServerSettings

__all__ = ["create_app", "ServerSettings"]
