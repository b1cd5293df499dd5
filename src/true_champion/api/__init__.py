"""HTTP API for True Champion (FastAPI)."""

from .main import MSGSpecResponse, create_app

__all__ = ["MSGSpecResponse", "create_app"]
