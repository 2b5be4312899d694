"""🌐 HTTP-шар (FastAPI)."""

from .main import create_app, run

__all__ = ["create_app", "run"]
