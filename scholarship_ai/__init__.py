"""FastAPI relay that drafts, improves and critiques scholarship letter sections."""

from .main import create_app

__all__ = ["create_app"]
