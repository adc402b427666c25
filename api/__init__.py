"""Backend client for the remote category store."""

from api.client import BackendError, CategoryBackend
from api.factory import get_backend

__all__ = ["BackendError", "CategoryBackend", "get_backend"]
