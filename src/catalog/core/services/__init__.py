"""Core services exports."""

from .database.db_manage import DbManageService
from .database.db_session import DbSessionService
from .storage.image_storage import ImageStorageService

__all__ = [
    "DbManageService",
    "DbSessionService",
    "ImageStorageService",
]
