# This project was developed with assistance from AI tools.
"""Repository selection and module-level singleton."""

import logging

from ..core.config import Settings
from .base import ApplicationTransaction, Collection, HostelRepository
from .memory import InMemoryRepository
from .sql import SqlAlchemyRepository

logger = logging.getLogger(__name__)

__all__ = [
    "ApplicationTransaction",
    "Collection",
    "HostelRepository",
    "InMemoryRepository",
    "SqlAlchemyRepository",
    "get_repository",
    "init_repository",
]

_repository: HostelRepository | None = None


def init_repository(cfg: Settings) -> HostelRepository:
    """Initialise the singleton (called once from app lifespan)."""
    global _repository  # noqa: PLW0603
    if cfg.STORAGE_BACKEND == "sql":
        _repository = SqlAlchemyRepository()
    else:
        _repository = InMemoryRepository()
    logger.info("Repository initialised (backend=%s)", cfg.STORAGE_BACKEND)
    return _repository


def get_repository() -> HostelRepository:
    """Return the initialised repository; FastAPI dependency."""
    if _repository is None:
        raise RuntimeError("Repository not initialised -- call init_repository() first")
    return _repository
