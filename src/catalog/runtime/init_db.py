"""Database initialization script."""

from src.catalog.core.services.database.db_manage import DbManageService
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import get_config


def init_db(config: ConfigData | None = None, seed: bool | None = None) -> int:
    """Create all database tables and optionally seed sample products.

    Returns the number of seeded rows.
    """
    config = config or get_config()
    db_session_service = DbSessionService(config)
    db_manage_service = DbManageService(db_session_service)
    try:
        db_manage_service.create_all()
        if seed if seed is not None else config.database.seed_sample_data:
            return db_manage_service.seed_sample_data()
        return 0
    finally:
        db_session_service.dispose()


if __name__ == "__main__":
    init_db()
