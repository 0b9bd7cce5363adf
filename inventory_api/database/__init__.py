from inventory_api.database.base import Base
from inventory_api.database.engine import create_db_engine, is_sqlite_memory_url
from inventory_api.database.session import build_session_factory, get_db

__all__ = [
    "Base",
    "build_session_factory",
    "create_db_engine",
    "get_db",
    "is_sqlite_memory_url",
]
