"""
Infrastructure: database engine and session management.
"""

from accommodation_shared.infrastructure.db import (
    get_engine,
    get_session_factory,
    create_session_factory,
    enable_sqlite_foreign_keys,
    get_db,
    get_db_context,
    safe_commit,
    init_db,
)

__all__ = [
    "get_engine",
    "get_session_factory",
    "create_session_factory",
    "enable_sqlite_foreign_keys",
    "get_db",
    "get_db_context",
    "safe_commit",
    "init_db",
]
