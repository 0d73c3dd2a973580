"""SQL persistence: SQLModel tables, engine and transaction management."""

from .async_db import Database, InMemoryTransactionManager, SqlTransactionManager, create_engine
from .models import RefreshTokenRecord, UserRecord

__all__ = [
    "Database",
    "InMemoryTransactionManager",
    "RefreshTokenRecord",
    "SqlTransactionManager",
    "UserRecord",
    "create_engine",
]
