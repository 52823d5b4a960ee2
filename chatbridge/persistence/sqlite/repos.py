"""Public re-exports for SQLite repository adapters and Unit of Work."""

from .keystore_repo import KeyStoreRepoSqlite
from .settings_repo import SettingsRepoSqlite
from .metrics_repo import MetricsRepoSqlite
from .chatlog_repo import ChatLogRepoSqlite
from .unit_of_work import UnitOfWorkSqlite
from .helpers import _parse_created_at  # re-export for test compatibility

__all__ = [
    "KeyStoreRepoSqlite",
    "SettingsRepoSqlite",
    "MetricsRepoSqlite",
    "ChatLogRepoSqlite",
    "UnitOfWorkSqlite",
    "_parse_created_at",
]
