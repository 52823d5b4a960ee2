"""Persistence interfaces package.

Defines repository protocols and shared DTOs for credentials, settings,
metrics and chat logs, plus a Unit of Work abstraction. Concrete
implementations live under the SQLite adapter package.
"""

from .repos import (  # noqa: F401
    ChatLog,
    IChatLogRepo,
    IKeyStoreRepo,
    IMetricsRepo,
    ISettingsRepo,
    IUnitOfWork,
    MetricEntry,
    Setting,
    StoredCredential,
)
