"""Generic key/value settings backed by the ``settings`` table.

Keys are validated with :class:`~chatbridge.base.dto.SettingDTO`; values are
stored as text. A handful of well-known keys double as dispatch defaults:
``temperature``, ``max_tokens``, ``image_size``, ``image_quality`` and
``image_style``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from ..base.dto import ChatOptionsDTO, SettingDTO
from ..base.errors import InvalidRequestError
from ..base.logging import get_logger, log_event
from ..base.models import DispatchOptions
from ..persistence.interfaces.repos import IUnitOfWork
from ..persistence.sqlite import get_uow

DISPATCH_SETTING_KEYS = ("temperature", "max_tokens", "image_size", "image_quality", "image_style")


def _validated(key: str, value: Any) -> SettingDTO:
    try:
        return SettingDTO(key=key, value=value)
    except ValidationError:
        raise InvalidRequestError(
            "Setting keys must be 1-100 characters of letters, digits, '_' or '-'",
            operation="settings",
        ) from None


class SettingsService:
    """CRUD over settings plus dispatch-default extraction."""

    def __init__(self, uow: Optional[IUnitOfWork] = None) -> None:
        self._uow = uow if uow is not None else get_uow()
        self._logger = get_logger("settings")

    def get(self, key: str) -> Optional[str]:
        with self._uow as uow:
            return uow.settings.get(key)

    def get_all(self) -> Dict[str, str]:
        with self._uow as uow:
            return uow.settings.get_all()

    def set(self, key: str, value: Any) -> None:
        dto = _validated(key, value)
        with self._uow as uow:
            uow.settings.set(dto.key, dto.value)

    def set_many(self, values: Mapping[str, Any]) -> None:
        """Write every pair in one transaction; nothing is written if any key is invalid."""
        dtos = [_validated(k, v) for k, v in values.items()]
        with self._uow as uow:
            for dto in dtos:
                uow.settings.set(dto.key, dto.value)

    def delete(self, key: str) -> Dict[str, bool]:
        with self._uow as uow:
            return {"removed": uow.settings.delete(key)}

    def dispatch_defaults(self) -> DispatchOptions:
        """Return dispatch options derived from stored settings.

        Values that do not parse or fall outside the accepted ranges are
        ignored (logged at WARNING) so a bad setting never blocks chatting.
        """
        stored = self.get_all()
        options = DispatchOptions()
        for key in DISPATCH_SETTING_KEYS:
            raw = stored.get(key)
            if raw is None or raw == "":
                continue
            try:
                parsed = ChatOptionsDTO.model_validate({key: raw})
            except ValidationError:
                log_event(self._logger, "settings.ignored", level=logging.WARNING, key=key)
                continue
            options = options.with_defaults(DispatchOptions(**{key: getattr(parsed, key)}))
        return options


__all__ = ["DISPATCH_SETTING_KEYS", "SettingsService"]
