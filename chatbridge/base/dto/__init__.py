"""DTO validation package."""

from .chat import ChatOptionsDTO
from .credentials import API_KEY_PATTERN, ApiKeyDTO
from .settings import SETTING_KEY_PATTERN, SettingDTO

__all__ = [
    "ChatOptionsDTO",
    "API_KEY_PATTERN",
    "ApiKeyDTO",
    "SETTING_KEY_PATTERN",
    "SettingDTO",
]
