"""chatbridge package

Unified chat and image-generation gateway over OpenAI and Anthropic.

Purpose:
    Provide a small, stable API for external consumption: a static model
    registry, an encrypted credential store with environment fallback, a
    single ``send`` entry point that normalizes provider responses, and a
    session-aware :class:`ChatService` with SQLite persistence.

Public API (re-exported):
    - Version: ``__version__``
    - Dispatch: :func:`send`, :class:`ChatDispatcher`
    - Registry: :func:`list_models`, :func:`resolve`, :func:`validate`
    - Credentials: :class:`CredentialStore`
    - Services: :class:`ChatService`, :class:`SettingsService`
    - Exceptions: :class:`GatewayError` and its subclasses, :class:`ErrorCode`
"""

from .base import (
    SUPPORTED_PROVIDERS,
    ChatDispatcher,
    CredentialStore,
    DispatchOptions,
    ErrorCode,
    GatewayError,
    InvalidRequestError,
    Message,
    MissingImageDataError,
    NormalizedResponse,
    ProviderCallError,
    ProviderError,
    ProviderNotConfiguredError,
    UnsupportedModelError,
    list_models,
    resolve,
    send,
    validate,
)
from .service.chat_service import ChatService
from .service.report import usage_report
from .service.settings_service import SettingsService

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Dispatch
    "ChatDispatcher",
    "DispatchOptions",
    "Message",
    "NormalizedResponse",
    "send",
    # Registry
    "SUPPORTED_PROVIDERS",
    "list_models",
    "resolve",
    "validate",
    # Credentials and services
    "ChatService",
    "CredentialStore",
    "SettingsService",
    "usage_report",
    # Exceptions
    "ErrorCode",
    "GatewayError",
    "InvalidRequestError",
    "MissingImageDataError",
    "ProviderCallError",
    "ProviderError",
    "ProviderNotConfiguredError",
    "UnsupportedModelError",
]
