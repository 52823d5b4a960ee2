"""
chatbridge Base Package

Exports the provider-agnostic core: models (DTOs), the static model registry,
the credential store, the dispatch facade, the error taxonomy and timeouts.

Layering:
- Models (DTOs): serialization-friendly request/response objects
- Registry: immutable model id -> descriptor table
- Credentials: encrypted key storage with environment fallback
- Dispatch: modality-keyed translator selection, one call per request
"""

from .credentials import CredentialStore, KeyResolution
from .dispatch import ChatDispatcher, get_dispatcher, send
from .errors import (
    ErrorCode,
    GatewayError,
    InvalidRequestError,
    MissingImageDataError,
    ProviderCallError,
    ProviderError,
    ProviderNotConfiguredError,
    UnsupportedModelError,
    classify_exception,
)
from .models import (
    DispatchOptions,
    Message,
    ModelDescriptor,
    NormalizedResponse,
    Role,
    Usage,
)
from .registry import (
    SUPPORTED_PROVIDERS,
    display_name,
    is_image_model,
    list_models,
    model_type,
    resolve,
    validate,
)
from .timeouts import TimeoutConfig, get_timeout_config, timeout_for

__all__ = [
    # Models
    "DispatchOptions",
    "Message",
    "ModelDescriptor",
    "NormalizedResponse",
    "Role",
    "Usage",
    # Registry
    "SUPPORTED_PROVIDERS",
    "display_name",
    "is_image_model",
    "list_models",
    "model_type",
    "resolve",
    "validate",
    # Credentials
    "CredentialStore",
    "KeyResolution",
    # Dispatch
    "ChatDispatcher",
    "get_dispatcher",
    "send",
    # Errors
    "ErrorCode",
    "GatewayError",
    "InvalidRequestError",
    "MissingImageDataError",
    "ProviderCallError",
    "ProviderError",
    "ProviderNotConfiguredError",
    "UnsupportedModelError",
    "classify_exception",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
    "timeout_for",
]
