"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `chatbridge.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .gateway_error import GatewayError
from .unsupported_model_error import UnsupportedModelError
from .invalid_request_error import InvalidRequestError
from .provider_not_configured_error import ProviderNotConfiguredError
from .provider_error import ProviderError
from .provider_call_error import ProviderCallError
from .missing_image_data_error import MissingImageDataError
from .decryption_error import DecryptionError
from .classification import classify_exception, classify_status

__all__ = [
    "ErrorCode",
    "GatewayError",
    "UnsupportedModelError",
    "InvalidRequestError",
    "ProviderNotConfiguredError",
    "ProviderError",
    "ProviderCallError",
    "MissingImageDataError",
    "DecryptionError",
    "classify_exception",
    "classify_status",
]
