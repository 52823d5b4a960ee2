"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``chatbridge.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.gateway_error import GatewayError
from .errors_parts.unsupported_model_error import UnsupportedModelError
from .errors_parts.invalid_request_error import InvalidRequestError
from .errors_parts.provider_not_configured_error import ProviderNotConfiguredError
from .errors_parts.provider_error import ProviderError
from .errors_parts.provider_call_error import ProviderCallError
from .errors_parts.missing_image_data_error import MissingImageDataError
from .errors_parts.decryption_error import DecryptionError
from .errors_parts.classification import classify_exception, classify_status

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
