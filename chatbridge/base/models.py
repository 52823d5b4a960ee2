"""
Provider-agnostic domain models public surface.

This module re-exports the one-class-per-file implementations under
``chatbridge.base.models_parts``.
"""

from .models_parts.dispatch_options import DispatchOptions
from .models_parts.message import Message, Role, ROLES
from .models_parts.model_descriptor import ImageProfile, Modality, ModelDescriptor
from .models_parts.normalized_response import NormalizedResponse
from .models_parts.usage import Usage

__all__ = [
    "DispatchOptions",
    "ImageProfile",
    "Message",
    "Modality",
    "ModelDescriptor",
    "NormalizedResponse",
    "ROLES",
    "Role",
    "Usage",
]
