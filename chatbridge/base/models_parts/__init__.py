"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`chatbridge.base.models_parts` if needed, while `chatbridge.base.models`
remains the primary stable import path.
"""

from .dispatch_options import DispatchOptions
from .message import Message, Role, ROLES
from .model_descriptor import ImageProfile, Modality, ModelDescriptor
from .normalized_response import NormalizedResponse
from .usage import Usage

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
