"""
ModelDescriptor: immutable description of one logical model id.

A descriptor ties the externally visible ``id`` to the provider that serves
it, the endpoint the translator posts to, the wire-level model name and the
modality that selects the translator. Image descriptors also name the image
parameter profile used to shape the payload.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional


Modality = Literal["text", "image"]
ImageProfile = Literal["dalle3", "dalle2", "gpt_image"]


@dataclass(frozen=True)
class ModelDescriptor:
    """A compiled-in model table entry.

    Attributes:
        id: Logical model identifier; the only identifier callers see.
        provider: Provider key (``"openai"`` or ``"anthropic"``).
        endpoint: Absolute URL the translator posts to.
        wire_model: Model name sent on the wire.
        modality: ``"text"`` or ``"image"``.
        display_name: Human-friendly name for listings.
        image_profile: Image parameter profile, ``None`` for text models.
        extended_timeout: Whether image calls use the extended timeout.
    """

    id: str
    provider: str
    endpoint: str
    wire_model: str
    modality: Modality
    display_name: str
    image_profile: Optional[ImageProfile] = None
    extended_timeout: bool = False

    @property
    def is_image(self) -> bool:
        return self.modality == "image"

    def to_dict(self) -> Dict[str, Any]:
        """Return the listing shape ``{id, name, provider, type}``."""
        return {
            "id": self.id,
            "name": self.display_name,
            "provider": self.provider,
            "type": self.modality,
        }


__all__ = [
    "ImageProfile",
    "Modality",
    "ModelDescriptor",
]
