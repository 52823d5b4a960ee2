"""
NormalizedResponse: the single result shape of every dispatch.

``content`` is always populated: completion text for text models, a URL or a
``data:image/png;base64,`` data-URL for image models. Raw provider payloads
are never attached.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

from .usage import Usage


@dataclass(frozen=True)
class NormalizedResponse:
    """Provider-agnostic response of a text or image dispatch.

    Attributes:
        content: Completion text, image URL or image data-URL.
        type: ``"text"`` or ``"image"``.
        model: Logical model id that was requested.
        provider: Provider that served the request.
        usage: Token usage for text responses when reported.
        revised_prompt: Prompt as rewritten by the image provider, if any.
        prompt: Original image prompt (image responses only).
    """

    content: str
    type: Literal["text", "image"]
    model: str
    provider: str
    usage: Optional[Usage] = None
    revised_prompt: Optional[str] = None
    prompt: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary.

        Text responses omit the image-only keys; image responses always carry
        ``revised_prompt`` (possibly ``None``).
        """
        out: Dict[str, Any] = {
            "content": self.content,
            "type": self.type,
            "model": self.model,
            "provider": self.provider,
        }
        if self.usage is not None:
            out["usage"] = self.usage.to_dict()
        if self.type == "image":
            out["revised_prompt"] = self.revised_prompt
            out["prompt"] = self.prompt
        return out


__all__ = ["NormalizedResponse"]
