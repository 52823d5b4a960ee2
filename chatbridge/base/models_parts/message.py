"""
Message DTO used across translators.

Defines the `Message` dataclass and the `Role` literal representing the sender
role. Content is always plain text; images produced by image models are carried
back as URLs or data-URLs in the normalized response, never as message parts.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Mapping, Union, get_args


# Message roles accepted by the dispatcher.
Role = Literal["system", "user", "assistant"]
ROLES = frozenset(get_args(Role))


@dataclass(frozen=True)
class Message:
    """A chat message in provider-agnostic form.

    Attributes:
        role: The role of the message author (``"system"``, ``"user"`` or
            ``"assistant"``).
        content: Plain text content. For image models the trailing user
            message is the image prompt.
    """

    role: Role
    content: str

    @classmethod
    def coerce(cls, value: Union["Message", Mapping[str, Any]]) -> "Message":
        """Return ``value`` as a `Message`, accepting ``{"role", "content"}`` mappings."""
        if isinstance(value, Message):
            return value
        return cls(role=value["role"], content=value["content"])

    def to_dict(self) -> Dict[str, str]:
        """Return the ``{"role", "content"}`` wire shape shared by both providers."""
        return {"role": self.role, "content": self.content}


__all__ = [
    "Message",
    "Role",
    "ROLES",
]
