"""Token usage reported by a text completion."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional


def _count(usage: Mapping[str, Any], field: str) -> Optional[int]:
    """Return a token count, dropping anything that is not a plain int."""
    value = usage.get(field)
    return value if isinstance(value, int) and not isinstance(value, bool) else None


@dataclass(frozen=True)
class Usage:
    """Normalized token usage.

    OpenAI reports ``prompt_tokens``/``completion_tokens``/``total_tokens``;
    Anthropic reports ``input_tokens``/``output_tokens``. Both map onto the
    same three fields; ``total_tokens`` is derived when the provider omits it.
    """

    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    @classmethod
    def from_openai(cls, usage: Optional[Mapping[str, Any]]) -> Optional["Usage"]:
        if not isinstance(usage, Mapping):
            return None
        prompt = _count(usage, "prompt_tokens")
        completion = _count(usage, "completion_tokens")
        total = _count(usage, "total_tokens")
        if total is None and prompt is not None and completion is not None:
            total = prompt + completion
        return cls(prompt_tokens=prompt, completion_tokens=completion, total_tokens=total)

    @classmethod
    def from_anthropic(cls, usage: Optional[Mapping[str, Any]]) -> Optional["Usage"]:
        if not isinstance(usage, Mapping):
            return None
        prompt = _count(usage, "input_tokens")
        completion = _count(usage, "output_tokens")
        total = prompt + completion if prompt is not None and completion is not None else None
        return cls(prompt_tokens=prompt, completion_tokens=completion, total_tokens=total)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["Usage"]
