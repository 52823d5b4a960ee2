"""Optional knobs accepted by a dispatch."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class DispatchOptions:
    """Per-request options.

    ``None`` means "use the default": temperature 0.7, the provider's
    ``max_tokens`` default, the configured image size and the image profile's
    quality/style defaults. Zero is a real value and is sent as-is.
    """

    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    image_size: Optional[str] = None
    image_quality: Optional[str] = None
    image_style: Optional[str] = None

    @classmethod
    def coerce(cls, value: Any) -> "DispatchOptions":
        """Accept ``None``, an instance, or a mapping of option names."""
        if value is None:
            return cls()
        if isinstance(value, DispatchOptions):
            return value
        if isinstance(value, Mapping):
            names = {f.name for f in fields(cls)}
            return cls(**{k: v for k, v in value.items() if k in names})
        raise TypeError(f"unsupported options type: {type(value).__name__}")

    def with_defaults(self, defaults: "DispatchOptions") -> "DispatchOptions":
        """Return a copy where unset fields take the value from ``defaults``."""
        updates = {
            f.name: getattr(defaults, f.name)
            for f in fields(self)
            if getattr(self, f.name) is None and getattr(defaults, f.name) is not None
        }
        return replace(self, **updates) if updates else self


__all__ = ["DispatchOptions"]
