"""OpenAI translators (chat completions and image generation)."""

from .chat_helpers import chat_impl
from .image_helpers import image_impl, map_gpt_image_quality

__all__ = ["chat_impl", "image_impl", "map_gpt_image_quality"]
