"""Anthropic translator (messages API)."""

from .chat_helpers import chat_impl

__all__ = ["chat_impl"]
