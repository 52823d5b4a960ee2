"""HTTP utilities package for translators.

Exposes pooled httpx clients and the single-shot JSON POST helper.
"""

from .client import get_httpx_client, close_all_clients
from .invoke import post_json, provider_error_message

__all__ = ["get_httpx_client", "close_all_clients", "post_json", "provider_error_message"]
