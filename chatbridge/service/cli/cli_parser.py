"""CLI parser construction for the ``chatbridge`` command.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` to keep files small and testable.
"""

from __future__ import annotations

import argparse

from ...base.registry import SUPPORTED_PROVIDERS


def _add_keys(sub: "argparse._SubParsersAction") -> None:
    p_keys = sub.add_parser("keys", help="Manage encrypted provider API keys")
    keys_sub = p_keys.add_subparsers(dest="keys_cmd", required=True)
    p_set = keys_sub.add_parser("set", help="Encrypt and store a provider key")
    p_set.add_argument("provider", choices=SUPPORTED_PROVIDERS)
    p_set.add_argument("key", nargs="?", default=None, help="Key text; read from stdin when omitted")
    keys_sub.add_parser("status", help="Show which providers have a stored key")
    p_del = keys_sub.add_parser("delete", help="Remove a stored key")
    p_del.add_argument("provider", choices=SUPPORTED_PROVIDERS)


def _add_settings(sub: "argparse._SubParsersAction") -> None:
    p_settings = sub.add_parser("settings", help="Read and write key/value settings")
    s_sub = p_settings.add_subparsers(dest="settings_cmd", required=True)
    p_get = s_sub.add_parser("get")
    p_get.add_argument("key")
    p_set = s_sub.add_parser("set")
    p_set.add_argument("key")
    p_set.add_argument("value")
    s_sub.add_parser("list")
    p_del = s_sub.add_parser("delete")
    p_del.add_argument("key")


def _add_sessions(sub: "argparse._SubParsersAction") -> None:
    p_sessions = sub.add_parser("sessions", help="Inspect stored conversations")
    ss_sub = p_sessions.add_subparsers(dest="sessions_cmd", required=True)
    p_list = ss_sub.add_parser("list")
    p_list.add_argument("--limit", type=int, default=50)
    p_show = ss_sub.add_parser("show")
    p_show.add_argument("session_id")
    p_del = ss_sub.add_parser("delete")
    p_del.add_argument("session_id")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser. No I/O or network calls occur here.
    """
    p = argparse.ArgumentParser(prog="chatbridge", description="Chat with OpenAI and Anthropic models")
    p.add_argument("--db", default=None, help="SQLite database path (defaults to CHATBRIDGE_DB_PATH)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_models = sub.add_parser("models", help="List supported models")
    p_models.add_argument("--provider", choices=SUPPORTED_PROVIDERS, default=None)

    _add_keys(sub)
    _add_settings(sub)

    p_chat = sub.add_parser("chat", help="Send one message (or image prompt)")
    p_chat.add_argument("--model", required=True)
    p_chat.add_argument("--prompt", required=True)
    p_chat.add_argument("--session", default=None, help="Continue an existing session id")
    p_chat.add_argument("--temperature", type=float, default=None)
    p_chat.add_argument("--max-tokens", dest="max_tokens", type=int, default=None)
    p_chat.add_argument("--image-size", dest="image_size", default=None)
    p_chat.add_argument("--image-quality", dest="image_quality", default=None)
    p_chat.add_argument("--image-style", dest="image_style", default=None)

    _add_sessions(sub)

    p_report = sub.add_parser("report", help="Usage analytics")
    p_report.add_argument("--process", action="store_true", help="Include in-process counters")

    sub.add_parser("check-env", help="Report missing or weak configuration")
    return p


__all__ = ["build_parser"]
