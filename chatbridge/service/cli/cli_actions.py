"""CLI action handlers.

Purpose
-------
One handler per subcommand. Each receives the parsed ``argparse.Namespace``
and a Unit of Work, and returns a JSON-serializable result; ``main`` prints
it. Handlers have no top-level side effects and are safe to import in tests.

Error Semantics
---------------
Handlers raise :class:`~chatbridge.base.errors.GatewayError` subclasses;
``main`` renders them as JSON on stderr with a non-zero exit code.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Callable, Dict

from ...base.credentials import CredentialStore
from ...base.errors import InvalidRequestError
from ...base.registry import iter_models
from ...config.env import validate_environment
from ...persistence.interfaces.repos import IUnitOfWork
from ..chat_service import ChatService
from ..report import usage_report
from ..settings_service import SettingsService

Handler = Callable[[argparse.Namespace, IUnitOfWork], Any]


def handle_models(args: argparse.Namespace, uow: IUnitOfWork) -> Any:
    return [d.to_dict() for d in iter_models(args.provider)]


def handle_keys(args: argparse.Namespace, uow: IUnitOfWork) -> Any:
    """``keys set|status|delete``; key text never appears in the output."""
    store = CredentialStore(uow)
    if args.keys_cmd == "set":
        key = args.key if args.key is not None else sys.stdin.readline().rstrip("\r\n")
        store.set_key(args.provider, key)
        return {"provider": args.provider, "stored": True}
    if args.keys_cmd == "delete":
        return {"provider": args.provider, **store.delete_key(args.provider)}
    return store.list_keys()


def handle_settings(args: argparse.Namespace, uow: IUnitOfWork) -> Any:
    settings = SettingsService(uow)
    if args.settings_cmd == "get":
        value = settings.get(args.key)
        if value is None:
            raise InvalidRequestError(f"Setting not found: {args.key}", operation="settings")
        return {args.key: value}
    if args.settings_cmd == "set":
        settings.set(args.key, args.value)
        return {args.key: args.value}
    if args.settings_cmd == "delete":
        return settings.delete(args.key)
    return settings.get_all()


def handle_chat(args: argparse.Namespace, uow: IUnitOfWork) -> Any:
    service = ChatService(uow)
    return service.chat(
        args.model,
        args.prompt,
        session_id=args.session,
        temperature=args.temperature,
        max_tokens=args.max_tokens,
        image_size=args.image_size,
        image_quality=args.image_quality,
        image_style=args.image_style,
    )


def handle_sessions(args: argparse.Namespace, uow: IUnitOfWork) -> Any:
    service = ChatService(uow)
    if args.sessions_cmd == "show":
        return service.session_messages(args.session_id)
    if args.sessions_cmd == "delete":
        return service.delete_session(args.session_id)
    return service.list_sessions(args.limit)


def handle_report(args: argparse.Namespace, uow: IUnitOfWork) -> Any:
    return usage_report(uow, include_process=args.process)


def handle_check_env(args: argparse.Namespace, uow: IUnitOfWork) -> Any:
    findings = validate_environment()
    return {"ok": not findings, "findings": findings}


HANDLERS: Dict[str, Handler] = {
    "models": handle_models,
    "keys": handle_keys,
    "settings": handle_settings,
    "chat": handle_chat,
    "sessions": handle_sessions,
    "report": handle_report,
    "check-env": handle_check_env,
}

# Commands that never touch the database.
NO_DB_COMMANDS = frozenset({"models", "check-env"})


__all__ = [
    "HANDLERS",
    "NO_DB_COMMANDS",
    "handle_chat",
    "handle_check_env",
    "handle_keys",
    "handle_models",
    "handle_report",
    "handle_sessions",
    "handle_settings",
]
