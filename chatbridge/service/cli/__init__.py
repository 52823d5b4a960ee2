"""chatbridge CLI (package entrypoint).

This package wires argument parsing to action handlers kept in small, focused
modules. It performs no provider logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import json
import sys
from typing import Any, Optional

from ...base.errors import GatewayError
from ...persistence.sqlite import get_uow
from .cli_actions import HANDLERS, NO_DB_COMMANDS
from .cli_parser import build_parser


def _emit(obj: Any, stream=None) -> None:
    print(json.dumps(obj, indent=2, ensure_ascii=False, default=str), file=stream or sys.stdout)


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, 1 on a normalized error).
    """
    args = build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
    handler = HANDLERS[args.cmd]
    uow = None if args.cmd in NO_DB_COMMANDS else get_uow(args.db)
    try:
        result = handler(args, uow)
    except GatewayError as exc:
        _emit(exc.to_dict(), sys.stderr)
        return 1
    finally:
        if uow is not None:
            uow.close()
    _emit(result)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
