"""vault-chat CLI (package entrypoint).

Wires argument parsing to the action handlers in ``cli_actions``; it
performs no provider logic directly.
"""

from __future__ import annotations

import json
import sys
from typing import Optional

from pydantic import ValidationError

from ...base.logging import configure_logger
from ...config.settings import build_registry
from .cli_actions import HANDLERS, resolve_settings
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    args = build_parser().parse_args(argv)
    if args.log_level:
        configure_logger(level=args.log_level)
    try:
        settings = resolve_settings(args.settings)
    except ValidationError as e:
        print(json.dumps({"error": "invalid settings", "details": e.errors(include_url=False)}, default=str), file=sys.stderr)
        return 2
    registry = build_registry(settings)
    return HANDLERS[args.cmd](args, settings, registry)


__all__ = ["main", "build_parser"]


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
