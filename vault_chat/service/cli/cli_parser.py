"""CLI parser construction for vault-chat.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions`` to keep files small and testable.
"""

from __future__ import annotations

import argparse

from ...base.factory import ProviderFactory


def _str2bool(v: str | None) -> bool:
    """Best-effort conversion of common truthy/falsey strings to bool.

    When ``None`` (flag given without a value) this returns ``True``.
    """
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else bool(val)


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--stream``/``--no-stream`` flags to a parser.

    ``--stream`` accepts an optional boolean (``--stream``, ``--stream false``)
    and defaults to ``True``; ``--no-stream`` is the explicit negation.
    """
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, default=True)
    grp.add_argument("--no-stream", dest="stream", action="store_false")


def _add_provider_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--provider",
        choices=ProviderFactory.supported(),
        default=None,
        help="Provider id (defaults to the active provider in settings)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    No I/O or network calls occur here.
    """
    p = argparse.ArgumentParser(prog="vault-chat", description="Multi-provider chat client for a notes vault")
    p.add_argument("--settings", default=None, help="JSON or YAML plugin settings file")
    p.add_argument("--log-level", default=None, help="Log level for the providers logger")
    sub = p.add_subparsers(dest="cmd", required=True)

    # providers
    p_prov = sub.add_parser("providers", help="List providers registered from the settings")
    p_prov.add_argument("--all", action="store_true", help="List every supported provider id")

    # validate
    p_val = sub.add_parser("validate", help="Check connectivity and credentials")
    _add_provider_arg(p_val)

    # models
    p_models = sub.add_parser("models", help="List models offered by a provider")
    _add_provider_arg(p_models)

    # chat
    p_chat = sub.add_parser("chat", help="Send one prompt and print the reply")
    _add_provider_arg(p_chat)
    p_chat.add_argument("prompt", help="User prompt text")
    p_chat.add_argument("--model", default=None)
    add_stream_flags(p_chat)
    p_chat.add_argument("--retries", type=int, default=0, help="Retries for transient failures")
    p_chat.add_argument("--vault", default=None, help="Vault directory used to save the transcript")
    p_chat.add_argument("--save", action="store_true", help="Save the transcript into the chat folder")

    return p


__all__ = ["build_parser", "add_stream_flags"]
