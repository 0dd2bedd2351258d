"""CLI action handlers.

Purpose
-------
Subcommand handlers for ``vault-chat``. Each handler takes the parsed
``argparse.Namespace`` and returns a process exit code; results go to stdout
(JSON for listings, plain text for chat replies) and errors are printed as
JSON to stderr.

Settings
--------
Settings come from the ``--settings`` file; credentials left empty there are
filled from the provider config layer (``.env``, env vars, config file).
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, Optional

from ...base.errors import ProviderError
from ...base.interfaces import LLMProvider
from ...base.logging import LogContext, get_logger, normalized_log_event
from ...base.registry import ProviderRegistry
from ...base.resilience.retry import RetryConfig, retry
from ...config import get_provider_config
from ...config.defaults import (
    GOOGLE_AI_ID,
    MINIMAX_ID,
    OLLAMA_ID,
    OPENAI_COMPATIBLE_ID,
    OPENROUTER_ID,
    PROVIDER_NAMES,
)
from ...config.settings import PluginSettings, load_settings
from ...storage import ChatPersistence, FileSystemNoteStorage
from ..chat_session import ChatSession, ChatTurn

# settings field -> (provider id, provider config key)
_CONFIG_FALLBACKS = {
    "openrouter_api_key": (OPENROUTER_ID, "api_key"),
    "google_api_key": (GOOGLE_AI_ID, "api_key"),
    "ollama_url": (OLLAMA_ID, "base_url"),
    "minimax_api_key": (MINIMAX_ID, "api_key"),
    "minimax_region": (MINIMAX_ID, "region"),
    "custom_api_url": (OPENAI_COMPATIBLE_ID, "base_url"),
    "custom_api_key": (OPENAI_COMPATIBLE_ID, "api_key"),
    "custom_model": (OPENAI_COMPATIBLE_ID, "model"),
}


class _EchoedFailure(Exception):
    """A provider failure after part of a streamed reply was printed."""

    def __init__(self, error: ProviderError) -> None:
        super().__init__(error.message)
        self.error = error


def _error(payload: Dict[str, Any], code: int = 1) -> int:
    print(json.dumps(payload), file=sys.stderr)
    return code


def resolve_settings(path: Optional[str], **overrides: Any) -> PluginSettings:
    """Load settings and fill unset credentials from the provider config."""
    settings = load_settings(path, **overrides)
    updates: Dict[str, Any] = {}
    fields_set = settings.model_fields_set
    for field_name, (provider, key) in _CONFIG_FALLBACKS.items():
        if field_name in fields_set and getattr(settings, field_name):
            continue
        value = get_provider_config(provider).get(key)
        if value:
            updates[field_name] = value
    return settings.model_copy(update=updates) if updates else settings


def _provider_for(args: argparse.Namespace, settings: PluginSettings, registry: ProviderRegistry) -> Optional[LLMProvider]:
    return registry.get(args.provider or settings.provider)


def handle_providers(args: argparse.Namespace, settings: PluginSettings, registry: ProviderRegistry) -> int:
    ids = list(PROVIDER_NAMES) if args.all else registry.ids()
    rows = [
        {"id": pid, "name": PROVIDER_NAMES[pid], "registered": pid in registry, "active": pid == settings.provider}
        for pid in ids
    ]
    print(json.dumps(rows))
    return 0


def handle_validate(args: argparse.Namespace, settings: PluginSettings, registry: ProviderRegistry) -> int:
    provider = _provider_for(args, settings, registry)
    if provider is None:
        return _error({"error": f"provider '{args.provider or settings.provider}' is not configured"}, 2)
    result = provider.validate()
    print(json.dumps({"provider": provider.provider_id, **result.to_dict()}))
    return 0 if result.valid else 1


def handle_models(args: argparse.Namespace, settings: PluginSettings, registry: ProviderRegistry) -> int:
    provider = _provider_for(args, settings, registry)
    if provider is None:
        return _error({"error": f"provider '{args.provider or settings.provider}' is not configured"}, 2)
    print(json.dumps([m.to_dict() for m in provider.list_models()]))
    return 0


def handle_chat(args: argparse.Namespace, settings: PluginSettings, registry: ProviderRegistry) -> int:
    """Send ``args.prompt`` through a ``ChatSession`` and print the reply.

    Streaming tokens are echoed as they arrive. ``--retries`` wraps the whole
    turn with the caller-side retry policy; once any token was echoed the
    failure is reported instead of retried.
    """
    provider = _provider_for(args, settings, registry)
    if provider is None:
        return _error({"error": f"provider '{args.provider or settings.provider}' is not configured"}, 2)
    if args.provider:
        settings = settings.model_copy(update={"provider": args.provider})
    if args.model:
        settings = settings.model_copy(update={"selected_model": args.model})

    persistence = None
    if args.save:
        if not args.vault:
            return _error({"error": "--vault is required with --save"}, 2)
        persistence = ChatPersistence(FileSystemNoteStorage(args.vault), settings.chat_folder)

    session = ChatSession(provider, settings, persistence=persistence)
    logger = get_logger("providers.cli")
    ctx = LogContext(provider=provider.provider_id, model=settings.selected_model or None)
    normalized_log_event(logger, "cli.start", ctx, phase="start", attempt=1)

    echoed = []

    def _echo(fragment: str) -> None:
        if fragment:
            echoed.append(fragment)
        sys.stdout.write(fragment)
        sys.stdout.flush()

    def _attempt() -> ChatTurn:
        try:
            return session.send(args.prompt, stream=args.stream, on_delta=_echo if args.stream else None)
        except ProviderError as e:
            if echoed:
                # Part of the reply is already on stdout; another attempt would print it twice.
                raise _EchoedFailure(e) from e
            raise

    def _failed(e: ProviderError) -> int:
        normalized_log_event(
            logger, "cli.error", ctx, phase="finalize", emitted=bool(echoed), error_code=e.code.value, error=e.message
        )
        return _error({"error": e.message, "code": e.code.value, "provider": e.provider})

    send = retry(RetryConfig(max_attempts=max(1, args.retries + 1)))(_attempt)
    try:
        turn = send()
    except _EchoedFailure as failure:
        sys.stdout.write("\n")
        return _failed(failure.error)
    except ProviderError as e:
        return _failed(e)

    if turn.streamed:
        sys.stdout.write("\n")
    else:
        print(turn.display_text)
    if not turn.text:
        return _error({"error": "No response received. Check your settings."})
    normalized_log_event(logger, "cli.finalize", ctx, phase="finalize", emitted=True)
    if persistence is not None:
        path = session.save()
        print(json.dumps({"saved": path}), file=sys.stderr)
    return 0


HANDLERS = {
    "providers": handle_providers,
    "validate": handle_validate,
    "models": handle_models,
    "chat": handle_chat,
}


__all__ = [
    "HANDLERS",
    "resolve_settings",
    "handle_providers",
    "handle_validate",
    "handle_models",
    "handle_chat",
]
