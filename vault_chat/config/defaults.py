"""vault_chat.config.defaults
==========================

Central place for the stable default values used across the package: provider
endpoints, request defaults, static model lists and the plugin settings
defaults. These can be overridden via environment variables, a config file or
explicit settings, but provide sensible fallbacks for local use and tests.

This module performs no I/O and imports nothing from the rest of the package
so it can be imported from anywhere without cycles.
"""

from __future__ import annotations

# ---- Provider ids ----
OPENROUTER_ID = "openrouter"
GOOGLE_AI_ID = "google-ai"
OLLAMA_ID = "ollama"
MINIMAX_ID = "minimax"
OPENAI_COMPATIBLE_ID = "openai-compatible"

PROVIDER_NAMES = {
    OPENROUTER_ID: "OpenRouter",
    GOOGLE_AI_ID: "Google AI (Gemini)",
    OLLAMA_ID: "Ollama (Local)",
    MINIMAX_ID: "MiniMax",
    OPENAI_COMPATIBLE_ID: "OpenAI Compatible",
}


# ---- OpenRouter (hosted aggregator) ----
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_DEFAULT_SITE_URL = "https://obsidian.md"
OPENROUTER_APP_TITLE = "Obsidian Vault AI"
# (id, display name, context length) used when the models endpoint fails.
OPENROUTER_FALLBACK_MODELS = (
    ("anthropic/claude-3.5-sonnet", "Claude 3.5 Sonnet", 200000),
    ("openai/gpt-4o", "GPT-4o", 128000),
    ("google/gemini-pro-1.5", "Gemini Pro 1.5", 1000000),
    ("meta-llama/llama-3.1-70b-instruct", "Llama 3.1 70B", 131072),
)


# ---- Google AI (Gemini REST) ----
GOOGLE_AI_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GOOGLE_AI_DEFAULT_MAX_TOKENS = 2000
GOOGLE_AI_DEFAULT_TEMPERATURE = 0.7
GOOGLE_AI_FALLBACK_MODELS = (
    ("gemini-2.0-flash", "Gemini 2.0 Flash", 1000000),
    ("gemini-2.5-flash", "Gemini 2.5 Flash", 1000000),
    ("gemini-2.5-pro", "Gemini 2.5 Pro", 1000000),
)


# ---- Ollama (local daemon) ----
OLLAMA_DEFAULT_HOST = "http://localhost:11434"


# ---- MiniMax (reasoning-capable vendor) ----
MINIMAX_BASE_URLS = {
    "international": "https://api.minimax.io/v1",
    "china": "https://api.minimaxi.com/v1",
}
MINIMAX_DEFAULT_REGION = "international"
MINIMAX_DEFAULT_TEMPERATURE = 1.0
MINIMAX_VALIDATION_MODEL = "MiniMax-M2.1"
MINIMAX_MODELS = (
    ("MiniMax-M2.1", "MiniMax M2.1 (Latest)", 200000),
    ("MiniMax-M2", "MiniMax M2", 200000),
)


# ---- Generic OpenAI-compatible endpoint ----
OPENAI_COMPATIBLE_DEFAULT_MAX_TOKENS = 2000
OPENAI_COMPATIBLE_DEFAULT_TEMPERATURE = 0.7
OPENAI_COMPATIBLE_CONTEXT_LENGTH = 128000


# ---- Validation checks ----
VALIDATION_PROMPT = "Hi"
VALIDATION_MAX_TOKENS = 5


# ---- Plugin settings defaults ----
DEFAULT_PROVIDER = OPENROUTER_ID
DEFAULT_CHAT_FOLDER = "AI Chats"
DEFAULT_ENHANCED_NOTES_FOLDER = "Enhanced Notes"
DEFAULT_MAX_CONTEXT_FILES = 5
DEFAULT_MAX_TOKENS = 2000
DEFAULT_TEMPERATURE = 0.7


# ---- Grounding ----
DEFAULT_MAX_CONTEXT_CHARS = 16000
MAX_SOURCE_CHARS = 4000
MAX_SOURCE_HEADINGS = 5
CHAT_SOURCE_CHARS = 2500
WRITER_SOURCE_CHARS = 1500
TRUNCATION_MARKER = "\n...[truncated]"




__all__ = [
    "OPENROUTER_ID",
    "GOOGLE_AI_ID",
    "OLLAMA_ID",
    "MINIMAX_ID",
    "OPENAI_COMPATIBLE_ID",
    "PROVIDER_NAMES",
    "OPENROUTER_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_SITE_URL",
    "OPENROUTER_APP_TITLE",
    "OPENROUTER_FALLBACK_MODELS",
    "GOOGLE_AI_DEFAULT_BASE_URL",
    "GOOGLE_AI_DEFAULT_MAX_TOKENS",
    "GOOGLE_AI_DEFAULT_TEMPERATURE",
    "GOOGLE_AI_FALLBACK_MODELS",
    "OLLAMA_DEFAULT_HOST",
    "MINIMAX_BASE_URLS",
    "MINIMAX_DEFAULT_REGION",
    "MINIMAX_DEFAULT_TEMPERATURE",
    "MINIMAX_VALIDATION_MODEL",
    "MINIMAX_MODELS",
    "OPENAI_COMPATIBLE_DEFAULT_MAX_TOKENS",
    "OPENAI_COMPATIBLE_DEFAULT_TEMPERATURE",
    "OPENAI_COMPATIBLE_CONTEXT_LENGTH",
    "VALIDATION_PROMPT",
    "VALIDATION_MAX_TOKENS",
    "DEFAULT_PROVIDER",
    "DEFAULT_CHAT_FOLDER",
    "DEFAULT_ENHANCED_NOTES_FOLDER",
    "DEFAULT_MAX_CONTEXT_FILES",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TEMPERATURE",
    "DEFAULT_MAX_CONTEXT_CHARS",
    "MAX_SOURCE_CHARS",
    "MAX_SOURCE_HEADINGS",
    "CHAT_SOURCE_CHARS",
    "WRITER_SOURCE_CHARS",
    "TRUNCATION_MARKER",
]
