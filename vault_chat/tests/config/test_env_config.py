from __future__ import annotations

import json

from vault_chat.config import get_model, get_provider_config, load_config_file, reset_config_cache
from vault_chat.config.env import (
    ENV_ALIASES,
    ENV_MAP,
    env_prefix,
    get_env_var_candidates,
    get_env_var_name,
    is_placeholder,
    resolve_provider_key,
)


def test_env_map_covers_keyed_providers():
    for p in ["openrouter", "google-ai", "minimax", "openai-compatible"]:
        assert p in ENV_MAP  # nosec B101 - asserts are appropriate in unit tests
    assert "ollama" not in ENV_MAP  # nosec B101 - asserts are appropriate in unit tests


def test_env_names_and_aliases():
    assert env_prefix("google-ai") == "GOOGLE_AI"  # nosec B101 - asserts are appropriate in unit tests
    assert get_env_var_name("openai-compatible") == "OPENAI_COMPATIBLE_API_KEY"  # nosec B101 - asserts are appropriate in unit tests
    assert ENV_ALIASES["google-ai"][0] == "GOOGLE_AI_API_KEY"  # nosec B101 - asserts are appropriate in unit tests
    assert list(get_env_var_candidates("google-ai")) == [  # nosec B101 - asserts are appropriate in unit tests
        "GOOGLE_AI_API_KEY",
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
    ]


def test_is_placeholder_heuristics():
    assert is_placeholder("placeholder-value")  # nosec B101 - asserts are appropriate in unit tests
    assert is_placeholder("ChangeMe123")  # nosec B101 - asserts are appropriate in unit tests
    assert is_placeholder("example-key")  # nosec B101 - asserts are appropriate in unit tests
    assert is_placeholder("test_token")  # nosec B101 - asserts are appropriate in unit tests
    assert not is_placeholder("real-value")  # nosec B101 - asserts are appropriate in unit tests


def test_resolve_provider_key_prefers_canonical(monkeypatch):
    monkeypatch.setenv("GOOGLE_AI_API_KEY", "canon")
    monkeypatch.setenv("GOOGLE_API_KEY", "alias")
    assert resolve_provider_key("google-ai") == ("canon", "GOOGLE_AI_API_KEY")  # nosec B101 - asserts are appropriate in unit tests


def test_resolve_provider_key_skips_placeholders(monkeypatch):
    monkeypatch.setenv("GOOGLE_AI_API_KEY", "your-key-placeholder")
    monkeypatch.setenv("GOOGLE_API_KEY", "real")
    assert resolve_provider_key("google-ai") == ("real", "GOOGLE_API_KEY")  # nosec B101 - asserts are appropriate in unit tests
    assert resolve_provider_key("ollama") == (None, None)  # nosec B101 - asserts are appropriate in unit tests


def test_defaults_without_any_source():
    assert get_provider_config("ollama") == {"base_url": "http://localhost:11434"}  # nosec B101 - asserts are appropriate in unit tests
    assert get_provider_config("minimax")["region"] == "international"  # nosec B101 - asserts are appropriate in unit tests
    assert get_provider_config("unknown") == {}  # nosec B101 - asserts are appropriate in unit tests


def test_merge_order_file_env_overrides(monkeypatch, tmp_path):
    cfg_file = tmp_path / "providers.yaml"
    cfg_file.write_text(
        "openrouter:\n  model: anthropic/claude-3.5-sonnet\n  api_key: from-file\nminimax:\n  region: china\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(cfg_file))
    monkeypatch.setenv("OPENROUTER_API_KEY", "from-env")
    reset_config_cache()

    cfg = get_provider_config("openrouter", overrides={"model": "openai/gpt-4o", "base_url": None})
    assert cfg["api_key"] == "from-env"  # nosec B101 - asserts are appropriate in unit tests
    assert cfg["model"] == "openai/gpt-4o"  # nosec B101 - asserts are appropriate in unit tests
    assert cfg["base_url"] == "https://openrouter.ai/api/v1"  # nosec B101 - asserts are appropriate in unit tests
    assert get_provider_config("minimax")["region"] == "china"  # nosec B101 - asserts are appropriate in unit tests
    assert get_model("openrouter") == "anthropic/claude-3.5-sonnet"  # nosec B101 - asserts are appropriate in unit tests


def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("# comment\nMINIMAX_API_KEY='mm-from-dotenv'\nNOT A PAIR\n", encoding="utf-8")
    monkeypatch.setenv("DOTENV_FILE", str(env_file))
    monkeypatch.delenv("MINIMAX_API_KEY", raising=False)
    reset_config_cache()
    try:
        assert get_provider_config("minimax")["api_key"] == "mm-from-dotenv"  # nosec B101 - asserts are appropriate in unit tests
    finally:
        monkeypatch.delenv("MINIMAX_API_KEY", raising=False)


def test_load_config_file_formats(tmp_path):
    json_file = tmp_path / "s.json"
    json_file.write_text(json.dumps({"provider": "ollama"}), encoding="utf-8")
    yaml_file = tmp_path / "s.yaml"
    yaml_file.write_text("provider: minimax\nmax_tokens: 512\n", encoding="utf-8")
    list_file = tmp_path / "l.yaml"
    list_file.write_text("- a\n- b\n", encoding="utf-8")

    assert load_config_file(json_file) == {"provider": "ollama"}  # nosec B101 - asserts are appropriate in unit tests
    assert load_config_file(yaml_file) == {"provider": "minimax", "max_tokens": 512}  # nosec B101 - asserts are appropriate in unit tests
    assert load_config_file(list_file) == {}  # nosec B101 - asserts are appropriate in unit tests
    assert load_config_file(tmp_path / "missing.yaml") == {}  # nosec B101 - asserts are appropriate in unit tests
