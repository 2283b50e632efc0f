"""Load settings.yaml into typed dataclasses. Checks API keys at startup."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"


@dataclass
class ModelConfig:
    name: str
    sdk: str
    model: str
    timeout_sec: int
    max_tokens: int
    api_key_env: str | None = None   # None for local backends (ollama)
    temperature: float = 0.7
    top_p: float = 0.9
    base_url: str | None = None


@dataclass
class PromptsConfig:
    challenger: str
    defender: str
    summary: str


@dataclass
class DefaultsConfig:
    provider: str
    challenger_model: str | None = None
    defender_model: str | None = None
    summarizer_model: str | None = None  # None -> challenger model
    rounds: int = 0                      # 0 -> until interrupted
    max_history: int = 100


@dataclass
class AppConfig:
    defaults: DefaultsConfig
    models: dict[str, ModelConfig]
    prompts: PromptsConfig
    available_providers: set[str] = field(default_factory=set)


def load_config(settings_path: Path = _SETTINGS_PATH) -> AppConfig:
    """Load and validate configuration from settings.yaml.

    Raises FileNotFoundError if settings file missing.
    Logs which providers have credentials but does not raise; callers check
    available_providers before building a provider.
    """
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {settings_path}")

    with settings_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    defaults_raw = raw["defaults"]
    defaults = DefaultsConfig(
        provider=str(defaults_raw["provider"]),
        challenger_model=defaults_raw.get("challenger_model"),
        defender_model=defaults_raw.get("defender_model"),
        summarizer_model=defaults_raw.get("summarizer_model"),
        rounds=int(defaults_raw.get("rounds", 0)),
        max_history=int(defaults_raw.get("max_history", 100)),
    )

    prompts_raw = raw["prompts"]
    prompts = PromptsConfig(
        challenger=str(prompts_raw["challenger"]).strip(),
        defender=str(prompts_raw["defender"]).strip(),
        summary=str(prompts_raw["summary"]).strip(),
    )

    models: dict[str, ModelConfig] = {}
    available_providers: set[str] = set()

    for provider_name, model_raw in raw["models"].items():
        model_cfg = ModelConfig(
            name=provider_name,
            sdk=model_raw["sdk"],
            model=model_raw["model"],
            timeout_sec=int(model_raw["timeout_sec"]),
            max_tokens=int(model_raw["max_tokens"]),
            api_key_env=model_raw.get("api_key_env"),
            temperature=float(model_raw.get("temperature", 0.7)),
            top_p=float(model_raw.get("top_p", 0.9)),
            base_url=model_raw.get("base_url"),
        )
        models[provider_name] = model_cfg

        if model_cfg.api_key_env is None:
            available_providers.add(provider_name)
            logger.debug("Provider available (no key needed): %s", provider_name)
            continue

        api_key = os.environ.get(model_cfg.api_key_env, "").strip()
        if api_key:
            available_providers.add(provider_name)
            logger.debug("Provider available: %s", provider_name)
        else:
            logger.debug(
                "Provider skipped (no API key): %s — set %s in .env",
                provider_name,
                model_cfg.api_key_env,
            )

    return AppConfig(
        defaults=defaults,
        models=models,
        prompts=prompts,
        available_providers=available_providers,
    )
