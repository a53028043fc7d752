"""Configuration loading and management."""

import os
from pathlib import Path
from typing import Any, Optional

import yaml

from .types import BudgetConfig, CompressConfig

ENV_PREFIX = "DOCCOMPRESS_"

BUDGET_ENV = {
    "MAX_TOKENS": ("max_tokens", int),
    "MAX_SYSTEM_TOKENS": ("max_system_tokens", int),
    "MAX_HISTORY_TOKENS": ("max_history_tokens", int),
    "MAX_RESPONSE_TOKENS": ("max_response_tokens", int),
    "MIN_TOKENS_PER_DOC": ("min_tokens_per_doc", int),
    "SUMMARY_THRESHOLD": ("summary_threshold", float),
}


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConfigLoader:
    """Loads and merges configuration from YAML and environment."""

    @staticmethod
    def load_yaml(config_path: str) -> dict[str, Any]:
        """Load configuration from YAML file."""
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def load_from_env() -> dict[str, Any]:
        """Load configuration from DOCCOMPRESS_* environment variables."""
        config: dict[str, Any] = {}

        budget_config = {}
        for suffix, (key, cast) in BUDGET_ENV.items():
            if value := os.environ.get(ENV_PREFIX + suffix):
                budget_config[key] = cast(value)
        if budget_config:
            config["budget"] = budget_config

        if estimator := os.environ.get(f"{ENV_PREFIX}ESTIMATOR"):
            config["estimator"] = estimator
        if model := os.environ.get(f"{ENV_PREFIX}MODEL"):
            config["model"] = model
        if locale := os.environ.get(f"{ENV_PREFIX}LOCALE"):
            config["locale"] = locale
        if use_kw := os.environ.get(f"{ENV_PREFIX}USE_QUERY_KEYWORDS"):
            config["use_query_keywords"] = _parse_bool(use_kw)
        if telemetry := os.environ.get(f"{ENV_PREFIX}TELEMETRY_ENABLED"):
            config["telemetry_enabled"] = _parse_bool(telemetry)

        return config

    @staticmethod
    def load(
        config_path: Optional[str] = None, merge_env: bool = True
    ) -> CompressConfig:
        """
        Load configuration from file and environment.

        Args:
            config_path: Path to YAML config file (optional)
            merge_env: Whether to merge environment variable overrides

        Returns:
            CompressConfig object

        Raises:
            FileNotFoundError: If config file specified but not found
            ValueError: If configuration is invalid
        """
        config_dict: dict[str, Any] = {}

        if config_path:
            config_dict = ConfigLoader.load_yaml(config_path)

        if merge_env:
            env_config = ConfigLoader.load_from_env()
            # Budget keys merge individually, env wins
            merged_budget = {**(config_dict.get("budget") or {}), **env_config.pop("budget", {})}
            config_dict = {**config_dict, **env_config, "budget": merged_budget}

        budget_dict = config_dict.pop("budget", None) or {}
        try:
            budget = BudgetConfig(**budget_dict)
            config = CompressConfig(budget=budget, **config_dict)
        except TypeError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

        config.validate()
        return config


def create_example_config(path: str) -> None:
    """Create an example configuration file."""
    example = {
        "budget": {
            "max_tokens": 128000,
            "max_system_tokens": 2000,
            "max_history_tokens": 3000,
            "max_response_tokens": 4000,
            "min_tokens_per_doc": 5000,
            "summary_threshold": 0.8,
            "max_section_tokens": 2000,
            "fallback_window_chars": 8000,
        },
        "estimator": "chars",
        "model": "gpt-4",
        "locale": "fr",
        "use_query_keywords": False,
        "telemetry_enabled": True,
    }

    Path(path).parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(example, f, default_flow_style=False, sort_keys=False)

    print(f"Example config created: {path}")
