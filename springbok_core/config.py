import copy
import os
from dataclasses import dataclass
from typing import Any

import yaml
from dotenv import load_dotenv
from rich.console import Console

from springbok_core.exceptions import ConfigError

load_dotenv()
console = Console()

DEFAULT_CONFIG: dict[str, Any] = {
    "general_court": "193",
    "strict_headers": True,
    "fetch": {
        "base_url": "https://malegislature.gov",
        "timeout": 30.0,
        "max_retries": 3,
        "retry_delay": 2.0,
        "max_concurrency": 8,
    },
    "output": {
        "folder": "output",
        "law_folder": "modified-laws",
        "render": False,
    },
}


@dataclass(frozen=True)
class FetchSettings:
    """Settings for talking to the legislature website."""

    base_url: str = "https://malegislature.gov"
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 2.0
    max_concurrency: int = 8


def _merge(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    # Top-level sections are merged one level deep; scalars replace defaults
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str = "config.yaml") -> dict[str, Any]:
    """
    From config.yaml, merged over DEFAULT_CONFIG.

    Environment overrides (also read from .env):
        SPRINGBOK_GENERAL_COURT, SPRINGBOK_OUTPUT_FOLDER

    Args:
        config_path: Path to config file (default: config.yaml)

    Returns:
        Configuration dictionary
    """
    try:
        with open(config_path, "r") as f:
            config = _merge(DEFAULT_CONFIG, yaml.safe_load(f) or {})
    except FileNotFoundError:
        console.print(f"[yellow]Warning: {config_path} not found. Using default config.[/yellow]")
        config = copy.deepcopy(DEFAULT_CONFIG)

    general_court = os.getenv("SPRINGBOK_GENERAL_COURT")
    if general_court:
        config["general_court"] = general_court
    output_folder = os.getenv("SPRINGBOK_OUTPUT_FOLDER")
    if output_folder:
        config["output"]["folder"] = output_folder

    config["general_court"] = str(config["general_court"])
    return config


def get_fetch_settings(config: dict[str, Any]) -> FetchSettings:
    fetch = config.get("fetch", {})
    try:
        settings = FetchSettings(
            base_url=str(fetch.get("base_url", FetchSettings.base_url)).rstrip("/"),
            timeout=float(fetch.get("timeout", FetchSettings.timeout)),
            max_retries=int(fetch.get("max_retries", FetchSettings.max_retries)),
            retry_delay=float(fetch.get("retry_delay", FetchSettings.retry_delay)),
            max_concurrency=int(fetch.get("max_concurrency", FetchSettings.max_concurrency)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid fetch settings: {e}") from e

    if settings.timeout <= 0 or settings.max_retries < 1 or settings.max_concurrency < 1:
        raise ConfigError(
            "fetch.timeout must be positive; fetch.max_retries and "
            "fetch.max_concurrency must be at least 1"
        )
    if settings.retry_delay < 0:
        raise ConfigError("fetch.retry_delay cannot be negative")
    return settings
