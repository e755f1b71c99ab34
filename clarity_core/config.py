import copy
import os
from typing import Any

import yaml
from rich.console import Console

console = Console()

DEFAULT_CONFIG: dict[str, Any] = {
    "documents": {
        # Empty base_url reads the files from disk relative to `root`
        "base_url": "",
        "root": ".",
        "timeout": 30.0,
        "paths": {
            "original": "data/Bill Text/OG Clarity Act.txt",
            "hfsc": "data/Bill Text/HFSC BILLS-119pih-ANStoHR3633offeredbyChairmanThompsonofPennsylvania-U1.txt",
            "hag": "data/Bill Text/HAG BILLS-119-HR3633-H001072-Amdt-4.txt",
        },
    },
    "comparison": {
        "default_pair": ["original", "hfsc"],
        "normalize": True,
    },
    "export": {
        "format": "html",
        "include_line_numbers": True,
        "include_highlights": True,
        "output_dir": "reports",
    },
    "llm": {
        "provider": "gemini",
        "gemini": {"model": "gemini-2.5-flash", "temperature": 0.2, "max_output_tokens": 2048},
        "openai": {"model": "gpt-5"},
        "retry": {"max_retries": 2, "base_delay": 1.0},
    },
    "debug": {"llm_responses": False},
}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    # Nested dicts merge key by key; everything else is replaced
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str = "config.yaml") -> dict[str, Any]:
    """
    From config.yaml, layered over DEFAULT_CONFIG

    Args:
        config_path: Path to config file (default: config.yaml)

    Returns:
        Configuration dictionary
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except FileNotFoundError:
        console.print(f"[yellow]Warning: {config_path} not found. Using default config.[/yellow]")
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(loaded, dict):
        console.print(f"[red]Error: {config_path} is not a mapping. Using default config.[/red]")
        return copy.deepcopy(DEFAULT_CONFIG)

    return _merge(DEFAULT_CONFIG, loaded)


def get_api_keys() -> dict[str, str]:
    return {
        "openai": os.getenv("OPENAI_API_KEY", ""),
        "google": os.getenv("GOOGLE_API_KEY", ""),
    }
