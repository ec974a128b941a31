"""
Configuration loader for the ABI JSON serializer.

Provides centralized configuration management with .env overrides.

Usage:
    from config.loader import get_config

    config = get_config()
    serializer_config = config.get_serializer_config()
"""

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from shared.constants import (
    DEFAULT_ADDRESS_ENCODER,
    DEFAULT_BYTE_ENCODER,
    DEFAULT_FLOAT_ENCODER,
    DEFAULT_FORMATTING_MODE,
    DEFAULT_INT_ENCODER,
    DEFAULT_PRETTY,
)

load_dotenv()

# Resolve config directory relative to this file
_CONFIG_DIR = Path(__file__).parent
_PROJECT_ROOT = _CONFIG_DIR.parent

# serializer.json key -> (env var, type)
_SERIALIZER_ENV_OVERRIDES = {
    "formatting_mode": ("ABI_JSON_FORMATTING_MODE", str),
    "int_encoder": ("ABI_JSON_INT_ENCODER", str),
    "float_encoder": ("ABI_JSON_FLOAT_ENCODER", str),
    "byte_encoder": ("ABI_JSON_BYTE_ENCODER", str),
    "address_encoder": ("ABI_JSON_ADDRESS_ENCODER", str),
    "pretty": ("ABI_JSON_PRETTY", bool),
}

_SERIALIZER_DEFAULTS = {
    "formatting_mode": DEFAULT_FORMATTING_MODE,
    "int_encoder": DEFAULT_INT_ENCODER,
    "float_encoder": DEFAULT_FLOAT_ENCODER,
    "byte_encoder": DEFAULT_BYTE_ENCODER,
    "address_encoder": DEFAULT_ADDRESS_ENCODER,
    "pretty": DEFAULT_PRETTY,
}


def _load_json(filepath: Path) -> Dict[str, Any]:
    """Load a JSON config file. Returns empty dict if file doesn't exist."""
    try:
        with open(filepath, "r") as f:
            return json.load(f)
    except FileNotFoundError:
        print(f"[CONFIG_WARN] Config file not found: {filepath}")
        return {}
    except json.JSONDecodeError as e:
        print(f"[CONFIG_ERROR] Invalid JSON in {filepath}: {e}")
        return {}


def get_env_var(var_name: str, default_value: Any, var_type: type) -> Any:
    """Get environment variable with type conversion and fallback."""
    value = os.getenv(var_name, None)
    if value is None:
        return default_value
    try:
        if var_type == bool:
            return value.lower() in ("true", "1", "yes")
        return var_type(value)
    except (ValueError, TypeError):
        return default_value


class ConfigLoader:
    """
    Central configuration manager for the ABI JSON serializer.

    Loads configuration from JSON files in the config/ directory with .env overrides.
    All accessor methods are cached via @lru_cache for performance.
    """

    _instance: Optional["ConfigLoader"] = None

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir) if config_dir is not None else _CONFIG_DIR
        self._project_root = _PROJECT_ROOT

    @classmethod
    def get_instance(cls) -> "ConfigLoader":
        """Singleton accessor."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    # ------------------------------------------------------------------
    # Core config file loaders (cached)
    # ------------------------------------------------------------------

    @lru_cache(maxsize=1)
    def get_app_config(self) -> Dict[str, Any]:
        """Load general application settings (logging)."""
        return _load_json(self._config_dir / "app.json")

    @lru_cache(maxsize=1)
    def get_serializer_config(self) -> Dict[str, Any]:
        """
        Load the default serialization policy, with environment overrides applied.

        Missing keys fall back to the shared.constants defaults. An address
        encoder of "none" (or empty) means: fall back to the byte encoder.
        """
        merged = dict(_SERIALIZER_DEFAULTS)
        merged.update(_load_json(self._config_dir / "serializer.json"))
        for key, (env_name, var_type) in _SERIALIZER_ENV_OVERRIDES.items():
            merged[key] = get_env_var(env_name, merged.get(key), var_type)
        if merged.get("address_encoder") in ("", "none", "None"):
            merged["address_encoder"] = None
        return merged

    # ------------------------------------------------------------------
    # Arbitrary config file loader
    # ------------------------------------------------------------------

    @lru_cache(maxsize=16)
    def get_config_file(self, config_name: str) -> Dict[str, Any]:
        """Load an arbitrary JSON config file from config/ directory."""
        return _load_json(self._config_dir / f"{config_name}.json")

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------

    def clear_cache(self) -> None:
        """Clear all cached configurations (useful for testing)."""
        for method_name in dir(self):
            method = getattr(self, method_name)
            if hasattr(method, "cache_clear"):
                method.cache_clear()


# ---------------------------------------------------------------------------
# Module-level convenience functions
# ---------------------------------------------------------------------------


def get_config() -> ConfigLoader:
    """Get the singleton ConfigLoader instance."""
    return ConfigLoader.get_instance()
