"""
Configuration schema validation for the ABI JSON serializer.

Validates that all required config files exist, contain required keys, and
name only known encoding strategies. Run at startup to fail fast on misconfiguration.
"""

from typing import Any

from config.loader import get_config
from core.encoders import ADDRESS_ENCODERS, BYTE_ENCODERS, FLOAT_ENCODERS, INT_ENCODERS
from shared.types import FormattingMode


class ConfigValidationError(ValueError):
    """Raised when a required config key is missing or invalid."""

    pass


# serializer.json key descriptions (printed by `main.py --describe-config`)
CONFIG_DESCRIPTIONS: dict[str, str] = {
    "formatting_mode": "How tuples are laid out: " + " / ".join(m.value for m in FormattingMode),
    "int_encoder": "Integer encoding: " + " / ".join(INT_ENCODERS),
    "float_encoder": "Fixed-point encoding: " + " / ".join(FLOAT_ENCODERS),
    "byte_encoder": "Bytes and function encoding: " + " / ".join(BYTE_ENCODERS),
    "address_encoder": "Address encoding: "
    + " / ".join(ADDRESS_ENCODERS)
    + " (null falls back to byte_encoder)",
    "pretty": "Indent JSON output with 2 spaces",
}


def _check_keys(config: dict[str, Any], required_keys: list[str], config_name: str) -> list[str]:
    """Check that all required keys exist in a config dict. Returns list of missing keys."""
    missing = []
    for key in required_keys:
        parts = key.split(".")
        current = config
        for part in parts:
            if not isinstance(current, dict) or part not in current:
                missing.append(f"missing: {key}")
                break
            current = current[part]
    return missing


def _check_choice(
    config: dict[str, Any], key: str, choices: list[str], nullable: bool = False
) -> list[str]:
    """Check that config[key] is one of choices. Returns list of errors."""
    value = config.get(key)
    if value is None and nullable:
        return []
    if value not in choices:
        return [f"{key}: unknown value {value!r} (expected one of: {', '.join(choices)})"]
    return []


def validate_app_config(config: dict[str, Any]) -> list[str]:
    """Validate app.json has required fields."""
    return _check_keys(config, ["logging.log_dir"], "app.json")


def validate_serializer_config(config: dict[str, Any]) -> list[str]:
    """Validate serializer.json (after env overrides) names known strategies."""
    errors = _check_keys(
        config,
        [
            "formatting_mode",
            "int_encoder",
            "float_encoder",
            "byte_encoder",
            "pretty",
        ],
        "serializer.json",
    )
    if errors:
        return errors
    errors += _check_choice(config, "formatting_mode", [m.value for m in FormattingMode])
    errors += _check_choice(config, "int_encoder", list(INT_ENCODERS))
    errors += _check_choice(config, "float_encoder", list(FLOAT_ENCODERS))
    errors += _check_choice(config, "byte_encoder", list(BYTE_ENCODERS))
    errors += _check_choice(config, "address_encoder", list(ADDRESS_ENCODERS), nullable=True)
    if not isinstance(config.get("pretty"), bool):
        errors.append("pretty: must be a boolean")
    return errors


def validate_all_configs(names: tuple[str, ...] | None = None) -> None:
    """
    Validate all config files, or only those listed in names. Raises
    ConfigValidationError with details if any required keys are missing or
    any strategy name is unknown.
    """
    loader = get_config()
    all_errors: dict[str, list[str]] = {}

    validators = {
        "app.json": (loader.get_app_config, validate_app_config),
        "serializer.json": (loader.get_serializer_config, validate_serializer_config),
    }

    for config_name, (loader_fn, validator_fn) in validators.items():
        if names is not None and config_name not in names:
            continue
        config = loader_fn()
        if not config:
            all_errors[config_name] = ["Config file is empty or not found"]
            continue
        errors = validator_fn(config)
        if errors:
            all_errors[config_name] = errors

    if all_errors:
        lines = ["Configuration validation failed:"]
        for config_name, errors in all_errors.items():
            lines.append(f"\n  {config_name}:")
            for error in errors:
                lines.append(f"    - {error}")
        raise ConfigValidationError("\n".join(lines))
