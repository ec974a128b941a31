"""
ABI JSON serializer command line entrypoint.

Loads an ABI parameter list and the matching decoded values from JSON files,
builds the value tree, and prints it as JSON under the configured encoding
policy. Policy defaults come from config/serializer.json (with ABI_JSON_* env
overrides); command line flags override both.

Usage:
    python main.py --abi transfer_event.json --values transfer_values.json
    python main.py --abi swap.json --outputs --values result.json \
        --mode self_describing_arrays --int-encoder number_if_fits --address-encoder checksum --pretty
    python main.py --describe-config
"""

from __future__ import annotations

import argparse
import json
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from config.loader import get_config
from config.validate import CONFIG_DESCRIPTIONS, ConfigValidationError, validate_all_configs
from core.encoders import ADDRESS_ENCODERS, BYTE_ENCODERS, FLOAT_ENCODERS, INT_ENCODERS
from core.errors import SerializationError
from core.serializer import CallContext, Serializer
from core.value_tree import ValueTreeError, build_value_tree
from serializer_logging.logger_manager import setup_module_logger
from shared.constants import DEFAULT_LOCALE
from shared.messages import localize
from shared.types import FormattingMode

# ---------------------------------------------------------------------------
# Module logger (file + stderr)
# ---------------------------------------------------------------------------
_logger = setup_module_logger("cli", "cli.log", module_folder="CLI_Logs", console=True)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serialize decoded ABI values to JSON")
    parser.add_argument("--abi", type=Path, help="ABI parameter list, or an ABI entry with inputs/outputs")
    parser.add_argument("--values", type=Path, help="Decoded values (JSON list or object)")
    parser.add_argument(
        "--outputs", action="store_true", help="Use the entry's 'outputs' instead of 'inputs'"
    )
    parser.add_argument("--mode", choices=[m.value for m in FormattingMode])
    parser.add_argument("--int-encoder", choices=list(INT_ENCODERS))
    parser.add_argument("--float-encoder", choices=list(FLOAT_ENCODERS))
    parser.add_argument("--byte-encoder", choices=list(BYTE_ENCODERS))
    parser.add_argument("--address-encoder", choices=list(ADDRESS_ENCODERS) + ["none"])
    pretty = parser.add_mutually_exclusive_group()
    pretty.add_argument("--pretty", dest="pretty", action="store_true", default=None)
    pretty.add_argument("--compact", dest="pretty", action="store_false")
    parser.add_argument("--locale", default=DEFAULT_LOCALE, help="Locale for error messages")
    parser.add_argument(
        "--describe-config", action="store_true", help="Print serializer.json keys and exit"
    )
    return parser


def _policy_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Merge CLI flags over the loaded serializer config."""
    cfg = dict(get_config().get_serializer_config())
    overrides = {
        "formatting_mode": args.mode,
        "int_encoder": args.int_encoder,
        "float_encoder": args.float_encoder,
        "byte_encoder": args.byte_encoder,
        "pretty": args.pretty,
    }
    cfg.update({k: v for k, v in overrides.items() if v is not None})
    if args.address_encoder is not None:
        cfg["address_encoder"] = None if args.address_encoder == "none" else args.address_encoder
    return cfg


def _load_params(path: Path, use_outputs: bool) -> list[dict[str, Any]]:
    """Accept a bare parameter list, or a function / event ABI entry."""
    with open(path, "r") as f:
        data = json.load(f)
    if isinstance(data, list):
        return data
    key = "outputs" if use_outputs else "inputs"
    if not isinstance(data, dict) or not isinstance(data.get(key), list):
        raise ValueTreeError(f"{path}: expected a parameter list or an ABI entry with '{key}'")
    return data[key]


def _load_values(path: Path) -> Any:
    # Decimal keeps fixed-point inputs exact; ints are already arbitrary precision
    with open(path, "r") as f:
        return json.load(f, parse_float=Decimal)


# ---------------------------------------------------------------------------
# Main entry
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _build_parser().parse_args(argv)

    if args.describe_config:
        for key, description in CONFIG_DESCRIPTIONS.items():
            print(f"{key:<16} {description}")
        return 0

    if args.abi is None or args.values is None:
        _logger.error("--abi and --values are required")
        return 2

    try:
        # serializer.json is checked after CLI flags are merged over it
        validate_all_configs(names=("app.json",))
        serializer = Serializer.from_config(_policy_from_args(args))
    except ConfigValidationError as exc:
        _logger.critical("Config validation failed:\n%s", exc)
        return 1

    try:
        root = build_value_tree(_load_params(args.abi, args.outputs), _load_values(args.values))
        payload = serializer.serialize_json(root, CallContext(locale=args.locale))
    except (OSError, json.JSONDecodeError, ValueTreeError) as exc:
        _logger.error("Cannot build value tree: %s", exc)
        return 1
    except SerializationError as exc:
        _logger.error("Serialization failed: %s", localize(exc))
        return 1

    sys.stdout.write(payload.decode("utf-8") + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
