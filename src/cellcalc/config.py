"""Configuration loading from ``cellcalc.yaml``."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "cellcalc.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "log_dir": "logs",
    "logging_enabled": True,
    "logging_fsync": False,
    "number_format": "{:g}",
}

DEFAULT_CONFIG_YAML = """\
# cellcalc configuration
# log_dir: logs            # structured event log, relative to this file
# logging_enabled: true
# logging_fsync: false
# number_format: "{:g}"    # how the CLI prints results
"""


def load_config(config_dir: Path) -> dict[str, Any]:
    """Load configuration from ``cellcalc.yaml``, with defaults.

    Args:
        config_dir: Directory containing ``cellcalc.yaml``.

    Returns:
        Merged configuration dict. Unknown keys are passed through.

    Raises:
        ValueError: If the file does not contain a mapping.
    """
    config = dict(DEFAULT_CONFIG)
    config_path = config_dir / CONFIG_FILENAME
    if config_path.exists():
        user_config = yaml.safe_load(config_path.read_text()) or {}
        if not isinstance(user_config, dict):
            raise ValueError(f"{config_path} must contain a mapping, got {type(user_config).__name__}")
        config.update(user_config)
    return config


def format_number(value: float, config: dict[str, Any]) -> str:
    """Format a result for display using the ``number_format`` setting."""
    fmt = str(config.get("number_format") or DEFAULT_CONFIG["number_format"])
    return fmt.format(value)
