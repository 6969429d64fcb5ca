"""Connection loader with YAML parsing and template rendering."""

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from stackquery.core.exceptions import ConfigurationError
from stackquery.models.connection_config import ConnectionConfig
from stackquery.models.templates import render_templates


def load_connection(path: str, cli_vars: Dict[str, str] | None = None) -> ConnectionConfig:
    """
    Load a connection configuration from a YAML file.

    The file holds either the connection fields at top level or under a
    ``connection`` key.

    Args:
        path: Path to the YAML file
        cli_vars: Variables passed via CLI (e.g., --var key=value)

    Returns:
        Validated ConnectionConfig

    Raises:
        ConfigurationError: If the file is missing, not valid YAML, or fails validation
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Connection file not found: {path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in connection file: {e}", context={"path": str(path)}
        ) from e

    if raw is None:
        raise ConfigurationError("Connection file is empty", context={"path": str(path)})
    if not isinstance(raw, dict):
        raise ConfigurationError(
            "Connection file must contain a mapping",
            context={"path": str(path), "type": type(raw).__name__},
        )

    config_dict: Dict[str, Any] = raw.get("connection", raw)
    config_dict = render_templates(config_dict, cli_vars)

    try:
        return ConnectionConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            f"Connection validation failed: {e}", context={"path": str(path)}
        ) from e
