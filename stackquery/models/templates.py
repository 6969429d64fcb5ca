"""Template rendering for connection values with Jinja2-style syntax.

Supported expressions:

- ``{{ env_var('OS_PASSWORD') }}`` or ``{{ env_var('OS_REGION_NAME', 'RegionOne') }}``
- ``{{ var('token') }}`` for values passed with ``--vars key=value``
- ``{{ connection.name }}``
"""

import os
import re
from typing import Any, Dict, Optional

from stackquery.core.exceptions import ConfigurationError

_EXPRESSION = re.compile(r"\{\{\s*(.+?)\s*\}\}")
_CALL = re.compile(
    r"^(?P<func>\w+)\(\s*(?P<q>['\"])(?P<key>[^'\"]+)(?P=q)"
    r"(?:\s*,\s*(?P<dq>['\"])(?P<default>[^'\"]*)(?P=dq))?\s*\)$"
)


class TemplateRenderer:
    """Renders template expressions found in string values."""

    def __init__(self, connection_name: str, cli_vars: Optional[Dict[str, str]] = None):
        self._attributes = {"connection": {"name": connection_name}}
        self._cli_vars = cli_vars or {}

    def render(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: self.render(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self.render(item) for item in value]
        if isinstance(value, str):
            return _EXPRESSION.sub(lambda match: self._evaluate(match.group(1)), value)
        return value

    def _evaluate(self, expr: str) -> str:
        call = _CALL.match(expr)
        if call:
            func, key, default = call.group("func", "key", "default")
            if func == "env_var":
                return self._env_var(key, default)
            if func == "var":
                return self._cli_var(key, default)
            raise ConfigurationError(
                f"Unknown function: {func}",
                context={"expression": expr, "available": "env_var, var"},
            )
        return self._attribute(expr)

    def _env_var(self, key: str, default: Optional[str]) -> str:
        value = os.environ.get(key, default)
        if value is None:
            raise ConfigurationError(
                f"Environment variable '{key}' not found", context={"key": key}
            )
        return value

    def _cli_var(self, key: str, default: Optional[str]) -> str:
        if key in self._cli_vars:
            return self._cli_vars[key]
        if default is not None:
            return default
        raise ConfigurationError(
            f"CLI variable '{key}' not provided",
            context={"key": key, "available": sorted(self._cli_vars)},
        )

    def _attribute(self, expr: str) -> str:
        value: Any = self._attributes
        for part in expr.split("."):
            if not isinstance(value, dict) or part not in value:
                raise ConfigurationError(
                    f"Template rendering failed: {expr}", context={"expression": expr}
                )
            value = value[part]
        return str(value)


def render_templates(
    config_dict: Dict[str, Any], cli_vars: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """Render every template expression in a connection dictionary.

    Args:
        config_dict: Raw connection mapping as loaded from YAML
        cli_vars: Variables passed via CLI (e.g., --vars key=value)

    Returns:
        A new dictionary with templates rendered

    Raises:
        ConfigurationError: If a variable is missing or an expression is unknown
    """
    renderer = TemplateRenderer(str(config_dict.get("name", "")), cli_vars)
    return renderer.render(config_dict)
