"""Configuration models for stackquery."""

from stackquery.models.connection_config import (
    DEFAULT_IGNORE_ERROR_SUBSTRINGS,
    ConnectionConfig,
)
from stackquery.models.loader import load_connection
from stackquery.models.templates import render_templates

__all__ = [
    "ConnectionConfig",
    "DEFAULT_IGNORE_ERROR_SUBSTRINGS",
    "load_connection",
    "render_templates",
]
