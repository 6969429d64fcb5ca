"""Core module for stackquery package."""

from stackquery.core.exceptions import (
    ConfigurationError,
    ErrorKind,
    FetchError,
    ListError,
    MissingQualifierError,
    RemoteAPIError,
    ResolutionError,
    ResolutionReason,
    StackQueryError,
    UnknownTableError,
)
from stackquery.core.metrics import ScanMetrics

__all__ = [
    "ConfigurationError",
    "ErrorKind",
    "FetchError",
    "ListError",
    "MissingQualifierError",
    "RemoteAPIError",
    "ResolutionError",
    "ResolutionReason",
    "ScanMetrics",
    "StackQueryError",
    "UnknownTableError",
]
