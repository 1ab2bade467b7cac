"""Core interfaces and validation for the data privacy exporter."""

from .interfaces import (
    RequestType,
    RequestStatus,
    CreationMethod,
    ContextLevel,
    UserLookup,
    UserSummaryBuilder,
    LabelService,
    HtmlFormatter,
)
from .validation import ValidationError, NotFoundError, RequestValidator

__all__ = [
    "RequestType",
    "RequestStatus",
    "CreationMethod",
    "ContextLevel",
    "UserLookup",
    "UserSummaryBuilder",
    "LabelService",
    "HtmlFormatter",
    "ValidationError",
    "NotFoundError",
    "RequestValidator",
]
