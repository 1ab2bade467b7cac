"""
dataprivacy - presentation-ready exports of data privacy requests

Flattens subject access and erasure requests, together with the users they
reference, into view models for templates and API payloads.
"""

__version__ = "0.1.0"

from .core.interfaces import RequestStatus, RequestType
from .core.validation import NotFoundError, ValidationError
from .models.request import Context, DataRequest, RenderContext, User
from .models.view_model import DataRequestViewModel, UserSummary
from .models.config import ExporterConfiguration
from .exporters import DataRequestExporter, UserSummaryExporter, create_exporter

__all__ = [
    "RequestStatus",
    "RequestType",
    "NotFoundError",
    "ValidationError",
    "Context",
    "DataRequest",
    "RenderContext",
    "User",
    "DataRequestViewModel",
    "UserSummary",
    "ExporterConfiguration",
    "DataRequestExporter",
    "UserSummaryExporter",
    "create_exporter",
]
