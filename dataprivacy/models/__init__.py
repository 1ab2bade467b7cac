"""Data models for the data privacy exporter."""

from .config import ExporterConfiguration
from .request import Context, DataRequest, RenderContext, User
from .view_model import DataRequestViewModel, UserSummary, VIEW_MODEL_PROPERTIES

__all__ = [
    "ExporterConfiguration",
    "Context",
    "DataRequest",
    "RenderContext",
    "User",
    "DataRequestViewModel",
    "UserSummary",
    "VIEW_MODEL_PROPERTIES",
]
