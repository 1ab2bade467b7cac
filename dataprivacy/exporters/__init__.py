"""Exporters turning data requests into view models."""

from typing import Iterable, Optional

from dataprivacy.formatting.text_to_html import PlainTextHtmlFormatter
from dataprivacy.i18n.strings import StringManager
from dataprivacy.models.config import ExporterConfiguration
from dataprivacy.models.request import User
from dataprivacy.providers.user_provider import InMemoryUserDirectory

from .request_exporter import DataRequestExporter, STATUS_LABELS, TYPE_LABELS
from .user_summary import UserSummaryExporter


def create_exporter(users: Iterable[User],
                    config: Optional[ExporterConfiguration] = None) -> DataRequestExporter:
    """Wire a DataRequestExporter with the bundled default collaborators."""
    config = config or ExporterConfiguration()
    return DataRequestExporter(
        user_lookup=InMemoryUserDirectory(users),
        summary_builder=UserSummaryExporter(config),
        label_service=StringManager(config),
        html_formatter=PlainTextHtmlFormatter(),
        config=config,
    )


__all__ = [
    "DataRequestExporter",
    "UserSummaryExporter",
    "STATUS_LABELS",
    "TYPE_LABELS",
    "create_exporter",
]
