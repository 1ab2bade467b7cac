"""Pytest configuration and fixtures for dataprivacy tests."""

import logging
import os

import pytest

from dataprivacy.core.interfaces import RequestStatus, RequestType
from dataprivacy.exporters import DataRequestExporter, UserSummaryExporter
from dataprivacy.formatting import PlainTextHtmlFormatter
from dataprivacy.i18n import StringManager
from dataprivacy.models.config import ExporterConfiguration
from dataprivacy.models.request import Context, DataRequest, RenderContext, User
from dataprivacy.providers import InMemoryUserDirectory


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate tests from DATAPRIVACY_* variables and logging set up by the CLI."""
    for key in list(os.environ):
        if key.startswith("DATAPRIVACY_"):
            monkeypatch.delenv(key, raising=False)

    yield

    package_logger = logging.getLogger("dataprivacy")
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    logging.getLogger("dataprivacy.i18n").setLevel(logging.NOTSET)


@pytest.fixture
def sample_users():
    """Provide the subject, a second requester and a DPO."""
    return [
        User(id=1, username="student1", firstname="Ada", lastname="Lovelace",
             email="ada@example.com", idnumber="S-001", department="Maths"),
        User(id=2, username="parent2", firstname="Byron", lastname="Lovelace",
             email="byron@example.com"),
        User(id=3, username="dpo", firstname="Grace", lastname="Hopper",
             email="dpo@example.com", institution="Privacy Office"),
    ]


@pytest.fixture
def config():
    """Provide an explicit exporter configuration."""
    return ExporterConfiguration(
        language="en",
        fallback_language="en",
        wwwroot="https://lms.example.com",
    )


@pytest.fixture
def user_directory(sample_users):
    return InMemoryUserDirectory(sample_users)


@pytest.fixture
def summary_builder(config):
    return UserSummaryExporter(config)


@pytest.fixture
def exporter(user_directory, summary_builder, config):
    """Provide an exporter wired with the bundled collaborators."""
    return DataRequestExporter(
        user_lookup=user_directory,
        summary_builder=summary_builder,
        label_service=StringManager(config),
        html_formatter=PlainTextHtmlFormatter(),
        config=config,
    )


@pytest.fixture
def render_context():
    return RenderContext(context=Context.system())


@pytest.fixture
def make_request():
    """Factory for data requests with sensible defaults."""
    def _make(**overrides):
        values = {
            "id": 100,
            "userid": 1,
            "requestedby": 1,
            "type": RequestType.EXPORT,
            "status": RequestStatus.PENDING,
            "comments": "hello",
            "dpo": None,
        }
        values.update(overrides)
        return DataRequest(**values)

    return _make


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def pytest_collection_modifyitems(config, items):
    """Mark CLI tests as integration tests."""
    for item in items:
        if "test_cli" in item.nodeid:
            item.add_marker(pytest.mark.integration)
