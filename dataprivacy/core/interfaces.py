"""
Core interfaces and enumerations for the data privacy exporter.

This module defines the request enumerations and the contracts for the
collaborators the exporter depends on (user lookup, user summaries, localized
strings and HTML formatting), so each can be injected and replaced in tests.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, TYPE_CHECKING
from enum import Enum

if TYPE_CHECKING:
    from dataprivacy.models.request import User, RenderContext
    from dataprivacy.models.view_model import UserSummary


class RequestType(Enum):
    """Kinds of data request a subject can file."""
    EXPORT = "export"
    DELETE = "delete"
    OTHERS = "others"

    @property
    def code(self) -> int:
        """Legacy integer code stored by older request records."""
        return _TYPE_CODES[self]

    @classmethod
    def parse(cls, value: Any) -> Optional["RequestType"]:
        """Coerce a member, string value or legacy code; None if unrecognized."""
        return _parse_enum(cls, value, _TYPE_CODES)


class RequestStatus(Enum):
    """Workflow status of a data request."""
    PENDING = "pending"
    PREPROCESSING = "preprocessing"
    AWAITING_APPROVAL = "awaiting-approval"
    APPROVED = "approved"
    PROCESSING = "processing"
    COMPLETE = "complete"
    CANCELLED = "cancelled"
    REJECTED = "rejected"

    @property
    def code(self) -> int:
        """Legacy integer code stored by older request records."""
        return _STATUS_CODES[self]

    @classmethod
    def parse(cls, value: Any) -> Optional["RequestStatus"]:
        """Coerce a member, string value or legacy code; None if unrecognized."""
        return _parse_enum(cls, value, _STATUS_CODES)


class CreationMethod(Enum):
    """How a data request was created."""
    WEB = "web"
    MANUAL = "manual"
    AUTO = "auto"


class ContextLevel(Enum):
    """Level of the context a request belongs to."""
    SYSTEM = "system"
    USER = "user"
    COURSE = "course"
    MODULE = "module"


_TYPE_CODES = {
    RequestType.EXPORT: 1,
    RequestType.DELETE: 2,
    RequestType.OTHERS: 3,
}

_STATUS_CODES = {
    RequestStatus.PENDING: 0,
    RequestStatus.PREPROCESSING: 1,
    RequestStatus.AWAITING_APPROVAL: 2,
    RequestStatus.APPROVED: 3,
    RequestStatus.PROCESSING: 4,
    RequestStatus.COMPLETE: 5,
    RequestStatus.CANCELLED: 6,
    RequestStatus.REJECTED: 7,
}


def _parse_enum(enum_cls, value, codes):
    if isinstance(value, enum_cls):
        return value

    # bool is an int subclass; True/False are never valid codes
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, int):
        for member, code in codes.items():
            if code == value:
                return member
        return None

    if isinstance(value, str):
        normalized = value.strip().lower().replace("_", "-")
        if normalized.isdigit():
            return _parse_enum(enum_cls, int(normalized), codes)
        for member in enum_cls:
            if member.value == normalized:
                return member

    return None


class UserLookup(ABC):
    """Resolves user ids to user records."""

    @abstractmethod
    def get_user(self, user_id: int, must_exist: bool = True) -> Optional["User"]:
        """Return the user with the given id.

        Raises NotFoundError when the user does not exist and must_exist is
        set; returns None otherwise.
        """
        pass


class UserSummaryBuilder(ABC):
    """Builds the public profile summary of a user."""

    @abstractmethod
    def build(self, user: "User", render_context: Optional["RenderContext"] = None) -> "UserSummary":
        """Build a summary for the given user."""
        pass


class LabelService(ABC):
    """Localized string lookup."""

    @abstractmethod
    def get_string(self, identifier: str, component: str = "dataprivacy",
                   language: Optional[str] = None) -> str:
        """Return the localized string for identifier in component."""
        pass


class HtmlFormatter(ABC):
    """Converts plain text to safe HTML."""

    @abstractmethod
    def to_html(self, text: Optional[str]) -> str:
        """Render text as escaped HTML."""
        pass
