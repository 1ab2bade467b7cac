"""Validation errors and input checks for data request records."""

from typing import Any, Dict, List, Optional

from dataprivacy.core.interfaces import RequestStatus, RequestType


class ValidationError(Exception):
    """Custom exception for validation errors."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format the validation error message."""
        if self.field:
            return f"Validation error in field '{self.field}': {self.message}"
        return f"Validation error: {self.message}"


class NotFoundError(LookupError):
    """Raised when a referenced record does not exist."""

    def __init__(self, entity: str, identifier: Any):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} with id {identifier!r} does not exist")


class RequestValidator:
    """Validates raw data request records before they are exported."""

    REQUIRED_FIELDS = ("id", "userid", "requestedby")

    @classmethod
    def validate_record(cls, data: Dict[str, Any]) -> List[str]:
        """Validate a raw request mapping and return a list of errors."""
        errors = []

        for name in cls.REQUIRED_FIELDS:
            if data.get(name) in (None, ""):
                errors.append(f"{name} is required")

        for name in ("id", "userid", "requestedby", "dpo"):
            value = data.get(name)
            if value in (None, ""):
                continue
            if not cls._is_user_id(value):
                errors.append(f"{name} must be a non-negative integer")

        return errors

    @classmethod
    def check_record(cls, data: Dict[str, Any]) -> None:
        """Raise ValidationError for the first problem in a raw request mapping."""
        errors = cls.validate_record(data)
        if errors:
            raise ValidationError("; ".join(errors), value=data.get("id"))

    @classmethod
    def is_known_type(cls, value: Any) -> bool:
        """Check whether a raw type value maps onto a RequestType."""
        return RequestType.parse(value) is not None

    @classmethod
    def is_known_status(cls, value: Any) -> bool:
        """Check whether a raw status value maps onto a RequestStatus."""
        return RequestStatus.parse(value) is not None

    @staticmethod
    def _is_user_id(value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return value >= 0
        if isinstance(value, str):
            return value.strip().isdigit()
        return False
