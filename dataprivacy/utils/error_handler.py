"""Error recording for batch exports."""

import logging
import uuid
from typing import Any, Dict, List, Optional
from dataclasses import dataclass
from enum import Enum
from datetime import datetime

from dataprivacy.core.validation import NotFoundError, ValidationError


logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"


class ErrorCategory(Enum):
    """Categories of errors."""
    NOT_FOUND_ERROR = "not_found_error"
    VALIDATION_ERROR = "validation_error"


@dataclass
class ErrorContext:
    """Context information for error handling."""
    operation: str
    component: str
    request_id: Optional[int] = None
    user_id: Optional[int] = None


@dataclass
class ErrorRecord:
    """Record of an error occurrence."""
    error_id: str
    timestamp: datetime
    severity: ErrorSeverity
    category: ErrorCategory
    message: str
    context: ErrorContext
    exception_type: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary."""
        return {
            'error_id': self.error_id,
            'timestamp': self.timestamp.isoformat(),
            'severity': self.severity.value,
            'category': self.category.value,
            'message': self.message,
            'operation': self.context.operation,
            'component': self.context.component,
            'request_id': self.context.request_id,
            'user_id': self.context.user_id,
            'exception_type': self.exception_type,
        }


class ExportErrorHandler:
    """Collects errors raised while exporting data requests."""

    # Errors a batch export may skip over; anything else propagates.
    RECOVERABLE_ERRORS = (NotFoundError, ValidationError)

    def __init__(self, max_records: int = 1000):
        self.error_records: List[ErrorRecord] = []
        self.max_records = max_records

    def is_recoverable(self, error: Exception) -> bool:
        """Check if a batch export can continue after this error."""
        return isinstance(error, self.RECOVERABLE_ERRORS)

    def handle_export_error(self, error: Exception, request_id: Optional[int] = None) -> ErrorRecord:
        """Record a recoverable error raised while exporting one request."""
        if not self.is_recoverable(error):
            raise TypeError(f"{type(error).__name__} is not a recoverable export error")

        if isinstance(error, NotFoundError):
            category = ErrorCategory.NOT_FOUND_ERROR
            severity = ErrorSeverity.MEDIUM
            user_id = error.identifier if error.entity == "user" else None
        else:
            category = ErrorCategory.VALIDATION_ERROR
            severity = ErrorSeverity.LOW
            user_id = None

        context = ErrorContext(
            operation="export_request",
            component="request_exporter",
            request_id=request_id,
            user_id=user_id,
        )

        logger.warning(f"Skipped request {request_id}: {error}")
        return self._record_error(error, severity, category, context)

    def _record_error(self,
                      error: Exception,
                      severity: ErrorSeverity,
                      category: ErrorCategory,
                      context: ErrorContext) -> ErrorRecord:
        """Record an error occurrence."""
        error_record = ErrorRecord(
            error_id=str(uuid.uuid4()),
            timestamp=datetime.utcnow(),
            severity=severity,
            category=category,
            message=str(error),
            context=context,
            exception_type=type(error).__name__,
        )

        self.error_records.append(error_record)

        # Keep only recent errors to prevent memory issues
        if len(self.error_records) > self.max_records:
            self.error_records = self.error_records[-(self.max_records // 2):]

        return error_record

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of recorded errors."""
        by_category: Dict[str, int] = {}
        for record in self.error_records:
            by_category[record.category.value] = by_category.get(record.category.value, 0) + 1

        return {
            "total_errors": len(self.error_records),
            "errors_by_category": by_category,
            "failed_request_ids": [
                record.context.request_id for record in self.error_records
                if record.context.request_id is not None
            ],
            "recent_errors": [record.to_dict() for record in self.error_records[-10:]],
        }

    def clear(self) -> None:
        """Forget all recorded errors."""
        self.error_records.clear()

    @property
    def has_errors(self) -> bool:
        return bool(self.error_records)
