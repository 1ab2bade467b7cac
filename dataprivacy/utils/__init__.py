"""Utility modules for the data privacy exporter."""

from .error_handler import ExportErrorHandler, ErrorCategory, ErrorRecord, ErrorSeverity

__all__ = [
    'ExportErrorHandler',
    'ErrorCategory',
    'ErrorRecord',
    'ErrorSeverity',
]
