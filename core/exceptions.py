"""
Custom exceptions for statement cleaning.
"""
from typing import Any, Dict, Optional


class StatementCleanerException(Exception):
    """Base exception for all statement cleaning errors."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize exception.
        
        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class FormatError(StatementCleanerException):
    """Raised when a workbook cannot be opened or restructured."""
    pass


class EmptyResultError(StatementCleanerException):
    """Raised when a workbook yields neither credits nor debits."""
    pass


class ExportError(StatementCleanerException):
    """Raised when CSV or archive output cannot be written."""
    pass


class ConfigurationError(StatementCleanerException):
    """Raised when configuration is invalid."""
    pass
