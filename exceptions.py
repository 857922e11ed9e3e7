"""
Custom Exception Hierarchy

Error types raised by the record store and the request handlers, each
carrying a short code and optional details for logging.
"""
from typing import Optional, Dict, Any


class DiabetesCareError(Exception):
    """Base exception for all portal errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for log records."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class ConfigurationError(DiabetesCareError):
    """Required settings are missing at startup."""

    def __init__(self, message: str, setting: str = "unknown"):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details={"setting": setting}
        )
        self.setting = setting


class StoreError(DiabetesCareError):
    """Connectivity or write failures reported by the record store."""

    def __init__(
        self,
        message: str,
        table: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="STORE_ERROR",
            details={"table": table, **(details or {})}
        )
        self.table = table


class RecordNotFoundError(DiabetesCareError):
    """A looked-up record does not exist."""

    def __init__(self, message: str, record_id: str = "unknown"):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            details={"record_id": record_id}
        )
        self.record_id = record_id


class HealthDataError(DiabetesCareError):
    """Submitted health form could not be parsed into a record."""

    def __init__(self, message: str, field: str = "unknown"):
        super().__init__(
            message=message,
            code="HEALTH_DATA_ERROR",
            details={"field": field}
        )
        self.field = field
