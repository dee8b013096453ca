"""
Custom error handling.

Defines the application's exception hierarchy and helpers to log and
aggregate errors consistently. Exceptions never reach the UI layer: the
order manager converts them into boolean/optional results plus a
human-readable reason.
"""

import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Standardized error codes.
    """

    # General
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Input data
    INVALID_NAME = "INVALID_NAME"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"
    INVALID_LINE_FORMAT = "INVALID_LINE_FORMAT"

    # Lookups
    NOT_FOUND = "NOT_FOUND"

    # Store
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    STORE_QUERY_FAILED = "STORE_QUERY_FAILED"


class ErrorSeverity(Enum):
    """
    Severity levels for errors.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Base class for every custom exception in the application.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        is_retryable: bool = False,
        is_critical: bool = False,
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_code: Standardized error code
            details: Extra information about the error
            severity: Error severity
            is_retryable: Whether the operation may be retried
            is_critical: Whether the error needs immediate attention
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.severity = severity
        self.is_retryable = is_retryable
        self.is_critical = is_critical
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the exception to a dictionary.

        Returns:
            Dict: Exception representation
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
            "is_critical": self.is_critical,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class ValidationException(AppException):
    """
    Raised when input data breaks a validation rule.
    """

    def __init__(
        self,
        message: str,
        field: str,
        invalid_value: Any = None,
        expected_format: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        **kwargs,
    ):
        """
        Initialize the validation exception.

        Args:
            message: Error message
            field: Field that failed validation
            invalid_value: Offending value
            expected_format: Description of the expected format
            error_code: Specific validation error code
            **kwargs: Extra arguments for AppException
        """
        super().__init__(
            message=message,
            error_code=error_code,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.field = field
        self.invalid_value = invalid_value
        self.expected_format = expected_format

        self.details.update(
            {
                "field": field,
                "invalid_value": str(invalid_value) if invalid_value is not None else None,
                "expected_format": expected_format,
            }
        )


class InvalidNameException(ValidationException):
    """
    Raised when a customer or shipper name breaks the active name policy.
    """

    def __init__(self, name: Optional[str], field: str = "name", policy: str = "lenient", **kwargs):
        super().__init__(
            message=f"Invalid {field}: {name!r} does not satisfy the {policy} name policy",
            field=field,
            invalid_value=name,
            expected_format=policy,
            error_code=ErrorCode.INVALID_NAME,
            **kwargs,
        )
        self.policy = policy


class NotFoundException(AppException):
    """
    Raised when the target of an operation does not exist.
    """

    def __init__(self, message: str, entity: str, entity_id: Any = None, **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.NOT_FOUND,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.entity = entity
        self.entity_id = entity_id

        self.details.update({"entity": entity, "entity_id": entity_id})


class StoreException(AppException):
    """
    Raised when the relational store fails (lost connection, constraint
    violation, query error).
    """

    def __init__(
        self,
        message: str,
        operation: str = "query",
        error_code: ErrorCode = ErrorCode.STORE_QUERY_FAILED,
        **kwargs,
    ):
        """
        Initialize the store exception.

        Args:
            message: Error message
            operation: Store operation that failed
            error_code: STORE_QUERY_FAILED or STORE_UNAVAILABLE
            **kwargs: Extra arguments for AppException
        """
        super().__init__(
            message=message,
            error_code=error_code,
            severity=ErrorSeverity.HIGH,
            is_retryable=False,
            **kwargs,
        )
        self.operation = operation

        self.details.update({"operation": operation})


def convert_to_app_exception(exception: Exception, context: Optional[Dict[str, Any]] = None) -> AppException:
    """
    Convert a standard exception into an AppException.

    Args:
        exception: Exception to convert
        context: Extra context

    Returns:
        AppException: Converted exception
    """
    context = context or {}

    if isinstance(exception, AppException):
        exception.details.update(context)
        return exception

    exception_type = type(exception).__name__
    message = str(exception)

    return AppException(
        message=f"{exception_type}: {message}",
        details={"original_exception": exception_type, **context},
    )


def log_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Log an error consistently.

    Args:
        exception: Exception to log
        context: Extra context
        level: Logging level
    """
    context = context or {}

    log_data = {
        "exception_type": type(exception).__name__,
        "exception_message": str(exception),
        **context,
    }

    if isinstance(exception, AppException):
        message = f"{exception.error_code.value}: {exception.message}"
        log_data.update(
            {
                "error_code": exception.error_code.value,
                "severity": exception.severity.value,
                "is_retryable": exception.is_retryable,
            }
        )
    else:
        message = f"Unhandled exception: {type(exception).__name__}: {str(exception)}"
        log_data["traceback"] = traceback.format_exc()

    logger.log(level, message, extra=log_data)


class ErrorAggregator:
    """
    Collects errors raised while processing a batch.
    """

    def __init__(self):
        self.errors: List[AppException] = []
        self.warnings: List[AppException] = []
        self.total_processed = 0
        self.start_time = datetime.now(timezone.utc)

    def add_error(self, exception: Union[AppException, Exception], context: Optional[Dict] = None):
        """
        Record an error.

        Args:
            exception: Exception to record
            context: Extra context
        """
        exception = convert_to_app_exception(exception, context)

        if exception.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM):
            self.warnings.append(exception)
        else:
            self.errors.append(exception)

        if exception.is_critical:
            log_error(exception, context, logging.CRITICAL)

    def increment_processed(self):
        self.total_processed += 1

    def get_summary(self) -> Dict[str, Any]:
        """
        Summarize the collected errors.

        Returns:
            Dict: Error summary
        """
        end_time = datetime.now(timezone.utc)

        return {
            "total_processed": self.total_processed,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "duration_seconds": (end_time - self.start_time).total_seconds(),
            "errors": [error.to_dict() for error in self.errors],
            "warnings": [warning.to_dict() for warning in self.warnings],
        }
