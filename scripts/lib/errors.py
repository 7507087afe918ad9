"""
Custom error classes for College Leads Hub.
Structured error handling with error codes across all modules.

Hierarchy:
    LeadsHubError
    ├── DataError
    │   ├── ConfigError
    │   ├── DataFetchError
    │   ├── InvalidFilterError
    │   └── SubmissionValidationError
    └── ReportError
        ├── ReportFormatError
        └── ReportGenerationError
"""


class LeadsHubError(Exception):
    """Base exception for all College Leads Hub errors."""

    def __init__(self, message: str, code: str = "UNKNOWN", details: dict = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code}] {message}")


# --- Data Errors ---

class DataError(LeadsHubError):
    """Base class for data access and validation errors."""
    pass


class ConfigError(DataError):
    """Missing or invalid configuration."""

    def __init__(self, message: str, setting: str = None):
        super().__init__(
            message, code="CONFIG_ERROR",
            details={"setting": setting},
        )


class DataFetchError(DataError):
    """Failed to read or write records in the store."""

    def __init__(self, message: str, source: str = None):
        super().__init__(
            message, code="DATA_FETCH_FAILED", details={"source": source},
        )


class InvalidFilterError(DataError):
    """A lead filter parameter could not be parsed."""

    def __init__(self, message: str, field: str = None, value: str = None):
        super().__init__(
            message, code="INVALID_FILTER",
            details={"field": field, "value": value},
        )


class SubmissionValidationError(DataError):
    """A contact form submission failed validation."""

    def __init__(self, message: str, field: str = None):
        super().__init__(
            message, code="SUBMISSION_INVALID", details={"field": field},
        )


# --- Report Errors ---

class ReportError(LeadsHubError):
    """Base class for report rendering errors."""
    pass


class ReportFormatError(ReportError):
    """Requested report format is not supported."""

    def __init__(self, fmt: str):
        super().__init__(
            f"Unsupported report format: {fmt}",
            code="REPORT_FORMAT", details={"format": fmt},
        )


class ReportGenerationError(ReportError):
    """The formatting library failed while rendering a report."""

    def __init__(self, fmt: str, cause: Exception = None):
        super().__init__(
            f"Failed to generate {fmt.upper()} report",
            code="REPORT_FAILED",
            details={"format": fmt, "cause": str(cause) if cause else None},
        )
