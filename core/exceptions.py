"""
Custom exceptions for Dataset Keyword Analysis.
"""


class AnalysisError(Exception):
    """Base exception for analysis errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InputFormatError(AnalysisError):
    """Exception for files the CSV parser cannot read."""

    def __init__(self, message: str, filename: str = None):
        self.filename = filename
        super().__init__(
            message,
            {"filename": filename}
        )


class EmptyDatasetError(AnalysisError):
    """Exception raised when no rows or keywords survive filtering."""

    def __init__(
        self,
        message: str = "No valid rows found in dataset",
        total_rows: int = 0,
        excluded_rows: int = 0
    ):
        self.total_rows = total_rows
        self.excluded_rows = excluded_rows
        super().__init__(
            message,
            {
                "total_rows": total_rows,
                "excluded_rows": excluded_rows
            }
        )


class UnexpectedComputationError(AnalysisError):
    """Exception for any other fault raised while aggregating."""

    def __init__(
        self,
        message: str,
        phase: str = None,
        cause: str = None
    ):
        self.phase = phase
        self.cause = cause
        super().__init__(
            message,
            {
                "phase": phase,
                "cause": cause
            }
        )


class ConfigurationError(AnalysisError):
    """Exception for configuration errors."""

    def __init__(self, message: str, missing_keys: list = None):
        self.missing_keys = missing_keys or []
        super().__init__(
            message,
            {"missing_keys": missing_keys}
        )
