"""
Core module for Dataset Keyword Analysis.
Contains exception handling and logging configuration.
Job management lives in core.job_manager.
"""
from core.exceptions import (
    AnalysisError,
    InputFormatError,
    EmptyDatasetError,
    UnexpectedComputationError,
    ConfigurationError
)

__all__ = [
    "AnalysisError",
    "InputFormatError",
    "EmptyDatasetError",
    "UnexpectedComputationError",
    "ConfigurationError"
]
