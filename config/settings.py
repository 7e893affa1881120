"""
Application settings and configuration.
Optional overrides are loaded from Streamlit secrets or the environment.
"""
import os
import streamlit as st
from dataclasses import dataclass, field
from typing import List, Optional
from functools import lru_cache


@dataclass
class ParsingSettings:
    """Settings for reading uploaded CSV files."""

    encodings: List[str] = field(default_factory=lambda: [
        "utf-8-sig", "cp1252", "latin-1"
    ])
    delimiters_to_guess: List[str] = field(default_factory=lambda: [
        ",", ";", "|", "\t"
    ])
    sniff_sample_bytes: int = 64 * 1024
    dynamic_typing: bool = False  # Let pandas infer numeric columns
    preview_rows: int = 5


@dataclass
class NormalizationSettings:
    """Settings for keyword normalization."""

    # Shorter token must be at least this long for the substring rule
    min_substring_length: int = 3


@dataclass
class DisplaySettings:
    """Settings for charts and tables."""

    top_keywords_chart: int = 15
    top_keywords_table: int = 20
    chart_colors: List[str] = field(default_factory=lambda: [
        "#8884d8",
        "#82ca9d",
        "#ffc658",
        "#ff7c7c",
        "#8dd1e1",
        "#d084d0",
        "#ffb347",
        "#87ceeb",
    ])


@dataclass
class ExportSettings:
    """Settings for result export."""

    json_filename: str = "dataset_analysis_results.json"
    excel_filename: str = "dataset_analysis_report.xlsx"
    categories_csv_filename: str = "category_analysis.csv"
    keywords_csv_filename: str = "keyword_analysis.csv"
    unique_keywords_csv_filename: str = "unique_keywords.csv"
    report_csv_filename: str = "dataset_analysis_report.csv"
    json_indent: int = 2


@dataclass
class LoggingSettings:
    """Settings for log output."""

    default_level: str = "INFO"
    file_path: Optional[str] = None
    file_level: str = "DEBUG"


@dataclass
class Settings:
    """
    Main application settings.
    Secrets are optional; every value has a working default.
    """

    # App info
    app_name: str = "Dataset Analysis Tool"
    app_version: str = "1.0.0"

    # Sub-settings
    parsing: ParsingSettings = field(default_factory=ParsingSettings)
    normalization: NormalizationSettings = field(
        default_factory=NormalizationSettings
    )
    display: DisplaySettings = field(default_factory=DisplaySettings)
    export: ExportSettings = field(default_factory=ExportSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def _get_secret(self, flat_key: str, nested_section: str, nested_key: str) -> str:
        """
        Get secret supporting both flat and nested formats.

        Flat: LOG_LEVEL = "DEBUG"
        Nested: [logging]
                level = "DEBUG"

        Falls back to the environment variable named by flat_key.
        """
        try:
            if flat_key in st.secrets:
                return st.secrets[flat_key]
            if nested_section in st.secrets:
                section = st.secrets[nested_section]
                if nested_key in section:
                    return section[nested_key]
        except Exception:
            # No secrets.toml configured
            pass

        return os.environ.get(flat_key, "")

    @property
    def log_level(self) -> str:
        """Get log level from secrets or the LOG_LEVEL variable."""
        level = self._get_secret("LOG_LEVEL", "logging", "level")
        return (level or self.logging.default_level).upper()

    @property
    def log_file(self) -> Optional[str]:
        """Get optional log file path."""
        path = self._get_secret("LOG_FILE", "logging", "file")
        return path or self.logging.file_path


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to avoid recreating settings on each call.
    """
    return Settings()
