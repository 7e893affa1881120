"""
Export module for Dataset Keyword Analysis.

Provides JSON, CSV, and Excel export functionality.
"""
from export.json_exporter import JSONExporter
from export.csv_exporter import CSVExporter, create_download_link
from export.excel_exporter import ExcelExporter

__all__ = [
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "create_download_link",
]
