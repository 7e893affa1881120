"""
Ingestion module for Dataset Keyword Analysis.
Handles CSV upload, parsing, and row validation.
"""
from ingestion.csv_parser import CSVParser
from ingestion.validator import RowValidator

__all__ = ["CSVParser", "RowValidator"]
