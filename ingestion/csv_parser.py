"""
CSV parsing for dataset uploads.
Supports any delimited file with column selection.
"""
import csv
import logging
import pandas as pd
from typing import List, Dict, Optional, Any, Tuple
from io import BytesIO

from config.settings import ParsingSettings, get_settings
from core.exceptions import InputFormatError

LOGGER = logging.getLogger(__name__)


class CSVParser:
    """
    Parses CSV files into analysis rows.
    Supports any CSV layout - user can select the source columns.
    """

    # Common column name variations for auto-detection
    CATEGORY_COLUMN_NAMES = [
        "category", "categories", "category name", "category_name",
        "type", "class", "classification", "topic", "label"
    ]

    DEPARTMENT_COLUMN_NAMES = [
        "department", "departments", "dept", "division",
        "team", "unit", "business unit", "business_unit", "owner"
    ]

    KEYWORDS_COLUMN_NAMES = [
        "keywords", "keyword", "key words", "key_words",
        "tags", "tag", "terms", "topics", "labels"
    ]

    def __init__(self, settings: ParsingSettings = None):
        self.settings = settings or ParsingSettings()
        self.df: Optional[pd.DataFrame] = None
        self.original_columns: List[str] = []
        self.delimiter: Optional[str] = None
        self.warnings: List[str] = []
        self.category_column: Optional[str] = None
        self.department_column: Optional[str] = None
        self.keywords_column: Optional[str] = None

    def preview(
        self,
        file_content: BytesIO,
        filename: str = None
    ) -> Dict[str, Any]:
        """
        Preview CSV file and return column information.

        Args:
            file_content: File content as BytesIO
            filename: Original file name, used in error messages

        Returns:
            Dict with columns, sample data, and auto-detected columns

        Raises:
            InputFormatError: If the file cannot be read
        """
        self._load(file_content, filename)

        sample_df = self.df.head(self.settings.preview_rows)
        sample_data = self._records(sample_df)

        return {
            "columns": self.original_columns,
            "row_count": len(self.df),
            "delimiter": self.delimiter,
            "warnings": list(self.warnings),
            "sample_data": sample_data,
            "detected_category_column": self._find_column(
                self.CATEGORY_COLUMN_NAMES
            ),
            "detected_department_column": self._find_column(
                self.DEPARTMENT_COLUMN_NAMES
            ),
            "detected_keywords_column": self._find_column(
                self.KEYWORDS_COLUMN_NAMES
            )
        }

    def parse_with_selection(
        self,
        category_column: str,
        keywords_column: str,
        department_column: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Parse using user-selected columns.

        Args:
            category_column: Column containing the category label
            keywords_column: Column containing comma-separated keywords
            department_column: Optional column for the department

        Returns:
            List of row dicts with category, department, keywords keys

        Raises:
            InputFormatError: If no file is loaded or a column is missing
        """
        if self.df is None:
            raise InputFormatError("No file loaded. Call preview() first.")

        for column in (category_column, keywords_column, department_column):
            if column is not None and column not in self.df.columns:
                raise InputFormatError(f"Column '{column}' not found")

        self.category_column = category_column
        self.keywords_column = keywords_column
        self.department_column = department_column

        rows = []
        for record in self._records(self.df):
            rows.append({
                "category": record.get(category_column),
                "department": (
                    record.get(department_column)
                    if department_column else None
                ),
                "keywords": record.get(keywords_column)
            })

        return rows

    def parse(
        self,
        file_content: BytesIO,
        filename: str = None
    ) -> List[Dict[str, Any]]:
        """
        Parse CSV file using auto-detected columns.

        Args:
            file_content: File content as BytesIO
            filename: Original file name

        Returns:
            List of row dicts

        Raises:
            InputFormatError: If parsing fails or required columns are missing
        """
        preview = self.preview(file_content, filename=filename)

        missing = [
            name for name, detected in (
                ("category", preview["detected_category_column"]),
                ("keywords", preview["detected_keywords_column"])
            )
            if not detected
        ]
        if missing:
            raise InputFormatError(
                f"Could not auto-detect {', '.join(missing)} column. "
                f"Available columns: {', '.join(map(str, preview['columns']))}",
                filename=filename
            )

        return self.parse_with_selection(
            category_column=preview["detected_category_column"],
            keywords_column=preview["detected_keywords_column"],
            department_column=preview["detected_department_column"]
        )

    def _load(self, file_content: BytesIO, filename: Optional[str]):
        """Read the file trying each configured encoding."""
        self.warnings = []
        raw = file_content.getvalue()
        if not raw.strip():
            raise InputFormatError("The uploaded file is empty", filename=filename)

        for enc in self.settings.encodings:
            try:
                text = raw.decode(enc)
                break
            except UnicodeDecodeError:
                continue
        else:
            raise InputFormatError(
                "Could not decode file with any supported encoding",
                filename=filename
            )

        self.delimiter = self._guess_delimiter(text)

        try:
            self.df = pd.read_csv(
                BytesIO(text.encode("utf-8")),
                sep=self.delimiter,
                encoding="utf-8",
                engine="python",
                dtype=None if self.settings.dynamic_typing else str,
                keep_default_na=False,
                na_values=[""],
                skip_blank_lines=True,
                on_bad_lines=self._record_bad_line
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as e:
            raise InputFormatError(
                f"Failed to read CSV: {str(e)}",
                filename=filename
            ) from e

        self.df.columns = [str(col).strip() for col in self.df.columns]
        self.original_columns = list(self.df.columns)

        if self.warnings:
            LOGGER.warning(
                "CSV parsing warnings for %s: %s",
                filename or "upload", "; ".join(self.warnings)
            )

    def _guess_delimiter(self, text: str) -> str:
        """Guess the delimiter from a sample, defaulting to a comma."""
        sample = text[:self.settings.sniff_sample_bytes]
        delimiters = "".join(self.settings.delimiters_to_guess)
        try:
            dialect = csv.Sniffer().sniff(sample, delimiters=delimiters)
            return dialect.delimiter
        except csv.Error:
            return self.settings.delimiters_to_guess[0]

    def _record_bad_line(self, bad_line: List[str]) -> None:
        """Keep malformed lines as non-fatal warnings and skip them."""
        self.warnings.append(
            f"Skipped malformed row with {len(bad_line)} fields"
        )
        return None

    @staticmethod
    def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
        """Convert a frame to records with None for missing cells."""
        cleaned = df.astype(object).where(pd.notna(df), None)
        return cleaned.to_dict("records")

    def _find_column(self, possible_names: List[str]) -> Optional[str]:
        """
        Find a column matching any of the possible names.

        Args:
            possible_names: List of possible column name variations

        Returns:
            Actual column name if found, None otherwise
        """
        if self.df is None:
            return None

        normalized = {
            str(col).lower().strip(): col
            for col in self.df.columns
        }
        for name in possible_names:
            if name in normalized:
                return normalized[name]

        return None

    def get_column_info(self) -> dict:
        """
        Get information about selected columns.

        Returns:
            Dict with column selection results
        """
        return {
            "category_column": self.category_column,
            "department_column": self.department_column,
            "keywords_column": self.keywords_column,
            "has_department": self.department_column is not None,
            "delimiter": self.delimiter,
            "total_columns": len(self.df.columns) if self.df is not None else 0,
            "column_names": (
                list(self.df.columns) if self.df is not None else []
            )
        }


def preview_uploaded_file(
    uploaded_file,
    settings: ParsingSettings = None
) -> Tuple[CSVParser, Dict[str, Any]]:
    """
    Preview a Streamlit uploaded file.

    Args:
        uploaded_file: Streamlit UploadedFile object
        settings: Parsing settings (defaults to the application settings)

    Returns:
        Tuple of (parser instance, preview info)
    """
    parser = CSVParser(settings or get_settings().parsing)
    content = BytesIO(uploaded_file.read())
    preview = parser.preview(content, filename=uploaded_file.name)
    return parser, preview
