"""
Row validation utilities.
"""
from typing import Any, List, Tuple
from dataclasses import dataclass

REQUIRED_FIELDS = ("category", "keywords")


def is_present(value: Any) -> bool:
    """
    Check whether a field value counts as present.

    None and blank strings are missing; other values follow truthiness.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


@dataclass
class RowValidationResult:
    """Result of row validation."""

    valid_rows: List[dict]
    excluded_rows: List[Tuple[dict, str]]  # (row, reason)
    warnings: List[str]

    @property
    def valid_count(self) -> int:
        return len(self.valid_rows)

    @property
    def excluded_count(self) -> int:
        return len(self.excluded_rows)

    @property
    def total_count(self) -> int:
        return self.valid_count + self.excluded_count

    @property
    def validity_rate(self) -> float:
        if self.total_count == 0:
            return 0.0
        return self.valid_count / self.total_count


class RowValidator:
    """
    Filters parsed rows before aggregation.
    A row is kept only when it has a category and a keywords value.
    """

    def __init__(self, required_fields: Tuple[str, ...] = REQUIRED_FIELDS):
        """
        Initialize validator.

        Args:
            required_fields: Fields that must be present on every row
        """
        self.required_fields = required_fields

    def validate(self, rows: List[dict]) -> RowValidationResult:
        """
        Validate a list of rows.

        Args:
            rows: Row dictionaries from the CSV parser

        Returns:
            RowValidationResult with kept/excluded rows and warnings
        """
        valid = []
        excluded = []
        warnings = []

        for row in rows:
            is_valid, reason = self._validate_row(row)

            if is_valid:
                valid.append(row)
            else:
                excluded.append((row, reason))

        if excluded:
            warnings.append(
                f"{len(excluded)} rows were excluded for missing "
                "category or keywords"
            )

        if rows and not valid:
            warnings.append(
                "No rows have both a category and keywords. "
                "Check the selected columns."
            )

        return RowValidationResult(
            valid_rows=valid,
            excluded_rows=excluded,
            warnings=warnings
        )

    def validate_batch(
        self,
        rows: List[dict]
    ) -> Tuple[List[dict], List[dict]]:
        """
        Split rows into kept and excluded lists.

        Args:
            rows: Row dictionaries

        Returns:
            Tuple of (valid_rows, excluded_rows)
        """
        valid = []
        excluded = []

        for row in rows:
            is_valid, _ = self._validate_row(row)

            if is_valid:
                valid.append(row)
            else:
                excluded.append(row)

        return valid, excluded

    def _validate_row(self, row: dict) -> Tuple[bool, str]:
        """
        Validate a single row.

        Args:
            row: Row dictionary

        Returns:
            Tuple of (is_valid, reason if invalid)
        """
        for name in self.required_fields:
            if not is_present(row.get(name)):
                return False, f"Missing {name}"

        return True, ""

    def get_stats(self, result: RowValidationResult) -> dict:
        """
        Get validation statistics.

        Args:
            result: RowValidationResult object

        Returns:
            Statistics dictionary
        """
        reason_counts = {}
        for _, reason in result.excluded_rows:
            reason_counts[reason] = reason_counts.get(reason, 0) + 1

        return {
            "total_input": result.total_count,
            "valid": result.valid_count,
            "excluded": result.excluded_count,
            "validity_rate": f"{result.validity_rate:.1%}",
            "excluded_reasons": reason_counts,
            "warnings": result.warnings
        }
