"""
Category and keyword statistics aggregation.
"""
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Tuple, TypeVar
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from analysis.keyword_normalizer import KeywordNormalizer, NormalizationResult
from core.exceptions import EmptyDatasetError

T = TypeVar("T")

_TWO_PLACES = Decimal("0.01")


def format_percentage(count: int, total: int) -> str:
    """
    Format count/total as a percentage string with two decimals.

    Rounds half away from zero on the exact float value.

    Raises:
        EmptyDatasetError: If total is zero
    """
    if total <= 0:
        raise EmptyDatasetError(
            "Cannot compute percentages for an empty dataset"
        )
    value = Decimal(count / total * 100)
    return str(value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def group_and_rank(
    items: Iterable[T],
    key: Callable[[T], Hashable]
) -> List[Tuple[Hashable, List[T]]]:
    """
    Group items by key and rank groups by size.

    Groups are built in first-appearance order of each key; the sort
    is stable, so groups of equal size keep that order.

    Args:
        items: Items to group
        key: Function extracting the grouping key

    Returns:
        List of (key, members) sorted by len(members) descending
    """
    groups: Dict[Hashable, List[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)

    return sorted(
        groups.items(),
        key=lambda x: len(x[1]),
        reverse=True
    )


def _unique_in_order(values: Iterable[Any]) -> Tuple[Any, ...]:
    return tuple(dict.fromkeys(values))


@dataclass(frozen=True)
class KeywordInstance:
    """One keyword occurrence contributed by a single row."""

    keyword: str
    category: str
    department: Any


@dataclass(frozen=True)
class CategoryStat:
    """Frequency of one category."""

    category: str
    count: int
    percentage: str

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "count": self.count,
            "percentage": self.percentage
        }


@dataclass(frozen=True)
class KeywordStat:
    """Frequency of one keyword with the categories it appears under."""

    keyword: str
    count: int
    percentage: str
    categories: Tuple[str, ...]
    departments: Tuple[Any, ...]

    def to_dict(self) -> dict:
        return {
            "keyword": self.keyword,
            "count": self.count,
            "percentage": self.percentage,
            "categories": list(self.categories),
            "departments": list(self.departments)
        }


class StatsAggregator:
    """
    Aggregates filtered rows into ranked category and keyword stats.

    Rows are dicts with ``category``, ``department`` and ``keywords``
    keys and are expected to have passed the presence filter.
    """

    def __init__(self, normalizer: Optional[KeywordNormalizer] = None):
        self.normalizer = normalizer or KeywordNormalizer()

    def category_stats(self, rows: List[dict]) -> List[CategoryStat]:
        """
        Compute the category distribution.

        Args:
            rows: Filtered rows

        Returns:
            CategoryStat list sorted by count descending
        """
        total = len(rows)
        ranked = group_and_rank(rows, key=lambda row: row["category"].strip())

        return [
            CategoryStat(
                category=category,
                count=len(members),
                percentage=format_percentage(len(members), total)
            )
            for category, members in ranked
        ]

    def normalize_rows(self, rows: List[dict]) -> List[NormalizationResult]:
        """Normalize the keyword field of every row, in row order."""
        return [
            self.normalizer.normalize_with_details(row["keywords"])
            for row in rows
        ]

    def keyword_instances(
        self,
        rows: List[dict],
        normalized: Optional[List[NormalizationResult]] = None
    ) -> List[KeywordInstance]:
        """
        Flatten rows into one instance per normalized keyword.

        Args:
            rows: Filtered rows
            normalized: Output of normalize_rows() for the same rows;
                computed here when omitted

        Returns:
            KeywordInstance list in row order
        """
        if normalized is None:
            normalized = self.normalize_rows(rows)

        instances = []
        for row, details in zip(rows, normalized):
            category = row["category"].strip()
            department = row.get("department")
            for keyword in details.keywords:
                instances.append(KeywordInstance(
                    keyword=keyword,
                    category=category,
                    department=department
                ))
        return instances

    def keyword_stats(
        self,
        instances: List[KeywordInstance]
    ) -> List[KeywordStat]:
        """
        Compute the keyword distribution.

        Args:
            instances: Keyword instances from keyword_instances()

        Returns:
            KeywordStat list sorted by count descending
        """
        total = len(instances)
        ranked = group_and_rank(instances, key=lambda inst: inst.keyword)

        return [
            KeywordStat(
                keyword=keyword,
                count=len(members),
                percentage=format_percentage(len(members), total),
                categories=_unique_in_order(m.category for m in members),
                departments=_unique_in_order(m.department for m in members)
            )
            for keyword, members in ranked
        ]

    @staticmethod
    def unique_keywords(keyword_stats: List[KeywordStat]) -> List[str]:
        """Return distinct keywords sorted ascending."""
        return sorted(stat.keyword for stat in keyword_stats)

    @staticmethod
    def suppressed_variants(
        normalized: List[NormalizationResult]
    ) -> Dict[str, int]:
        """
        Count near-duplicate collapses as 'variant → kept' labels.

        Exact repeats are not reported.
        """
        counts: Dict[str, int] = {}
        for details in normalized:
            for variant, kept in details.suppressed:
                if variant == kept:
                    continue
                label = f"{variant} → {kept}"
                counts[label] = counts.get(label, 0) + 1
        return counts
