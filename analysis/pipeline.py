"""
Main analysis pipeline orchestrator.
Coordinates all stages of the dataset analysis.

Pipeline:
1. Presence filter (category and keywords required)
2. Category distribution
3. Per-row keyword normalization
4. Keyword distribution and unique keyword list
"""
import logging
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass, field
from datetime import datetime, timezone

from analysis.keyword_normalizer import KeywordNormalizer
from analysis.stats_aggregator import (
    CategoryStat,
    KeywordStat,
    StatsAggregator
)
from core.exceptions import (
    AnalysisError,
    EmptyDatasetError,
    UnexpectedComputationError
)
from config.settings import Settings
from ingestion.validator import RowValidator

LOGGER = logging.getLogger(__name__)


def _isoformat(timestamp: datetime) -> str:
    """ISO 8601 in UTC with millisecond precision and a Z suffix."""
    utc = timestamp.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class AnalysisResult:
    """Complete result of one dataset analysis."""

    total_records: int
    category_stats: List[CategoryStat]
    keyword_stats: List[KeywordStat]
    unique_keywords: List[str]
    total_keyword_instances: int
    analysis_timestamp: datetime
    excluded_records: int = 0
    # Excluded row counts per reason, e.g. "Missing keywords"
    exclusion_reasons: Dict[str, int] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    # Near-duplicate collapses per (variant, kept) pair
    suppressed_variants: Dict[str, int] = field(default_factory=dict)

    @property
    def total_categories(self) -> int:
        return len(self.category_stats)

    @property
    def total_unique_keywords(self) -> int:
        return len(self.unique_keywords)

    def summary(self) -> Dict[str, Any]:
        """Summary block used by the exporters."""
        return {
            "totalRecords": self.total_records,
            "totalCategories": self.total_categories,
            "totalUniqueKeywords": self.total_unique_keywords,
            "totalKeywordInstances": self.total_keyword_instances,
            "analysisTimestamp": _isoformat(self.analysis_timestamp)
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "summary": self.summary(),
            "categoryAnalysis": [s.to_dict() for s in self.category_stats],
            "keywordAnalysis": [s.to_dict() for s in self.keyword_stats],
            "uniqueKeywords": list(self.unique_keywords)
        }


class AnalysisPipeline:
    """
    Orchestrates filtering and aggregation of parsed rows.

    Domain errors propagate unchanged; anything else raised while
    aggregating is logged and re-raised as UnexpectedComputationError.
    """

    def __init__(
        self,
        validator: RowValidator = None,
        aggregator: StatsAggregator = None
    ):
        """
        Initialize analysis pipeline.

        Args:
            validator: Row presence filter
            aggregator: Statistics aggregator
        """
        self.validator = validator or RowValidator()
        self.aggregator = aggregator or StatsAggregator()

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalysisPipeline":
        """Build a pipeline whose normalizer follows the normalization settings."""
        normalizer = KeywordNormalizer(
            min_substring_length=settings.normalization.min_substring_length
        )
        return cls(aggregator=StatsAggregator(normalizer))

    def run(
        self,
        rows: List[dict],
        progress_callback: Callable = None,
        timestamp: Optional[datetime] = None
    ) -> AnalysisResult:
        """
        Run the full analysis.

        Args:
            rows: Parsed rows with category, department, keywords keys
            progress_callback: Progress callback (stage, progress, message)
            timestamp: Analysis time (defaults to now, UTC)

        Returns:
            AnalysisResult with all statistics

        Raises:
            EmptyDatasetError: If no rows or keywords survive filtering
            UnexpectedComputationError: On any other aggregation fault
        """
        phase = "filtering"
        try:
            if progress_callback:
                progress_callback(phase, 0.1, "Filtering rows...")

            validation = self.validator.validate(rows)
            valid = validation.valid_rows
            LOGGER.info(
                "Kept %d of %d rows (%d excluded)",
                validation.valid_count, len(rows), validation.excluded_count
            )
            if not valid:
                raise EmptyDatasetError(
                    "No rows with both a category and keywords were found",
                    total_rows=len(rows),
                    excluded_rows=validation.excluded_count
                )
            exclusion_stats = self.validator.get_stats(validation)

            phase = "categories"
            if progress_callback:
                progress_callback(phase, 0.3, "Computing category distribution...")

            category_stats = self.aggregator.category_stats(valid)

            phase = "keywords"
            if progress_callback:
                progress_callback(phase, 0.6, "Normalizing keywords...")

            normalized = self.aggregator.normalize_rows(valid)
            instances = self.aggregator.keyword_instances(valid, normalized)
            if not instances:
                raise EmptyDatasetError(
                    "No keywords remained after normalization",
                    total_rows=len(rows),
                    excluded_rows=validation.excluded_count
                )

            keyword_stats = self.aggregator.keyword_stats(instances)
            unique_keywords = self.aggregator.unique_keywords(keyword_stats)
            suppressed = self.aggregator.suppressed_variants(normalized)

        except AnalysisError:
            raise
        except Exception as exc:
            LOGGER.exception("Error analyzing dataset during %s", phase)
            raise UnexpectedComputationError(
                f"Error analyzing dataset: {exc}",
                phase=phase,
                cause=str(exc)
            ) from exc

        if progress_callback:
            progress_callback("completed", 1.0, "Analysis complete")

        LOGGER.info(
            "Analysis complete: %d categories, %d unique keywords, %d instances",
            len(category_stats), len(unique_keywords), len(instances)
        )

        return AnalysisResult(
            total_records=len(valid),
            category_stats=category_stats,
            keyword_stats=keyword_stats,
            unique_keywords=unique_keywords,
            total_keyword_instances=len(instances),
            analysis_timestamp=timestamp or datetime.now(timezone.utc),
            excluded_records=validation.excluded_count,
            exclusion_reasons=exclusion_stats["excluded_reasons"],
            warnings=list(validation.warnings),
            suppressed_variants=suppressed
        )
