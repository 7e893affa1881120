"""
Analysis module for Dataset Keyword Analysis.
Keyword normalization, statistics aggregation, and the pipeline
that ties them together.
"""
from analysis.keyword_normalizer import (
    KeywordNormalizer,
    NormalizationResult,
    is_similar,
    split_keywords
)
from analysis.stats_aggregator import (
    CategoryStat,
    KeywordInstance,
    KeywordStat,
    StatsAggregator,
    group_and_rank
)

__all__ = [
    "KeywordNormalizer",
    "NormalizationResult",
    "is_similar",
    "split_keywords",
    "CategoryStat",
    "KeywordInstance",
    "KeywordStat",
    "StatsAggregator",
    "group_and_rank",
]
