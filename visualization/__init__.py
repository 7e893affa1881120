"""
Visualization module for Dataset Keyword Analysis.

Provides interactive charts and metrics displays.
"""
from visualization.charts import (
    create_category_bar,
    create_category_pie,
    create_top_keywords_bar
)
from visualization.metrics_display import (
    display_summary_metrics,
    display_category_table,
    display_keyword_table,
    display_unique_keywords,
    display_exclusion_summary,
    exclusion_table
)

__all__ = [
    # Charts
    "create_category_bar",
    "create_category_pie",
    "create_top_keywords_bar",
    # Metrics display
    "display_summary_metrics",
    "display_category_table",
    "display_keyword_table",
    "display_unique_keywords",
    "display_exclusion_summary",
    "exclusion_table",
]
