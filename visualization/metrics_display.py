"""
Metrics display components for Streamlit.
Renders summary cards and statistics tables.
"""
import pandas as pd
import streamlit as st
from typing import Dict, List

from analysis.stats_aggregator import CategoryStat, KeywordStat


def display_summary_metrics(
    total_records: int,
    total_categories: int,
    total_unique_keywords: int,
    total_keywords: int
):
    """
    Display top-level summary metrics.

    Args:
        total_records: Rows that survived filtering
        total_categories: Number of distinct categories
        total_unique_keywords: Number of distinct keywords
        total_keywords: Keyword instances across all rows
    """
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric(label="Total Records", value=f"{total_records:,}")

    with col2:
        st.metric(label="Categories", value=f"{total_categories:,}")

    with col3:
        st.metric(label="Unique Keywords", value=f"{total_unique_keywords:,}")

    with col4:
        st.metric(label="Total Keywords", value=f"{total_keywords:,}")


def category_table(category_stats: List[CategoryStat]) -> pd.DataFrame:
    """Build the category breakdown frame."""
    return pd.DataFrame(
        [
            {
                "Category": s.category,
                "Count": s.count,
                "Percentage": f"{s.percentage}%"
            }
            for s in category_stats
        ],
        columns=["Category", "Count", "Percentage"]
    )


def keyword_table(
    keyword_stats: List[KeywordStat],
    limit: int = 20
) -> pd.DataFrame:
    """Build the keyword analysis frame for the top `limit` keywords."""
    return pd.DataFrame(
        [
            {
                "Keyword": s.keyword,
                "Count": s.count,
                "Percentage": f"{s.percentage}%",
                "Categories": ", ".join(map(str, s.categories)),
                "Departments": ", ".join(
                    str(d) for d in s.departments if d is not None
                )
            }
            for s in keyword_stats[:limit]
        ],
        columns=["Keyword", "Count", "Percentage", "Categories", "Departments"]
    )


def display_category_table(category_stats: List[CategoryStat]):
    """
    Display the category breakdown table.

    Args:
        category_stats: Ranked category stats
    """
    st.dataframe(
        category_table(category_stats),
        use_container_width=True,
        hide_index=True
    )


def display_keyword_table(
    keyword_stats: List[KeywordStat],
    limit: int = 20
):
    """
    Display the keyword analysis table.

    Args:
        keyword_stats: Ranked keyword stats
        limit: Maximum rows to show
    """
    st.dataframe(
        keyword_table(keyword_stats, limit),
        use_container_width=True,
        hide_index=True
    )

    if len(keyword_stats) > limit:
        st.caption(f"Showing top {limit} of {len(keyword_stats):,} keywords")


def display_unique_keywords(keywords: List[str], columns: int = 3):
    """
    Display the alphabetical unique keyword list.

    Args:
        keywords: Sorted unique keywords
        columns: Number of display columns
    """
    st.markdown(f"### Unique Keywords ({len(keywords):,} total)")

    if not keywords:
        st.info("No keywords found")
        return

    cols = st.columns(columns)
    per_col = -(-len(keywords) // columns)

    for i, col in enumerate(cols):
        with col:
            for kw in keywords[i * per_col:(i + 1) * per_col]:
                st.markdown(f"• {kw}")


def exclusion_table(exclusion_reasons: Dict[str, int]) -> pd.DataFrame:
    """Build the excluded-rows frame, most frequent reason first."""
    return pd.DataFrame(
        [
            {"Reason": reason, "Rows": count}
            for reason, count in sorted(
                exclusion_reasons.items(),
                key=lambda x: x[1],
                reverse=True
            )
        ],
        columns=["Reason", "Rows"]
    )


def display_exclusion_summary(
    excluded_records: int,
    exclusion_reasons: Dict[str, int],
    suppressed_variants: Dict[str, int]
):
    """
    Display what was filtered out before and during aggregation.

    Args:
        excluded_records: Rows dropped for missing category/keywords
        exclusion_reasons: Excluded row counts per reason
        suppressed_variants: Near-duplicate collapses and their counts
    """
    if excluded_records:
        st.warning(
            f"{excluded_records:,} rows were excluded because they had "
            "no category or no keywords."
        )
        st.dataframe(
            exclusion_table(exclusion_reasons),
            use_container_width=True,
            hide_index=True
        )

    if suppressed_variants:
        with st.expander(
            f"🔄 Near-duplicate keywords collapsed "
            f"({sum(suppressed_variants.values()):,})"
        ):
            for label, count in sorted(
                suppressed_variants.items(),
                key=lambda x: x[1],
                reverse=True
            )[:50]:
                st.markdown(f"• {label} ({count})")
