"""
Chart generation for analysis results.
Uses Plotly for interactive charts.
"""
import plotly.express as px
import plotly.graph_objects as go
from typing import List

from analysis.stats_aggregator import CategoryStat, KeywordStat


def create_category_bar(
    category_stats: List[CategoryStat],
    color: str = "#8884d8"
) -> go.Figure:
    """
    Create bar chart of category percentages.

    Args:
        category_stats: Ranked category stats
        color: Bar color

    Returns:
        Plotly figure
    """
    names = [s.category for s in category_stats]
    percentages = [float(s.percentage) for s in category_stats]

    fig = go.Figure(go.Bar(
        x=names,
        y=percentages,
        marker_color=color,
        customdata=[s.count for s in category_stats],
        hovertemplate=(
            "<b>%{x}</b><br>"
            "Percentage: %{y:.2f}%<br>"
            "Records: %{customdata:,}"
            "<extra></extra>"
        )
    ))

    fig.update_layout(
        title="Category Distribution",
        xaxis_title="Category",
        yaxis_title="Percentage of Records",
        template="plotly_white",
        xaxis_tickangle=-45,
        height=400
    )

    return fig


def create_category_pie(
    category_stats: List[CategoryStat],
    colors: List[str] = None
) -> go.Figure:
    """
    Create pie chart of category counts.

    Args:
        category_stats: Ranked category stats
        colors: Palette, cycled when there are more slices than colors

    Returns:
        Plotly figure
    """
    colors = colors or px.colors.qualitative.Pastel

    fig = go.Figure(go.Pie(
        labels=[s.category for s in category_stats],
        values=[s.count for s in category_stats],
        marker=dict(colors=[
            colors[i % len(colors)] for i in range(len(category_stats))
        ]),
        text=[f"{s.category}: {s.percentage}%" for s in category_stats],
        textinfo="text",
        hovertemplate="%{label}: %{value:,} records<extra></extra>",
        sort=False
    ))

    fig.update_layout(
        title="Category Distribution (Pie)",
        template="plotly_white",
        height=400
    )

    return fig


def create_top_keywords_bar(
    keyword_stats: List[KeywordStat],
    top_n: int = 15,
    color: str = "#82ca9d"
) -> go.Figure:
    """
    Create bar chart of the most frequent keywords.

    Args:
        keyword_stats: Ranked keyword stats
        top_n: Show top N keywords
        color: Bar color

    Returns:
        Plotly figure
    """
    top = keyword_stats[:top_n]

    fig = go.Figure(go.Bar(
        x=[s.keyword for s in top],
        y=[float(s.percentage) for s in top],
        marker_color=color,
        text=[s.count for s in top],
        textposition="outside",
        hovertemplate=(
            "<b>%{x}</b><br>"
            "Percentage: %{y:.2f}%<br>"
            "Count: %{text}"
            "<extra></extra>"
        )
    ))

    fig.update_layout(
        title=f"Top {top_n} Keywords (After Deduplication)",
        xaxis_title="Keyword",
        yaxis_title="Percentage of Keyword Instances",
        template="plotly_white",
        xaxis_tickangle=-45,
        height=500
    )

    return fig
