import pytest

from analysis.pipeline import AnalysisPipeline
from visualization.charts import (
    create_category_bar,
    create_category_pie,
    create_top_keywords_bar,
)
from visualization.metrics_display import category_table, exclusion_table, keyword_table


@pytest.fixture(name="result")
def fixture_result(mixed_rows):
    return AnalysisPipeline().run(mixed_rows)


def test_category_bar_plots_percentages(result):
    fig = create_category_bar(result.category_stats, color="#123456")

    assert list(fig.data[0].x) == ["Sales", "Support"]
    assert list(fig.data[0].y) == [66.67, 33.33]


def test_category_pie_cycles_colors(result):
    fig = create_category_pie(result.category_stats, colors=["#111111"])

    assert list(fig.data[0].values) == [2, 1]
    assert list(fig.data[0].marker.colors) == ["#111111", "#111111"]


def test_top_keywords_bar_limits_entries(result):
    fig = create_top_keywords_bar(result.keyword_stats, top_n=2)

    assert list(fig.data[0].x) == ["leads", "pipeline"]
    assert fig.layout.title.text == "Top 2 Keywords (After Deduplication)"


def test_category_table(result):
    df = category_table(result.category_stats)

    assert df.to_dict("records") == [
        {"Category": "Sales", "Count": 2, "Percentage": "66.67%"},
        {"Category": "Support", "Count": 1, "Percentage": "33.33%"},
    ]


def test_keyword_table_limits_and_joins(result):
    df = keyword_table(result.keyword_stats, limit=1)

    assert len(df) == 1
    assert df.iloc[0]["Departments"] == "East, West"


def test_keyword_table_skips_missing_departments():
    rows = [{"category": "Ops", "department": None, "keywords": "deploy"}]
    stats = AnalysisPipeline().run(rows).keyword_stats

    assert keyword_table(stats).iloc[0]["Departments"] == ""


def test_exclusion_table_orders_by_rows(result):
    df = exclusion_table(result.exclusion_reasons)

    assert df.to_dict("records") == [
        {"Reason": "Missing category", "Rows": 2},
        {"Reason": "Missing keywords", "Rows": 1},
    ]
