import json
from datetime import datetime, timezone
from io import BytesIO

import pytest
from openpyxl import load_workbook

from analysis.pipeline import AnalysisPipeline
from export import CSVExporter, ExcelExporter, JSONExporter, create_download_link


@pytest.fixture(name="result")
def fixture_result(hr_finance_rows):
    ts = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    return AnalysisPipeline().run(hr_finance_rows, timestamp=ts)


def test_json_export_sections(result):
    data = json.loads(JSONExporter().export(result))

    assert data["summary"]["analysisTimestamp"] == "2026-01-02T03:04:05.000Z"
    assert data["summary"]["totalRecords"] == 3
    assert data["categoryAnalysis"][1] == {
        "category": "Finance",
        "count": 1,
        "percentage": "33.33",
    }
    assert data["keywordAnalysis"][0]["departments"] == ["People", "Money"]
    assert data["uniqueKeywords"] == ["onboarding", "payroll"]


def test_json_export_bytes_keep_non_ascii(hr_finance_rows):
    rows = hr_finance_rows + [{"category": "Café", "department": None, "keywords": "menu"}]
    result = AnalysisPipeline().run(rows)

    assert "Café".encode("utf-8") in JSONExporter(indent=4).export_bytes(result)


def test_csv_categories(result):
    lines = CSVExporter().export_categories(result.category_stats).splitlines()

    assert lines == ["category,count,percentage", "HR,2,66.67", "Finance,1,33.33"]


def test_csv_keywords_join_sets(result):
    lines = CSVExporter().export_keywords(result.keyword_stats).splitlines()

    assert lines[0] == "keyword,count,percentage,categories,departments"
    assert lines[1] == "payroll,2,66.67,HR | Finance,People | Money"
    assert lines[2] == "onboarding,1,33.33,HR,People"


def test_csv_unique_keywords(result):
    lines = CSVExporter().export_unique_keywords(result.unique_keywords).splitlines()

    assert lines == ["keyword", "onboarding", "payroll"]


def test_csv_full_report_has_summary_header(result):
    report = CSVExporter().export_full_report(result)

    assert report.startswith("# Dataset Analysis Report\n")
    assert "# Total Records: 3\n" in report
    assert "category,count,percentage" in report
    assert "keyword,count,percentage,categories,departments" in report


def test_download_bytes_start_with_bom():
    data = create_download_link("a,b\n", "out.csv")

    assert data.startswith(b"\xef\xbb\xbf")
    assert data.endswith(b"a,b\n")


def test_excel_report_sheets(result):
    workbook = load_workbook(BytesIO(ExcelExporter().export_full_report(result)))

    assert workbook.sheetnames == ["Summary", "Categories", "Keywords", "Unique Keywords"]

    categories = workbook["Categories"]
    assert categories["A2"].value == "HR"
    assert categories["B2"].value == 2
    assert categories["C2"].value == pytest.approx(66.67)

    keywords = workbook["Keywords"]
    assert keywords["A2"].value == "payroll"
    assert keywords["D2"].value == "HR | Finance"
    assert keywords["E2"].value == "People | Money"

    summary = workbook["Summary"]
    assert summary["B5"].value == 3


def test_excel_keyword_chart_follows_configured_size(result):
    exporter = ExcelExporter(top_keywords_chart=1)
    exporter.export_full_report(result)

    chart = exporter.wb["Keywords"]._charts[0]

    assert chart.series[0].val.numRef.f.endswith("$C$2")


def test_excel_keyword_chart_caps_at_available_keywords(result):
    exporter = ExcelExporter()
    exporter.export_full_report(result)

    chart = exporter.wb["Keywords"]._charts[0]

    assert chart.series[0].val.numRef.f.endswith("$C$3")
