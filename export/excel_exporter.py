"""
Excel export functionality for analysis results.
Uses openpyxl for rich Excel formatting.
"""
import io
from typing import Iterable, List

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.chart import PieChart, BarChart, Reference

from analysis.pipeline import AnalysisResult
from analysis.stats_aggregator import CategoryStat, KeywordStat
from export.csv_exporter import join_values


class ExcelExporter:
    """Exports analysis results to Excel with formatting."""

    # Style definitions
    HEADER_FILL = PatternFill(
        start_color="4472C4",
        end_color="4472C4",
        fill_type="solid"
    )
    HEADER_FONT = Font(bold=True, color="FFFFFF")

    def __init__(self, top_keywords_chart: int = 15):
        """
        Initialize exporter.

        Args:
            top_keywords_chart: Keywords plotted in the Keywords sheet chart
        """
        self.top_keywords_chart = top_keywords_chart
        self.wb = None

    def export_full_report(self, result: AnalysisResult) -> bytes:
        """
        Export complete report with multiple sheets.

        Args:
            result: Completed analysis

        Returns:
            Excel file as bytes
        """
        self.wb = Workbook()

        # Remove default sheet
        self.wb.remove(self.wb.active)

        self._create_summary_sheet(result)
        self._create_categories_sheet(result.category_stats)
        self._create_keywords_sheet(result.keyword_stats)
        self._create_unique_keywords_sheet(result.unique_keywords)

        output = io.BytesIO()
        self.wb.save(output)
        output.seek(0)

        return output.getvalue()

    def _write_headers(self, ws, headers: List[str]):
        for col, header in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.fill = self.HEADER_FILL
            cell.font = self.HEADER_FONT
            cell.alignment = Alignment(horizontal="center")

    @staticmethod
    def _set_widths(ws, widths: Iterable[int]):
        for col, width in enumerate(widths, 1):
            ws.column_dimensions[
                ws.cell(row=1, column=col).column_letter
            ].width = width

    def _create_summary_sheet(self, result: AnalysisResult):
        """Create summary sheet with overview metrics."""
        ws = self.wb.create_sheet("Summary")
        summary = result.summary()

        ws["A1"] = "Dataset Analysis Report"
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:D1")

        ws["A3"] = "Generated:"
        ws["B3"] = summary["analysisTimestamp"]

        metrics = [
            ("Total Records", summary["totalRecords"]),
            ("Categories", summary["totalCategories"]),
            ("Unique Keywords", summary["totalUniqueKeywords"]),
            ("Total Keywords", summary["totalKeywordInstances"]),
            ("Excluded Rows", result.excluded_records),
        ]

        row = 5
        for label, value in metrics:
            ws[f"A{row}"] = label
            ws[f"A{row}"].font = Font(bold=True)
            ws[f"B{row}"] = value
            row += 1

        ws.column_dimensions["A"].width = 25
        ws.column_dimensions["B"].width = 28

    def _create_categories_sheet(self, category_stats: List[CategoryStat]):
        """Create category breakdown sheet with a pie chart."""
        ws = self.wb.create_sheet("Categories")
        self._write_headers(ws, ["Category", "Count", "Percentage"])

        for row_idx, stat in enumerate(category_stats, 2):
            ws.cell(row=row_idx, column=1, value=stat.category)
            ws.cell(row=row_idx, column=2, value=stat.count)
            # Stored as a number so Excel can chart/sort it
            ws.cell(row=row_idx, column=3, value=float(stat.percentage))

        self._set_widths(ws, [30, 10, 12])
        ws.freeze_panes = "A2"

        if category_stats:
            chart = PieChart()
            chart.title = "Category Distribution"
            last = len(category_stats) + 1
            data = Reference(ws, min_col=2, min_row=1, max_row=last)
            labels = Reference(ws, min_col=1, min_row=2, max_row=last)
            chart.add_data(data, titles_from_data=True)
            chart.set_categories(labels)
            ws.add_chart(chart, "E2")

    def _create_keywords_sheet(self, keyword_stats: List[KeywordStat]):
        """Create keyword analysis sheet with a top-keywords bar chart."""
        ws = self.wb.create_sheet("Keywords")
        self._write_headers(
            ws,
            ["Keyword", "Count", "Percentage", "Categories", "Departments"]
        )

        for row_idx, stat in enumerate(keyword_stats, 2):
            values = [
                stat.keyword,
                stat.count,
                float(stat.percentage),
                join_values(stat.categories),
                join_values(stat.departments)
            ]
            for col, value in enumerate(values, 1):
                ws.cell(row=row_idx, column=col, value=value)

        self._set_widths(ws, [35, 10, 12, 40, 40])
        ws.freeze_panes = "A2"

        if keyword_stats:
            chart = BarChart()
            chart.title = f"Top {self.top_keywords_chart} Keywords"
            chart.y_axis.title = "Percentage"
            last = min(len(keyword_stats), self.top_keywords_chart) + 1
            data = Reference(ws, min_col=3, min_row=1, max_row=last)
            labels = Reference(ws, min_col=1, min_row=2, max_row=last)
            chart.add_data(data, titles_from_data=True)
            chart.set_categories(labels)
            ws.add_chart(chart, "G2")

    def _create_unique_keywords_sheet(self, keywords: List[str]):
        """Create sheet listing unique keywords alphabetically."""
        ws = self.wb.create_sheet("Unique Keywords")
        self._write_headers(ws, ["Keyword"])

        for row_idx, keyword in enumerate(keywords, 2):
            ws.cell(row=row_idx, column=1, value=keyword)

        ws.column_dimensions["A"].width = 40
        ws.freeze_panes = "A2"