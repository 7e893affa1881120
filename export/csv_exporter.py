"""
CSV export functionality for analysis results.
"""
import csv
import io
from typing import Any, Iterable, List

from analysis.pipeline import AnalysisResult
from analysis.stats_aggregator import CategoryStat, KeywordStat


LIST_SEPARATOR = " | "


def join_values(values: Iterable[Any]) -> str:
    """Join categories or departments into one cell; None becomes empty."""
    return LIST_SEPARATOR.join("" if v is None else str(v) for v in values)


class CSVExporter:
    """Exports analysis results to CSV format."""

    def export_categories(self, category_stats: List[CategoryStat]) -> str:
        """
        Export the category distribution to CSV string.

        Args:
            category_stats: Ranked category stats

        Returns:
            CSV content as string
        """
        output = io.StringIO()
        writer = csv.DictWriter(
            output,
            fieldnames=["category", "count", "percentage"]
        )
        writer.writeheader()

        for stat in category_stats:
            writer.writerow(stat.to_dict())

        return output.getvalue()

    def export_keywords(self, keyword_stats: List[KeywordStat]) -> str:
        """
        Export the keyword distribution to CSV string.

        Categories and departments are joined with LIST_SEPARATOR.

        Args:
            keyword_stats: Ranked keyword stats

        Returns:
            CSV content as string
        """
        output = io.StringIO()
        writer = csv.DictWriter(
            output,
            fieldnames=[
                "keyword",
                "count",
                "percentage",
                "categories",
                "departments"
            ]
        )
        writer.writeheader()

        for stat in keyword_stats:
            writer.writerow({
                "keyword": stat.keyword,
                "count": stat.count,
                "percentage": stat.percentage,
                "categories": join_values(stat.categories),
                "departments": join_values(stat.departments)
            })

        return output.getvalue()

    def export_unique_keywords(self, keywords: List[str]) -> str:
        """Export the sorted unique keyword list, one per row."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["keyword"])
        for keyword in keywords:
            writer.writerow([keyword])
        return output.getvalue()

    def export_full_report(self, result: AnalysisResult) -> str:
        """
        Export full analysis report.

        Args:
            result: Completed analysis

        Returns:
            CSV content with a commented summary header and both tables
        """
        summary = result.summary()
        output = io.StringIO()

        output.write("# Dataset Analysis Report\n")
        output.write(f"# Generated: {summary['analysisTimestamp']}\n")
        output.write(f"# Total Records: {summary['totalRecords']}\n")
        output.write(f"# Total Categories: {summary['totalCategories']}\n")
        output.write(
            f"# Total Unique Keywords: {summary['totalUniqueKeywords']}\n"
        )
        output.write("\n")

        output.write(self.export_categories(result.category_stats))
        output.write("\n")
        output.write(self.export_keywords(result.keyword_stats))

        return output.getvalue()


def create_download_link(
    csv_content: str,
    filename: str
) -> bytes:
    """
    Create downloadable CSV bytes.

    Args:
        csv_content: CSV content string
        filename: Suggested filename

    Returns:
        UTF-8 encoded bytes with BOM for Excel compatibility
    """
    bom = b'\xef\xbb\xbf'
    return bom + csv_content.encode('utf-8')
