"""
JSON export of analysis results.
"""
import json

from analysis.pipeline import AnalysisResult


class JSONExporter:
    """Serializes an AnalysisResult to an indented JSON document."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def export(self, result: AnalysisResult) -> str:
        """
        Export the full analysis.

        Args:
            result: Completed analysis

        Returns:
            JSON document with summary, categoryAnalysis,
            keywordAnalysis, and uniqueKeywords sections
        """
        return json.dumps(
            result.to_dict(),
            indent=self.indent,
            ensure_ascii=False,
            default=str
        )

    def export_bytes(self, result: AnalysisResult) -> bytes:
        """Export as UTF-8 bytes for download."""
        return self.export(result).encode("utf-8")
