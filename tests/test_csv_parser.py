from io import BytesIO

import pytest

from analysis.pipeline import AnalysisPipeline
from config.settings import ParsingSettings, Settings
from core.exceptions import InputFormatError
from ingestion import csv_parser
from ingestion.csv_parser import CSVParser, preview_uploaded_file


def _upload(text: str, encoding: str = "utf-8") -> BytesIO:
    return BytesIO(text.encode(encoding))


def test_parse_comma_file_with_quoted_keywords():
    content = _upload(
        'category,department,keywords\n'
        'HR,People,"onboarding, onboard"\n'
        'Finance,Money,payroll\n'
    )

    rows = CSVParser().parse(content)

    assert rows == [
        {"category": "HR", "department": "People", "keywords": "onboarding, onboard"},
        {"category": "Finance", "department": "Money", "keywords": "payroll"},
    ]


def test_preview_detects_semicolon_delimiter_and_columns():
    content = _upload(
        "Category;Dept;Tags\n"
        "HR;People;payroll, taxes\n"
        "Ops;Infra;deploy\n"
    )

    preview = CSVParser().preview(content)

    assert preview["delimiter"] == ";"
    assert preview["columns"] == ["Category", "Dept", "Tags"]
    assert preview["row_count"] == 2
    assert preview["detected_category_column"] == "Category"
    assert preview["detected_department_column"] == "Dept"
    assert preview["detected_keywords_column"] == "Tags"


def test_missing_cells_become_none():
    content = _upload(
        "category,department,keywords\n"
        "HR,,payroll\n"
        ",People,tax\n"
    )

    rows = CSVParser().parse(content)

    assert rows[0]["department"] is None
    assert rows[1]["category"] is None


def test_values_stay_strings_without_dynamic_typing():
    content = _upload("category,department,keywords\n2023,7,alpha\n")

    rows = CSVParser().parse(content)

    assert rows[0]["category"] == "2023"
    assert rows[0]["department"] == "7"


def test_dynamic_typing_infers_numbers():
    content = _upload("category,department,keywords\n2023,7,alpha\n")
    parser = CSVParser(ParsingSettings(dynamic_typing=True))

    rows = parser.parse(content)

    assert rows[0]["category"] == 2023


def test_malformed_rows_are_skipped_with_warning():
    content = _upload(
        "category,department,keywords\n"
        "HR,People,payroll\n"
        "HR,People,a,b,c\n"
        "Ops,Infra,deploy\n"
    )
    parser = CSVParser()

    preview = parser.preview(content)

    assert preview["row_count"] == 2
    assert preview["warnings"] == ["Skipped malformed row with 5 fields"]


def test_byte_order_mark_is_stripped():
    content = BytesIO("\ufeffcategory,department,keywords\nHR,People,payroll\n".encode("utf-8"))

    preview = CSVParser().preview(content)

    assert preview["columns"][0] == "category"
    assert preview["detected_category_column"] == "category"


def test_legacy_encoding_falls_back():
    content = _upload("category,department,keywords\nCafé,Ops,menu\n", encoding="latin-1")

    rows = CSVParser().parse(content)

    assert rows[0]["category"] == "Café"


def test_empty_file_raises():
    with pytest.raises(InputFormatError) as exc_info:
        CSVParser().preview(BytesIO(b"  \n"), filename="empty.csv")

    assert exc_info.value.filename == "empty.csv"


def test_undetectable_columns_raise():
    content = _upload("name,value\na,1\nb,2\n")

    with pytest.raises(InputFormatError) as exc_info:
        CSVParser().parse(content)

    assert "category, keywords" in exc_info.value.message


def test_parse_with_selection_requires_preview():
    with pytest.raises(InputFormatError):
        CSVParser().parse_with_selection("category", "keywords")


def test_parse_with_selection_rejects_unknown_column():
    parser = CSVParser()
    parser.preview(_upload("a,b\nx,y\n"))

    with pytest.raises(InputFormatError):
        parser.parse_with_selection("a", "missing")


def test_parse_with_selection_maps_columns():
    parser = CSVParser()
    parser.preview(_upload("topic,owner,terms\nHR,People,payroll\nOps,Infra,deploy\n"))

    rows = parser.parse_with_selection("topic", "terms")

    assert rows[0] == {"category": "HR", "department": None, "keywords": "payroll"}
    info = parser.get_column_info()
    assert info["has_department"] is False
    assert info["column_names"] == ["topic", "owner", "terms"]


def test_null_like_literals_stay_strings():
    content = _upload(
        "category,department,keywords\n"
        "NA,Sales,leads\n"
        "HR,null,None\n"
        "HR,nan,N/A\n"
    )

    rows = CSVParser().parse(content)

    assert rows == [
        {"category": "NA", "department": "Sales", "keywords": "leads"},
        {"category": "HR", "department": "null", "keywords": "None"},
        {"category": "HR", "department": "nan", "keywords": "N/A"},
    ]


def test_rows_with_null_like_keywords_reach_the_analysis():
    content = _upload("category,department,keywords\nHR,People,None\nHR,People,N/A\n")

    result = AnalysisPipeline().run(CSVParser().parse(content))

    assert result.total_records == 2
    assert result.unique_keywords == ["n/a", "none"]


class _Upload:
    name = "upload.csv"

    def __init__(self, text: str):
        self._data = text.encode("utf-8")

    def read(self) -> bytes:
        return self._data


def test_preview_uploaded_file_uses_application_settings(monkeypatch):
    settings = Settings(parsing=ParsingSettings(preview_rows=1))
    monkeypatch.setattr(csv_parser, "get_settings", lambda: settings)

    parser, preview = preview_uploaded_file(
        _Upload("category,department,keywords\nHR,People,a\nOps,Infra,b\n")
    )

    assert parser.settings is settings.parsing
    assert len(preview["sample_data"]) == 1
    assert preview["row_count"] == 2


def test_default_encoding_order():
    assert ParsingSettings().encodings == ["utf-8-sig", "cp1252", "latin-1"]
