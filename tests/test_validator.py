import pytest

from ingestion.validator import RowValidator, is_present


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, False),
        ("", False),
        ("   ", False),
        ("HR", True),
        (0, False),
        (42, True),
    ],
)
def test_is_present(value, expected):
    assert is_present(value) is expected


def test_validate_splits_rows_with_reasons(mixed_rows):
    result = RowValidator().validate(mixed_rows)

    assert result.valid_count == 3
    assert result.excluded_count == 3
    assert [reason for _, reason in result.excluded_rows] == [
        "Missing category",
        "Missing keywords",
        "Missing category",
    ]
    assert result.validity_rate == 0.5
    assert result.warnings == ["3 rows were excluded for missing category or keywords"]


def test_validate_batch_keeps_order(mixed_rows):
    valid, excluded = RowValidator().validate_batch(mixed_rows)

    assert [r["category"] for r in valid] == ["Sales ", "Sales", "Support"]
    assert len(excluded) == 3


def test_department_is_not_required():
    valid, excluded = RowValidator().validate_batch(
        [{"category": "HR", "department": None, "keywords": "payroll"}]
    )

    assert len(valid) == 1
    assert not excluded


def test_all_excluded_adds_hint():
    result = RowValidator().validate([{"category": None, "keywords": None}])

    assert len(result.warnings) == 2
    assert result.warnings[1].startswith("No rows have both")


def test_get_stats_counts_reasons(mixed_rows):
    validator = RowValidator()
    stats = validator.get_stats(validator.validate(mixed_rows))

    assert stats["excluded_reasons"] == {"Missing category": 2, "Missing keywords": 1}
    assert stats["validity_rate"] == "50.0%"
