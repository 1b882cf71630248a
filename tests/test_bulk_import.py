import pytest

from roadside.errors import InvalidImportContent
from roadside.models.domain import NewLocation
from roadside.services.bulk_import import (
    DEFAULT_IMPORT_CATEGORIES,
    normalize_category_slug,
    parse_bulk_import,
    parse_visit_date,
    LineError,
)


class Recorder:
    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.created: list[NewLocation] = []
        self.fail_on = fail_on or set()

    def __call__(self, draft: NewLocation) -> NewLocation:
        if draft.name in self.fail_on:
            raise RuntimeError(f"database is locked for {draft.name}")
        self.created.append(draft)
        return draft


def test_single_valid_line_creates_record():
    recorder = Recorder()

    result = parse_bulk_import("Chicago, IL, muffler-men, 01/15/2024, Giant Paul Bunyan", DEFAULT_IMPORT_CATEGORIES, recorder)

    assert (result.success, result.failed, result.errors) == (1, 0, [])
    created = recorder.created[0]
    assert created.tagged_date == "2024-01-15"
    assert created.category == "muffler-men"
    assert created.city == "Chicago"
    assert created.state == "IL"
    assert created.name == "Giant Paul Bunyan"
    assert (created.latitude, created.longitude) == (0.0, 0.0)
    assert created.photo_url == "" and created.photo_id == "" and created.zip_code == ""
    assert created.custom_fields == "{}"


def test_category_with_spaces_and_case_is_normalized():
    recorder = Recorder()

    result = parse_bulk_import("Austin, TX, Worlds Largest, 02/20/2024, Cowboy Boots", DEFAULT_IMPORT_CATEGORIES, recorder)

    assert result.success == 1
    assert recorder.created[0].category == "worlds-largest"


def test_too_few_fields_reports_count_and_continues():
    recorder = Recorder()
    content = "Chicago, IL, muffler-men\nAustin, TX, unique-finds, 3/4/2024, Cathedral of Junk"

    result = parse_bulk_import(content, DEFAULT_IMPORT_CATEGORIES, recorder)

    assert result.success == 1
    assert result.failed == 1
    assert result.errors == ["Line 1: Invalid format - expected 5 fields, got 3"]
    assert recorder.created[0].tagged_date == "2024-03-04"


def test_wrong_date_format_mentions_the_value():
    result = parse_bulk_import("Chicago, IL, muffler-men, 2024-01-15, Giant", DEFAULT_IMPORT_CATEGORIES, Recorder())

    assert result.failed == 1
    assert result.errors == ['Line 1: Invalid date format "2024-01-15" - expected MM/DD/YYYY']


def test_non_numeric_date_parts_are_rejected():
    result = parse_bulk_import("Chicago, IL, muffler-men, Jan/15/2024, Giant", DEFAULT_IMPORT_CATEGORIES, Recorder())

    assert result.failed == 1
    assert "Invalid date format \"Jan/15/2024\"" in result.errors[0]


def test_invalid_category_message_lists_choices():
    result = parse_bulk_import("Chicago, IL, Giant Heads, 01/15/2024, Head", DEFAULT_IMPORT_CATEGORIES, Recorder())

    assert result.errors == [
        'Line 1: Invalid category "Giant Heads" - must be one of: Muffler Men, World\'s Largest, Unique Finds'
    ]


def test_middle_line_failure_is_reported_against_its_own_line():
    content = "\n".join(
        [
            "Chicago, IL, muffler-men, 01/15/2024, One",
            "broken line",
            "Austin, TX, unique-finds, 02/20/2024, Three",
        ]
    )

    result = parse_bulk_import(content, DEFAULT_IMPORT_CATEGORIES, Recorder())

    assert (result.success, result.failed) == (2, 1)
    assert len(result.errors) == 1
    assert result.errors[0].startswith("Line 2:")


def test_blank_lines_are_skipped_but_counted_for_numbering():
    content = "\n   \nChicago, IL, muffler-men, 01/15/2024\r\n\nAustin, TX, unique-finds, 02/20/2024, Ok\r\n"

    result = parse_bulk_import(content, DEFAULT_IMPORT_CATEGORIES, Recorder())

    assert (result.success, result.failed) == (1, 1)
    assert result.errors == ["Line 3: Invalid format - expected 5 fields, got 4"]


def test_extra_fields_are_ignored():
    recorder = Recorder()

    result = parse_bulk_import(
        "Wilmington, IL, muffler-men, 6/15/2024, Gemini Giant, extra, more", DEFAULT_IMPORT_CATEGORIES, recorder
    )

    assert result.success == 1
    assert recorder.created[0].name == "Gemini Giant"


def test_persistence_failure_uses_underlying_message():
    recorder = Recorder(fail_on={"Doomed"})
    content = "Chicago, IL, muffler-men, 01/15/2024, Doomed\nChicago, IL, muffler-men, 01/16/2024, Fine"

    result = parse_bulk_import(content, DEFAULT_IMPORT_CATEGORIES, recorder)

    assert (result.success, result.failed) == (1, 1)
    assert result.errors == ["Line 1: database is locked for Doomed"]
    assert [draft.name for draft in recorder.created] == ["Fine"]


def test_errors_are_in_line_order():
    content = "\n".join(["a,b", "Chicago, IL, nope, 01/15/2024, X", "Chicago, IL, muffler-men, 1-2-2024, Y"])

    result = parse_bulk_import(content, DEFAULT_IMPORT_CATEGORIES, Recorder())

    assert result.failed == 3
    assert [error.split(":")[0] for error in result.errors] == ["Line 1", "Line 2", "Line 3"]


def test_injected_category_vocabulary_is_respected():
    result = parse_bulk_import(
        "Chicago, IL, Giant Heads, 01/15/2024, Head",
        {"giant-heads"},
        Recorder(),
        category_labels=["Giant Heads"],
    )

    assert result.success == 1


def test_all_lines_failing_still_returns_a_result():
    result = parse_bulk_import("x\ny\nz", DEFAULT_IMPORT_CATEGORIES, Recorder())

    assert (result.success, result.failed) == (0, 3)
    assert result.to_dict() == {"success": 0, "failed": 3, "errors": result.errors}


def test_non_text_content_is_a_structural_error():
    with pytest.raises(InvalidImportContent):
        parse_bulk_import(b"Chicago, IL, muffler-men, 01/15/2024, X", DEFAULT_IMPORT_CATEGORIES, Recorder())


def test_normalize_category_slug():
    assert normalize_category_slug("Muffler Men") == "muffler-men"
    assert normalize_category_slug("  Worlds   Largest ") == "worlds-largest"
    assert normalize_category_slug("-unique finds-") == "unique-finds"


def test_parse_visit_date_pads_month_and_day():
    assert parse_visit_date("1/5/2024") == "2024-01-05"
    with pytest.raises(LineError):
        parse_visit_date("01/15")


@pytest.mark.parametrize("raw", ["1/15/24", "123/456/2024", "¹/15/2024", "01/15/20245", "01/15/2024/1", "1 /15/2024"])
def test_dates_outside_mm_dd_yyyy_are_rejected(raw):
    recorder = Recorder()

    result = parse_bulk_import(f"Chicago, IL, muffler-men, {raw}, Giant", DEFAULT_IMPORT_CATEGORIES, recorder)

    assert (result.success, result.failed) == (0, 1)
    assert recorder.created == []
    assert result.errors[0].startswith("Line 1: Invalid date format")


def test_empty_name_is_rejected():
    recorder = Recorder()
    content = "Chicago, IL, muffler-men, 01/15/2024,\nChicago, IL, muffler-men, 01/15/2024,   , extra"

    result = parse_bulk_import(content, DEFAULT_IMPORT_CATEGORIES, recorder)

    assert (result.success, result.failed) == (0, 2)
    assert result.errors == ["Line 1: Name is required", "Line 2: Name is required"]
    assert recorder.created == []
