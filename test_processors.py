#!/usr/bin/env python3
"""
Tests for the grade processors (columns, parser, ranker, CSV output).

Usage:
    pytest test_processors.py
"""

import pytest

from processors.columns import (
    add_column, columns_from_names, default_columns, get_grade_columns,
    get_identifier_column, make_column, rename_column
)
from processors.errors import ColumnNotFoundError, InvalidSchemaError, NoGradeColumnsError
from processors.row_parser import parse_line, parse_rows, split_tokens
from processors.ranker import GradeRanker, calculate_average, parse_grade_value, rank_student
from processors.output_generator import (
    OutputGenerator, format_rank_summary, records_to_dataframe, save_csv, serialize_csv
)

SAMPLE_TEXT = "A1 90 80\nA2 70 60\nA3 100 100"


@pytest.fixture
def columns():
    return columns_from_names(['id', 'grade1', 'grade2'])


@pytest.fixture
def records(columns):
    return parse_rows(SAMPLE_TEXT, columns)


# ============= COLUMNS =============

def test_default_columns():
    columns = default_columns()
    assert [col['id'] for col in columns] == ['col1', 'col2']
    assert columns[0] == {'id': 'col1', 'name': 'ID', 'kind': 'identifier'}
    assert columns[1] == {'id': 'col2', 'name': 'Grade 1', 'kind': 'grade'}


def test_add_column_appends_one_grade_column():
    columns = default_columns()
    updated = add_column(columns)

    assert len(get_grade_columns(updated)) == len(get_grade_columns(columns)) + 1
    assert updated[:2] == columns
    assert updated[-1] == {'id': 'col3', 'name': 'Grade 2', 'kind': 'grade'}
    # Original schema untouched
    assert len(columns) == 2


def test_add_column_after_rename_keeps_names():
    columns = rename_column(default_columns(), 'col2', 'Math')
    columns = add_column(add_column(columns))

    assert [col['name'] for col in columns] == ['ID', 'Math', 'Grade 2', 'Grade 3']
    assert [col['id'] for col in columns] == ['col1', 'col2', 'col3', 'col4']


def test_rename_column_in_place():
    columns = add_column(default_columns())
    renamed = rename_column(columns, 'col2', 'Physics')

    assert [col['id'] for col in renamed] == ['col1', 'col2', 'col3']
    assert renamed[1] == {'id': 'col2', 'name': 'Physics', 'kind': 'grade'}
    assert columns[1]['name'] == 'Grade 1'


def test_rename_unknown_column():
    with pytest.raises(ColumnNotFoundError) as exc_info:
        rename_column(default_columns(), 'col99', 'Nope')
    assert 'col99' in str(exc_info.value)


def test_identifier_column_lookup():
    assert get_identifier_column(default_columns())['id'] == 'col1'

    # Falls back to the first column when none is marked
    grades_only = [make_column('a', 'A'), make_column('b', 'B')]
    assert get_identifier_column(grades_only)['id'] == 'a'

    with pytest.raises(InvalidSchemaError):
        get_identifier_column([])


def test_invalid_column_kind():
    with pytest.raises(InvalidSchemaError):
        make_column('col1', 'ID', 'score')


def test_columns_from_names(columns):
    assert [col['kind'] for col in columns] == ['identifier', 'grade', 'grade']
    assert [col['name'] for col in columns] == ['id', 'grade1', 'grade2']

    with pytest.raises(InvalidSchemaError):
        columns_from_names([' ', ''])


# ============= ROW PARSER =============

def test_parse_rows_positional(records):
    assert records == [
        {'col1': 'A1', 'col2': '90', 'col3': '80'},
        {'col1': 'A2', 'col2': '70', 'col3': '60'},
        {'col1': 'A3', 'col2': '100', 'col3': '100'},
    ]


def test_parse_line_extra_and_missing_tokens(columns):
    assert parse_line("A1 90 80 70 60", columns) == {'col1': 'A1', 'col2': '90', 'col3': '80'}
    assert parse_line("A1", columns) == {'col1': 'A1', 'col2': '', 'col3': ''}


def test_consecutive_spaces_collapse(columns):
    assert parse_line("  A1    90  80 ", columns) == {'col1': 'A1', 'col2': '90', 'col3': '80'}


def test_only_spaces_separate_tokens():
    assert split_tokens("A1\t90 80") == ['A1\t90', '80']
    assert split_tokens("A1 \t 80") == ['A1', '80']


def test_blank_lines_are_kept_by_default(columns):
    records = parse_rows("A1 90 80\n\nA2 70 60", columns)
    assert len(records) == 3
    assert records[1] == {'col1': '', 'col2': '', 'col3': ''}


def test_blank_lines_skipped_when_requested(columns):
    records = parse_rows("A1 90 80\n   \nA2 70 60", columns, skip_blank_lines=True)
    assert [r['col1'] for r in records] == ['A1', 'A2']


def test_surrounding_blank_lines_trimmed(columns):
    records = parse_rows("\n\nA1 90 80\nA2 70 60\n\n", columns)
    assert [r['col1'] for r in records] == ['A1', 'A2']


def test_empty_text(columns):
    assert parse_rows("", columns) == [{'col1': '', 'col2': '', 'col3': ''}]
    assert parse_rows("", columns, skip_blank_lines=True) == []
    assert parse_rows(None, columns, skip_blank_lines=True) == []


def test_parse_keeps_text_values(columns):
    record = parse_line("B7 abc 0x10", columns)
    assert record == {'col1': 'B7', 'col2': 'abc', 'col3': '0x10'}


# ============= RANKER =============

@pytest.mark.parametrize("text, expected", [
    ("90", 90.0),
    (" 85.5 ", 85.5),
    ("-3", -3.0),
    ("1e2", 100.0),
    ("90\r", 90.0),
    ("", 0.0),
    ("   ", 0.0),
    ("abc", 0.0),
    ("12abc", 0.0),
    ("1_000", 0.0),
    ("nan", 0.0),
    ("inf", 0.0),
    (None, 0.0),
    (75, 75.0),
])
def test_parse_grade_value(text, expected):
    assert parse_grade_value(text) == expected


def test_calculate_average(columns, records):
    grade_columns = get_grade_columns(columns)
    assert [calculate_average(r, grade_columns) for r in records] == [85.0, 65.0, 100.0]


def test_calculate_average_without_grade_columns():
    with pytest.raises(NoGradeColumnsError):
        calculate_average({'col1': 'A1'}, [])


def test_rank_example(columns, records):
    assert rank_student(records, columns, "A1") == {'rank': 2, 'percentile': '66.67'}
    assert rank_student(records, columns, "A3") == {'rank': 1, 'percentile': '33.33'}
    assert rank_student(records, columns, "A2") == {'rank': 3, 'percentile': '100.00'}


def test_rank_unknown_id(columns, records):
    assert rank_student(records, columns, "ZZZ") == {}


def test_rank_empty_id_or_no_records(columns, records):
    assert rank_student(records, columns, "") == {}
    assert rank_student([], columns, "A1") == {}


def test_rank_id_compared_as_exact_text(columns, records):
    assert rank_student(records, columns, " A1") == {}
    assert rank_student(records, columns, "a1") == {}


def test_rank_ties_share_best_rank(columns):
    records = parse_rows("A 90 90\nB 95 85\nC 100 80\nD 10 10", columns)
    for student in ("A", "B", "C"):
        assert rank_student(records, columns, student)['rank'] == 1
    assert rank_student(records, columns, "D")['rank'] == 4


def test_top_of_four_is_25_percent(columns):
    records = parse_rows("A 90 90\nB 80 80\nC 70 70\nD 60 60", columns)
    assert rank_student(records, columns, "A") == {'rank': 1, 'percentile': '25.00'}


def test_rank_invariant_under_reordering(columns):
    lines = ["A1 90 80", "A2 70 60", "A3 100 100", "A4 85 85", "A5 0 abc"]
    forward = parse_rows("\n".join(lines), columns)
    backward = parse_rows("\n".join(reversed(lines)), columns)

    for student in ("A1", "A2", "A3", "A4", "A5"):
        assert rank_student(forward, columns, student) == rank_student(backward, columns, student)


def test_rank_non_numeric_grades_count_as_zero(columns):
    records = parse_rows("A1 abc\nA2 10 -5", columns)
    # A1 averages 0 (missing grade2 too), A2 averages 2.5
    assert rank_student(records, columns, "A1") == {'rank': 2, 'percentile': '100.00'}


def test_rank_blank_records_count_towards_total(columns):
    records = parse_rows("A1 90 80\n\nA2 70 60", columns)
    assert rank_student(records, columns, "A2") == {'rank': 2, 'percentile': '66.67'}


def test_rank_without_grade_columns():
    columns = [make_column('col1', 'ID', 'identifier')]
    records = parse_rows("A1\nA2", columns)
    with pytest.raises(NoGradeColumnsError):
        rank_student(records, columns, "A1")


def test_rank_with_column_added_after_parse(columns, records):
    # The new column has no values and drags every average down equally
    wider = add_column(columns)
    assert rank_student(records, wider, "A1") == {'rank': 2, 'percentile': '66.67'}


def test_duplicate_ids_use_first_match(columns):
    records = parse_rows("A1 10 10\nA2 50 50\nA1 100 100", columns)
    ranker = GradeRanker(columns, records)
    assert ranker.find_record("A1") == records[0]
    assert ranker.rank_of("A1")['rank'] == 3


def test_percentile_decimals(columns, records):
    assert rank_student(records, columns, "A1", decimals=0) == {'rank': 2, 'percentile': '67'}


def test_percentile_rounds_half_up(columns):
    # 1/32 and 5/32 land exactly on the rounding digit
    records = parse_rows("\n".join(f"S{i} {100 - i}" for i in range(32)), columns)

    assert rank_student(records, columns, "S0") == {'rank': 1, 'percentile': '3.13'}
    assert rank_student(records, columns, "S4") == {'rank': 5, 'percentile': '15.63'}
    assert rank_student(records, columns, "S31") == {'rank': 32, 'percentile': '100.00'}


# ============= CSV OUTPUT =============

def test_serialize_csv(columns, records):
    assert serialize_csv(columns, records) == (
        "id,grade1,grade2\n"
        "A1,90,80\n"
        "A2,70,60\n"
        "A3,100,100"
    )


def test_serialize_csv_round_trip(columns):
    lines = ["S1 55 66", "S2 77 88", "S3 99 11"]
    records = parse_rows("\n".join(lines), columns)
    csv_lines = serialize_csv(columns, records).split("\n")

    assert csv_lines[0].split(",") == ['id', 'grade1', 'grade2']
    assert [line.split(",") for line in csv_lines[1:]] == [line.split(" ") for line in lines]


def test_serialize_csv_without_records(columns):
    assert serialize_csv(columns, []) == "id,grade1,grade2\n"


def test_serialize_csv_missing_fields(columns, records):
    wider = add_column(columns)
    lines = serialize_csv(wider, records).split("\n")
    assert lines[0] == "id,grade1,grade2,Grade 3"
    assert lines[1] == "A1,90,80,"


def test_serialize_csv_does_not_escape_by_default():
    columns = rename_column(default_columns(), 'col2', 'Grade, final')
    records = [{'col1': 'A1', 'col2': '9"0'}]
    assert serialize_csv(columns, records) == 'ID,Grade, final\nA1,9"0'


def test_serialize_csv_with_quoting():
    columns = rename_column(default_columns(), 'col2', 'Grade, final')
    records = [{'col1': 'A1', 'col2': '9"0'}, {'col1': 'A2', 'col2': '80'}]
    assert serialize_csv(columns, records, quote_fields=True) == (
        'ID,"Grade, final"\n'
        'A1,"9""0"\n'
        'A2,80'
    )


def test_save_csv(tmp_path, columns, records):
    output_path = tmp_path / "exports" / "grade_results.csv"
    written = save_csv(columns, records, str(output_path))

    assert written == str(output_path)
    assert output_path.read_text(encoding='utf-8') == serialize_csv(columns, records)


def test_records_to_dataframe(columns, records):
    df = records_to_dataframe(columns, records)
    assert list(df.columns) == ['id', 'grade1', 'grade2']
    assert df.shape == (3, 3)
    assert df.iloc[2].tolist() == ['A3', '100', '100']


def test_preview_text(columns, records):
    generator = OutputGenerator(columns)
    preview = generator.generate_preview_text(records, max_rows=2)

    assert 'grade1' in preview
    assert 'A2' in preview
    assert 'A3' not in preview
    assert preview.endswith("... 1 more rows")
    assert generator.generate_preview_text([]) == "No records parsed."


def test_format_rank_summary():
    assert format_rank_summary({'rank': 2, 'percentile': '66.67'}, 3) == "Rank 2 of 3 | Top 66.67%"
    assert format_rank_summary({}, 3) == "No results found"
