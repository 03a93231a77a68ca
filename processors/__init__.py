"""
Data processing modules for grade parsing, ranking and export.
"""

from .errors import (
    GradeCalculatorError,
    InvalidSchemaError,
    NoGradeColumnsError,
    ColumnNotFoundError
)
from .columns import (
    default_columns,
    columns_from_names,
    add_column,
    rename_column,
    get_grade_columns,
    get_identifier_column
)
from .row_parser import (
    parse_line,
    parse_rows
)
from .ranker import (
    GradeRanker,
    parse_grade_value,
    calculate_average,
    rank_student
)
from .output_generator import (
    OutputGenerator,
    serialize_csv,
    save_csv,
    records_to_dataframe,
    format_rank_summary
)

__all__ = [
    'GradeCalculatorError',
    'InvalidSchemaError',
    'NoGradeColumnsError',
    'ColumnNotFoundError',
    'default_columns',
    'columns_from_names',
    'add_column',
    'rename_column',
    'get_grade_columns',
    'get_identifier_column',
    'parse_line',
    'parse_rows',
    'GradeRanker',
    'parse_grade_value',
    'calculate_average',
    'rank_student',
    'OutputGenerator',
    'serialize_csv',
    'save_csv',
    'records_to_dataframe',
    'format_rank_summary',
]
