"""
Student ranking utilities.
Ranks one student's average grade against every parsed record.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from processors.columns import get_grade_columns, get_identifier_column
from processors.errors import NoGradeColumnsError


def parse_grade_value(text) -> float:
    """
    Coerce a raw grade value to a number.

    Surrounding whitespace is ignored. Empty, missing, non-numeric and
    non-finite values coerce to 0.

    Args:
        text: Raw value from a record (usually a string)

    Returns:
        Numeric grade
    """
    if text is None:
        return 0.0

    if isinstance(text, (int, float)) and not isinstance(text, bool):
        value = float(text)
    else:
        text = str(text).strip()
        if not text:
            return 0.0
        # Digit-group underscores are not part of the accepted number format
        if '_' in text:
            return 0.0
        try:
            value = float(text)
        except ValueError:
            return 0.0

    if not math.isfinite(value):
        return 0.0

    return value


def calculate_average(record: Dict, grade_columns: List[Dict]) -> float:
    """
    Average of a record's grade values.

    Args:
        record: Parsed record
        grade_columns: Grade columns of the schema

    Returns:
        Mean of the coerced grade values

    Raises:
        NoGradeColumnsError: If grade_columns is empty
    """
    if not grade_columns:
        raise NoGradeColumnsError()

    total = sum(parse_grade_value(record.get(col['id'], '')) for col in grade_columns)
    return total / len(grade_columns)


def format_percentile(rank: int, total: int, decimals: int = 2) -> str:
    """
    Rank as a "top X%" share of all records, e.g. '25.00'.

    Ties at the last digit round half up on the exact binary value,
    so rank 1 of 32 gives '3.13'.
    """
    value = Decimal((rank / total) * 100)
    return str(value.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP))


class GradeRanker:
    """Rank students by average grade within one set of parsed records."""

    def __init__(self, columns: List[Dict], records: List[Dict], decimals: int = 2):
        """
        Initialize ranker.

        Args:
            columns: Column schema
            records: Parsed records
            decimals: Decimal places used for the percentile string
        """
        self.columns = columns
        self.records = records
        self.decimals = decimals
        self.grade_columns = get_grade_columns(columns)

    def average_of(self, record: Dict) -> float:
        return calculate_average(record, self.grade_columns)

    def averages(self) -> List[float]:
        """Averages of all records, in record order."""
        return [self.average_of(record) for record in self.records]

    def find_record(self, target_id: str) -> Optional[Dict]:
        """
        Find the first record whose identifier equals target_id.

        Comparison is exact text: no trimming, no case folding.
        """
        if not self.records:
            return None

        id_column = get_identifier_column(self.columns)['id']

        for record in self.records:
            if str(record.get(id_column, '')) == target_id:
                return record

        return None

    def rank_of(self, target_id: str) -> Dict:
        """
        Compute rank and percentile for one identifier.

        Ranking is competition style: rank = 1 + number of records with a
        strictly greater average, so ties share the better rank.

        Args:
            target_id: Identifier to look up

        Returns:
            {'rank': int, 'percentile': str}, or {} if the identifier
            is empty or not found

        Raises:
            NoGradeColumnsError: If the schema has no grade columns
        """
        if not self.grade_columns:
            raise NoGradeColumnsError()

        if not target_id:
            return {}

        student = self.find_record(target_id)
        if student is None:
            return {}

        average = self.average_of(student)
        better = sum(1 for other in self.averages() if other > average)
        rank = better + 1

        return {
            'rank': rank,
            'percentile': format_percentile(rank, len(self.records), self.decimals)
        }


def rank_student(records: List[Dict], columns: List[Dict], target_id: str,
                 decimals: int = 2) -> Dict:
    """
    Main function to rank one student among all records.

    Args:
        records: Parsed records
        columns: Column schema
        target_id: Identifier to look up
        decimals: Decimal places for the percentile

    Returns:
        Rank result dict ({} when there is no result)
    """
    ranker = GradeRanker(columns, records, decimals=decimals)
    return ranker.rank_of(target_id)
