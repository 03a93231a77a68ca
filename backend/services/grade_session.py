"""
Grade Session service for the Grade Rank Calculator API.
Holds the state of one calculator form and runs the processors on it.

Every action replaces the affected field with a fresh value returned by
a pure processor function; nothing is mutated in place.
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional

# Add parent directory to path to import existing modules
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from processors.columns import add_column, make_column, rename_column
from processors.output_generator import serialize_csv
from processors.row_parser import parse_rows
from processors.ranker import rank_student
from utils.config import DEFAULT_CONFIG_PATH, load_config


class GradeSession:
    """
    State of the grade calculator form.

    Attributes:
        columns: Column schema
        raw_text: Text of the last parse action
        records: Records of the last parse action
        search_id: Identifier of the last calculate action
        result: Rank result of the last calculate action
    """

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize session.

        Args:
            config: Configuration dictionary (loaded from the default path if None)
        """
        self.config = config if config is not None else load_config(DEFAULT_CONFIG_PATH)
        self.reset()

    @property
    def skip_blank_lines(self) -> bool:
        return bool(self.config['parser'].get('skip_blank_lines', False))

    @property
    def quote_fields(self) -> bool:
        return bool(self.config['export'].get('quote_fields', False))

    @property
    def percentile_decimals(self) -> int:
        return int(self.config['ranking'].get('percentile_decimals', 2))

    @property
    def csv_filename(self) -> str:
        return self.config['export'].get('csv_filename', 'grade_results.csv')

    def _initial_columns(self) -> List[Dict]:
        return [
            make_column(str(col['id']), str(col['name']), col.get('kind', 'grade'))
            for col in self.config['columns']
        ]

    def reset(self) -> None:
        """Restore the startup state."""
        self.columns: List[Dict] = self._initial_columns()
        self.raw_text: str = ''
        self.records: List[Dict] = []
        self.search_id: str = ''
        self.result: Dict = {}

    def add_column(self) -> List[Dict]:
        self.columns = add_column(self.columns)
        return self.columns

    def rename_column(self, column_id: str, name: str) -> List[Dict]:
        self.columns = rename_column(self.columns, column_id, name)
        return self.columns

    def parse(self, raw_text: str) -> List[Dict]:
        """
        Replace the records with a fresh parse of raw_text.

        Args:
            raw_text: Pasted grade data

        Returns:
            Parsed records
        """
        self.raw_text = raw_text
        self.records = parse_rows(raw_text, self.columns,
                                  skip_blank_lines=self.skip_blank_lines)
        return self.records

    def calculate(self, search_id: str) -> Dict:
        """
        Replace the rank result with the result for search_id.

        Args:
            search_id: Identifier to rank

        Returns:
            Rank result ({} when there is no result)

        Raises:
            NoGradeColumnsError: If the schema has no grade columns
        """
        self.search_id = search_id
        self.result = {}
        self.result = rank_student(self.records, self.columns, search_id,
                                   decimals=self.percentile_decimals)
        return self.result

    def export_csv(self) -> str:
        return serialize_csv(self.columns, self.records, quote_fields=self.quote_fields)
