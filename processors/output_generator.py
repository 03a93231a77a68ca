"""
Output generation utilities for CSV export and console previews.
"""

import csv
import io
import os
from typing import Dict, List

import pandas as pd

DEFAULT_CSV_FILENAME = 'grade_results.csv'


def _format_line(values: List[str], quote_fields: bool) -> str:
    if not quote_fields:
        # Values are joined as-is: an embedded comma shifts the columns
        return ','.join(values)

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator='\n')
    writer.writerow(values)
    return buffer.getvalue()[:-1]


def serialize_csv(columns: List[Dict], records: List[Dict],
                  quote_fields: bool = False) -> str:
    """
    Convert the schema and records to CSV text.

    The header line holds the column names. Every record becomes one line
    with its fields in column order; fields missing from a record are empty.

    Args:
        columns: Column schema
        records: Parsed records
        quote_fields: Apply RFC-4180 quoting to fields that need it

    Returns:
        CSV text
    """
    header = _format_line([col['name'] for col in columns], quote_fields)
    rows = '\n'.join(
        _format_line([str(record.get(col['id'], '')) for col in columns], quote_fields)
        for record in records
    )
    return f"{header}\n{rows}"


def records_to_dataframe(columns: List[Dict], records: List[Dict]) -> pd.DataFrame:
    """
    Build a preview table of the records with column names as headers.

    Duplicate column names are kept as separate columns.
    """
    data = [[record.get(col['id'], '') for col in columns] for record in records]
    return pd.DataFrame(data, columns=[col['name'] for col in columns])


def format_rank_summary(result: Dict, total: int) -> str:
    """Human readable rank result, e.g. 'Rank 2 of 3 | Top 66.67%'."""
    if not result:
        return "No results found"
    return f"Rank {result['rank']} of {total} | Top {result['percentile']}%"


class OutputGenerator:
    """Generate CSV files and text previews from parsed grade data."""

    def __init__(self, columns: List[Dict], quote_fields: bool = False):
        """
        Initialize output generator.

        Args:
            columns: Column schema
            quote_fields: Quote CSV fields containing commas, quotes or newlines
        """
        self.columns = columns
        self.quote_fields = quote_fields

    def generate_csv(self, records: List[Dict]) -> str:
        return serialize_csv(self.columns, records, quote_fields=self.quote_fields)

    def save_csv(self, records: List[Dict], output_path: str = DEFAULT_CSV_FILENAME) -> str:
        """
        Write the CSV export to disk.

        Args:
            records: Parsed records
            output_path: Destination file

        Returns:
            Path of the written file
        """
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            f.write(self.generate_csv(records))

        return output_path

    def generate_preview_text(self, records: List[Dict], max_rows: int = 20) -> str:
        """
        Render the first records as a text table.

        Args:
            records: Parsed records
            max_rows: Maximum number of rows shown

        Returns:
            Preview text
        """
        if not records:
            return "No records parsed."

        df = records_to_dataframe(self.columns, records[:max_rows])
        lines = [df.to_string(index=False)]

        if len(records) > max_rows:
            lines.append(f"... {len(records) - max_rows} more rows")

        return '\n'.join(lines)


def save_csv(columns: List[Dict], records: List[Dict],
             output_path: str = DEFAULT_CSV_FILENAME,
             quote_fields: bool = False) -> str:
    """
    Main function to export parsed records to a CSV file.

    Args:
        columns: Column schema
        records: Parsed records
        output_path: Destination file
        quote_fields: Apply RFC-4180 quoting

    Returns:
        Path of the written file
    """
    generator = OutputGenerator(columns, quote_fields=quote_fields)
    return generator.save_csv(records, output_path)
