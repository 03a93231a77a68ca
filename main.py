#!/usr/bin/env python3
"""
Grade Rank Calculator
Command line front end: parse pasted grade data, rank a student among
their peers and export the table as CSV.
"""

import os
import sys
import argparse

# Import modules
from utils.config import DEFAULT_CONFIG_PATH, load_config
from processors.columns import columns_from_names, get_grade_columns, make_column
from processors.errors import GradeCalculatorError
from processors.row_parser import parse_rows
from processors.ranker import rank_student
from processors.output_generator import OutputGenerator, format_rank_summary


def print_banner():
    """Print application banner."""
    print("\n" + "="*80)
    print("GRADE RANK CALCULATOR")
    print("Find out where a student stands among their peers")
    print("="*80 + "\n")


def build_columns(config: dict, column_names: str = None) -> list:
    """
    Build the column schema.

    Args:
        config: Configuration dictionary
        column_names: Optional comma separated names; the first is the identifier

    Returns:
        Column schema
    """
    if column_names:
        return columns_from_names(column_names.split(','))

    return [
        make_column(str(col['id']), str(col['name']), col.get('kind', 'grade'))
        for col in config['columns']
    ]


def read_input(input_path: str) -> str:
    """
    Read raw grade data from a file, or stdin when the path is '-'.

    Args:
        input_path: Path to text file

    Returns:
        Raw text
    """
    if input_path == '-':
        return sys.stdin.read()

    if not os.path.exists(input_path):
        print(f"❌ Error: Input file not found at {input_path}")
        sys.exit(1)

    with open(input_path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_data(raw_text: str, columns: list, config: dict) -> list:
    """
    Parse raw text into records.

    Args:
        raw_text: Pasted grade data
        columns: Column schema
        config: Configuration dictionary

    Returns:
        Parsed records
    """
    print("\n" + "="*80)
    print("STEP 1/3: Parsing data")
    print("="*80 + "\n")

    skip_blank = config['parser'].get('skip_blank_lines', False)
    records = parse_rows(raw_text, columns, skip_blank_lines=skip_blank)

    print(f"  Columns: {', '.join(col['name'] for col in columns)}")
    print(f"  Grade columns: {len(get_grade_columns(columns))}")
    print(f"  ✓ Parsed {len(records)} records")

    return records


def calculate_results(records: list, columns: list, search_id: str, config: dict) -> dict:
    """
    Rank one student and print the result.

    Args:
        records: Parsed records
        columns: Column schema
        search_id: Identifier to rank
        config: Configuration dictionary

    Returns:
        Rank result dict
    """
    print("\n" + "="*80)
    print("STEP 2/3: Calculating results")
    print("="*80 + "\n")

    decimals = config['ranking'].get('percentile_decimals', 2)
    result = rank_student(records, columns, search_id, decimals=decimals)

    if result:
        print(f"  ✓ {search_id}: {format_rank_summary(result, len(records))}")
    else:
        print(f"  ⚠️  No results found for ID '{search_id}'")

    return result


def main(args):
    """Main execution function."""
    print_banner()

    # Load configuration
    try:
        config = load_config(args.config, required=True)
    except FileNotFoundError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    if args.skip_blank_lines:
        config['parser']['skip_blank_lines'] = True
    if args.quote_fields:
        config['export']['quote_fields'] = True

    output_path = args.output or config['export']['csv_filename']

    try:
        columns = build_columns(config, args.columns)
        raw_text = read_input(args.input)

        # STEP 1: Parse
        records = parse_data(raw_text, columns, config)

        generator = OutputGenerator(columns, quote_fields=config['export']['quote_fields'])

        if not args.no_preview:
            print("\n  Data preview:\n")
            print(generator.generate_preview_text(records))

        # STEP 2: Rank
        if args.id is not None:
            calculate_results(records, columns, args.id, config)

        # STEP 3: Export
        print("\n" + "="*80)
        print("STEP 3/3: Generating outputs")
        print("="*80 + "\n")

        generator.save_csv(records, output_path)
        print(f"✓ CSV saved to: {output_path}")
        print()

    except GradeCalculatorError as e:
        print(f"\n❌ Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description='Grade Rank Calculator - Rank a student by average grade and export CSV'
    )

    parser.add_argument(
        '--input',
        required=True,
        help="Text file with space separated grades, one student per line ('-' for stdin)"
    )

    parser.add_argument(
        '--id',
        default=None,
        help='Student ID to rank (exact match)'
    )

    parser.add_argument(
        '--columns',
        default=None,
        help='Comma separated column names, identifier first (default: from config)'
    )

    parser.add_argument(
        '--output',
        default=None,
        help='CSV output path (default: export.csv_filename from config)'
    )

    parser.add_argument(
        '--config',
        default=DEFAULT_CONFIG_PATH,
        help='Path to configuration file (default: config/config.yaml)'
    )

    parser.add_argument(
        '--skip-blank-lines',
        action='store_true',
        help='Drop blank lines instead of keeping them as empty records'
    )

    parser.add_argument(
        '--quote-fields',
        action='store_true',
        help='Quote CSV fields that contain commas, quotes or newlines'
    )

    parser.add_argument(
        '--no-preview',
        action='store_true',
        help='Do not print the parsed data table'
    )

    args = parser.parse_args()

    main(args)
