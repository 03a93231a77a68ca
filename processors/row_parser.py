"""
Row parsing for pasted grade data.
Turns space-separated text into records keyed by column id.
"""

from typing import Dict, List


def split_tokens(line: str) -> List[str]:
    """
    Split a line on single spaces, dropping empty and whitespace-only tokens.

    Only the space character separates fields; a tab inside a token is kept.
    """
    return [token for token in line.split(' ') if token.strip() != '']


def parse_line(line: str, columns: List[Dict]) -> Dict[str, str]:
    """
    Map the tokens of one line onto the columns by position.

    Args:
        line: One line of raw input
        columns: Ordered column schema

    Returns:
        Record with exactly one key per column id
    """
    tokens = split_tokens(line)
    record = {}

    for index, col in enumerate(columns):
        # Extra tokens are discarded, missing ones become empty strings
        record[col['id']] = tokens[index] if index < len(tokens) else ''

    return record


def is_blank_line(line: str) -> bool:
    return not split_tokens(line)


def parse_rows(raw_text: str, columns: List[Dict],
               skip_blank_lines: bool = False) -> List[Dict[str, str]]:
    """
    Parse raw multi-line text into records.

    There is no header row. Surrounding whitespace of the whole text is
    stripped before splitting into lines. Blank lines produce all-empty
    records unless skip_blank_lines is set, so empty text yields a single
    empty record by default and no records when skipping.

    Args:
        raw_text: Pasted text, one record per line
        columns: Ordered column schema
        skip_blank_lines: Drop lines with no tokens

    Returns:
        List of records in input order
    """
    lines = (raw_text or '').strip().split('\n')

    if skip_blank_lines:
        lines = [line for line in lines if not is_blank_line(line)]

    return [parse_line(line, columns) for line in lines]
