"""
CSV Utilities

Reading and writing catalog CSV files with proper configuration.
Handles large field sizes, byte-order marks and ragged rows.
"""

import csv
import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List


def configure_csv(field_size_limit: int = 10 * 1024 * 1024) -> None:
    """
    Configure CSV module for large fields.

    Args:
        field_size_limit: Maximum field size in bytes (default: 10MB)
    """
    csv.field_size_limit(field_size_limit)


@dataclass
class CsvReadResult:
    """Parsed CSV content plus any row-level parse problems."""

    headers: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)
    parse_errors: List[str] = field(default_factory=list)


def _distinct_headers(record: List[str]) -> List[str]:
    """Header row with verbatim repeats renamed so each column gets its own key."""
    headers: List[str] = []
    for header in record:
        name, suffix = header, 2
        while name in headers:
            name = f"{header} ({suffix})"
            suffix += 1
        headers.append(name)
    return headers


def parse_csv_text(text: str) -> CsvReadResult:
    """
    Parse CSV text into headers, rows and parse errors.

    Fully blank lines are skipped. Short rows are padded with empty strings;
    long rows keep their extra cells under ``Column <n>`` keys. Both are
    reported as parse errors rather than dropped. A header repeated
    verbatim is renamed ``<header> (2)``, ``(3)``... so every column keeps
    its own values.

    Args:
        text: CSV content

    Returns:
        CsvReadResult with ordered headers and string-valued rows
    """
    configure_csv()
    result = CsvReadResult()
    reader = csv.reader(io.StringIO(text))

    try:
        for record in reader:
            if not any(cell.strip() for cell in record):
                continue
            if not result.headers:
                result.headers = _distinct_headers(record)
                continue

            line = reader.line_num
            width = len(result.headers)
            row = {header: '' for header in result.headers}
            for header, cell in zip(result.headers, record):
                row[header] = cell
            if len(record) < width:
                result.parse_errors.append(
                    f"Line {line}: expected {width} fields, found {len(record)}"
                )
            elif len(record) > width:
                for position in range(width, len(record)):
                    row[f"Column {position + 1}"] = record[position]
                result.parse_errors.append(
                    f"Line {line}: expected {width} fields, found {len(record)}; "
                    f"extra values kept"
                )
            result.rows.append(row)
    except csv.Error as exc:
        result.parse_errors.append(f"Line {reader.line_num}: {exc}")

    return result


def read_csv(file_path: str | Path, encoding: str = 'utf-8-sig') -> CsvReadResult:
    """
    Read a CSV file.

    Args:
        file_path: Path to CSV file
        encoding: File encoding (default: utf-8 with optional BOM)

    Returns:
        CsvReadResult with headers, rows and parse errors
    """
    with open(file_path, 'r', encoding=encoding, newline='') as f:
        return parse_csv_text(f.read())


def to_csv_text(headers: List[str], rows: List[Dict[str, str]]) -> str:
    """
    Serialize rows to CSV text with a fixed column order.

    Args:
        headers: Column names, in output order
        rows: Row dictionaries; missing keys are written as empty cells

    Returns:
        CSV content including the header line
    """
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=headers, extrasaction='ignore', restval='')
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def write_csv(
    file_path: str | Path,
    headers: List[str],
    rows: List[Dict[str, str]],
    encoding: str = 'utf-8'
) -> int:
    """
    Write rows to CSV file.

    Args:
        file_path: Path to output CSV file
        headers: Column names, in output order
        rows: List of dictionaries to write
        encoding: File encoding (default: utf-8)

    Returns:
        Number of rows written
    """
    with open(file_path, 'w', encoding=encoding, newline='') as f:
        f.write(to_csv_text(headers, rows))

    return len(rows)


# Initialize CSV configuration on module import
configure_csv()
