"""
Preview and export of batch parse results.

Turns BatchResults into flat records for a preview table, a pandas
DataFrame, or an Excel workbook with one sheet of recognized attributes
and one sheet of lines the user needs to correct.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd
from openpyxl.styles import Alignment, Font, PatternFill

from quality_specs.parsing.types import BatchResult

logger = logging.getLogger(__name__)

PARSED_SHEET = "Parsed Specifications"
ERRORS_SHEET = "Parse Errors"

PARSED_COLUMNS = [
    'source_row', 'spec_number', 'test_attribute', 'data_source',
    'value_range', 'comments', 'original_text', 'form',
]
ERROR_COLUMNS = ['source_row', 'spec_number', 'original_text', 'error']


def batch_to_records(batch: BatchResult, source_row: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    Flatten a batch into records in input order.

    Successes and failures are interleaved by spec number so a preview
    shows each line where the user typed it.

    Args:
        batch: Result of parse_batch()
        source_row: Optional row number of the input this batch came from

    Returns:
        List of record dictionaries with a boolean 'success' key
    """
    records = []
    for item in batch.in_input_order():
        record = item.to_dict()
        record['source_row'] = source_row
        records.append(record)
    return records


def batch_to_dataframe(batch: BatchResult, source_row: Optional[int] = None) -> pd.DataFrame:
    """
    Build a preview DataFrame for one batch.

    Args:
        batch: Result of parse_batch()
        source_row: Optional row number of the input this batch came from

    Returns:
        DataFrame with one row per candidate, in input order
    """
    columns = list(dict.fromkeys(PARSED_COLUMNS + ERROR_COLUMNS + ['success']))
    records = batch_to_records(batch, source_row=source_row)
    return pd.DataFrame(records, columns=columns)


def write_workbook(
    records: Iterable[Dict[str, Any]],
    output_path: Union[str, Path],
) -> Path:
    """
    Write parse records to an Excel workbook.

    Args:
        records: Records from batch_to_records(), possibly from many batches
        output_path: Path to the .xlsx file

    Returns:
        Path of the written workbook

    Raises:
        ValueError: If output_path is not an .xlsx file
    """
    output_path = Path(output_path)
    if output_path.suffix.lower() != '.xlsx':
        raise ValueError(f"Unsupported output format: {output_path.suffix}")

    records = list(records)
    parsed = pd.DataFrame([r for r in records if r.get('success')], columns=PARSED_COLUMNS)
    errors = pd.DataFrame([r for r in records if not r.get('success')], columns=ERROR_COLUMNS)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        parsed.to_excel(writer, sheet_name=PARSED_SHEET, index=False)
        errors.to_excel(writer, sheet_name=ERRORS_SHEET, index=False)

        _format_sheet(writer.sheets[PARSED_SHEET])
        _format_sheet(writer.sheets[ERRORS_SHEET])

        # Highlight lines that need correction
        red_fill = PatternFill(start_color="FFE5E5", end_color="FFE5E5", fill_type="solid")
        ws = writer.sheets[ERRORS_SHEET]
        for row in ws.iter_rows(min_row=2, max_row=len(errors) + 1):
            for cell in row:
                cell.fill = red_fill

    logger.info(
        f"Workbook written to: {output_path} "
        f"({len(parsed)} parsed, {len(errors)} errors)"
    )
    return output_path


def _format_sheet(ws) -> None:
    """Style the header row and size columns to their content."""
    header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
    header_font = Font(color="FFFFFF", bold=True)

    for cell in ws[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal='center', vertical='center')

    for column in ws.columns:
        column_letter = column[0].column_letter
        max_length = max(
            (len(str(cell.value)) for cell in column if cell.value is not None),
            default=0,
        )
        ws.column_dimensions[column_letter].width = min(max_length + 2, 50)


def summarize(batches: Iterable[BatchResult]) -> Dict[str, int]:
    """Totals across batches for a run summary."""
    totals = {'total_specs': 0, 'success_count': 0, 'error_count': 0}
    for batch in batches:
        totals['total_specs'] += batch.total_specs
        totals['success_count'] += batch.success_count
        totals['error_count'] += batch.error_count
    return totals

