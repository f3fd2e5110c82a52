"""
Tests for preview/export of parse results and the batch CLI helpers.

Tests:
- Records and DataFrames in input order
- Excel workbook sheets and styling
- Run summaries
- CLI input loading and block parsing
"""

import importlib.util
from pathlib import Path

import pandas as pd
import pytest
from openpyxl import load_workbook

from quality_specs.export import (
    ERRORS_SHEET,
    PARSED_SHEET,
    batch_to_dataframe,
    batch_to_records,
    summarize,
    write_workbook,
)
from quality_specs.parsing.batch_parser import parse_spec_text
from quality_specs.utils.config_manager import ConfigManager
from tests.fixtures.test_data import MIXED_BATCH

SCRIPT_PATH = Path(__file__).parent.parent / "scripts" / "parse_quality_specs.py"


@pytest.fixture(scope="module")
def cli():
    """Load the CLI script as a module."""
    spec = importlib.util.spec_from_file_location("parse_quality_specs", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def mixed_batch():
    return parse_spec_text(MIXED_BATCH)


# ============================================================================
# RECORD AND DATAFRAME TESTS
# ============================================================================

class TestRecords:
    """Tests for batch_to_records() and batch_to_dataframe()."""

    def test_records_in_input_order(self, mixed_batch):
        records = batch_to_records(mixed_batch, source_row=7)
        assert [r['spec_number'] for r in records] == [1, 2, 3, 4, 5, 6]
        assert [r['success'] for r in records] == [True, False, True, False, True, True]
        assert all(r['source_row'] == 7 for r in records)

    def test_record_fields(self, mixed_batch):
        first, second = batch_to_records(mixed_batch)[:2]
        assert first['test_attribute'] == 'Purity'
        assert first['data_source'] == 'QC'
        assert first['comments'] == 'Method: GC'
        assert first['source_row'] is None
        assert second['original_text'] == 'asdkjasdj'
        assert 'error' in second

    def test_dataframe(self, mixed_batch):
        df = batch_to_dataframe(mixed_batch)
        assert len(df) == 6
        assert {'test_attribute', 'value_range', 'error', 'success'} <= set(df.columns)
        assert df['success'].tolist() == [True, False, True, False, True, True]

    def test_empty_batch_dataframe(self):
        df = batch_to_dataframe(parse_spec_text(""))
        assert df.empty
        assert 'test_attribute' in df.columns


# ============================================================================
# WORKBOOK TESTS
# ============================================================================

class TestWorkbook:
    """Tests for write_workbook()."""

    def test_write_workbook(self, mixed_batch, tmp_path):
        output = write_workbook(batch_to_records(mixed_batch, source_row=2), tmp_path / "out" / "parsed.xlsx")
        assert output.exists()

        wb = load_workbook(output)
        assert wb.sheetnames == [PARSED_SHEET, ERRORS_SHEET]

        parsed = pd.read_excel(output, sheet_name=PARSED_SHEET)
        errors = pd.read_excel(output, sheet_name=ERRORS_SHEET)
        assert parsed['test_attribute'].tolist() == ['Purity', 'Ph', 'Appearance', 'Color']
        assert errors['original_text'].tolist() == ['asdkjasdj', '≥99%']

    def test_header_and_error_styling(self, mixed_batch, tmp_path):
        output = write_workbook(batch_to_records(mixed_batch), tmp_path / "parsed.xlsx")
        wb = load_workbook(output)

        header = wb[PARSED_SHEET]['A1']
        assert header.font.bold
        assert header.fill.start_color.rgb.endswith("366092")

        error_cell = wb[ERRORS_SHEET]['A2']
        assert error_cell.fill.start_color.rgb.endswith("FFE5E5")

    def test_rejects_non_xlsx(self, mixed_batch, tmp_path):
        with pytest.raises(ValueError):
            write_workbook(batch_to_records(mixed_batch), tmp_path / "parsed.csv")


class TestSummarize:

    def test_totals(self, mixed_batch):
        totals = summarize([mixed_batch, parse_spec_text("purity ≥99%")])
        assert totals == {'total_specs': 7, 'success_count': 5, 'error_count': 2}

    def test_empty(self):
        assert summarize([]) == {'total_specs': 0, 'success_count': 0, 'error_count': 0}


# ============================================================================
# CLI HELPER TESTS
# ============================================================================

class TestCli:
    """Tests for the batch CLI helpers."""

    def test_detect_spec_column(self, cli):
        df = pd.DataFrame({'Product': ['A'], 'Quality Specification': ['purity ≥99%']})
        assert cli.detect_spec_column(df) == 'Quality Specification'
        assert cli.detect_spec_column(pd.DataFrame({'Product': ['A']})) is None

    def test_load_text_file(self, cli, tmp_path):
        path = tmp_path / "specs.txt"
        path.write_text("purity ≥99%\nph 6.5-7.5", encoding="utf-8")
        assert cli.load_spec_blocks(str(path)) == [(None, "purity ≥99%\nph 6.5-7.5")]

    def test_load_csv_rows(self, cli, tmp_path):
        path = tmp_path / "specs.csv"
        pd.DataFrame({
            'Product': ['A', 'B', 'C'],
            'Specification': ['purity ≥99%', None, 'ph 6.5-7.5'],
        }).to_csv(path, index=False)

        blocks = cli.load_spec_blocks(str(path))
        assert blocks == [(2, 'purity ≥99%'), (4, 'ph 6.5-7.5')]

    def test_load_errors(self, cli, tmp_path):
        with pytest.raises(FileNotFoundError):
            cli.load_spec_blocks(str(tmp_path / "missing.csv"))

        path = tmp_path / "specs.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(ValueError):
            cli.load_spec_blocks(str(path))

        path = tmp_path / "specs.csv"
        pd.DataFrame({'Spec': ['purity ≥99%']}).to_csv(path, index=False)
        with pytest.raises(ValueError):
            cli.load_spec_blocks(str(path), column='Missing')

    def test_parse_blocks(self, cli):
        batches = cli.parse_blocks([(2, "purity at least 99%"), (3, "ph 6.5-7.5")], ConfigManager())
        assert [row for row, _ in batches] == [2, 3]
        assert batches[0][1].results[0].value_range == "≥99%"

    def test_parse_blocks_skips_oversized(self, cli):
        config = ConfigManager()
        config.set('cli', 'max_input_chars', 10)
        batches = cli.parse_blocks([(2, "purity ≥99%, ph 6.5-7.5"), (3, "ph 7-8")], config)
        assert [row for row, _ in batches] == [3]

    def test_summary_report(self, cli):
        report = cli.generate_summary_report([(None, parse_spec_text(MIXED_BATCH))])
        assert "Specifications:    6" in report
        assert "Recognized:        4 (66.7%)" in report
