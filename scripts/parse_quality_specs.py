"""
Batch quality specification parsing CLI.

Parses free-text quality specifications and reports the recognized
attributes alongside the lines that could not be parsed.

Input, one of:
- --text "purity ≥99% by gc, ph 6.5-7.5"
- a .txt file (the whole file is one spec block)
- a .csv/.xlsx file with one spec block per row in a text column

Output: JSON on stdout, or an .xlsx workbook with --output.

Usage:
    python scripts/parse_quality_specs.py --text "purity ≥99.9% by gc, appearance: white powder"
    python scripts/parse_quality_specs.py --input specs.xlsx --column "Specification" --output parsed.xlsx
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd
from tqdm import tqdm

from quality_specs.export import batch_to_records, summarize, write_workbook
from quality_specs.parsing import BatchResult, build_parser
from quality_specs.utils.config_manager import ConfigManager

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stderr)]
)
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "parser_config.yaml"


def detect_spec_column(df: pd.DataFrame) -> Optional[str]:
    """
    Auto-detect which column holds specification text.

    Args:
        df: DataFrame to analyze

    Returns:
        Column name or None if not detected
    """
    candidate_names = [
        'specification', 'specifications', 'quality specification',
        'quality specifications', 'spec', 'specs', 'test', 'tests',
    ]

    columns_lower = {str(col).lower(): col for col in df.columns}
    for candidate in candidate_names:
        if candidate in columns_lower:
            logger.info(f"Auto-detected spec column: '{columns_lower[candidate]}'")
            return columns_lower[candidate]

    for col in df.columns:
        if 'spec' in str(col).lower():
            logger.info(f"Auto-detected spec column (partial match): '{col}'")
            return col

    logger.warning("Could not auto-detect spec column")
    return None


def load_spec_blocks(file_path: str, column: Optional[str] = None) -> List[Tuple[Optional[int], str]]:
    """
    Load specification blocks from a file.

    Args:
        file_path: .txt, .csv, .xlsx or .xls file
        column: Column holding spec text (auto-detect if None)

    Returns:
        List of (source_row, text) pairs; source_row is None for text files

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported or the column is not found
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == '.txt':
        return [(None, path.read_text(encoding='utf-8'))]

    if suffix in ['.xlsx', '.xls']:
        df = pd.read_excel(path)
    elif suffix == '.csv':
        df = pd.read_csv(path)
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")

    logger.info(f"Loaded {len(df)} rows, {len(df.columns)} columns")

    if column is None:
        column = detect_spec_column(df)
        if column is None:
            raise ValueError(
                f"Could not detect spec column. Available columns: {list(df.columns)}"
            )
    elif column not in df.columns:
        raise ValueError(f"Column '{column}' not found. Available: {list(df.columns)}")

    # Spreadsheet rows are 1-based with a header row
    return [
        (row_idx + 2, str(text))
        for row_idx, text in df[column].items()
        if pd.notna(text) and str(text).strip()
    ]


def parse_blocks(
    blocks: List[Tuple[Optional[int], str]],
    config: ConfigManager,
) -> List[Tuple[Optional[int], BatchResult]]:
    """
    Normalize and parse each block.

    Blocks longer than cli.max_input_chars are skipped with a warning
    rather than handed to the parser.
    """
    normalizer, parser = build_parser(config)
    max_chars = config.get('cli', 'max_input_chars')

    batches = []
    for source_row, text in tqdm(blocks, desc="Parsing specifications", disable=len(blocks) < 2):
        if len(text) > max_chars:
            logger.warning(
                f"Skipping row {source_row}: {len(text)} characters exceeds limit of {max_chars}"
            )
            continue
        batches.append((source_row, parser.parse_batch(normalizer.normalize(text))))

    return batches


def generate_summary_report(batches: List[Tuple[Optional[int], BatchResult]]) -> str:
    """Human-readable summary of a parsing run."""
    totals = summarize(batch for _, batch in batches)
    total = totals['total_specs']
    rate = (totals['success_count'] / total * 100) if total else 0.0

    lines = [
        "=" * 60,
        "QUALITY SPECIFICATION PARSING SUMMARY",
        "=" * 60,
        f"Input blocks:      {len(batches)}",
        f"Specifications:    {total}",
        f"Recognized:        {totals['success_count']} ({rate:.1f}%)",
        f"Unparseable:       {totals['error_count']}",
        "=" * 60,
    ]
    return "\n".join(lines)


def main():
    """Main entry point for the parsing CLI."""
    parser = argparse.ArgumentParser(
        description="Parse free-text quality specifications into structured attributes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Parse a single block and print JSON
  python scripts/parse_quality_specs.py --text "purity ≥99% by gc; ph 6.5-7.5"

  # Parse a spreadsheet column into a workbook
  python scripts/parse_quality_specs.py --input specs.xlsx --column Specification --output parsed.xlsx
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--text', '-t', help='Specification text to parse')
    source.add_argument('--input', '-i', help='Input file (.txt, .csv, .xlsx)')
    parser.add_argument('--column', '-c', help='Column with specification text (auto-detect if not specified)')
    parser.add_argument('--output', '-o', help='Output .xlsx workbook (JSON to stdout if omitted)')
    parser.add_argument('--config', help=f'Config file (default: {DEFAULT_CONFIG_PATH})')

    args = parser.parse_args()

    try:
        config = ConfigManager(Path(args.config) if args.config else DEFAULT_CONFIG_PATH)

        if args.text is not None:
            blocks = [(None, args.text)]
        else:
            blocks = load_spec_blocks(args.input, args.column)
        logger.info(f"Parsing {len(blocks)} specification block(s)")

        batches = parse_blocks(blocks, config)

        records = []
        for source_row, batch in batches:
            records.extend(batch_to_records(batch, source_row=source_row))

        if args.output:
            write_workbook(records, args.output)
        else:
            print(json.dumps(records, ensure_ascii=False, indent=2))

        print(generate_summary_report(batches), file=sys.stderr)

    except Exception as e:
        logger.error(f"Specification parsing failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
