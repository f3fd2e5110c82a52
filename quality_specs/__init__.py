"""
Quality Specification Parser - Source Package

Main modules:
- normalization: Operator canonicalization and method/attribute casing
- parsing: Candidate splitting, pattern recognizers and batch parsing
- utils: YAML configuration management
- export: Preview rows, DataFrames and Excel workbooks of parse results
"""

from quality_specs.normalization import normalize
from quality_specs.parsing import BatchResult, parse_batch, parse_spec_text

__version__ = "1.0.0"

__all__ = ["normalize", "parse_batch", "parse_spec_text", "BatchResult"]
