"""
Pytest configuration and shared fixtures for quality specification parser tests.

Provides:
- Operator and method normalizers
- Splitter and specification parser
- Temporary directories and a small YAML config file
- Performance tracking utilities
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator

from quality_specs.normalization.method_normalizer import MethodNormalizer
from quality_specs.normalization.operator_normalizer import OperatorNormalizer
from quality_specs.parsing.batch_parser import SpecificationParser
from quality_specs.parsing.splitter import SpecSplitter


# ============================================================================
# NORMALIZATION FIXTURES
# ============================================================================

@pytest.fixture(scope="session")
def operator_normalizer() -> OperatorNormalizer:
    """Operator normalizer with the built-in phrase table."""
    return OperatorNormalizer()


@pytest.fixture(scope="session")
def method_normalizer() -> MethodNormalizer:
    """Method normalizer with the built-in vocabulary."""
    return MethodNormalizer()


# ============================================================================
# PARSING FIXTURES
# ============================================================================

@pytest.fixture(scope="session")
def splitter() -> SpecSplitter:
    """Candidate splitter."""
    return SpecSplitter()


@pytest.fixture(scope="session")
def spec_parser() -> SpecificationParser:
    """Specification parser with default recognizers, defaults off."""
    return SpecificationParser()


@pytest.fixture(scope="function")
def default_method_parser() -> SpecificationParser:
    """Specification parser that fills comments from the default-method table."""
    return SpecificationParser(apply_default_methods=True)


# ============================================================================
# CONFIG AND FILE FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test file operations."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(scope="function")
def config_file(temp_dir) -> Path:
    """A small YAML config with one extra operator phrase and method."""
    path = temp_dir / "parser_config.yaml"
    path.write_text(
        "normalization:\n"
        "  operator_phrases:\n"
        "    not below: \"≥\"\n"
        "parsing:\n"
        "  vendor_keywords: [vendor, supplier]\n"
        "vocabulary:\n"
        "  method_casing:\n"
        "    hplc-cad: HPLC-CAD\n",
        encoding="utf-8",
    )
    return path


# ============================================================================
# PERFORMANCE TRACKING FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def performance_tracker():
    """Simple performance tracking for benchmarks."""
    import time

    class PerformanceTracker:
        def __init__(self):
            self.measurements = []

        def measure(self, func, *args, **kwargs):
            """Measure execution time of a function."""
            start = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed_ms = (time.perf_counter() - start) * 1000
            self.measurements.append(elapsed_ms)
            return result, elapsed_ms

        def avg_time(self):
            """Calculate average execution time."""
            return sum(self.measurements) / len(self.measurements) if self.measurements else 0

        def max_time(self):
            """Get maximum execution time."""
            return max(self.measurements) if self.measurements else 0

    return PerformanceTracker()
