"""
Type definitions for the quality specification parser.

Defines the candidate, success, failure and batch structures passed
between the splitter, the recognizers and the caller.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class DataSource(Enum):
    """Provenance of a specification value."""
    QC = "QC"
    VENDOR = "Vendor"


class ParseFailure(Enum):
    """Reasons a candidate could not be parsed."""
    NO_VALUE = "no recognizable value or operator found"
    NO_ATTRIBUTE = "no attribute name found"


@dataclass(frozen=True)
class SpecCandidate:
    """
    One segment of normalized text hypothesized to describe a single attribute.

    Attributes:
        original_text: Trimmed substring exactly as it appears in the normalized text
        index: 1-based position in the batch
        start: Offset of original_text in the normalized text
        end: End offset (exclusive) of original_text in the normalized text
    """
    original_text: str
    index: int
    start: int = 0
    end: int = 0


@dataclass(frozen=True)
class ParsedAttribute:
    """
    Successful extraction from one candidate.

    Attributes:
        test_attribute: Attribute name in Title Case
        data_source: QC unless the candidate names the vendor
        value_range: Operator + value, literal range, or descriptor
        comments: Auxiliary detail such as "Method: GC"
        original_text: Candidate text carried through for audit and preview
        spec_number: Candidate index
        form: Name of the recognizer that matched
    """
    test_attribute: str
    data_source: DataSource = DataSource.QC
    value_range: str = ""
    comments: str = ""
    original_text: str = ""
    spec_number: int = 0
    form: str = ""

    success = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "spec_number": self.spec_number,
            "test_attribute": self.test_attribute,
            "data_source": self.data_source.value,
            "value_range": self.value_range,
            "comments": self.comments,
            "original_text": self.original_text,
            "form": self.form,
            "success": True,
        }


@dataclass(frozen=True)
class ParseError:
    """
    Failed extraction from one candidate.

    Attributes:
        spec_number: Candidate index
        original_text: Candidate text, verbatim, for re-display
        error: Short machine-readable reason
    """
    spec_number: int
    original_text: str
    error: str = ParseFailure.NO_VALUE.value

    success = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "spec_number": self.spec_number,
            "original_text": self.original_text,
            "error": self.error,
            "success": False,
        }


@dataclass(frozen=True)
class BatchResult:
    """
    Aggregate outcome of one parse call.

    Results and errors are each kept in candidate order; counts are
    derived from them rather than tracked separately.
    """
    results: Tuple[ParsedAttribute, ...] = field(default_factory=tuple)
    errors: Tuple[ParseError, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Freeze incoming sequences."""
        object.__setattr__(self, 'results', tuple(self.results))
        object.__setattr__(self, 'errors', tuple(self.errors))

    @property
    def success_count(self) -> int:
        """Number of parsed candidates."""
        return len(self.results)

    @property
    def error_count(self) -> int:
        """Number of unparseable candidates."""
        return len(self.errors)

    @property
    def total_specs(self) -> int:
        """Number of non-empty candidates in the batch."""
        return self.success_count + self.error_count

    @property
    def all_parsed(self) -> bool:
        """Check if every candidate was recognized."""
        return self.error_count == 0

    def in_input_order(self) -> list:
        """Successes and failures interleaved by candidate index."""
        return sorted(
            list(self.results) + list(self.errors),
            key=lambda item: item.spec_number,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "results": [r.to_dict() for r in self.results],
            "errors": [e.to_dict() for e in self.errors],
            "total_specs": self.total_specs,
            "success_count": self.success_count,
            "error_count": self.error_count,
        }
