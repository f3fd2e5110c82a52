"""
Batch parser for quality specification text.

Splits normalized text into candidates and runs each one through the
ordered recognizers. Candidates that match no form are reported as
ParseErrors; the batch itself never fails.

Typical use:
    >>> from quality_specs.parsing.batch_parser import parse_spec_text
    >>> batch = parse_spec_text("purity ≥99.9% by gc, ph 6.5-7.5")
    >>> [r.test_attribute for r in batch.results]
    ['Purity', 'Ph']
"""

import re
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from loguru import logger

from ..normalization.method_normalizer import MethodNormalizer, title_case
from ..normalization.operator_normalizer import normalize
from ..normalization.vocabulary import CANONICAL_OPERATORS, VENDOR_KEYWORDS
from .recognizers import DEFAULT_RECOGNIZERS, Extraction, Recognizer
from .splitter import SpecSplitter
from .types import (
    BatchResult,
    DataSource,
    ParsedAttribute,
    ParseError,
    ParseFailure,
    SpecCandidate,
)

# "... by GC", "... via Karl Fischer", "... using HPLC"
_METHOD_CLAUSE = re.compile(
    r'^(?P<body>.+?)\s+(?:by|via|using)\s+(?P<method>.+?)$',
    flags=re.IGNORECASE | re.DOTALL,
)

# "... (HPLC)", only taken as a method when the vocabulary knows it
_METHOD_PARENS = re.compile(
    r'^(?P<body>.+?)\s*\((?P<method>[^()]+)\)$',
    flags=re.DOTALL,
)

# Text that starts like a value, i.e. the attribute name is missing
_VALUE_FIRST = re.compile(
    '^(?:[' + ''.join(CANONICAL_OPERATORS) + r':：]|[-+]?[.,]?\d)'
)

DEFAULT_METHOD_PREFIX = 'Method: '


class SpecificationParser:
    """
    Parses batches of quality specifications.

    Per candidate:
    1. Detect the data source ("vendor" anywhere -> Vendor, else QC)
    2. Remove source tags such as "(vendor)" or "per vendor"
    3. Split off a method clause ("by GC")
    4. Run recognizers in priority order, first match wins
    5. Title-case the attribute and case the method

    The parser holds only immutable configuration, so one instance can be
    shared between threads.
    """

    def __init__(
        self,
        recognizers: Optional[Sequence[Recognizer]] = None,
        method_normalizer: Optional[MethodNormalizer] = None,
        vendor_keywords: Optional[Iterable[str]] = None,
        apply_default_methods: bool = False,
        method_prefix: str = DEFAULT_METHOD_PREFIX,
        splitter: Optional[SpecSplitter] = None,
    ):
        """
        Initialize the specification parser.

        Args:
            recognizers: Ordered recognizers (defaults to DEFAULT_RECOGNIZERS)
            method_normalizer: Method casing and defaults (created if None)
            vendor_keywords: Words that flag vendor-supplied data
            apply_default_methods: Fill comments from the default-method table
                when no method is stated
            method_prefix: Prefix for the method in comments
            splitter: Candidate splitter (created if None)
        """
        self.recognizers: Tuple[Recognizer, ...] = tuple(
            DEFAULT_RECOGNIZERS if recognizers is None else recognizers
        )
        self.method_normalizer = method_normalizer or MethodNormalizer()
        self.vendor_keywords = tuple(
            k.lower().strip() for k in (VENDOR_KEYWORDS if vendor_keywords is None else vendor_keywords)
            if k and k.strip()
        )
        self.apply_default_methods = apply_default_methods
        self.method_prefix = method_prefix
        self.splitter = splitter or SpecSplitter()

        self._vendor_pattern = None
        source_words = ['qc']
        if self.vendor_keywords:
            keywords = '|'.join(r'\s+'.join(map(re.escape, k.split())) for k in self.vendor_keywords)
            self._vendor_pattern = re.compile(rf'\b(?:{keywords})\b', flags=re.IGNORECASE)
            source_words.append(keywords)

        sources = '|'.join(source_words)
        self._source_tag_pattern = re.compile(
            rf'\s*[(\[]\s*(?:{sources})(?:\s+data)?\s*[)\]]'
            rf'|\s+(?:per|from)\s+(?:{sources})\b',
            flags=re.IGNORECASE,
        )

    def parse_batch(self, text: str) -> BatchResult:
        """
        Parse normalized text into a batch of attributes and errors.

        Args:
            text: Text already passed through the operator normalizer

        Returns:
            BatchResult with results and errors in candidate order.
            Empty or separator-only input yields an empty batch.
        """
        candidates = self.splitter.split(text)
        outcomes = tuple(self.parse_candidate(c) for c in candidates)

        batch = BatchResult(
            results=tuple(o for o in outcomes if isinstance(o, ParsedAttribute)),
            errors=tuple(o for o in outcomes if isinstance(o, ParseError)),
        )

        if candidates:
            logger.debug(
                f"Parsed {batch.total_specs} specs: "
                f"{batch.success_count} recognized, {batch.error_count} errors"
            )

        return batch

    def parse_candidate(self, candidate: SpecCandidate) -> Union[ParsedAttribute, ParseError]:
        """
        Parse a single candidate.

        Args:
            candidate: Candidate produced by the splitter

        Returns:
            ParsedAttribute on success, ParseError otherwise
        """
        text = candidate.original_text
        data_source = self.detect_data_source(text)

        # Runs of whitespace collapse to one space before any pattern runs
        body = self._source_tag_pattern.sub('', ' '.join(text.split())).strip()

        recognized = self._recognize(body) if body else None
        if recognized is None:
            reason = self._classify_failure(body)
            logger.debug(f"Spec #{candidate.index} not recognized ({reason.value}): '{text}'")
            return ParseError(
                spec_number=candidate.index,
                original_text=text,
                error=reason.value,
            )

        form, extraction, method = recognized
        attribute = title_case(extraction.attribute)

        comments = ''
        if method:
            comments = self.method_prefix + self.method_normalizer.normalize_method(method)
        elif self.apply_default_methods:
            default = self.method_normalizer.default_method(attribute)
            if default:
                comments = self.method_prefix + default

        return ParsedAttribute(
            test_attribute=attribute,
            data_source=data_source,
            value_range=extraction.value_range,
            comments=comments,
            original_text=text,
            spec_number=candidate.index,
            form=form,
        )

    def parse_spec(self, text: str) -> Optional[ParsedAttribute]:
        """
        Parse one specification line in isolation.

        Args:
            text: A single normalized specification

        Returns:
            ParsedAttribute, or None when empty or unrecognized
        """
        if not text or not isinstance(text, str) or not text.strip():
            return None

        outcome = self.parse_candidate(SpecCandidate(
            original_text=text.strip(),
            index=1,
            start=0,
            end=len(text.strip()),
        ))
        return outcome if isinstance(outcome, ParsedAttribute) else None

    def detect_data_source(self, text: str) -> DataSource:
        """Vendor when a vendor keyword appears anywhere in the text, else QC."""
        if self._vendor_pattern is not None and self._vendor_pattern.search(text):
            return DataSource.VENDOR
        return DataSource.QC

    def _recognize(self, body: str) -> Optional[Tuple[str, Extraction, Optional[str]]]:
        """
        Run the recognizers, first with the method clause split off.

        If the split body matches nothing, the unsplit text is tried so
        attributes such as "purity by area ≥99%" still parse.
        """
        split_body, method = self._split_method(body)

        attempts = [(split_body, method)]
        if method is not None:
            attempts.append((body, None))

        for candidate_body, candidate_method in attempts:
            for recognizer in self.recognizers:
                extraction = recognizer.try_match(candidate_body)
                if extraction is not None and extraction.attribute and extraction.value_range:
                    return recognizer.name, extraction, candidate_method

        return None

    def _split_method(self, body: str) -> Tuple[str, Optional[str]]:
        """Split "value by METHOD" or "value (METHOD)" into body and method."""
        match = _METHOD_CLAUSE.match(body)
        if match:
            return match.group('body').strip(), match.group('method').strip()

        match = _METHOD_PARENS.match(body)
        if match and self.method_normalizer.is_known_method(match.group('method')):
            return match.group('body').strip(), match.group('method').strip()

        return body, None

    @staticmethod
    def _classify_failure(body: str) -> ParseFailure:
        """A candidate that starts with a value is missing its name."""
        if body and _VALUE_FIRST.match(body):
            return ParseFailure.NO_ATTRIBUTE
        return ParseFailure.NO_VALUE


def validate_attribute(parsed: ParsedAttribute) -> List[str]:
    """
    Validate a parsed attribute before it is committed.

    Args:
        parsed: Attribute, possibly edited by the user in the preview

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if not parsed.test_attribute or not parsed.test_attribute.strip():
        errors.append("Test/Attribute is required")

    if not parsed.value_range or not parsed.value_range.strip():
        errors.append("Value/Range is required")

    return errors


# Module-level singleton for convenience functions
_parser_instance = None


def _get_parser() -> SpecificationParser:
    """Get or create the module-level SpecificationParser singleton."""
    global _parser_instance
    if _parser_instance is None:
        _parser_instance = SpecificationParser()
    return _parser_instance


def parse_batch(text: str) -> BatchResult:
    """
    Convenience function for batch parsing.

    Callers are expected to pass text already run through normalize();
    see parse_spec_text() for the composed pipeline.

    Args:
        text: Normalized specification text

    Returns:
        BatchResult
    """
    return _get_parser().parse_batch(text)


def parse_spec_text(raw_text: str) -> BatchResult:
    """
    Normalize operators and parse in one call.

    Equivalent to parse_batch(normalize(raw_text)).
    """
    return parse_batch(normalize(raw_text))
