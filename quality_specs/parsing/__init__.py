"""
Quality specification batch parsing package.

Splits normalized text into candidates and recognizes each one with an
ordered set of pattern recognizers:
- operator form  ("purity ≥99% by gc")
- range form     ("ph 6.5-7.5")
- "of" form      ("purity of 99.8%")
- "is" form      ("appearance is clear")
- colon form     ("appearance: white powder")
- conforms form  ("conforms to structure by 1hnmr")
"""

import logging
from typing import Optional, Tuple

from quality_specs.normalization.method_normalizer import MethodNormalizer
from quality_specs.normalization.operator_normalizer import OperatorNormalizer
from quality_specs.normalization.vocabulary import OPERATOR_PHRASES
from quality_specs.parsing.batch_parser import (
    SpecificationParser,
    parse_batch,
    parse_spec_text,
    validate_attribute,
)
from quality_specs.parsing.recognizers import DEFAULT_RECOGNIZERS, Recognizer
from quality_specs.parsing.splitter import SpecSplitter, split_candidates
from quality_specs.parsing.types import (
    BatchResult,
    DataSource,
    ParsedAttribute,
    ParseError,
    ParseFailure,
    SpecCandidate,
)
from quality_specs.utils.config_manager import ConfigManager

_logger = logging.getLogger(__name__)


def build_parser(
    config: Optional[ConfigManager] = None,
) -> Tuple[OperatorNormalizer, SpecificationParser]:
    """
    Build a normalizer and parser wired from configuration.

    Extra operator phrases, method casing and default methods from the
    config are layered over the built-in vocabulary.

    Args:
        config: ConfigManager (defaults are used if None).

    Returns:
        (OperatorNormalizer, SpecificationParser) pair; compose as
        parser.parse_batch(normalizer.normalize(raw_text)).

    Raises:
        ValueError: If the configuration fails validation.
    """
    config = config or ConfigManager()

    errors = config.validate_config()
    if errors:
        raise ValueError("Invalid parser configuration: " + "; ".join(errors))

    normalization = config.config['normalization']
    parsing = config.config['parsing']
    vocabulary = config.config['vocabulary']

    phrases = dict(OPERATOR_PHRASES)
    phrases.update(normalization.get('operator_phrases') or {})

    normalizer = OperatorNormalizer(
        phrases=phrases,
        tighten_spacing=normalization.get('tighten_operator_spacing', True),
    )

    method_normalizer = MethodNormalizer(
        method_casing=vocabulary.get('method_casing') or {},
        default_methods=vocabulary.get('default_methods') or {},
    )

    parser = SpecificationParser(
        method_normalizer=method_normalizer,
        vendor_keywords=parsing.get('vendor_keywords'),
        apply_default_methods=parsing.get('apply_default_methods', False),
        method_prefix=parsing.get('method_prefix', 'Method: '),
    )

    _logger.info(
        "Parser built: %d operator phrases, %d methods, default methods %s",
        len(normalizer.phrases),
        len(method_normalizer.method_casing),
        "on" if parser.apply_default_methods else "off",
    )

    return normalizer, parser


__all__ = [
    "BatchResult",
    "DataSource",
    "ParsedAttribute",
    "ParseError",
    "ParseFailure",
    "SpecCandidate",
    "Recognizer",
    "DEFAULT_RECOGNIZERS",
    "SpecSplitter",
    "SpecificationParser",
    "split_candidates",
    "parse_batch",
    "parse_spec_text",
    "validate_attribute",
    "build_parser",
]
