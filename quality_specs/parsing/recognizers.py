"""
Pattern recognizers for single quality specification candidates.

Each recognizer handles one phrasing and either extracts an
(attribute, value/range) pair or declines. The batch parser runs them in
DEFAULT_RECOGNIZERS order and takes the first match:

1. operator   "purity ≥99%"
2. range      "ph 6.5-7.5"
3. of         "purity of 99.8%"
4. is         "water content is ≤50 ppm"
5. colon      "appearance: white powder", "color - white"
6. conforms   "conforms to structure"

Method clauses ("by GC") are split off by the parser before recognition,
so every form carries a method through to the comments.
"""

import re
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional, Tuple

from ..normalization.vocabulary import CANONICAL_OPERATORS, CONFORMANCE_VERBS, CONNECTOR_WORDS

_OPERATORS = ''.join(CANONICAL_OPERATORS)
_NUMBER = r'[-+]?(?:\d+(?:[.,]\d+)?|[.,]\d+)'
_VERBS = r'conforms?\s+to|compl(?:y|ies)\s+with|confirms?|match(?:es)?'


class Extraction(NamedTuple):
    """Attribute and value pulled out of a candidate body."""
    attribute: Optional[str]
    value_range: str


@dataclass(frozen=True)
class Recognizer:
    """
    One phrasing of a quality specification.

    Attributes:
        name: Form name reported on ParsedAttribute.form
        pattern: Compiled, case-insensitive, anchored pattern
        extract: Builds an Extraction from a match, or None to decline
    """
    name: str
    pattern: re.Pattern
    extract: Callable[[re.Match], Optional[Extraction]]

    def try_match(self, text: str) -> Optional[Extraction]:
        """
        Attempt to recognize text in this form.

        Args:
            text: Candidate body with source tags and method clause removed

        Returns:
            Extraction, or None when the text is not in this form
        """
        match = self.pattern.match(text)
        if match is None:
            return None
        return self.extract(match)


def is_valid_attribute(attribute: Optional[str]) -> bool:
    """
    Check that text can serve as a test attribute name.

    Rejects names with no letters, names containing a colon or operator,
    names ending in a connector word ("water content is"), and names
    starting with a conformance verb.
    """
    if not attribute:
        return False

    attribute = attribute.strip()
    if not any(ch.isalpha() for ch in attribute):
        return False
    if any(ch in attribute for ch in ':：' + _OPERATORS):
        return False

    words = attribute.lower().split()
    if words[-1] in CONNECTOR_WORDS:
        return False
    if re.match(rf'(?:{_VERBS})\b', attribute, flags=re.IGNORECASE):
        return False

    return True


def _attribute_value(match: re.Match) -> Optional[Extraction]:
    """Shared extractor for forms with attribute and value groups."""
    attribute = match.group('attribute')
    value = match.group('value').strip()
    if not is_valid_attribute(attribute) or not value:
        return None
    return Extraction(attribute.strip(), value)


def _operator_value(match: re.Match) -> Optional[Extraction]:
    attribute = match.group('attribute')
    if not is_valid_attribute(attribute):
        return None
    return Extraction(attribute.strip(), match.group('operator') + match.group('value').strip())


def _range_value(match: re.Match) -> Optional[Extraction]:
    attribute = match.group('attribute')
    if not is_valid_attribute(attribute):
        return None
    return Extraction(attribute.strip(), match.group('range').strip())


def _conformance_value(match: re.Match) -> Optional[Extraction]:
    verb_phrase = ' '.join(match.group('verb').lower().split())
    descriptor = match.group('descriptor').strip()
    attribute = match.group('attribute')

    if attribute is None:
        # "conforms to structure" names the attribute itself
        if not any(ch.isalpha() for ch in descriptor):
            return None
        return Extraction(
            descriptor,
            CONFORMANCE_VERBS.get(verb_phrase, verb_phrase.split()[0].capitalize()),
        )

    if not is_valid_attribute(attribute):
        return None
    return Extraction(attribute.strip(), f"{verb_phrase.capitalize()} {descriptor}")


OPERATOR_FORM = Recognizer(
    name='operator',
    pattern=re.compile(
        rf'^(?P<attribute>[^{_OPERATORS}]+?)\s*(?P<operator>[{_OPERATORS}])\s*'
        rf'(?P<value>{_NUMBER}.*)$',
        flags=re.IGNORECASE | re.DOTALL,
    ),
    extract=_operator_value,
)

RANGE_FORM = Recognizer(
    name='range',
    pattern=re.compile(
        r'^(?P<attribute>.+?)\s+(?P<range>'
        rf'(?:between\s+{_NUMBER}\s+and\s+{_NUMBER}'
        rf'|{_NUMBER}\s*(?:-|–|—|to)\s*{_NUMBER})'
        r'(?:\s*\D.*)?)$',
        flags=re.IGNORECASE | re.DOTALL,
    ),
    extract=_range_value,
)

OF_FORM = Recognizer(
    name='of',
    pattern=re.compile(
        r'^(?P<attribute>.+?)\s+of\s+(?P<value>.+)$',
        flags=re.IGNORECASE | re.DOTALL,
    ),
    extract=_attribute_value,
)

IS_FORM = Recognizer(
    name='is',
    pattern=re.compile(
        r'^(?P<attribute>.+?)\s+(?:is|are|was|were|must\s+be|should\s+be)\s+(?P<value>.+)$',
        flags=re.IGNORECASE | re.DOTALL,
    ),
    extract=_attribute_value,
)

# "appearance: white" or "color - white"; a dash before a number is a range
COLON_FORM = Recognizer(
    name='colon',
    pattern=re.compile(
        r'^(?P<attribute>[^:：]+?)(?:\s*[:：]\s*|\s+-\s+(?![-+]?[.,]?\d))(?P<value>.+)$',
        flags=re.IGNORECASE | re.DOTALL,
    ),
    extract=_attribute_value,
)

CONFORMS_FORM = Recognizer(
    name='conforms',
    pattern=re.compile(
        rf'^(?:(?P<attribute>.+?)\s+)?(?P<verb>{_VERBS})\s+(?P<descriptor>.+)$',
        flags=re.IGNORECASE | re.DOTALL,
    ),
    extract=_conformance_value,
)

# Fixed priority order, first match wins
DEFAULT_RECOGNIZERS: Tuple[Recognizer, ...] = (
    OPERATOR_FORM,
    RANGE_FORM,
    OF_FORM,
    IS_FORM,
    COLON_FORM,
    CONFORMS_FORM,
)
