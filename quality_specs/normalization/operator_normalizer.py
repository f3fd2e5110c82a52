"""
Operator normalization module for quality specifications.

Rewrites the many ways analysts write comparisons ("at least 99%",
"NMT 0.5%", ">= 98", "max. 10 ppm") into one canonical vocabulary
(≥, ≤, >, <) so the batch parser only has to recognize symbols.
"""

import re
from typing import Dict, Mapping, Optional

from loguru import logger

from .vocabulary import CANONICAL_OPERATORS, OPERATOR_PHRASES, SYMBOL_OPERATORS

# Versioned normalization, increment when rewrite rules change
NORMALIZATION_VERSION = 2

# A number, optionally signed, possibly starting with a decimal point
_NUMBER_AHEAD = r'(?=[-+]?[.,]?\d)'


class OperatorNormalizer:
    """
    Canonicalizes comparison operators in free-text specifications.

    Handles:
    - Word forms ("greater than or equal to", "at least", "not more than")
    - Abbreviations ("min.", "max", "NLT", "NMT"), also glued to the number ("NMT5%")
    - ASCII digraphs (>=, <=, =>, =<)
    - Spacing between a canonical operator and its value

    Word forms are only rewritten when a numeric value follows, so prose
    such as "stored under nitrogen" is left untouched. Bare ranges like
    "6.5-7.5" are never rewritten.
    """

    def __init__(
        self,
        phrases: Optional[Mapping[str, str]] = None,
        tighten_spacing: bool = True,
    ):
        """
        Initialize the operator normalizer.

        Args:
            phrases: Phrase -> canonical operator table (defaults to OPERATOR_PHRASES)
            tighten_spacing: Remove whitespace between an operator and its number
        """
        table: Dict[str, str] = dict(OPERATOR_PHRASES if phrases is None else phrases)
        for phrase, operator in table.items():
            if operator not in CANONICAL_OPERATORS:
                raise ValueError(
                    f"Phrase '{phrase}' maps to non-canonical operator '{operator}'"
                )

        self.phrases = {' '.join(phrase.lower().split()): op for phrase, op in table.items()}
        self.tighten_spacing = tighten_spacing

        self._phrase_pattern = self._compile_phrases(self.phrases)
        self._symbol_pattern = re.compile(
            '|'.join(re.escape(s) for s in sorted(SYMBOL_OPERATORS, key=len, reverse=True))
        )
        self._spacing_pattern = re.compile(
            '([' + ''.join(CANONICAL_OPERATORS) + r'])[ \t]+' + _NUMBER_AHEAD
        )

    @staticmethod
    def _compile_phrases(phrases: Mapping[str, str]) -> Optional[re.Pattern]:
        """Build one alternation, longest phrase first, anchored on word boundaries."""
        if not phrases:
            return None

        alternatives = []
        for phrase in sorted(phrases, key=len, reverse=True):
            body = r'[ \t]+'.join(re.escape(word) for word in phrase.split())
            if phrase[-1].isalnum():
                # "NMT5%" has no word boundary before the digit
                body += r'(?:\b|(?=\d))'
            alternatives.append(body)

        return re.compile(
            r'(?<![\w.])(' + '|'.join(alternatives) + r')[ \t]*' + _NUMBER_AHEAD,
            flags=re.IGNORECASE,
        )

    def normalize(self, text: str) -> str:
        """
        Apply operator canonicalization to specification text.

        Pipeline order:
        1. Word and abbreviation forms -> canonical symbol
        2. ASCII digraphs -> canonical symbol
        3. Tighten "≥ 99" to "≥99"

        Args:
            text: Raw specification text

        Returns:
            Text with canonical operators; unrelated content is unchanged

        Examples:
            >>> normalizer = OperatorNormalizer()
            >>> normalizer.normalize("water content is at most 50 ppm")
            'water content is ≤50 ppm'
            >>> normalizer.normalize("purity >= 99%")
            'purity ≥99%'
            >>> normalizer.normalize("ph 6.5-7.5")
            'ph 6.5-7.5'
        """
        if not text or not isinstance(text, str):
            return ''

        result = text

        # Step 1: word forms
        if self._phrase_pattern is not None:
            result = self._phrase_pattern.sub(self._replace_phrase, result)

        # Step 2: symbol digraphs
        result = self._symbol_pattern.sub(
            lambda m: SYMBOL_OPERATORS[m.group(0)], result
        )

        # Step 3: operator spacing
        if self.tighten_spacing:
            result = self._spacing_pattern.sub(r'\1', result)

        if result != text:
            logger.debug(f"Normalized operators: '{text[:60]}' -> '{result[:60]}'")

        return result

    def _replace_phrase(self, match: re.Match) -> str:
        """Look up the canonical operator for a matched phrase."""
        phrase = ' '.join(match.group(1).lower().split())
        # Case-insensitive regex matching is looser than str.lower(), e.g. "ſ" ~ "s"
        return self.phrases.get(phrase, match.group(0))


# Module-level singleton for convenience function
_normalizer_instance = None


def _get_normalizer() -> OperatorNormalizer:
    """Get or create the module-level OperatorNormalizer singleton."""
    global _normalizer_instance
    if _normalizer_instance is None:
        _normalizer_instance = OperatorNormalizer()
    return _normalizer_instance


def normalize(text: str) -> str:
    """
    Convenience function for operator normalization.

    Uses a module-level OperatorNormalizer singleton built from the
    default vocabulary. Never raises; non-string input yields ''.

    Args:
        text: Raw specification text

    Returns:
        Normalized text
    """
    return _get_normalizer().normalize(text)
