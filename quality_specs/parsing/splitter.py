"""
Splits normalized specification text into candidates.

Separators, in priority order: line breaks, then within a line the comma,
semicolon, pipe and the standalone word "and". A separator is ignored when:
- it is a comma with a digit on both sides ("99,5%", "1,4-dioxane")
- it is "and" between two numbers ("between 6.5 and 7.5")
- it sits inside a parenthesis or bracket pair closed on the same line
  ("(by GC, area)"); an unclosed bracket protects nothing
"""

import re
from typing import List, Set, Tuple

from .types import SpecCandidate

_TOKEN_PATTERN = re.compile(
    r'(?P<newline>\r\n|\r|\n)'
    r'|(?P<open>[(\[])'
    r'|(?P<close>[)\]])'
    r'|(?P<sep>[,;|])'
    r'|(?<!\S)(?P<and>and)(?!\S)',
    flags=re.IGNORECASE,
)


class SpecSplitter:
    """
    Segments normalized text into SpecCandidates.

    Candidates are trimmed, empty segments are dropped, and the remaining
    ones are numbered from 1 across the whole input (not per line).
    """

    def split(self, text: str) -> List[SpecCandidate]:
        """
        Split text into candidates.

        Args:
            text: Normalized specification text

        Returns:
            Candidates in order of appearance

        Examples:
            >>> [c.original_text for c in SpecSplitter().split("ph 6.5-7.5, purity ≥99,5%")]
            ['ph 6.5-7.5', 'purity ≥99,5%']
        """
        if not text or not isinstance(text, str):
            return []

        candidates = []
        for start, end in self._segment_spans(text):
            segment = text[start:end]
            stripped = segment.strip()
            if not stripped:
                continue

            offset = start + (len(segment) - len(segment.lstrip()))
            candidates.append(SpecCandidate(
                original_text=stripped,
                index=len(candidates) + 1,
                start=offset,
                end=offset + len(stripped),
            ))

        return candidates

    def _segment_spans(self, text: str) -> List[Tuple[int, int]]:
        """Return (start, end) spans of the text between real separators."""
        tokens = list(_TOKEN_PATTERN.finditer(text))
        paired = self._paired_opens(tokens)

        spans = []
        segment_start = 0
        depth = 0

        for match in tokens:
            kind = match.lastgroup

            if kind == 'newline':
                depth = 0
            elif kind == 'open':
                if match.start() in paired:
                    depth += 1
                continue
            elif kind == 'close':
                depth = max(depth - 1, 0)
                continue
            elif depth > 0:
                continue
            elif kind == 'sep' and not self._is_separator_comma(text, match):
                continue
            elif kind == 'and' and self._is_numeric_and(text, match):
                continue

            spans.append((segment_start, match.start()))
            segment_start = match.end()

        spans.append((segment_start, len(text)))
        return spans

    @staticmethod
    def _paired_opens(tokens: List[re.Match]) -> Set[int]:
        """
        Positions of opening brackets closed later on the same line.

        An unclosed "(" protects nothing.
        """
        paired = set()
        stack = []
        for match in tokens:
            kind = match.lastgroup
            if kind == 'newline':
                stack = []
            elif kind == 'open':
                stack.append(match.start())
            elif kind == 'close' and stack:
                paired.add(stack.pop())
        return paired

    @staticmethod
    def _is_separator_comma(text: str, match: re.Match) -> bool:
        """A comma between two digits is a decimal comma or locant, not a separator."""
        if match.group() != ',':
            return True

        before = text[match.start() - 1] if match.start() > 0 else ''
        after = text[match.end()] if match.end() < len(text) else ''
        return not (before.isdigit() and after.isdigit())

    @staticmethod
    def _is_numeric_and(text: str, match: re.Match) -> bool:
        """Check if "and" joins two numbers, as in "between 6.5 and 7.5"."""
        i = match.start() - 1
        while i >= 0 and text[i].isspace():
            i -= 1
        j = match.end()
        while j < len(text) and text[j].isspace():
            j += 1
        return i >= 0 and j < len(text) and text[i].isdigit() and text[j].isdigit()


# Module-level singleton for convenience function
_splitter_instance = None


def split_candidates(text: str) -> List[SpecCandidate]:
    """
    Convenience function for candidate splitting.

    Args:
        text: Normalized specification text

    Returns:
        Candidates in order of appearance
    """
    global _splitter_instance
    if _splitter_instance is None:
        _splitter_instance = SpecSplitter()
    return _splitter_instance.split(text)
