"""
Attribute and method casing for parsed quality specifications.

Test attribute names are rendered in Title Case; analytical method names
are looked up in the method vocabulary so "1hnmr" and "icp-ms" come out
as "1H NMR" and "ICP-MS".
"""

import re
from typing import Dict, List, Mapping, Optional

from .vocabulary import DEFAULT_METHODS, METHOD_CASING, METHOD_SUGGESTIONS

# Short letter/hyphen tokens are treated as acronyms
_ACRONYM_PATTERN = re.compile(r'^[A-Za-z-]{1,6}$')


def title_case(text: str) -> str:
    """
    Render an attribute name in Title Case.

    Each space-separated word gets its first letter upper-cased and
    everything else lower-cased, independent of locale. Leading digits and
    punctuation are skipped when looking for the first letter.

    Examples:
        >>> title_case("water content")
        'Water Content'
        >>> title_case("ph")
        'Ph'
        >>> title_case("1,4-dioxane")
        '1,4-Dioxane'
    """
    if not text or not isinstance(text, str):
        return ''

    return ' '.join(_capitalize_word(word) for word in text.split())


def _capitalize_word(word: str) -> str:
    lowered = word.lower()
    for i, ch in enumerate(lowered):
        if ch.isalpha():
            return lowered[:i] + ch.upper() + lowered[i + 1:]
    return lowered


class MethodNormalizer:
    """
    Normalizes analytical method names and resolves default methods.

    Tables are copied at construction so that per-instance extensions
    from configuration never leak into the module-level vocabulary.
    """

    def __init__(
        self,
        method_casing: Optional[Mapping[str, str]] = None,
        default_methods: Optional[Mapping[str, str]] = None,
        suggestions: Optional[Mapping[str, List[str]]] = None,
    ):
        """
        Initialize the method normalizer.

        Args:
            method_casing: Extra lowercase method -> display name entries
            default_methods: Extra lowercase attribute -> default method entries
            suggestions: Extra attribute keyword -> suggested methods entries
        """
        self.method_casing: Dict[str, str] = dict(METHOD_CASING)
        self.default_methods: Dict[str, str] = dict(DEFAULT_METHODS)
        self.suggestions: Dict[str, List[str]] = {
            key: list(methods) for key, methods in METHOD_SUGGESTIONS.items()
        }

        if method_casing:
            self.method_casing.update({k.lower().strip(): v for k, v in method_casing.items()})
        if default_methods:
            self.default_methods.update({k.lower().strip(): v for k, v in default_methods.items()})
        if suggestions:
            self.suggestions.update({k.lower().strip(): list(v) for k, v in suggestions.items()})

    def normalize_method(self, method: str) -> str:
        """
        Normalize the capitalization of a method name.

        Lookup order:
        1. Exact vocabulary match (case-insensitive, whitespace collapsed)
        2. Short letter/hyphen token -> upper case acronym
        3. Otherwise returned as written

        Args:
            method: Method text as typed by the user

        Returns:
            Display form of the method

        Examples:
            >>> MethodNormalizer().normalize_method("1hnmr")
            '1H NMR'
            >>> MethodNormalizer().normalize_method("kfr")
            'KFR'
        """
        if not method or not isinstance(method, str):
            return ''

        cleaned = ' '.join(method.split())
        known = self.method_casing.get(cleaned.lower())
        if known:
            return known

        if _ACRONYM_PATTERN.match(cleaned):
            return cleaned.upper()

        return cleaned

    def is_known_method(self, method: str) -> bool:
        """Check if a method name is in the vocabulary."""
        if not method or not isinstance(method, str):
            return False
        return ' '.join(method.lower().split()) in self.method_casing

    def default_method(self, attribute: str) -> str:
        """
        Get the most common method for a test attribute.

        Tries an exact match first, then the first table entry whose key
        contains or is contained in the attribute.

        Args:
            attribute: Test attribute name (any casing)

        Returns:
            Default method name, or '' when nothing is known
        """
        if not attribute or not isinstance(attribute, str):
            return ''

        lowered = ' '.join(attribute.lower().split())
        if lowered in self.default_methods:
            return self.default_methods[lowered]

        for key, method in self.default_methods.items():
            if key in lowered or lowered in key:
                return method

        return ''

    def suggest_methods(self, attribute: str) -> List[str]:
        """Suggested methods for an attribute, by keyword containment."""
        if not attribute or not isinstance(attribute, str):
            return []

        lowered = attribute.lower()
        for key, methods in self.suggestions.items():
            if key in lowered:
                return list(methods)

        return []


# Module-level singleton for convenience functions
_method_normalizer_instance = None


def _get_method_normalizer() -> MethodNormalizer:
    """Get or create the module-level MethodNormalizer singleton."""
    global _method_normalizer_instance
    if _method_normalizer_instance is None:
        _method_normalizer_instance = MethodNormalizer()
    return _method_normalizer_instance


def normalize_test_method(method: str) -> str:
    """Normalize a method name with the default vocabulary."""
    return _get_method_normalizer().normalize_method(method)


def default_test_method(attribute: str) -> str:
    """Default method for an attribute with the default vocabulary."""
    return _get_method_normalizer().default_method(attribute)


def suggest_test_methods(attribute: str) -> List[str]:
    """Suggested methods for an attribute with the default vocabulary."""
    return _get_method_normalizer().suggest_methods(attribute)
