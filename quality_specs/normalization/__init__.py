"""
Operator and vocabulary normalization for quality specifications.

This package canonicalizes comparison operators before parsing and
renders attribute and method names in their display form.
"""

from .operator_normalizer import OperatorNormalizer, normalize, NORMALIZATION_VERSION
from .method_normalizer import (
    MethodNormalizer,
    title_case,
    normalize_test_method,
    default_test_method,
    suggest_test_methods,
)

__all__ = [
    'OperatorNormalizer',
    'normalize',
    'NORMALIZATION_VERSION',
    'MethodNormalizer',
    'title_case',
    'normalize_test_method',
    'default_test_method',
    'suggest_test_methods',
]
