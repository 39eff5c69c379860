"""
Exception hierarchy for the Text Frequency Toolkit.
"""


class TextFrequencyError(Exception):
    """Base exception for library."""


class InvalidInputError(TextFrequencyError):
    """Malformed input table, record or resource."""


class DivisionByZeroError(TextFrequencyError):
    """Normalization requested for a group with no tokens."""


class DegenerateMatrixError(TextFrequencyError):
    """Matrix has insufficient rank for a projection."""
