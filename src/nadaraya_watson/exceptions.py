"""
Exceptions raised for invalid regression inputs.

All errors are raised before any numeric work starts. Both concrete
errors subclass ``ValueError`` so callers that already catch the usual
scikit-learn input errors keep working.
"""


class NadarayaWatsonError(Exception):
    """Base class for errors raised by this package."""


class DimensionMismatch(NadarayaWatsonError, ValueError):
    """Predictor and response arrays have different lengths."""


class InvalidParameter(NadarayaWatsonError, ValueError):
    """A scalar parameter or the evaluation set is out of its valid range."""
