"""
Exceptions for climate trend analysis.
"""


class ClimateAnalysisError(Exception):
    """Base exception for climate analysis errors."""

    pass


class DataQualityError(ClimateAnalysisError):
    """Structural defect in the daily input (missing columns, duplicate dates)."""

    pass


class InsufficientDataError(ClimateAnalysisError):
    """Too few yearly points for a trend computation."""

    pass


class DegenerateInputError(ClimateAnalysisError):
    """All values identical; slope and tau are undefined."""

    pass
