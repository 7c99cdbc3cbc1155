class SalescastError(Exception):
    """Base class for every error raised by salescast."""


class InvalidInputError(SalescastError, ValueError):
    """Bad counts, empty sequences, malformed params or dates."""


class DegenerateMetricError(SalescastError, ArithmeticError):
    """A metric has a zero denominator for the given input (strict mode only)."""
