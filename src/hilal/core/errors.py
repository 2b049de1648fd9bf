class HilalError(Exception):
    """Base error."""

class InvalidArgumentError(HilalError, ValueError):
    """Raised at the API boundary for bad counts, coordinates or instants."""

class ProviderError(HilalError):
    """Raised when a sunset provider fails or returns malformed data."""

class NumericDegenerateError(HilalError, ArithmeticError):
    """Raised (strict mode only) when a new-moon bracket does not contain a phase crossing."""
