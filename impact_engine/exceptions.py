"""
Custom exceptions for the impact engine.

Invalid inputs are rejected before any calculation starts, so a caller either
gets a complete result or one of the errors below, never a partial report.
"""


class ImpactEngineError(Exception):
    """
    Base exception for impact engine failures.

    Attributes:
        message: Human-readable error description
        details: Additional context about the failure
    """

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class InvalidParameter(ImpactEngineError, ValueError):
    """
    An impact parameter is outside its physical domain.

    Raised for a non-positive diameter, velocity or density, an angle outside
    [0, 90] degrees, coordinates off the globe, non-finite numbers and negative
    population densities.

    Attributes:
        field: Name of the offending input field
        value: The rejected value
    """

    def __init__(self, field, value, reason):
        message = f"Invalid value for '{field}': {reason}"
        super().__init__(message, {"field": field, "value": value})
        self.field = field
        self.value = value


class DegenerateGeometry(UserWarning):
    """
    Warning category for inputs that are valid but collapse a result to zero.

    A perfectly grazing impact (angle = 0) gives sin(0)^0.44 = 0 effective
    crater energy, so the crater diameter comes out as 0 even though the
    impactor carries real kinetic energy.
    """
