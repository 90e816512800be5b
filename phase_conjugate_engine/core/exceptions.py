"""
Custom exceptions for the Phase Conjugate Engine.

All exceptions inherit from PhaseEngineError to enable unified error handling
across the application. Unknown pair ids and below-threshold transfers are
not errors: they are reported through None and ``success=False`` results.
"""


class PhaseEngineError(Exception):
    """Base exception for all Phase Conjugate Engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(PhaseEngineError):
    """Raised when configuration loading or validation fails.

    Examples:
        - Missing configuration file
        - Invalid YAML syntax
        - Invalid configuration values
    """

    pass


class InvalidScalarError(PhaseEngineError):
    """Raised when a phi/lambda scalar is not strictly positive and finite.

    Conjugation divides by both scalars and scalar synchronisation takes a
    square root of their ratio to the invariant target, so neither is
    defined for zero, negative or non-finite values.

    Attributes:
        scalar_name: Which scalar was rejected ("phi" or "lambda").
        value: The rejected value.
    """

    def __init__(
        self,
        message: str,
        scalar_name: str,
        value: float,
        details: dict | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            scalar_name: Name of the rejected scalar.
            value: The rejected value.
            details: Optional dictionary with additional error context.
        """
        self.scalar_name = scalar_name
        self.value = value
        super().__init__(message, details)

    def __str__(self) -> str:
        """Return string representation of the exception."""
        base = f"[{self.scalar_name}={self.value!r}] {self.message}"
        if self.details:
            return f"{base} | Details: {self.details}"
        return base
