"""Error definitions for TOOLCHEST."""

# ============================================================================
#                           General errors
# ============================================================================


class ToolchestError(Exception):
    """Base class for all TOOLCHEST errors."""


class InvalidArgumentError(ToolchestError, ValueError):
    """Raised when a combinator is configured with an out-of-range argument."""

    def __init__(self, name: str, value: object, requirement: str) -> None:
        super().__init__(f"Invalid {name}={value!r}: {requirement}.")
        self.name = name
        self.value = value
        self.requirement = requirement


# ============================================================================
#                   Circuit breaker errors
# ============================================================================


class CircuitBreakerError(ToolchestError):
    """Base class for errors surfaced by a circuit breaker."""


class CircuitOpenError(CircuitBreakerError):
    """Raised when the breaker is open and the operation was not attempted."""

    def __init__(self, open_until: float, remaining: float) -> None:
        super().__init__(f"Circuit is open; retry in {remaining:.3f}s.")
        self.open_until = open_until
        self.remaining = remaining


class CircuitOperationError(CircuitBreakerError):
    """Raised when the guarded operation itself failed.

    The original exception is kept on ``error`` and chained as ``__cause__``.
    """

    def __init__(self, error: BaseException) -> None:
        super().__init__(f"Guarded operation failed: {error!r}")
        self.error = error


# ============================================================================
#                   Debounce errors
# ============================================================================


class DebouncerStoppedError(ToolchestError):
    """Raised when calling a debounced handle after it has been stopped."""

    def __init__(self) -> None:
        super().__init__("Debounced handle has been stopped.")
