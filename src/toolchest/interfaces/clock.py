"""Interface for time sources."""

import abc


class Clock(abc.ABC):
    """Contract for a monotonic time source.

    Implementations report time as float seconds on an arbitrary but
    monotonic scale; only differences between readings are meaningful.
    """

    @abc.abstractmethod
    def now(self) -> float:
        """Return the current reading in seconds."""

    @abc.abstractmethod
    def sleep(self, seconds: float) -> None:
        """Block the calling thread for ``seconds``."""
