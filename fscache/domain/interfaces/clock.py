"""Interface for the time source used to stamp and check expiry."""

import abc


class Clock(abc.ABC):
    """Supplies the current time in seconds."""

    @abc.abstractmethod
    def now(self) -> float:
        """Returns the current timestamp in seconds.

        Must be non-decreasing within a process run.
        """
        pass
