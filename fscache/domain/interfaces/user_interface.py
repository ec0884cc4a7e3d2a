"""Interface for reporting to the user.

Defines the contract for displaying values, information, warnings and
errors, allowing different UI implementations (e.g., console, tests).
"""

import abc
from typing import Any

from fscache.domain.models.cache import ClearReport


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_output(self, output: str, **kwargs: Any) -> None:
        """Displays standard output (e.g. a cached value) to the user.

        Args:
            output: The text to display.
            **kwargs: Additional arguments for formatting (e.g., title).
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user.

        Args:
            error_message: The error message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user.

        Args:
            warning_message: The warning message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user.

        Args:
            info_message: The informational message string.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_clear_report(self, report: ClearReport) -> None:
        """Displays the outcome of a whole-cache clear.

        Args:
            report: The report returned by CacheService.clear().
        """
        pass
