"""Interface for interacting with the user (input/output).

Defines the contract for displaying cache contents, results, errors and
getting input from the user, allowing different UI implementations.
"""

import abc
from typing import Any, List, Sequence

# Import relevant domain models
from tiercache.domain.models.common import LevelSnapshot


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_output(self, output: str, **kwargs: Any) -> None:
        """Displays standard output to the user.

        Args:
            output: The string to display.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user."""
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass

    @abc.abstractmethod
    def display_levels(self, levels: Sequence[LevelSnapshot], **kwargs: Any) -> None:
        """Displays every cache level, labelled L1, L2, ... with its contents.

        Args:
            levels: Snapshots ordered fastest first.
            **kwargs: Additional arguments for formatting.
        """
        pass

    @abc.abstractmethod
    def get_prompt(self, prompt_message: str = "> ") -> str:
        """Gets a line of input from the user.

        Args:
            prompt_message: The message to display before the input cursor.

        Returns:
            The user's input.
        """
        pass

    def display_stats(self, levels: Sequence[LevelSnapshot], **kwargs: Any) -> None:
        """Displays hit/miss/eviction counters per level."""
        pass

    def display_session_header(self, level_labels: List[str]) -> None:
        """Displays a header for a new interactive shell session."""
        pass
