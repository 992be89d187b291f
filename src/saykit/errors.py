"""Error types for the say wrapper.

Custom exceptions raised when the speech tool cannot be used.
"""


class SayError(Exception):
    """Base exception for say-related errors."""

    pass


class SayUnavailableError(SayError):
    """Raised when the speech tool is missing or cannot be launched."""

    def __init__(self, message: str, launch_path: str | None = None) -> None:
        """Initialize unavailable error.

        Args:
            message: Error message.
            launch_path: Path of the executable that failed to launch.
        """
        super().__init__(message)
        self.launch_path = launch_path


__all__ = [
    "SayError",
    "SayUnavailableError",
]
