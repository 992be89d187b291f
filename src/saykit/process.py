"""Process launching for the `say` command.

Splits invocation into a non-blocking start and an optional wait so the
request layer never touches `subprocess` directly.
"""

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from .errors import SayUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_LAUNCH_PATH = "/usr/bin/say"


class ProcessHandle(Protocol):
    """Handle to a launched speech process."""

    def wait(self) -> int:
        """Block until the process exits and return its exit status."""
        ...

    def poll(self) -> int | None:
        """Return the exit status, or None while the process is running."""
        ...


class ProcessLauncher(Protocol):
    """Interface for launching the speech tool.

    Implementations start the tool with a list of arguments, either in the
    background or with its standard output captured.
    """

    @property
    def launch_path(self) -> str:
        """Path of the executable being launched."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if the executable can be launched."""
        ...

    def start(self, arguments: list[str]) -> ProcessHandle:
        """Start the tool and return immediately.

        Args:
            arguments: Command-line arguments, without the executable

        Returns:
            Handle of the running process

        Raises:
            SayUnavailableError: If the tool cannot be launched
        """
        ...

    def capture(self, arguments: list[str]) -> str:
        """Run the tool to completion and return its standard output.

        Raises:
            SayUnavailableError: If the tool cannot be launched
        """
        ...


class SubprocessLauncher:
    """Launches the speech tool as an OS subprocess."""

    def __init__(self, launch_path: str = DEFAULT_LAUNCH_PATH) -> None:
        """Initialize launcher.

        Args:
            launch_path: Absolute path of the speech executable
        """
        self._launch_path = launch_path

    @property
    def launch_path(self) -> str:
        return self._launch_path

    @property
    def is_available(self) -> bool:
        """Check if the executable exists at the launch path."""
        return Path(self._launch_path).is_file()

    def start(self, arguments: list[str]) -> subprocess.Popen:
        cmd = [self._launch_path, *arguments]
        logger.debug(f"Starting {cmd}")
        try:
            return subprocess.Popen(cmd)
        except OSError as e:
            raise self._unavailable(e) from e

    def capture(self, arguments: list[str]) -> str:
        cmd = [self._launch_path, *arguments]
        logger.debug(f"Running {cmd}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise self._unavailable(e) from e
        return result.stdout

    def _unavailable(self, error: OSError) -> SayUnavailableError:
        return SayUnavailableError(
            f"Cannot launch speech tool at {self._launch_path}: {error}",
            launch_path=self._launch_path,
        )


__all__ = [
    "DEFAULT_LAUNCH_PATH",
    "ProcessHandle",
    "ProcessLauncher",
    "SubprocessLauncher",
]
