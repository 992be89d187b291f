"""Mock launcher for testing.

Records invocations instead of running the speech tool.
"""

from .errors import SayUnavailableError
from .process import DEFAULT_LAUNCH_PATH


class MockProcess:
    """Fake process that stays running until waited on or finished."""

    def __init__(self, arguments: list[str], returncode: int = 0) -> None:
        self.arguments = arguments
        self._returncode = returncode
        self._finished = False
        self._wait_count = 0

    def wait(self) -> int:
        """Finish the process and return its exit status."""
        self._wait_count += 1
        self._finished = True
        return self._returncode

    def poll(self) -> int | None:
        return self._returncode if self._finished else None

    def finish(self) -> None:
        """Simulate the process exiting on its own."""
        self._finished = True

    @property
    def waited(self) -> bool:
        """Return True if wait() was called."""
        return self._wait_count > 0

    @property
    def finished(self) -> bool:
        return self._finished


class MockLauncher:
    """Mock launcher for testing.

    Returns a canned voice listing from capture() and MockProcess handles
    from start().
    """

    def __init__(
        self,
        listing: str = "",
        launch_path: str = DEFAULT_LAUNCH_PATH,
        available: bool = True,
    ) -> None:
        """Initialize mock launcher.

        Args:
            listing: Output returned by capture()
            launch_path: Reported executable path
            available: If False, every launch raises SayUnavailableError
        """
        self._listing = listing
        self._launch_path = launch_path
        self._available = available
        self._captures: list[list[str]] = []
        self._processes: list[MockProcess] = []

    @property
    def launch_path(self) -> str:
        return self._launch_path

    @property
    def is_available(self) -> bool:
        return self._available

    def start(self, arguments: list[str]) -> MockProcess:
        self._check_available()
        process = MockProcess(list(arguments))
        self._processes.append(process)
        return process

    def capture(self, arguments: list[str]) -> str:
        self._check_available()
        self._captures.append(list(arguments))
        return self._listing

    def _check_available(self) -> None:
        if not self._available:
            raise SayUnavailableError(
                f"Cannot launch speech tool at {self._launch_path}",
                launch_path=self._launch_path,
            )

    @property
    def captures(self) -> list[list[str]]:
        """Get arguments of every capture() call."""
        return [list(c) for c in self._captures]

    @property
    def processes(self) -> list[MockProcess]:
        """Get every process started so far."""
        return self._processes.copy()

    @property
    def last_process(self) -> MockProcess | None:
        return self._processes[-1] if self._processes else None


__all__ = ["MockLauncher", "MockProcess"]
