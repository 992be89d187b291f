"""Easy-to-use interface for the `say` command.

A SayRequest holds the text, an optional voice and an optional output file,
and launches a fresh `say` process each time it is played or written.
"""

import logging
import os
from enum import Enum

from .process import ProcessHandle, ProcessLauncher, SubprocessLauncher
from .voices import Voice, VoiceCatalogue, default_catalogue

logger = logging.getLogger(__name__)

# `say -o` writes AIFF unless told otherwise
DEFAULT_FILE_EXTENSION = ".aiff"


class RequestState(Enum):
    """Lifecycle of the most recent launch of a request.

    Launching happens synchronously inside play() and write_to_file(), so a
    request goes straight from IDLE to RUNNING once the launcher returns.
    """

    IDLE = "idle"
    RUNNING = "running"
    TERMINATED = "terminated"


class SayRequest:
    """Text to speak, with the voice and destination to speak it with.

    The request may be played or written any number of times; every call
    launches an independent process.
    """

    def __init__(
        self,
        text: str,
        voice: Voice | None = None,
        launcher: ProcessLauncher | None = None,
    ) -> None:
        """Initialize a request with given text and voice.

        Args:
            text: Text to speak
            voice: Voice to speak with. If None, the system default is used.
            launcher: Launcher for the speech tool (default: /usr/bin/say)
        """
        self.text = text
        self.voice = voice
        self.output_file: str | None = None
        self._launcher = launcher or SubprocessLauncher()
        self._process: ProcessHandle | None = None

    @classmethod
    def with_voice_name(
        cls,
        text: str,
        voice_name: str,
        catalogue: VoiceCatalogue | None = None,
        launcher: ProcessLauncher | None = None,
    ) -> tuple["SayRequest", bool]:
        """Create a request using the voice with the given name.

        Args:
            text: Text to speak
            voice_name: Exact, case-sensitive voice name
            catalogue: Catalogue to search. Defaults to a catalogue backed by
                `launcher` if given, otherwise the system catalogue.
            launcher: Launcher for the speech tool

        Returns:
            Tuple of (request, found). When no voice matches, the request
            uses the default voice and found is False.
        """
        if catalogue is None:
            if launcher is not None:
                catalogue = VoiceCatalogue(launcher)
            else:
                catalogue = default_catalogue()
        voice = catalogue.find(voice_name)
        if voice is None:
            logger.warning(f"Voice '{voice_name}' not found, using default voice")
        return cls(text, voice, launcher=launcher), voice is not None

    def __repr__(self) -> str:
        return f"<SayRequest: '{self.text}'>"

    @property
    def process(self) -> ProcessHandle | None:
        """Handle of the most recently launched process."""
        return self._process

    @property
    def state(self) -> RequestState:
        if self._process is None:
            return RequestState.IDLE
        if self._process.poll() is None:
            return RequestState.RUNNING
        return RequestState.TERMINATED

    def compose_arguments(self) -> list[str]:
        """Build the `say` arguments: voice, then output file, then text."""
        arguments = []
        if self.voice is not None:
            arguments += ["-v", self.voice.name]
        if self.output_file is not None:
            arguments += ["-o", self.output_file]
        arguments.append(self.text)
        return arguments

    def play(self, wait_until_done: bool = True) -> None:
        """Speak the text aloud.

        Args:
            wait_until_done: Block until the process exits if True

        Raises:
            SayUnavailableError: If the speech tool cannot be launched
        """
        self.output_file = None
        self._launch()
        if wait_until_done:
            self.wait()

    def write_to_file(self, path: str | os.PathLike, atomically: bool = False) -> None:
        """Render the speech into an audio file without waiting.

        The file format is AIFF. `atomically` is accepted for symmetry with
        other writers and has no effect.

        Args:
            path: Destination file path
            atomically: Ignored

        Raises:
            SayUnavailableError: If the speech tool cannot be launched
        """
        self.output_file = os.fspath(path)
        self._launch()

    def wait(self) -> int | None:
        """Wait for the last launched process.

        Returns:
            Exit status, or None if nothing was launched
        """
        if self._process is None:
            return None
        return self._process.wait()

    def _launch(self) -> None:
        arguments = self.compose_arguments()
        logger.debug(f"Launching say with {arguments}")
        self._process = self._launcher.start(arguments)


__all__ = [
    "DEFAULT_FILE_EXTENSION",
    "RequestState",
    "SayRequest",
]
