"""Voice discovery for the `say` command.

Runs `say --voice=?` once and parses its listing into Voice records.
Each listing line has the form::

    <name><4+ spaces><locale><1+ spaces># <comment>

where the locale is 2-3 lowercase letters, an underscore and 2+ uppercase
letters (e.g. ``en_US``). Lines in any other shape are skipped.
"""

import logging
import re
import threading
from dataclasses import dataclass

from .process import ProcessLauncher, SubprocessLauncher

logger = logging.getLogger(__name__)

DISCOVERY_FLAG = "--voice=?"

VOICE_PATTERN = re.compile(r"(.*?) {4,}([a-z]{2,3}_[A-Z]{2,}) +# (.*)")


@dataclass(frozen=True)
class Voice:
    """A voice available to the speech tool.

    Voices built by hand are not validated; only voices returned by a
    VoiceCatalogue are known to exist on the system.

    Attributes:
        name: Display name, may contain spaces
        locale: Locale identifier such as "en_US"
        comment: Sample sentence or description
    """

    name: str
    locale: str
    comment: str

    def __str__(self) -> str:
        return f"<Voice: '{self.name}'({self.locale}), '{self.comment}'>"


def parse_voices(output: str) -> list[Voice]:
    """Parse the voice listing printed by `say --voice=?`.

    Args:
        output: Captured standard output of the tool

    Returns:
        Voices in listing order. Empty if no line matches.
    """
    voices = []
    for line in output.splitlines():
        match = VOICE_PATTERN.search(line)
        if match is None or not match.group(1) or not match.group(3):
            if line.strip():
                logger.debug(f"Skipping unrecognized voice line: {line!r}")
            continue
        voices.append(Voice(*match.groups()))
    return voices


class VoiceCatalogue:
    """Lazily discovered, memoized list of system voices.

    The discovery process runs at most once per catalogue, even when the
    first access happens from several threads at the same time.
    """

    def __init__(self, launcher: ProcessLauncher | None = None) -> None:
        """Initialize catalogue.

        Args:
            launcher: Launcher for the speech tool (default: /usr/bin/say)
        """
        self._launcher = launcher or SubprocessLauncher()
        self._lock = threading.Lock()
        self._voices: tuple[Voice, ...] | None = None

    @property
    def is_loaded(self) -> bool:
        """Return True once discovery has run."""
        return self._voices is not None

    def voices(self) -> list[Voice]:
        """Return the system voices, discovering them on first call.

        Returns:
            Voices in the order the tool reported them

        Raises:
            SayUnavailableError: If the speech tool cannot be launched
        """
        if self._voices is None:
            with self._lock:
                if self._voices is None:
                    output = self._launcher.capture([DISCOVERY_FLAG])
                    self._voices = tuple(parse_voices(output))
                    logger.info(f"Discovered {len(self._voices)} voices")
        return list(self._voices)

    def find(self, name: str) -> Voice | None:
        """Return the first voice whose name equals `name` exactly."""
        for voice in self.voices():
            if voice.name == name:
                return voice
        return None


_default_catalogue: VoiceCatalogue | None = None
_default_lock = threading.Lock()


def default_catalogue() -> VoiceCatalogue:
    """Return the process-wide catalogue backed by /usr/bin/say."""
    global _default_catalogue
    with _default_lock:
        if _default_catalogue is None:
            _default_catalogue = VoiceCatalogue()
        return _default_catalogue


def list_voices() -> list[Voice]:
    """List voices of the current system, equivalent to `say --voice=?`."""
    return default_catalogue().voices()


__all__ = [
    "DISCOVERY_FLAG",
    "VOICE_PATTERN",
    "Voice",
    "VoiceCatalogue",
    "default_catalogue",
    "list_voices",
    "parse_voices",
]
