"""saykit - Easy-to-use interface for the macOS `say` command.

Lists the voices installed on the system and speaks text aloud or into an
audio file:

    >>> from saykit import SayRequest, list_voices
    >>> voices = list_voices()
    >>> request, found = SayRequest.with_voice_name("Hello", "Alex")
    >>> request.play(wait_until_done=True)
"""

__version__ = "0.1.0"

from .errors import SayError, SayUnavailableError
from .process import DEFAULT_LAUNCH_PATH, SubprocessLauncher
from .say import RequestState, SayRequest
from .voices import Voice, VoiceCatalogue, default_catalogue, list_voices, parse_voices

__all__ = [
    "DEFAULT_LAUNCH_PATH",
    "RequestState",
    "SayError",
    "SayRequest",
    "SayUnavailableError",
    "SubprocessLauncher",
    "Voice",
    "VoiceCatalogue",
    "__version__",
    "default_catalogue",
    "list_voices",
    "parse_voices",
]
