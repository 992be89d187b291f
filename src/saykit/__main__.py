"""saykit command-line entry point.

Usage:
    python -m saykit [OPTIONS] COMMAND

Commands:
    voices           List the voices installed on this system
    speak TEXT       Speak text aloud or into an audio file

Options:
    --config PATH      Path to YAML config file
    --log-level LEVEL  Override the configured log level
    --help             Show this help message
    --version          Show version
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

from . import __version__
from .config import SayConfig
from .config.loader import load_config
from .errors import SayError, SayUnavailableError
from .process import ProcessLauncher, SubprocessLauncher
from .say import SayRequest
from .voices import VoiceCatalogue

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNKNOWN_VOICE = 2


def setup_logging(level: str) -> None:
    """Configure logging based on config."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="saykit",
        description="saykit - speak text with the macOS say command",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  saykit voices                         # List all voices
  saykit voices --locale en             # List English voices
  saykit speak "Hello" -v Alex          # Speak with the Alex voice
  saykit speak "Hello" -o hello.aiff    # Write speech to a file

Environment:
  SAYKIT_LAUNCH_PATH   Path of the say executable
  SAYKIT_LOG_LEVEL     Log level (DEBUG, INFO, WARNING, ERROR)
""",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML config file",
        metavar="PATH",
    )

    parser.add_argument(
        "--log-level",
        help="Log level (overrides config)",
        metavar="LEVEL",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"saykit v{__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    voices_parser = subparsers.add_parser("voices", help="List installed voices")
    voices_parser.add_argument(
        "--locale",
        help="Only show voices whose locale starts with PREFIX",
        metavar="PREFIX",
    )

    speak_parser = subparsers.add_parser("speak", help="Speak text")
    speak_parser.add_argument("text", help="Text to speak")
    speak_parser.add_argument("-v", "--voice", help="Voice name", metavar="NAME")
    speak_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write speech to an AIFF file instead of playing it",
        metavar="PATH",
    )
    speak_parser.add_argument(
        "--no-wait",
        action="store_true",
        help="Return without waiting for playback to finish",
    )
    speak_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail if the requested voice is not installed",
    )

    return parser.parse_args(argv)


def list_command(args: argparse.Namespace, catalogue: VoiceCatalogue) -> int:
    """Print installed voices."""
    for voice in catalogue.voices():
        if args.locale and not voice.locale.startswith(args.locale):
            continue
        print(f"{voice.name:<24} {voice.locale:<8} # {voice.comment}")
    return EXIT_OK


def speak_command(
    args: argparse.Namespace,
    config: SayConfig,
    catalogue: VoiceCatalogue,
    launcher: ProcessLauncher,
) -> int:
    """Speak text aloud or into a file."""
    logger = logging.getLogger("saykit")
    voice_name = args.voice or config.say.voice

    if voice_name:
        request, found = SayRequest.with_voice_name(
            args.text, voice_name, catalogue=catalogue, launcher=launcher
        )
        if not found and args.strict:
            print(f"Error: Voice not found: {voice_name}", file=sys.stderr)
            return EXIT_UNKNOWN_VOICE
    else:
        request = SayRequest(args.text, launcher=launcher)

    if args.output:
        logger.info(f"Writing speech to {args.output}")
        request.write_to_file(args.output)
        # The CLI exits right away, so keep the file complete
        request.wait()
    else:
        request.play(wait_until_done=config.say.wait and not args.no_wait)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point for saykit.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    load_dotenv()
    args = parse_args(argv)

    try:
        config = load_config(path=args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (yaml.YAMLError, TypeError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return EXIT_ERROR

    setup_logging(args.log_level or config.logging.level)
    logger = logging.getLogger("saykit")
    logger.debug(f"Using speech tool at {config.say.launch_path}")

    launcher = SubprocessLauncher(config.say.launch_path)
    catalogue = VoiceCatalogue(launcher)

    try:
        if not launcher.is_available:
            raise SayUnavailableError(
                f"Cannot launch speech tool at {launcher.launch_path}: not found",
                launch_path=launcher.launch_path,
            )
        if args.command == "voices":
            return list_command(args, catalogue)
        return speak_command(args, config, catalogue, launcher)
    except SayError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
