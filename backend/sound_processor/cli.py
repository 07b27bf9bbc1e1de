#!/usr/bin/env python3
"""
Sound Processor - CLI Entry Point
=================================
Applies an edit script to a mono WAV file.

Usage:
    sound_processor -c config.txt output.wav input1.wav [input2.wav ...]
    sound_processor -h
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import LOG_FORMAT, Settings
from .errors import SoundProcessorError
from .processor import SoundProcessor

USAGE = "sound_processor -c <config.txt> <output.wav> <input1.wav> [<input2.wav> ...]"

# program name, -c, config, output, first input
MIN_ARGC = 5

EPILOG = """
Config file commands (one per line, '#' starts a comment line):
  mute <start> <end>       silence the interval [start, end) in seconds
  mix $N <offset>          average input N into the stream from <offset> seconds
                           ($2 is the first file after input1)
  speed_up <factor>        change playback speed (factor > 1 shortens)

Examples:
  sound_processor -c config.txt out.wav voice.wav music.wav
"""


class UsageError(SoundProcessorError):
    """Command line arguments do not match the expected form."""


class _ArgumentParser(argparse.ArgumentParser):

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog='sound_processor',
        usage=USAGE,
        description='Script-driven mono WAV editor: mute, mix and speed change',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG
    )
    parser.add_argument('-c', '--config', required=True, help='Config script path')
    parser.add_argument('output', help='Output WAV path')
    parser.add_argument('inputs', nargs='+', help='Primary input WAV followed by additional inputs')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = build_parser()

    if argv and argv[0] in ('-h', '--help'):
        parser.print_help()
        return 0

    if len(argv) + 1 < MIN_ARGC:
        print(f"Usage: {USAGE}", file=sys.stderr)
        return 1

    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        print(f"Usage: {USAGE}", file=sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        settings = Settings.from_env()
    except SoundProcessorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    configure_logging('DEBUG' if args.verbose else settings.log_level)

    primary, *additional = args.inputs
    try:
        processor = SoundProcessor(primary, args.output, additional, settings=settings)
        processor.process_config_file(args.config)
    except SoundProcessorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
