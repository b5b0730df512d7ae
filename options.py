# options.py
"""
Command-line options for text_to_speech.py.

Usage:
  text-to-speech -i hello.ssml
  text-to-speech -i hello.ssml -r -o hello.wav
  text-to-speech -i hello.ssml -l de -g male -v
  text-to-speech -d
"""
from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

from common import CommandLineError, ErrorCode

__version__ = "1.0.0"

GENDERS = ("female", "male", "neutral")


@dataclass(frozen=True)
class Options:
    input_file: Optional[str] = None
    output_file: Optional[str] = None
    recording: bool = False
    display_voices: bool = False
    verbose: bool = False
    language: Optional[str] = None
    gender: str = "female"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="text-to-speech",
        description="Speak an SSML file with the operating system's speech engine, or record it to WAV.",
    )
    parser.add_argument("-i", "--input", dest="input_file", help="Input SSML file to be processed.")
    parser.add_argument("-o", "--output", dest="output_file", help="Output audio file.")
    parser.add_argument("-r", "--recording", action="store_true", help="Recording mode.")
    parser.add_argument("-d", "--display_voices", action="store_true",
                        help="Display information on available voices.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Set console output to verbose messages.")
    parser.add_argument("-l", "--language", help="Two-letter ISO language code of the voice (e.g. en, de).")
    parser.add_argument("-g", "--gender", choices=GENDERS, default=None,
                        help="Voice gender used together with --language (default: female).")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_options(argv: Optional[Sequence[str]] = None, default_gender: str = "female") -> Options:
    """Parse and validate argv. Raises CommandLineError; nothing here touches the speech engine."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits 0 after printing --help/--version, 2 on bad arguments
        if e.code in (0, None):
            raise CommandLineError("Help or version requested", ErrorCode.VERSION_OR_HELP_REQUIRED) from None
        raise CommandLineError("Invalid or missing command line argument(s)") from None
    return validate(args, default_gender)


def validate(args: argparse.Namespace, default_gender: str = "female") -> Options:
    if args.display_voices:
        return Options(display_voices=True, verbose=args.verbose)

    if args.input_file is None:
        msg = "Invalid or missing command line argument(s): no input file"
        if args.verbose:
            msg += "\nThis version cannot read SSML text from standard input."
        raise CommandLineError(msg)

    if args.recording and args.output_file is None:
        msg = "Invalid or missing command line argument(s): no output file"
        if args.verbose:
            msg += "\nThis version cannot write audio data to standard output."
        raise CommandLineError(msg)

    language = None
    if args.language is not None:
        language = args.language.strip().lower()
        if len(language) != 2 or not language.isalpha():
            raise CommandLineError(f"Invalid language code '{args.language}', expected two letters (e.g. en)")

    return Options(
        input_file=args.input_file,
        output_file=args.output_file,
        recording=args.recording,
        verbose=args.verbose,
        language=language,
        gender=args.gender or default_gender,
    )
