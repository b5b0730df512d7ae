"""
Common utilities for the ssml-tts project.

Centralizes:
- Config loading (config.yaml)
- Logging setup
- Exit codes and the errors that map onto them
- SSML file reading
- Pause-before-exit for console windows
"""
from __future__ import annotations

from enum import IntEnum
from pathlib import Path
import codecs
import logging
import os
import sys
from typing import Any, Optional

import yaml


CONFIG_PATH = Path(os.getenv("TTS_CONFIG", "config.yaml"))

DEFAULTS: dict[str, Any] = {
    "sample_rate": 16000,
    "bits_per_sample": 16,
    "channels": 1,
    "gender": "female",
    "driver": None,
    "rate": None,
    "pause_on_exit": True,
    "read_buffer_size": 1024,
}


class ErrorCode(IntEnum):
    SUCCESS = 0
    DIRECTORY_NOT_FOUND = 1
    FILE_NOT_FOUND = 2
    CANNOT_SET_LANGUAGE = 3
    SSML_FORMAT_ERROR = 4
    COMMAND_LINE_ERROR = 5
    VERSION_OR_HELP_REQUIRED = 6
    ENGINE_UNAVAILABLE = 7
    CONFIG_ERROR = 8


class TtsError(Exception):
    """Base class for every fatal condition; carries the process exit code."""

    exit_code = ErrorCode.ENGINE_UNAVAILABLE

    def __init__(self, message: str, exit_code: Optional[ErrorCode] = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class CommandLineError(TtsError):
    exit_code = ErrorCode.COMMAND_LINE_ERROR


class DirectoryNotFoundError(TtsError):
    exit_code = ErrorCode.DIRECTORY_NOT_FOUND


class InputFileNotFoundError(TtsError):
    exit_code = ErrorCode.FILE_NOT_FOUND


class VoiceNotFoundError(TtsError):
    exit_code = ErrorCode.CANNOT_SET_LANGUAGE


class SsmlFormatError(TtsError):
    exit_code = ErrorCode.SSML_FORMAT_ERROR


class EngineUnavailableError(TtsError):
    exit_code = ErrorCode.ENGINE_UNAVAILABLE


class ConfigError(TtsError):
    exit_code = ErrorCode.CONFIG_ERROR


def load_config(path: Path | str = CONFIG_PATH) -> dict:
    """Load YAML config merged over DEFAULTS. Missing/invalid files yield the defaults."""
    cfg = dict(DEFAULTS)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        data = {}
    if isinstance(data, dict):
        cfg.update({k: v for k, v in data.items() if k in DEFAULTS})
    pause = os.getenv("PAUSE_ON_EXIT")
    if pause is not None:
        cfg["pause_on_exit"] = pause.lower() in ("1", "true", "yes")
    return cfg


_BITS_PER_SAMPLE = (8, 16, 24, 32)


def validate_config(cfg: dict) -> dict:
    """Check the numeric settings; raises ConfigError naming the first bad key."""
    for key in ("sample_rate", "channels", "read_buffer_size"):
        try:
            value = int(cfg.get(key, DEFAULTS[key]))
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid config value {key}: {cfg.get(key)!r}") from None
        if value <= 0:
            raise ConfigError(f"Invalid config value {key}: {value}, must be positive")
    bits = cfg.get("bits_per_sample", DEFAULTS["bits_per_sample"])
    if bits not in _BITS_PER_SAMPLE:
        raise ConfigError(f"Invalid config value bits_per_sample: {bits!r}, expected one of {_BITS_PER_SAMPLE}")
    return cfg


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Create a console logger. Level can be overridden by LOG_LEVEL env."""
    logger = logging.getLogger(name)
    lvl = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logger.setLevel(getattr(logging, lvl, logging.INFO))
    if logger.handlers:
        return logger
    ch = logging.StreamHandler()
    ch.setFormatter(logging.Formatter("[%(name)s] %(levelname)s: %(message)s"))
    logger.addHandler(ch)
    return logger


def read_ssml_from_file(path: Path | str, buffer_size: int = 1024) -> str:
    """
    Read the whole SSML document as UTF-8 text.

    The file is consumed in `buffer_size` byte chunks; an incremental decoder
    keeps multi-byte sequences that straddle a chunk boundary intact.
    Invalid byte sequences become U+FFFD.
    """
    if buffer_size <= 0:
        raise ValueError(f"buffer_size must be positive, got {buffer_size}")
    path = Path(path)
    if not path.parent.is_dir():
        raise DirectoryNotFoundError(f"Could not find a part of the path '{path.resolve()}'.")

    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    parts: list[str] = []
    try:
        with open(path, "rb") as fs:
            while True:
                chunk = fs.read(buffer_size)
                if not chunk:
                    break
                parts.append(decoder.decode(chunk))
    except (FileNotFoundError, IsADirectoryError):
        raise InputFileNotFoundError(f"Could not find file '{path.resolve()}'.") from None
    except OSError as e:
        raise InputFileNotFoundError(f"Cannot read file '{path.resolve()}': {e.strerror or e}") from e
    parts.append(decoder.decode(b"", final=True))
    return "".join(parts)


def get_file_size(path: Path | str) -> int:
    path = Path(path)
    if not path.resolve().parent.is_dir():
        print(f"Permission to <{path}> denied!")
        return -1
    if path.is_file():
        return path.stat().st_size
    return 0


def wait_for_key_then_exit(msg: str, exit_code: ErrorCode, pause: bool = True) -> None:
    if msg:
        print(msg)
    print(f"Please press Enter to exit ({exit_code.name})!")
    # Only block when a human can answer.
    if pause and sys.stdin is not None and sys.stdin.isatty():
        try:
            input()
        except EOFError:
            pass
    sys.exit(int(exit_code))
