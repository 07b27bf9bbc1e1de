"""
Sound Processor Errors
======================
Exception hierarchy shared by the codec, the transformation engine and the
script interpreter. Nothing below the CLI prints or exits; errors are raised
and handled once in ``cli.main``.
"""

from typing import Optional


class SoundProcessorError(Exception):
    """Base class for every error the sound processor reports to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class FileOpenError(SoundProcessorError):
    """An input audio file could not be opened or decoded."""

    def __init__(self, filename: str, reason: str = ""):
        message = f"Cannot open file '{filename}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.filename = filename


class FileParametersError(SoundProcessorError):
    """An input audio file has the wrong channel count or sample rate."""

    def __init__(self, filename: str, channels: int, sample_rate: int, expected_rate: int):
        super().__init__(
            f"Invalid parameters in file '{filename}': "
            f"{channels} channel(s) at {sample_rate}Hz, "
            f"expected 1 channel at {expected_rate}Hz"
        )
        self.filename = filename
        self.channels = channels
        self.sample_rate = sample_rate


class FileWriteError(SoundProcessorError):
    """The output audio file could not be created or written."""

    def __init__(self, filename: str, reason: str = ""):
        message = f"Cannot write file '{filename}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.filename = filename


class ScriptError(SoundProcessorError):
    """The config script is missing, unreadable or contains a bad line."""

    def __init__(self, message: str, line_number: Optional[int] = None, filename: Optional[str] = None):
        prefix = ""
        if filename:
            prefix = f"{filename}:"
        if line_number is not None:
            prefix += f"{line_number}:"
        super().__init__(f"{prefix} {message}" if prefix else message)
        self.reason = message
        self.line_number = line_number
        self.filename = filename


class ConfigError(SoundProcessorError):
    """An environment setting holds a value the processor cannot use."""
