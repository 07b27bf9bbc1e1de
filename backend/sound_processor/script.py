"""
Config Script Interpreter
=========================
Parses the line-oriented edit script and applies each command, in order, to
the main buffer.

Script format (UTF-8, one command per line)::

    # comment lines and blank lines are ignored
    mute <start_seconds> <end_seconds>
    mix $<N> <offset_seconds>
    speed_up <factor>

``$N`` refers to the N-th audio file on the command line, counting the
primary input as 1; the first auxiliary input is ``$2``.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np

from .errors import ScriptError, SoundProcessorError
from .transformations import Converter

logger = logging.getLogger(__name__)

COMMENT_MARKER = "#"
REFERENCE_MARKER = "$"
FIRST_AUXILIARY_REFERENCE = 2


@dataclass(frozen=True)
class MuteCommand:
    start: float
    end: float
    line_number: Optional[int] = None


@dataclass(frozen=True)
class MixCommand:
    input_number: int
    offset: float
    line_number: Optional[int] = None


@dataclass(frozen=True)
class SpeedUpCommand:
    factor: float
    line_number: Optional[int] = None


Command = Union[MuteCommand, MixCommand, SpeedUpCommand]


class InterpreterState(Enum):
    READY = "ready"
    DONE = "done"
    FAILED = "failed"


def resolve_input_reference(input_number: int, auxiliary_count: int) -> int:
    """
    Convert a ``$N`` input number into an index into the auxiliary buffers.

    Input 1 is the primary file, so ``$2`` is auxiliary index 0.

    Args:
        input_number: N from ``$N``
        auxiliary_count: Number of loaded auxiliary buffers

    Returns:
        Zero-based auxiliary index (N - 2)

    Raises:
        ScriptError: If N does not name a loaded auxiliary input
    """
    index = input_number - FIRST_AUXILIARY_REFERENCE
    if input_number < FIRST_AUXILIARY_REFERENCE:
        raise ScriptError(
            f"Input reference ${input_number} is invalid, "
            f"references start at ${FIRST_AUXILIARY_REFERENCE}"
        )
    if index >= auxiliary_count:
        raise ScriptError(
            f"Input reference ${input_number} is out of range, "
            f"{auxiliary_count} additional input(s) loaded"
        )
    return index


def parse_input_reference(token: str) -> int:
    """Parse a ``$N`` token into N."""
    if not token.startswith(REFERENCE_MARKER):
        raise ScriptError(f"Expected an input reference like $2, got '{token}'")
    try:
        input_number = int(token[len(REFERENCE_MARKER):])
    except ValueError:
        raise ScriptError(f"Input reference '{token}' is not of the form $N")
    if input_number < FIRST_AUXILIARY_REFERENCE:
        raise ScriptError(
            f"Input reference '{token}' is invalid, "
            f"references start at ${FIRST_AUXILIARY_REFERENCE}"
        )
    return input_number


def _parse_number(token: str, name: str) -> float:
    try:
        value = float(token)
    except ValueError:
        raise ScriptError(f"{name} must be a number, got '{token}'")
    if not math.isfinite(value):
        raise ScriptError(f"{name} must be finite, got '{token}'")
    return value


def _expect_args(command: str, args: List[str], names: Sequence[str]) -> None:
    if len(args) != len(names):
        usage = " ".join(f"<{n}>" for n in names)
        raise ScriptError(
            f"'{command}' takes {len(names)} argument(s): {command} {usage}"
        )


def parse_line(line: str, line_number: Optional[int] = None) -> Optional[Command]:
    """
    Parse a single script line.

    Args:
        line: Raw line text
        line_number: 1-based position in the script, used in error messages

    Returns:
        The parsed command, or None for blank and comment lines

    Raises:
        ScriptError: On an unknown command or malformed arguments
    """
    if not line.strip() or line.startswith(COMMENT_MARKER):
        return None

    tokens = line.split()
    command, args = tokens[0], tokens[1:]

    try:
        if command == "mute":
            _expect_args(command, args, ("start", "end"))
            return MuteCommand(
                start=_parse_number(args[0], "start"),
                end=_parse_number(args[1], "end"),
                line_number=line_number,
            )

        if command == "mix":
            _expect_args(command, args, ("$N", "offset"))
            return MixCommand(
                input_number=parse_input_reference(args[0]),
                offset=_parse_number(args[1], "offset"),
                line_number=line_number,
            )

        if command == "speed_up":
            _expect_args(command, args, ("factor",))
            factor = _parse_number(args[0], "factor")
            if factor <= 0:
                raise ScriptError(f"factor must be positive, got '{args[0]}'")
            return SpeedUpCommand(factor=factor, line_number=line_number)

    except ScriptError as e:
        if line_number is None:
            raise
        raise ScriptError(e.reason, line_number=line_number) from e

    raise ScriptError(f"Unknown command '{command}'", line_number=line_number)


def parse_script(lines: Iterable[str]) -> List[Command]:
    """Parse every line of a script, dropping blanks and comments."""
    commands = []
    for line_number, line in enumerate(lines, start=1):
        command = parse_line(line.rstrip("\r\n"), line_number)
        if command is not None:
            commands.append(command)
    return commands


def load_script(path: Union[str, Path]) -> List[Command]:
    """
    Read and parse a script file.

    Raises:
        ScriptError: If the file cannot be read or any line is invalid
    """
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ScriptError(f"Cannot read config file '{path}': {e}") from e

    try:
        return parse_script(text.splitlines())
    except ScriptError as e:
        raise ScriptError(e.reason, line_number=e.line_number, filename=str(path)) from e


class ScriptInterpreter:
    """
    Runs parsed commands against a main buffer.

    The interpreter starts in READY. ``run`` moves it to DONE after the last
    command or to FAILED on the first error; the failing error is re-raised
    and no result is returned.
    """

    def __init__(self, converter: Converter, auxiliary: Sequence[np.ndarray] = ()):
        self.converter = converter
        self.auxiliary = tuple(auxiliary)
        self.state = InterpreterState.READY

    def execute(self, command: Command, main: np.ndarray) -> np.ndarray:
        """Apply one command and return the new main buffer."""
        try:
            if isinstance(command, MuteCommand):
                logger.info(f"Muting from {command.start:g} seconds to {command.end:g} seconds.")
                return self.converter.apply_mute(main, command.start, command.end)

            if isinstance(command, MixCommand):
                index = resolve_input_reference(command.input_number, len(self.auxiliary))
                logger.info(
                    f"Mixing with input{command.input_number} "
                    f"starting from {command.offset:g} seconds."
                )
                return self.converter.apply_mix(main, self.auxiliary[index], command.offset)

            if isinstance(command, SpeedUpCommand):
                logger.info(f"Speed up on {command.factor:g}")
                return self.converter.apply_speed_up(main, command.factor)

        except ScriptError as e:
            raise ScriptError(e.reason, line_number=command.line_number) from e
        except (ValueError, ArithmeticError, MemoryError) as e:
            raise ScriptError(str(e) or type(e).__name__, line_number=command.line_number) from e

        raise ScriptError(f"Unsupported command {command!r}", line_number=command.line_number)

    def run(self, commands: Iterable[Command], main: np.ndarray) -> np.ndarray:
        """
        Apply commands in order.

        Args:
            commands: Parsed script
            main: Initial main buffer

        Returns:
            Final main buffer

        Raises:
            ScriptError: On the first command that fails
        """
        if self.state is not InterpreterState.READY:
            raise RuntimeError(f"Interpreter already finished ({self.state.value})")

        try:
            for command in commands:
                main = self.execute(command, main)
        except SoundProcessorError:
            self.state = InterpreterState.FAILED
            raise

        self.state = InterpreterState.DONE
        return main

    def run_file(self, path: Union[str, Path], main: np.ndarray) -> np.ndarray:
        """Load a script file and run it."""
        try:
            commands = load_script(path)
        except ScriptError:
            self.state = InterpreterState.FAILED
            raise

        try:
            return self.run(commands, main)
        except ScriptError as e:
            raise ScriptError(e.reason, line_number=e.line_number, filename=str(path)) from e
