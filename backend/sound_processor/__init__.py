"""
Sound Processor
===============
Offline, script-driven editor for mono WAV audio.

Modules:
- transformations.py: Mute, mix and speed-change transformations
- script.py: Config script parser and interpreter
- wav_io.py: WAV loading and saving (soundfile)
- processor.py: Session that ties inputs, script and output together
- cli.py: Command line entry point
"""

__version__ = "1.0.0"

from .config import Settings
from .errors import (
    FileOpenError,
    FileParametersError,
    FileWriteError,
    ScriptError,
    SoundProcessorError,
)
from .processor import SoundProcessor
from .script import ScriptInterpreter, load_script, parse_script, resolve_input_reference
from .transformations import Converter
from .wav_io import WAVManager
