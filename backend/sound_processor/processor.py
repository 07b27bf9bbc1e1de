"""
Sound Processor Session
=======================
Owns the main buffer and the auxiliary buffers for one run: loads every
input, runs the config script, and saves the result only if the whole script
succeeded.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np

from .config import Settings
from .script import ScriptInterpreter
from .transformations import Converter
from .wav_io import WAVManager

logger = logging.getLogger(__name__)


class SoundProcessor:
    """
    One editing session over a primary input and optional auxiliary inputs.

    Usage:
        processor = SoundProcessor('in.wav', 'out.wav', ['music.wav'])
        processor.process_config_file('config.txt')
    """

    def __init__(
        self,
        input_file: str,
        output_file: str,
        input_filenames: Sequence[str] = (),
        settings: Optional[Settings] = None
    ):
        """
        Load the primary and auxiliary inputs.

        Args:
            input_file: Primary input; becomes the main buffer ($1)
            output_file: Where the result is written
            input_filenames: Auxiliary inputs, referenced as $2, $3, ...
            settings: Session settings (defaults to built-in values)

        Raises:
            FileOpenError: If an input cannot be opened
            FileParametersError: If an input is not mono at the session rate
        """
        self.settings = settings or Settings()
        self.output_file = Path(output_file)

        self.wav = WAVManager(
            sample_rate=self.settings.sample_rate,
            subtype=self.settings.pcm_subtype
        )
        self.converter = Converter(sample_rate=self.settings.sample_rate)

        self.main_sample: np.ndarray = self.wav.load_audio_file(input_file)
        self.input_samples: List[np.ndarray] = [
            self.wav.load_audio_file(name) for name in input_filenames
        ]
        logger.debug(f"Session ready with {len(self.input_samples)} additional input(s)")

    def process_config_file(self, config_filename: str) -> np.ndarray:
        """
        Run a config script over the main buffer and save the result.

        Args:
            config_filename: Path of the script

        Returns:
            The buffer that was written

        Raises:
            ScriptError: If the script cannot be read or a command fails;
                nothing is written in that case
            FileWriteError: If the output cannot be written
        """
        interpreter = ScriptInterpreter(self.converter, self.input_samples)
        result = interpreter.run_file(config_filename, self.main_sample)

        self.wav.save_audio_file(str(self.output_file), result)
        self.main_sample = result
        return result
