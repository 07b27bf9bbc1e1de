"""
WAV Codec
=========
Loads mono input files into float buffers and writes the processed buffer
back out as PCM WAV, using soundfile.
"""

import logging
from pathlib import Path

import numpy as np
import soundfile as sf

from .errors import FileOpenError, FileParametersError, FileWriteError

logger = logging.getLogger(__name__)


class WAVManager:
    """Reads and writes mono WAV files at one fixed sample rate."""

    CHANNELS = 1

    def __init__(self, sample_rate: int = 44100, subtype: str = "PCM_16"):
        self.sample_rate = sample_rate
        self.subtype = subtype

    def load_audio_file(self, filename: str) -> np.ndarray:
        """
        Load a mono audio file.

        Args:
            filename: Path to the input file

        Returns:
            1-D float64 array of samples

        Raises:
            FileOpenError: If the file is missing or not a readable audio file
            FileParametersError: If the file is not mono at the session rate
        """
        try:
            info = sf.info(str(filename))
        except (sf.LibsndfileError, RuntimeError, OSError) as e:
            raise FileOpenError(str(filename), str(e)) from e

        if info.channels != self.CHANNELS or info.samplerate != self.sample_rate:
            raise FileParametersError(
                str(filename), info.channels, info.samplerate, self.sample_rate
            )

        try:
            audio, _ = sf.read(str(filename), dtype='float64', always_2d=False)
        except (sf.LibsndfileError, RuntimeError, OSError) as e:
            raise FileOpenError(str(filename), str(e)) from e

        logger.info(f"Loaded: {filename} ({info.samplerate}Hz, {len(audio)} samples)")
        return audio

    def save_audio_file(self, filename: str, samples: np.ndarray) -> Path:
        """
        Write samples as a mono PCM WAV file.

        Args:
            filename: Output path
            samples: 1-D array of samples in [-1.0, 1.0]

        Returns:
            Path of the written file

        Raises:
            FileWriteError: If the file cannot be created or written
        """
        output_path = Path(filename)
        try:
            sf.write(
                str(output_path),
                np.asarray(samples, dtype=np.float64),
                self.sample_rate,
                subtype=self.subtype,
                format='WAV'
            )
        except (sf.LibsndfileError, RuntimeError, OSError, ValueError) as e:
            raise FileWriteError(str(filename), str(e)) from e

        logger.info(f"Saved: {output_path} ({self.sample_rate}Hz, {len(samples)} samples)")
        return output_path
