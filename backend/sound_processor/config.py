"""
Runtime configuration.

Settings come from the process environment, optionally seeded from a
``.env`` file in the working directory.
"""

import os
from dataclasses import dataclass

import soundfile as sf
from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_SAMPLE_RATE = 44100
DEFAULT_PCM_SUBTYPE = "PCM_16"
DEFAULT_LOG_LEVEL = "INFO"

SAMPLE_RATE_ENV = "SOUND_PROCESSOR_SAMPLE_RATE"
PCM_SUBTYPE_ENV = "SOUND_PROCESSOR_PCM_SUBTYPE"
LOG_LEVEL_ENV = "SOUND_PROCESSOR_LOG_LEVEL"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Session-wide settings shared by every loaded and saved buffer."""
    sample_rate: int = DEFAULT_SAMPLE_RATE
    pcm_subtype: str = DEFAULT_PCM_SUBTYPE
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env_file: dotenv file loaded before reading the environment.
                Variables already set in the environment take precedence.

        Returns:
            Validated Settings instance

        Raises:
            ConfigError: If a variable holds an unusable value
        """
        load_dotenv(env_file)

        raw_rate = os.environ.get(SAMPLE_RATE_ENV, str(DEFAULT_SAMPLE_RATE))
        try:
            sample_rate = int(raw_rate)
        except ValueError:
            raise ConfigError(f"{SAMPLE_RATE_ENV} must be an integer, got '{raw_rate}'")
        if sample_rate <= 0:
            raise ConfigError(f"{SAMPLE_RATE_ENV} must be positive, got {sample_rate}")

        pcm_subtype = os.environ.get(PCM_SUBTYPE_ENV, DEFAULT_PCM_SUBTYPE).upper()
        if not sf.check_format("WAV", pcm_subtype):
            raise ConfigError(f"{PCM_SUBTYPE_ENV} '{pcm_subtype}' is not a valid WAV subtype")

        log_level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"{LOG_LEVEL_ENV} must be one of {', '.join(LOG_LEVELS)}, got '{log_level}'")

        return cls(sample_rate=sample_rate, pcm_subtype=pcm_subtype, log_level=log_level)
