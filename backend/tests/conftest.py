import numpy as np
import pytest
import soundfile as sf

from sound_processor.config import LOG_LEVEL_ENV, PCM_SUBTYPE_ENV, SAMPLE_RATE_ENV


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in (SAMPLE_RATE_ENV, PCM_SUBTYPE_ENV, LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)
    # keep load_dotenv away from any .env in the repo
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def write_wav(tmp_path):
    def _write(name, audio, sample_rate=44100):
        path = tmp_path / name
        sf.write(str(path), np.asarray(audio, dtype=np.float64), sample_rate, subtype='PCM_16')
        return path
    return _write
