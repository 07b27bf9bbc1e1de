import numpy as np
import pytest
import soundfile as sf

from sound_processor.cli import main
from sound_processor.config import Settings
from sound_processor.errors import FileParametersError, ScriptError
from sound_processor.processor import SoundProcessor

RATE = 44100


def _script(tmp_path, text):
    path = tmp_path / "config.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_end_to_end_mix_then_mute(tmp_path, write_wav):
    primary = write_wav("voice.wav", np.ones(RATE))
    background = write_wav("music.wav", np.zeros(RATE))
    output = tmp_path / "out.wav"
    config = _script(tmp_path, "# mix then mute\nmix $2 0\n\nmute 0 0.5\n")

    processor = SoundProcessor(str(primary), str(output), [str(background)])
    result = processor.process_config_file(str(config))

    half = RATE // 2
    assert result.shape == (RATE,)
    assert np.all(result[:half] == 0.0)
    assert np.allclose(result[half:], 0.5, atol=1e-3)

    written, rate = sf.read(str(output))
    assert rate == RATE
    assert written.shape == (RATE,)
    assert np.all(written[:half] == 0.0)
    assert np.allclose(written[half:], 0.5, atol=1e-3)


def test_speed_up_changes_output_length(tmp_path, write_wav):
    primary = write_wav("voice.wav", np.full(RATE, 0.25))
    output = tmp_path / "out.wav"
    config = _script(tmp_path, "speed_up 2\n")

    SoundProcessor(str(primary), str(output)).process_config_file(str(config))

    assert sf.info(str(output)).frames == RATE // 2


def test_failed_script_writes_nothing(tmp_path, write_wav):
    primary = write_wav("voice.wav", np.ones(RATE))
    output = tmp_path / "out.wav"
    config = _script(tmp_path, "mute 0 1\nmix $99 0\n")

    processor = SoundProcessor(str(primary), str(output))
    with pytest.raises(ScriptError):
        processor.process_config_file(str(config))
    assert not output.exists()


def test_custom_sample_rate_is_used_for_load_and_save(tmp_path, write_wav):
    primary = write_wav("voice.wav", np.full(8000, 0.5), sample_rate=8000)
    output = tmp_path / "out.wav"
    config = _script(tmp_path, "mute 0 0.5\n")

    processor = SoundProcessor(str(primary), str(output), settings=Settings(sample_rate=8000))
    result = processor.process_config_file(str(config))

    assert np.all(result[:4000] == 0.0)
    assert np.allclose(result[4000:], 0.5)
    assert sf.info(str(output)).samplerate == 8000


def test_mismatched_auxiliary_rate_fails_at_load(write_wav, tmp_path):
    primary = write_wav("voice.wav", np.zeros(100))
    other = write_wav("music.wav", np.zeros(100), sample_rate=48000)
    with pytest.raises(FileParametersError):
        SoundProcessor(str(primary), str(tmp_path / "out.wav"), [str(other)])


def test_cli_help_exits_zero(capsys):
    assert main(["-h"]) == 0
    assert "sound_processor -c" in capsys.readouterr().out


def test_cli_too_few_arguments(capsys, tmp_path):
    assert main(["-c", "config.txt", "out.wav"]) == 1
    assert "Usage:" in capsys.readouterr().err
    assert not (tmp_path / "out.wav").exists()


def test_cli_runs_script(tmp_path, write_wav):
    primary = write_wav("voice.wav", np.full(RATE, 0.5))
    background = write_wav("music.wav", np.full(RATE, 0.5))
    output = tmp_path / "out.wav"
    config = _script(tmp_path, "mix $2 0\n")

    code = main(["-c", str(config), str(output), str(primary), str(background)])

    assert code == 0
    written, _ = sf.read(str(output))
    assert np.allclose(written, 0.5)


def test_cli_reports_script_errors(tmp_path, write_wav, capsys):
    primary = write_wav("voice.wav", np.zeros(RATE))
    output = tmp_path / "out.wav"
    config = _script(tmp_path, "foo 1 2\n")

    assert main(["-c", str(config), str(output), str(primary)]) == 1
    assert "Unknown command 'foo'" in capsys.readouterr().err
    assert not output.exists()


def test_cli_reports_missing_input(tmp_path, capsys):
    config = _script(tmp_path, "mute 0 1\n")
    code = main(["-c", str(config), str(tmp_path / "out.wav"), str(tmp_path / "missing.wav")])
    assert code == 1
    assert "Cannot open file" in capsys.readouterr().err


def test_cli_missing_config_flag_is_usage_error(tmp_path, write_wav, capsys):
    primary = write_wav("voice.wav", np.zeros(10))
    assert main(["out.wav", str(primary), str(primary), str(primary)]) == 1
    assert "Usage:" in capsys.readouterr().err


def test_cli_accepts_out_of_range_mute(tmp_path, write_wav):
    primary = write_wav("voice.wav", np.full(RATE, 0.5))
    output = tmp_path / "out.wav"
    config = _script(tmp_path, "mute 0 1e305\n")

    assert main(["-c", str(config), str(output), str(primary)]) == 0
    written, _ = sf.read(str(output))
    assert np.all(written == 0.0)
