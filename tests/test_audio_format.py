import numpy as np
import pytest
import soundfile as sf

from audio_format import AudioFormat, convert_wave, resample


def _write_tone(path, sr, channels, seconds=0.5):
    t = np.arange(int(sr * seconds)) / sr
    tone = 0.5 * np.sin(2 * np.pi * 440 * t)
    sf.write(str(path), np.stack([tone] * channels, axis=1), sr, subtype="PCM_16")


@pytest.mark.parametrize("rate", [16000, 32000])
def test_convert_to_mono_pcm16(tmp_path, rate):
    src, dst = tmp_path / "src.wav", tmp_path / "dst.wav"
    _write_tone(src, 22050, 2)

    convert_wave(src, dst, AudioFormat(samples_per_second=rate))

    info = sf.info(str(dst))
    assert info.samplerate == rate
    assert info.channels == 1
    assert info.subtype == "PCM_16"
    assert info.format == "WAV"
    assert abs(info.frames - rate // 2) <= 1


def test_convert_keeps_signal_level(tmp_path):
    src, dst = tmp_path / "src.wav", tmp_path / "dst.wav"
    _write_tone(src, 16000, 1)
    convert_wave(src, dst, AudioFormat())
    y, _ = sf.read(str(dst))
    assert 0.45 < np.abs(y).max() < 0.55


def test_resample_identity():
    y = np.linspace(-1, 1, 100)
    assert resample(y, 16000, 16000) is y


def test_unsupported_bits():
    with pytest.raises(ValueError):
        AudioFormat(bits_per_sample=12).subtype


def test_str():
    assert str(AudioFormat()) == "Pcm 16000 Hz, 16 bit, Mono"
