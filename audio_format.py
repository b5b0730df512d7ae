# audio_format.py
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import soundfile as sf

_SUBTYPES = {8: "PCM_U8", 16: "PCM_16", 24: "PCM_24", 32: "PCM_32"}


@dataclass(frozen=True)
class AudioFormat:
    samples_per_second: int = 16000
    bits_per_sample: int = 16
    channels: int = 1

    @property
    def subtype(self) -> str:
        try:
            return _SUBTYPES[self.bits_per_sample]
        except KeyError:
            raise ValueError(f"Unsupported bits per sample: {self.bits_per_sample}") from None

    def __str__(self):
        mode = "Mono" if self.channels == 1 else f"{self.channels} channels"
        return f"Pcm {self.samples_per_second} Hz, {self.bits_per_sample} bit, {mode}"


def resample(y: np.ndarray, sr_in: int, sr_out: int) -> np.ndarray:
    """Linear-interpolation resampling along the first axis."""
    if sr_in == sr_out or len(y) == 0:
        return y
    n_out = max(1, int(round(len(y) * sr_out / sr_in)))
    t_in = np.arange(len(y)) / sr_in
    t_out = np.arange(n_out) / sr_out
    if y.ndim == 1:
        return np.interp(t_out, t_in, y)
    return np.stack([np.interp(t_out, t_in, y[:, c]) for c in range(y.shape[1])], axis=1)


def convert_wave(src: Path, dst: Path, fmt: AudioFormat) -> Path:
    """
    Rewrite the engine's WAV output at `src` as `fmt` into `dst`.
    Works with mono/stereo input; stereo is down-mixed by averaging.
    """
    y, sr = sf.read(str(src), dtype="float64", always_2d=True)  # shape (n, channels)
    if fmt.channels == 1:
        y = y.mean(axis=1)
    elif y.shape[1] != fmt.channels:
        y = np.repeat(y.mean(axis=1, keepdims=True), fmt.channels, axis=1)

    y = resample(y, sr, fmt.samples_per_second)
    y = np.clip(y, -1.0, 1.0)
    sf.write(str(dst), y, fmt.samples_per_second, subtype=fmt.subtype, format="WAV")
    return Path(dst)
