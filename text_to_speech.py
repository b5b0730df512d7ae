# text_to_speech.py
"""
Speaks an SSML document with the operating system's speech engine, or records
it to a WAV file.

Features:
- Speak to the default audio device, or record with -r -o out.wav
- List installed voices with -d
- Restrict to voices of one language/gender with -l <xx> [-g female|male]
- config.yaml (or $TTS_CONFIG) for sample rate, engine driver, speaking rate

Usage:
  python text_to_speech.py -i hello.ssml
  python text_to_speech.py -i hello.ssml -r -o output/hello.wav
  python text_to_speech.py -i hello.ssml -l de -v
  python text_to_speech.py -d
"""
from __future__ import annotations

from pathlib import Path
import sys
from typing import Callable, Optional, Sequence

from audio_format import AudioFormat
from common import (
    ErrorCode,
    TtsError,
    VoiceNotFoundError,
    get_file_size,
    get_logger,
    load_config,
    read_ssml_from_file,
    validate_config,
    wait_for_key_then_exit,
)
from options import Options, parse_options
from synth_speech import SpeechSynthesizer
from voices import display_voices

log = get_logger("tts")


def make_synthesizer(cfg: dict) -> SpeechSynthesizer:
    return SpeechSynthesizer(driver_name=cfg.get("driver"), rate=cfg.get("rate"))


def audio_format_from_config(cfg: dict) -> AudioFormat:
    return AudioFormat(
        samples_per_second=int(cfg.get("sample_rate", 16000)),
        bits_per_sample=int(cfg.get("bits_per_sample", 16)),
        channels=int(cfg.get("channels", 1)),
    )


def run(
    options: Options,
    cfg: Optional[dict] = None,
    synth_factory: Optional[Callable[[dict], SpeechSynthesizer]] = None,
) -> ErrorCode:
    """Execute one run. Failures are raised as TtsError subclasses."""
    cfg = validate_config(cfg if cfg is not None else load_config())
    synth = (synth_factory or make_synthesizer)(cfg)

    if options.display_voices:
        display_voices(synth.get_installed_voices())
        return ErrorCode.SUCCESS

    if options.recording:
        fmt = audio_format_from_config(cfg)
        synth.set_output_to_wave_file(options.output_file, fmt)
        log.debug("Recording to %s as %s", options.output_file, fmt)
    else:
        synth.set_output_to_default_audio_device()

    if options.language is not None:
        if not synth.select_voice_by_hints(options.gender, options.language):
            raise VoiceNotFoundError(f"Cannot set language of voice to {options.language}")

    ssml = read_ssml_from_file(options.input_file, int(cfg.get("read_buffer_size", 1024)))
    log.debug("Read %d characters of SSML from %s", len(ssml), options.input_file)

    synth.speak_ssml(ssml)

    if options.recording:
        name = Path(options.output_file).name
        print(f"Generated audio file <{name}>, {get_file_size(options.output_file)} bytes written.")

    print("Program terminated successfully.")
    return ErrorCode.SUCCESS


def main(argv: Optional[Sequence[str]] = None):
    cfg = load_config()
    pause = bool(cfg.get("pause_on_exit", True))
    try:
        options = parse_options(argv, default_gender=str(cfg.get("gender") or "female"))
    except TtsError as e:
        wait_for_key_then_exit(str(e), e.exit_code, pause)
        return

    if options.verbose:
        for name in ("tts", "synth"):
            get_logger(name, "DEBUG")

    try:
        code = run(options, cfg)
    except TtsError as e:
        log.debug("Run failed", exc_info=True)
        wait_for_key_then_exit(str(e), e.exit_code, pause)
        return
    wait_for_key_then_exit("", code, pause)


if __name__ == "__main__":
    main(sys.argv[1:])
