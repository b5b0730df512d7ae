# synth_speech.py
import os
import sys
from pathlib import Path

import pyttsx3

from audio_format import AudioFormat, convert_wave
from common import (
    DirectoryNotFoundError,
    EngineUnavailableError,
    SsmlFormatError,
    get_logger,
)
from voices import InstalledVoice, filter_voices, voice_info_from_engine

log = get_logger("synth")


def default_driver_name() -> str:
    # same choice pyttsx3 makes when no driver is named
    if sys.platform == "win32":
        return "sapi5"
    if sys.platform == "darwin":
        return "nsss"
    return "espeak"


class SpeechSynthesizer:
    """
    Thin wrapper over a pyttsx3 engine: installed voices with an enabled flag,
    output target (default device or WAV file) and blocking SSML synthesis.
    """

    def __init__(self, engine=None, driver_name=None, rate=None):
        self.driver_name = driver_name or default_driver_name()
        if engine is None:
            try:
                engine = pyttsx3.init(driver_name)
            except Exception as e:
                raise EngineUnavailableError(f"Cannot initialise speech engine '{self.driver_name}': {e}") from e
        self.engine = engine
        if rate:
            self.engine.setProperty("rate", int(rate))
        self.output_file = None
        self.audio_format = None
        self._voices = None
        self._errors = []
        self.engine.connect("error", self._on_error)

    def _on_error(self, name=None, exception=None, **kwargs):
        log.debug("Engine reported error for utterance %s: %r", name, exception)
        self._errors.append(exception)

    def get_installed_voices(self) -> list:
        if self._voices is None:
            self._voices = [
                InstalledVoice(voice_info_from_engine(v, self.driver_name))
                for v in (self.engine.getProperty("voices") or [])
            ]
        return self._voices

    def set_output_to_wave_file(self, path, audio_format: AudioFormat = AudioFormat()):
        path = Path(path)
        if not path.resolve().parent.is_dir():
            raise DirectoryNotFoundError(f"Could not find a part of the path '{path.resolve()}'.")
        self.output_file = path
        self.audio_format = audio_format

    def set_output_to_default_audio_device(self):
        self.output_file = None
        self.audio_format = None

    def select_voice_by_hints(self, gender: str, language: str) -> bool:
        match = filter_voices(self.get_installed_voices(), language, gender, log)
        if match is None:
            return False
        self.engine.setProperty("voice", match.info.id)
        log.debug("Selected voice %s (%s)", match.info.name, match.info.culture)
        return True

    def speak_ssml(self, ssml: str):
        """Synthesize `ssml`, blocking until the engine finishes."""
        self._errors.clear()
        if self.output_file is None:
            self.engine.say(ssml)
            self._run()
            return None

        # Engine output and converted output both go to temp files; only a
        # complete conversion replaces the final path.
        tmp = Path(str(self.output_file) + ".tmp.wav")
        part = Path(str(self.output_file) + ".part.wav")
        self.engine.save_to_file(ssml, str(tmp))
        try:
            self._run()
            if not tmp.exists() or tmp.stat().st_size == 0:
                raise EngineUnavailableError(f"Speech engine produced no audio for {self.output_file}")
            convert_wave(tmp, part, self.audio_format)
            os.replace(part, self.output_file)
        finally:
            for p in (tmp, part):
                if p.exists():
                    os.remove(p)
        return self.output_file

    def _run(self):
        try:
            self.engine.runAndWait()
        except RuntimeError as e:
            raise EngineUnavailableError(f"Speech engine failed: {e}") from e
        if self._errors:
            raise SsmlFormatError(str(self._errors[0]) or "The SSML content could not be processed.")
