import os

import numpy as np
import pytest
import soundfile as sf

os.environ.setdefault("PAUSE_ON_EXIT", "0")


class FakeVoice:
    def __init__(self, id, name, languages=(), gender=None, age=None):
        self.id = id
        self.name = name
        self.languages = list(languages)
        self.gender = gender
        self.age = age


class FakeEngine:
    """Stands in for a pyttsx3 Engine: same method names, no audio device."""

    def __init__(self, voices=(), fail_with=None, write_audio=True, sample_rate=22050, channels=2):
        self.voices = list(voices)
        self.fail_with = fail_with
        self.write_audio = write_audio
        self.sample_rate = sample_rate
        self.channels = channels
        self.props = {"voice": self.voices[0].id if self.voices else None, "rate": 200}
        self.callbacks = {}
        self.queue = []
        self.spoken = []
        self.saved = []

    def connect(self, topic, cb):
        self.callbacks.setdefault(topic, []).append(cb)
        return (topic, cb)

    def getProperty(self, name):
        if name == "voices":
            return self.voices
        return self.props.get(name)

    def setProperty(self, name, value):
        self.props[name] = value

    def say(self, text, name=None):
        self.queue.append(("say", text, None))

    def save_to_file(self, text, filename, name=None):
        self.queue.append(("save", text, filename))

    def runAndWait(self):
        queue, self.queue = self.queue, []
        for kind, text, filename in queue:
            if self.fail_with is not None:
                for cb in self.callbacks.get("error", []):
                    cb(name=None, exception=self.fail_with)
                continue
            if kind == "say":
                self.spoken.append(text)
            else:
                self.saved.append(text)
                if self.write_audio:
                    t = np.arange(self.sample_rate // 2) / self.sample_rate
                    tone = 0.5 * np.sin(2 * np.pi * 440 * t)
                    data = np.stack([tone] * self.channels, axis=1)
                    sf.write(filename, data, self.sample_rate, subtype="PCM_16")

    def stop(self):
        pass


@pytest.fixture
def voices():
    return [
        FakeVoice("v-en-f", "Zira", ["en_US"], "VoiceGenderFemale", 30),
        FakeVoice("v-en-m", "David", ["en-us"], "Male", 40),
        FakeVoice("v-de-f", "Hedda", ["407"], "Female", None),
        FakeVoice("v-fr-m", "Paul", [b"\x05fr"], "male", None),
        FakeVoice("v-en-f2", "Hazel", ["en_GB"], "female", None),
    ]


@pytest.fixture
def engine(voices):
    return FakeEngine(voices)


@pytest.fixture
def ssml_file(tmp_path):
    p = tmp_path / "hello.ssml"
    p.write_text(
        '<speak version="1.0" xmlns="http://www.w3.org/2001/10/synthesis" xml:lang="en-US">'
        "Hello <break time=\"200ms\"/> world.</speak>",
        encoding="utf-8",
    )
    return p
