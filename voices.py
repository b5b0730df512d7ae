# voices.py
"""
Voice metadata as reported by the platform engine, the language/gender filter
and the console listing used by `--display_voices`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re
from typing import Any, Callable, Iterable, Optional

# Primary language ids of Windows LCIDs (lcid & 0x3FF) as reported by SAPI5.
_LCID_PRIMARY = {
    0x04: "zh", 0x05: "cs", 0x06: "da", 0x07: "de", 0x08: "el", 0x09: "en",
    0x0A: "es", 0x0B: "fi", 0x0C: "fr", 0x0D: "he", 0x0E: "hu", 0x10: "it",
    0x11: "ja", 0x12: "ko", 0x13: "nl", 0x14: "nb", 0x15: "pl", 0x16: "pt",
    0x18: "ro", 0x19: "ru", 0x1D: "sv", 0x1F: "tr", 0x22: "uk",
}

_TAG = re.compile(r"^([a-z]{2,3})(?:[-_].*)?$")


@dataclass
class VoiceInfo:
    name: str
    culture: str = ""
    age: str = "NotSet"
    gender: str = "notset"
    description: str = ""
    id: str = ""
    supported_audio_formats: tuple = ()
    additional_info: dict = field(default_factory=dict)

    @property
    def language(self) -> str:
        return two_letter_language(self.culture)


@dataclass
class InstalledVoice:
    info: VoiceInfo
    enabled: bool = True


def two_letter_language(tag: Any) -> str:
    """Reduce an engine language tag to a lower-case two-letter code ('' if unknown)."""
    if tag is None:
        return ""
    if isinstance(tag, (bytes, bytearray)):
        # eSpeak prefixes the tag with a priority byte
        tag = bytes(tag).lstrip(bytes(range(32))).decode("ascii", "ignore")
    tag = str(tag).strip().lower()
    if not tag:
        return ""
    if re.fullmatch(r"[0-9a-f]{3,4}", tag):
        return _LCID_PRIMARY.get(int(tag, 16) & 0x3FF, "")
    m = _TAG.match(tag)
    if not m or len(m.group(1)) != 2:
        return ""
    return m.group(1)


def normalize_gender(value: Any) -> str:
    if value is None:
        return "notset"
    v = str(value).lower()
    # NSSpeechSynthesizer reports VoiceGenderFemale / VoiceGenderMale
    if v.startswith("voicegender"):
        v = v[len("voicegender"):]
    if "female" in v:
        return "female"
    if "male" in v:
        return "male"
    if "neutral" in v or "neuter" in v:
        return "neutral"
    return "notset"


def _culture_of(languages: Any) -> str:
    if not languages:
        return ""
    first = languages[0] if isinstance(languages, (list, tuple)) else languages
    if isinstance(first, (bytes, bytearray)):
        return bytes(first).lstrip(bytes(range(32))).decode("ascii", "ignore")
    return str(first)


def voice_info_from_engine(voice: Any, driver: str = "") -> VoiceInfo:
    """Build a VoiceInfo from a pyttsx3 Voice (id, name, languages, gender, age)."""
    name = getattr(voice, "name", None) or str(getattr(voice, "id", ""))
    age = getattr(voice, "age", None)
    additional = {}
    if driver:
        additional["Driver"] = driver
    languages = getattr(voice, "languages", None) or []
    if len(languages) > 1:
        additional["Languages"] = ", ".join(_culture_of([lang]) for lang in languages)
    return VoiceInfo(
        name=name,
        culture=_culture_of(languages),
        age=str(age) if age not in (None, "") else "NotSet",
        gender=normalize_gender(getattr(voice, "gender", None)),
        description=name,
        id=str(getattr(voice, "id", "")),
        additional_info=additional,
    )


def filter_voices(
    voices: Iterable[InstalledVoice],
    language: str,
    gender: str,
    log: Optional[logging.Logger] = None,
) -> Optional[InstalledVoice]:
    """
    Disable every voice that does not speak `language`, and among those that
    do, every voice of another gender. Returns the last voice matching both,
    or None. Voices are only ever disabled here, never enabled.
    """
    language = language.lower()
    gender = gender.lower()
    found = None
    for v in voices:
        lang = v.info.language
        if lang == language:
            if v.info.gender == gender:
                if log:
                    log.debug("Found voice %s", v.info.name)
                found = v
            else:
                v.enabled = False
                if log:
                    log.debug("Disabled voice %s, due to gender %s", v.info.name, v.info.gender)
        else:
            v.enabled = False
            if log:
                log.debug("Disabled voice %s, due to language %s", v.info.name, lang or "unknown")
    return found


def format_voice(number: int, voice: InstalledVoice) -> str:
    info = voice.info
    lines = [
        " -------------\n",
        f" No.:           {number}",
        f" Name:          {info.name}",
        f" Culture:       {info.culture}",
        f" Age:           {info.age}",
        f" Gender:        {info.gender.capitalize()}",
        f" Description:   {info.description}",
        f" ID:            {info.id}",
        f" Enabled:       {voice.enabled}",
    ]
    if info.supported_audio_formats:
        lines.append(" Audio formats: " + "\n".join(str(f) for f in info.supported_audio_formats) + "\n")
    else:
        lines.append(" Audio formats: No supported audio formats found!")
    extra = "".join(f" {k}: {v}\n" for k, v in info.additional_info.items())
    lines.append("\n Additional information about the voice - \n" + extra)
    return "\n".join(lines) + "\n"


def display_voices(voices: Iterable[InstalledVoice], out: Callable[[str], Any] = print) -> int:
    out("Installed voices -\n")
    n = 0
    for n, voice in enumerate(voices, 1):
        out(format_voice(n, voice))
    return n
