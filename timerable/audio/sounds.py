"""End-of-chunk feedback: synthesized sounds plus a window alert.

Sounds are synthesized with numpy as short decaying tones, written to
a cache directory as WAV files, and played through
``QSoundEffect``.

Sound names
-----------
- ``work_complete``: rising arpeggio when a work chunk ends
- ``break_complete``: soft bell when a break ends
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect
from PyQt6.QtWidgets import QApplication, QWidget

from ..settings import APP_SUPPORT_DIR
from ..timer.session import ChunkType

logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = (
    "work_complete",
    "break_complete",
)

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════════


def _tone(
    freqs: tuple[float, ...],
    seconds: float,
    *,
    attack: float = 0.01,
    decay_rate: float = 6.0,
    level: float = 0.4,
) -> np.ndarray:
    """Sum of partials with a linear attack and exponential decay.

    ``freqs`` holds the fundamental first; each further partial is
    mixed in at half the amplitude of the previous one.
    """
    n = int(SAMPLE_RATE * seconds)
    t = np.arange(n) / SAMPLE_RATE
    mix = np.zeros(n)
    for i, freq in enumerate(freqs):
        mix += np.sin(2 * np.pi * freq * t) * 0.5 ** i
    ramp = np.clip(t / attack, 0.0, 1.0) if attack > 0 else np.ones(n)
    return mix * ramp * np.exp(-decay_rate * t) * level


def _pcm16(samples: np.ndarray) -> bytes:
    """Mono 16-bit WAV file bytes for float samples in -1..1."""
    frames = (np.clip(samples, -1.0, 1.0) * 32767).astype("<i2")
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(frames.tobytes())
    return buf.getvalue()


def _generate_arpeggio() -> bytes:
    """Work chunk done: rising G4, C5, E5, G5 with the top note ringing."""
    notes = (392.00, 523.25, 659.25, 783.99)
    step = int(SAMPLE_RATE * 0.12)
    tail = _tone((notes[-1], notes[-1] * 2), 0.6, decay_rate=4.5, level=0.35)
    out = np.zeros(step * (len(notes) - 1) + len(tail))
    for i, freq in enumerate(notes[:-1]):
        note = _tone((freq, freq * 2), 0.25, decay_rate=12.0, level=0.3)
        out[i * step:i * step + len(note)] += note
    out[step * (len(notes) - 1):] += tail
    return _pcm16(out)


def _generate_bell() -> bytes:
    """Break done: a soft bell on A4 with an inharmonic overtone."""
    return _pcm16(
        _tone((440.0, 440.0 * 2.76, 440.0 * 5.4), 1.2,
              attack=0.005, decay_rate=3.0, level=0.35)
    )


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "work_complete": _generate_arpeggio,
    "break_complete": _generate_bell,
}


# ═══════════════════════════════════════════════════════════════════════════
#  NOTIFICATION SERVICE
# ═══════════════════════════════════════════════════════════════════════════


class NotificationService(QObject):
    """Plays the end-of-chunk sound and raises a window alert.

    Usage::

        notifier = NotificationService(parent=self, window=self)
        notifier.play_notification_sound(ChunkType.WORK)
        notifier.play_haptic_feedback()
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
        window: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._window = window
        self._enabled = True
        self._haptics_enabled = True
        self._level = 70
        self._effects: dict[str, QSoundEffect] = {}
        self._prepare_effects()

    # ── sound ─────────────────────────────────────────────────────────

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def volume(self) -> int:
        return self._level

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def set_volume(self, level: int) -> None:
        """0-100, clamped."""
        self._level = max(0, min(100, level))
        for effect in self._effects.values():
            effect.setVolume(self._level / 100)

    def play(self, name: str) -> None:
        if self._enabled and name in self._effects:
            self._effects[name].play()

    def play_notification_sound(self, completed_type: ChunkType | None = None) -> None:
        """Bell after a break, arpeggio after work (or when unknown)."""
        is_break = completed_type is not None and completed_type.is_break
        self.play("break_complete" if is_break else "work_complete")

    # ── haptics ───────────────────────────────────────────────────────

    @property
    def haptics_enabled(self) -> bool:
        return self._haptics_enabled

    def set_haptics_enabled(self, enabled: bool) -> None:
        self._haptics_enabled = enabled

    def play_haptic_feedback(self) -> None:
        """Bounce the dock icon / flash the taskbar entry."""
        if self._haptics_enabled and self._window is not None:
            QApplication.alert(self._window, 0)

    # ── setup ─────────────────────────────────────────────────────────

    def _prepare_effects(self) -> None:
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(_GENERATORS[name]())
                logger.debug("Wrote %s", path)
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._level / 100)
            self._effects[name] = effect
