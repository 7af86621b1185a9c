"""Circular countdown ring drawn with QPainter.

The arc fills clockwise from twelve o'clock as the current chunk
progresses and takes its colours from the chunk type, or from the
status while paused or idle.  Inside the ring sit the remaining time,
the chunk label, and the chunk's position in the session.  When a chunk
ends the ring sends out a single expanding pulse.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QRectF, QVariantAnimation, QEasingCurve
from PyQt6.QtGui import QColor, QFont, QLinearGradient, QPainter, QPen
from PyQt6.QtWidgets import QWidget

from ..timer.session import ChunkType, TimerStatus
from .styles import PALETTE, STATUS_COLORS, ring_colors_for


def _mix(a: QColor, b: QColor, t: float) -> QColor:
    t = max(0.0, min(1.0, t))
    return QColor.fromRgbF(
        a.redF() + (b.redF() - a.redF()) * t,
        a.greenF() + (b.greenF() - a.greenF()) * t,
        a.blueF() + (b.blueF() - a.blueF()) * t,
    )


class ProgressRing(QWidget):
    """Chunk progress dial."""

    DIAMETER = 250
    STROKE = 12
    PULSE_SPREAD = 24

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(self.DIAMETER + 2 * self.PULSE_SPREAD,
                            self.DIAMETER + 2 * self.PULSE_SPREAD)

        self._percent = 0.0
        self._shown_percent = 0.0
        self._time_text = ""
        self._chunk_label = ""
        self._position_text = ""
        self._status = TimerStatus.READY
        self._chunk_type = ChunkType.WORK

        idle = STATUS_COLORS[TimerStatus.READY]
        self._colors = (QColor(idle[0]), QColor(idle[1]))
        self._from_colors = self._colors
        self._to_colors = self._colors
        self._pulse = 0.0

        self._arc_anim = self._animation(350, QEasingCurve.Type.OutQuad, self._on_arc)
        self._fade_anim = self._animation(450, QEasingCurve.Type.InOutSine, self._on_fade)
        self._fade_anim.setStartValue(0.0)
        self._fade_anim.setEndValue(1.0)
        self._pulse_anim = self._animation(700, QEasingCurve.Type.OutCubic, self._on_pulse)
        self._pulse_anim.setStartValue(0.0)
        self._pulse_anim.setEndValue(1.0)
        self._pulse_anim.finished.connect(self._end_pulse)

    def _animation(self, ms: int, curve: QEasingCurve.Type, slot) -> QVariantAnimation:
        anim = QVariantAnimation(self)
        anim.setDuration(ms)
        anim.setEasingCurve(curve)
        anim.valueChanged.connect(slot)
        return anim

    # ── state ─────────────────────────────────────────────────────────────

    @property
    def percent(self) -> float:
        return self._percent

    @property
    def time_text(self) -> str:
        return self._time_text

    @property
    def chunk_label(self) -> str:
        return self._chunk_label

    @property
    def position_text(self) -> str:
        return self._position_text

    @property
    def is_pulsing(self) -> bool:
        return self._pulse_anim.state() == QVariantAnimation.State.Running

    def set_percent(self, pct: float) -> None:
        """Move the arc to ``pct`` (0..1)."""
        self._percent = pct
        self._arc_anim.stop()
        self._arc_anim.setStartValue(self._shown_percent)
        self._arc_anim.setEndValue(pct)
        self._arc_anim.start()

    def set_time_text(self, text: str) -> None:
        self._time_text = text
        self.update()

    def set_chunk_label(self, text: str) -> None:
        self._chunk_label = text
        self.update()

    def set_position_text(self, text: str) -> None:
        self._position_text = text
        self.update()

    def apply_state(self, status: TimerStatus, chunk_type: ChunkType) -> None:
        """Fade the arc to the colours for ``status`` and ``chunk_type``."""
        if (status, chunk_type) == (self._status, self._chunk_type):
            return
        self._status = status
        self._chunk_type = chunk_type
        start, end = ring_colors_for(status, chunk_type)
        self._from_colors = self._colors
        self._to_colors = (QColor(start), QColor(end))
        self._fade_anim.stop()
        self._fade_anim.start()

    def trigger_celebration(self) -> None:
        self._pulse_anim.stop()
        self._pulse_anim.start()

    # ── animation slots ───────────────────────────────────────────────────

    def _on_arc(self, value) -> None:
        self._shown_percent = float(value)
        self.update()

    def _on_fade(self, value) -> None:
        t = float(value)
        self._colors = (
            _mix(self._from_colors[0], self._to_colors[0], t),
            _mix(self._from_colors[1], self._to_colors[1], t),
        )
        self.update()

    def _on_pulse(self, value) -> None:
        self._pulse = float(value)
        self.update()

    def _end_pulse(self) -> None:
        self._pulse = 0.0
        self.update()

    # ── painting ──────────────────────────────────────────────────────────

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        side = min(self.width(), self.height()) - 2 * self.PULSE_SPREAD
        side = max(side, 80)
        rect = QRectF(
            (self.width() - side) / 2, (self.height() - side) / 2, side, side,
        )
        start, end = self._colors

        if self._pulse > 0:
            glow = QColor(start)
            glow.setAlphaF(0.5 * (1.0 - self._pulse))
            spread = self.PULSE_SPREAD * self._pulse
            painter.setPen(QPen(glow, self.STROKE * (1.0 - self._pulse) + 1))
            painter.drawEllipse(rect.adjusted(-spread, -spread, spread, spread))

        painter.setPen(QPen(QColor(PALETTE["track"]), self.STROKE))
        painter.drawEllipse(rect)

        if self._shown_percent > 0:
            gradient = QLinearGradient(rect.topLeft(), rect.bottomRight())
            gradient.setColorAt(0.0, start)
            gradient.setColorAt(1.0, end)
            pen = QPen(gradient, self.STROKE)
            pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(pen)
            # angles are in 1/16 degree, negative span runs clockwise
            span = int(min(self._shown_percent, 1.0) * 360 * 16)
            painter.drawArc(rect, 90 * 16, -span)

        centre = QRectF(rect)
        self._draw_text(painter, centre.translated(0, -14), self._time_text,
                        44, QFont.Weight.DemiBold, QColor(PALETTE["ink"]))
        self._draw_text(painter, centre.translated(0, 26), self._chunk_label,
                        14, QFont.Weight.Medium, start)
        self._draw_text(painter, centre.translated(0, 48), self._position_text,
                        11, QFont.Weight.Normal, QColor(PALETTE["muted"]))
        painter.end()

    @staticmethod
    def _draw_text(
        painter: QPainter,
        rect: QRectF,
        text: str,
        px: int,
        weight: QFont.Weight,
        color: QColor,
    ) -> None:
        if not text:
            return
        font = QFont()
        font.setPixelSize(px)
        font.setWeight(weight)
        painter.setFont(font)
        painter.setPen(color)
        painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, text)
