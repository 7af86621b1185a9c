"""Colours and the application stylesheet.

The timer screen is light: white cards on a warm grey background, with
the ring colour telling the user what kind of chunk is running.
"""

from __future__ import annotations

from ..timer.session import ChunkType, TimerStatus

# ── ring colours (arc start, arc end) ───────────────────────────────────

CHUNK_COLORS: dict[ChunkType, tuple[str, str]] = {
    ChunkType.WORK:        ("#F0653A", "#F59E4C"),   # tomato
    ChunkType.SHORT_BREAK: ("#2BB39A", "#5FD3B5"),   # mint
    ChunkType.LONG_BREAK:  ("#3B82D6", "#74A9EC"),   # sky
}

# Paused and idle rings ignore the chunk type
STATUS_COLORS: dict[TimerStatus, tuple[str, str]] = {
    TimerStatus.PAUSED: ("#A3A09B", "#C2BFB9"),
    TimerStatus.READY:  ("#C9C6C0", "#DDDAD4"),
}


def ring_colors_for(status: TimerStatus, chunk_type: ChunkType) -> tuple[str, str]:
    if status in STATUS_COLORS:
        return STATUS_COLORS[status]
    return CHUNK_COLORS[chunk_type]


PALETTE: dict[str, str] = {
    "window":   "#F4F2EE",
    "card":     "#FFFFFF",
    "track":    "#E7E4DE",
    "ink":      "#2C2A27",
    "muted":    "#8A867F",
    "accent":   "#F0653A",
    "accent_hi": "#F4835E",
    "alert":    "#D64545",
    "line":     "#DEDAD3",
}


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    """QSS for the whole window; widgets opt in through object names."""
    p = palette or PALETTE
    return f"""
    QMainWindow, QDialog {{
        background: {p['window']};
    }}
    QWidget {{
        color: {p['ink']};
        font-size: 14px;
    }}

    QPushButton {{
        background: {p['card']};
        border: 1px solid {p['line']};
        border-radius: 6px;
        padding: 7px 18px;
    }}
    QPushButton:pressed {{
        background: {p['track']};
    }}
    QPushButton#primaryButton {{
        background: {p['accent']};
        color: white;
        border: 0;
        min-height: 40px;
        font-size: 16px;
        font-weight: bold;
    }}
    QPushButton#primaryButton:pressed {{
        background: {p['accent_hi']};
    }}
    QPushButton#secondaryButton {{
        color: {p['muted']};
        font-size: 13px;
    }}
    QPushButton#dangerButton {{
        color: {p['alert']};
        border-color: {p['alert']};
        min-height: 40px;
        font-size: 16px;
    }}

    QFrame#card {{
        background: {p['card']};
        border: 1px solid {p['line']};
        border-radius: 10px;
    }}
    QLabel#goalTitle {{
        color: {p['muted']};
        font-size: 12px;
        text-transform: uppercase;
    }}
    QLabel#goalValue {{
        font-size: 22px;
        font-weight: bold;
    }}
    QLabel#subtitle {{
        color: {p['muted']};
        font-size: 12px;
    }}

    QProgressBar {{
        background: {p['track']};
        border: 0;
        border-radius: 2px;
        max-height: 4px;
    }}
    QProgressBar::chunk {{
        background: {p['accent']};
        border-radius: 2px;
    }}

    QLineEdit, QListWidget {{
        background: {p['card']};
        border: 1px solid {p['line']};
        border-radius: 6px;
        padding: 4px;
    }}
    QListWidget::item {{
        padding: 6px;
    }}
    QListWidget::item:selected {{
        background: {p['track']};
        color: {p['ink']};
    }}

    QStatusBar {{
        color: {p['muted']};
        font-size: 12px;
    }}
    """
