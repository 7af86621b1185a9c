"""Timerable: a Pomodoro timer organised around subjects and goals."""

__version__ = "0.1.0"
