#!/usr/bin/env python3
"""Timerable entry point.

Run with:
    python main.py
    python -m timerable
"""

from timerable.__main__ import main


if __name__ == "__main__":
    main()
