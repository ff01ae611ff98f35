"""CLI layer for cmdbox.

Usage:
    cmdbox                     # list actions
    cmdbox chat "why is the sky blue"
    cmdbox -v iosevka --sarasa
"""

from cmdbox.cli.app import app, main

__all__ = ["app", "main"]
