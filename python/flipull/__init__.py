"""Minimum-time route solver for Flipull ADVANCE-mode stages."""

__version__ = "0.1.0"
