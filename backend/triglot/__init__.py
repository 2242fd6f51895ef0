"""Triglot: sentence-aligned translation between Classical Chinese, Modern Chinese and English."""

__version__ = "0.1.0"
