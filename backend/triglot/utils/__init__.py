"""Utility modules for the triglot backend."""

from .text import safe_truncate, count_tagged_sentences

__all__ = ["safe_truncate", "count_tagged_sentences"]
