"""
Shared helpers for message rendering.
"""

from .text import bytes_to_str, natural_join

__all__ = [
    "bytes_to_str",
    "natural_join",
]
