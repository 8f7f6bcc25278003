"""
Message catalogs and violation message rendering.
"""

from .catalog import MessageCatalog, MessageLookup, mapping_catalog
from .formatter import MessageFormatter

__all__ = [
    "MessageCatalog",
    "MessageFormatter",
    "MessageLookup",
    "mapping_catalog",
]
