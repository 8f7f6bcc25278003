"""
Text rendering helpers used when building user-facing messages.
"""

from collections.abc import Iterable
from typing import Any

BYTE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def natural_join(items: Iterable[Any], separator: str = ", ", last_separator: str = " and ") -> str:
    """
    Join items the way a sentence would list them.

    Examples:
        >>> natural_join(["jpg", "png", "gif"])
        'jpg, png and gif'
        >>> natural_join([18, 65])
        '18 and 65'
        >>> natural_join(["only"])
        'only'
    """
    parts = [str(item) for item in items]
    if len(parts) <= 1:
        return "".join(parts)
    return separator.join(parts[:-1]) + last_separator + parts[-1]


def bytes_to_str(size: float, precision: int = 2) -> str:
    """
    Render a byte count as a human-readable size.

    Examples:
        >>> bytes_to_str(512)
        '512 B'
        >>> bytes_to_str(1536)
        '1.5 KB'
        >>> bytes_to_str(400000)
        '390.62 KB'
    """
    value = float(size)
    unit = BYTE_UNITS[0]
    for unit in BYTE_UNITS:
        if abs(value) < 1024 or unit == BYTE_UNITS[-1]:
            break
        value /= 1024

    rendered = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    return f"{rendered} {unit}"
