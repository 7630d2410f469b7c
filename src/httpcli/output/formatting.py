"""Text formatting helpers."""

from typing import Any

import yaml

SIZE_UNITS = ["B", "kB", "MB", "GB", "TB"]


def to_yaml(value: Any) -> str:
    """
    Render a value as indented ``key: value`` text.

    Mappings keep their key order. Scalars are returned as their string form.
    """
    if not isinstance(value, (dict, list, tuple)):
        return "" if value is None else str(value)
    return yaml.safe_dump(
        value,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    ).rstrip("\n")


def human_readable_size(size: int) -> str:
    """
    Format a byte count using 1024-based units.

    Examples:
        >>> human_readable_size(0)
        '0 B'
        >>> human_readable_size(1536)
        '1.5 kB'
    """
    if size <= 0:
        return "0 B"
    index = 0
    value = float(size)
    while value >= 1024 and index < len(SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    value = round(value, 2)
    return f"{value:g} {SIZE_UNITS[index]}"
