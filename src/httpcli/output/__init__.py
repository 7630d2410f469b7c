"""Terminal and file output for http-cli."""

from .formatting import human_readable_size, to_yaml
from .renderer import ResponseRenderer
from .style import VALUE_THEME, OutputStyle

__all__ = [
    "OutputStyle",
    "ResponseRenderer",
    "VALUE_THEME",
    "human_readable_size",
    "to_yaml",
]
