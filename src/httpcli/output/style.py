"""Terminal styling threaded through the renderer and the log handler."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

# Colors used by rich's pretty printer for structured bodies
VALUE_THEME = Theme(
    {
        "repr.str": "white",
        "repr.number": "blue",
        "repr.bool_true": "red",
        "repr.bool_false": "red",
        "repr.none": "magenta",
        "repr.attrib_name": "green",
    }
)


@dataclass(frozen=True)
class OutputStyle:
    """
    Set of formatting functions for user-visible text.

    With ``color=False`` every function returns the text unstyled, so a
    single value decided at startup switches all coloring off.

    Example:
        style = OutputStyle(color=not args.no_color)
        console = style.make_console()
        console.print(style.error("Request failed"))
    """

    color: bool = True
    error_style: str = "red"
    warning_style: str = "yellow"
    success_style: str = "green"
    verbose_style: str = "blue"

    def paint(self, text: Any, style: str) -> Text:
        return Text(str(text), style=style if self.color else "")

    def error(self, text: Any) -> Text:
        return self.paint(text, self.error_style)

    def warning(self, text: Any) -> Text:
        return self.paint(text, self.warning_style)

    def success(self, text: Any) -> Text:
        return self.paint(text, self.success_style)

    def verbose(self, text: Any) -> Text:
        return self.paint(text, self.verbose_style)

    def plain(self, text: Any) -> Text:
        return Text(str(text))

    def for_level(self, levelno: int) -> Callable[[Any], Text]:
        """Formatting function for a logging level."""
        if levelno >= logging.ERROR:
            return self.error
        if levelno >= logging.WARNING:
            return self.warning
        if levelno <= logging.DEBUG:
            return self.verbose
        return self.plain

    def make_console(self, **kwargs: Any) -> Console:
        """Create a rich console honouring the color setting."""
        kwargs.setdefault("soft_wrap", True)
        if not self.color:
            kwargs.setdefault("color_system", None)
            kwargs.setdefault("highlight", False)
        return Console(theme=VALUE_THEME, **kwargs)
