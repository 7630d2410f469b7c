"""Render a response to the terminal or stream it to a file."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.pretty import Pretty
from rich.syntax import Syntax

from ..exceptions import TransportError
from ..models.response import RenderedResponse
from .formatting import human_readable_size, to_yaml
from .style import OutputStyle

logger = logging.getLogger(__name__)


class ResponseRenderer:
    """
    Writes a response to the terminal or to an output file.

    Terminal rendering prints the headers first in verbose mode, then the
    body: YAML-style when requested, fully expanded and colored by value
    type for mappings and lists, and as-is for anything else.

    Example:
        renderer = ResponseRenderer(console, style, verbose=True)
        ok = await renderer.render(response, output_file=None)
    """

    CHUNK_SIZE = 64 * 1024

    def __init__(
        self,
        console: Console,
        style: OutputStyle,
        *,
        verbose: bool = False,
        yaml: bool = False,
    ) -> None:
        self.console = console
        self.style = style
        self.verbose = verbose
        self.yaml = yaml

    def error(self, message: Any) -> None:
        self.console.print(self.style.error(message))

    def warning(self, message: Any) -> None:
        self.console.print(self.style.warning(message))

    def success(self, message: Any) -> None:
        self.console.print(self.style.success(message))

    def _print_yaml(self, value: Any) -> None:
        text = to_yaml(value)
        if self.style.color and isinstance(value, (dict, list, tuple)):
            self.console.print(Syntax(text, "yaml", background_color="default"))
        else:
            self.console.out(text, highlight=False)

    def show_headers(self, headers: dict[str, Any]) -> None:
        if not self.verbose:
            return
        self.console.print(self.style.verbose("\nResponse headers:"))
        self._print_yaml(headers)

    def show_body(self, body: Any) -> None:
        if body is None or body == "":
            return
        if self.verbose:
            self.console.print(self.style.verbose("\nBody content:"))

        if self.yaml:
            self._print_yaml(body)
        elif isinstance(body, (dict, list)):
            self.console.print(Pretty(body, expand_all=True))
        else:
            self.console.out(str(body), highlight=False)

    def show(self, response: RenderedResponse) -> None:
        """Print headers (verbose mode) and the buffered body."""
        self.show_headers(response.headers)
        self.show_body(response.body)

    async def save(self, response: RenderedResponse, path: Path) -> bool:
        """
        Copy the response stream into a file.

        Success is reported once the file is flushed and closed. Failures
        are reported and returned, never raised.

        Args:
            response: Streamed response
            path: Destination file

        Returns:
            True if the whole body was written
        """
        if response.stream is None:
            raise ValueError("Saving to a file requires a streamed response")

        written = 0
        try:
            handle = await asyncio.to_thread(open, path, "wb")
            try:
                async for chunk in response.stream.iter_chunked(self.CHUNK_SIZE):
                    await asyncio.to_thread(handle.write, chunk)
                    written += len(chunk)
            finally:
                await asyncio.to_thread(handle.close)
        except (OSError, TransportError) as e:
            logger.debug(f"Failed to save response to {path} after {written} bytes: {e}")
            self.error(f"Error when saving response: {e}")
            return False

        self.success(f"Response saved in {path} ({human_readable_size(written)})")
        return True

    async def render(self, response: RenderedResponse, output_file: Path | None = None) -> bool:
        """
        Render a response.

        Args:
            response: Response from the transport
            output_file: Stream the body here instead of printing it

        Returns:
            False if saving to the output file failed
        """
        if output_file is not None:
            return await self.save(response, output_file)
        self.show(response)
        return True
