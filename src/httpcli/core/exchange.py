"""One request/response exchange: build, send, render, persist cookies."""

from __future__ import annotations

import logging
from typing import Protocol

from ..cookies import CookieStore
from ..exceptions import TransportError
from ..http.protocols import HttpTransport
from ..models.config import RequestConfig
from ..output.renderer import ResponseRenderer
from .builder import build_request

logger = logging.getLogger(__name__)


class Spinner(Protocol):
    """Progress indicator shown while the request is in flight."""

    def start(self) -> None: ...

    def stop(self) -> None: ...


class RequestExchange:
    """
    Runs a single exchange from a normalized config to rendered output.

    Every file write (output file, cookie file) is awaited before run()
    returns, so the process can exit as soon as it gets the exit code.

    Example:
        async with AsyncHttpClient() as transport:
            exchange = RequestExchange(config, transport, renderer)
            exit_code = await exchange.run()
    """

    def __init__(
        self,
        config: RequestConfig,
        transport: HttpTransport,
        renderer: ResponseRenderer,
        spinner: Spinner | None = None,
    ) -> None:
        self.config = config
        self.transport = transport
        self.renderer = renderer
        self.spinner = spinner
        self.cookie_store = CookieStore(config.cookie_file) if config.cookie_file else None

    def _stop_spinner(self) -> None:
        if self.spinner is not None:
            self.spinner.stop()

    async def run(self) -> int:
        """
        Send the request and render the response.

        Returns:
            0 on success, 1 if the request failed
        """
        request = await build_request(self.config, self.cookie_store)

        if self.spinner is not None:
            self.spinner.start()

        try:
            async with self.transport.send(request) as response:
                self._stop_spinner()
                logger.debug(f"Received {response.status} {response.reason or ''}".rstrip())
                await self.renderer.render(response, self.config.output_file)

                if self.cookie_store is not None:
                    await self.cookie_store.save(response.set_cookies)
        except TransportError as e:
            self._stop_spinner()
            self.renderer.error(f"Error: {e}")
            return 1
        finally:
            self._stop_spinner()

        return 0
