"""Flat-file cookie persistence."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

# Always appended to the persisted cookie list
SENTINEL_COOKIE = "hello=world"


def strip_cookie_attributes(line: str) -> str:
    """Keep the ``name=value`` part of a Set-Cookie line."""
    return line.split(";", 1)[0].strip()


class CookieStore:
    """
    Cookie file read before a request and rewritten after the response.

    The file holds one cookie per line. Only ``name=value`` pairs survive a
    round trip; attributes such as Path or Expires are dropped on load.

    Example:
        store = CookieStore(Path("cookies.txt"))
        header = await store.load()
        ...
        await store.save(response.set_cookies)
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    async def load(self) -> str | None:
        """
        Read the file into a Cookie header value.

        Returns:
            ``"a=1; b=2"``, or None when the file does not exist
        """
        if not self.path.exists():
            logger.debug(f"No cookie file at {self.path}")
            return None

        try:
            text = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable cookie file {self.path}: {e}")
            return None

        pairs = [strip_cookie_attributes(line) for line in text.splitlines()]
        return "; ".join(pair for pair in pairs if pair)

    async def save(self, set_cookies: Sequence[str]) -> bool:
        """
        Overwrite the file with the response's Set-Cookie values.

        Nothing is written when the response set no cookies. Write
        failures are logged and reported through the return value.

        Args:
            set_cookies: Set-Cookie header values from the response

        Returns:
            True if the file was written
        """
        if not set_cookies:
            return False

        entries = [*set_cookies, SENTINEL_COOKIE]
        try:
            await asyncio.to_thread(self.path.write_text, "\n".join(entries), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save cookies to {self.path}: {e}")
            return False

        logger.debug(f"Saved {len(entries)} cookies to {self.path}")
        return True
