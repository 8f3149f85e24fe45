"""Rate-limited existence probe shared by all registry validators."""

import asyncio
import ssl
import time
from typing import Any, Optional

import aiohttp
import certifi
from aiohttp import ClientTimeout

from .. import __version__
from ..utils.logging import get_logger

# HTTP status codes with a special meaning for the probe
HTTP_NOT_FOUND = 404
HTTP_METHOD_NOT_ALLOWED = 405


class RateLimiter:
    """Enforces a minimum delay between outbound requests.

    One instance is shared by every validator, so the spacing holds across
    registries. The timestamp check and the sleep happen under one lock.
    """

    def __init__(self, min_interval: float = 0.1) -> None:
        """Initialize the rate limiter.

        Args:
            min_interval: Minimum seconds between two requests
        """
        if min_interval < 0:
            raise ValueError("min_interval cannot be negative")
        self.min_interval = min_interval
        self._lock = asyncio.Lock()
        self._last_request: Optional[float] = None

    async def wait(self) -> None:
        """Wait until the next request may be sent and claim the slot."""
        async with self._lock:
            if self._last_request is not None:
                elapsed = time.monotonic() - self._last_request
                if elapsed < self.min_interval:
                    await asyncio.sleep(self.min_interval - elapsed)
            self._last_request = time.monotonic()


class RegistryProbe:
    """Async HTTP client answering "does this URL exist?".

    ``True`` for 2xx, ``False`` for 404 and ``None`` for anything else
    (other status codes, timeouts, connection failures).
    """

    TIMEOUT = ClientTimeout(total=30)
    USER_AGENT = f"depverify/{__version__}"

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        rate_limiter: Optional[RateLimiter] = None
    ) -> None:
        """Initialize the registry probe.

        Args:
            session: Optional aiohttp session (not closed by the probe)
            rate_limiter: Shared rate limiter; a 100 ms limiter by default
        """
        self.logger = get_logger("RegistryProbe")
        self.rate_limiter = rate_limiter or RateLimiter()
        self._session = session
        self._owns_session = session is None
        self._ssl_context = ssl.create_default_context(cafile=certifi.where())

    async def __aenter__(self) -> "RegistryProbe":
        """Async context manager entry."""
        self._get_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the session if the probe created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def check_url_exists(self, url: str) -> Optional[bool]:
        """Probe a URL with HEAD, falling back to GET on 405.

        Args:
            url: Registry URL of a package

        Returns:
            True if it exists, False if it does not, None if undetermined
        """
        try:
            status = await self._request("HEAD", url)
            if status == HTTP_METHOD_NOT_ALLOWED:
                status = await self._request("GET", url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.debug(f"Request to {url} failed: {e!r}")
            return None

        if 200 <= status < 300:
            return True
        if status == HTTP_NOT_FOUND:
            return False

        self.logger.debug(f"Unexpected status {status} from {url}")
        return None

    async def _request(self, method: str, url: str) -> int:
        """Send one rate-limited request and return its status code."""
        await self.rate_limiter.wait()
        session = self._get_session()
        async with session.request(method, url, allow_redirects=True) as response:
            return response.status

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session.

        Returns:
            aiohttp ClientSession
        """
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(ssl=self._ssl_context)
            self._session = aiohttp.ClientSession(
                timeout=self.TIMEOUT,
                connector=connector,
                headers={"User-Agent": self.USER_AGENT},
            )
            self._owns_session = True
        return self._session
