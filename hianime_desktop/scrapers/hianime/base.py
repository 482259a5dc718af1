"""
Base HTTP client for HiAnime page requests
Sends browser-like headers and surfaces transport failures
"""
import asyncio
import logging
from typing import Dict, Optional

import aiohttp

from ...core.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}


class HianimeBaseClient:
    """Base HTTP client for HiAnime pages. No retries happen at this layer."""

    def __init__(
        self,
        base_url: str,
        default_headers: Optional[Dict[str, str]] = None,
        timeout: float = 20,
    ):
        self.base_url = base_url.rstrip("/")
        self.default_headers = {**DEFAULT_HEADERS, **(default_headers or {})}
        self.timeout = timeout

    def url_for(self, path: str) -> str:
        """Join a site-relative path onto the base URL"""
        return f"{self.base_url}/{path.lstrip('/')}"

    async def fetch(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """
        GET a page and return its body as text

        Args:
            url: Absolute URL to request
            headers: Per-call headers, merged over the defaults

        Returns:
            Response body

        Raises:
            TransportError: on a non-success status or a network failure
        """
        request_headers = {**self.default_headers, **(headers or {})}
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, headers=request_headers) as resp:
                    if not 200 <= resp.status < 300:
                        logger.warning(f"[HianimeClient] {url} returned {resp.status}")
                        raise TransportError(url, status=resp.status)
                    return await resp.text()
        except asyncio.TimeoutError as exc:
            logger.warning(f"[HianimeClient] Timeout for {url}")
            raise TransportError(url, message=f"Request timed out for {url}") from exc
        except aiohttp.ClientError as exc:
            logger.warning(f"[HianimeClient] Error for {url}: {exc}")
            raise TransportError(url, message=f"Request failed for {url}: {exc}") from exc
