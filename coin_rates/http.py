"""JSON-over-HTTP fetch shared by the oracle and fiat clients."""
from __future__ import annotations

import asyncio
import json
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from .errors import SourceUnavailableError

logger = logging.getLogger(__name__)


async def fetch_json(
    url: str, *, timeout: float, user_agent: str = ""
) -> tuple[Any, int]:
    """GET ``url`` and decode the body as JSON.

    Returns the decoded document and the size of the (decompressed) body.
    Every failure is reported as SourceUnavailableError.
    """
    headers = {"Accept-Encoding": "gzip"}
    if user_agent:
        headers["User-Agent"] = user_agent

    ssl_context = ssl.create_default_context(cafile=certifi.where())
    connector = aiohttp.TCPConnector(ssl=ssl_context)

    try:
        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.get(
                url,
                headers=headers,
                allow_redirects=False,
                timeout=aiohttp.ClientTimeout(
                    sock_connect=timeout, sock_read=timeout
                ),
            ) as response:
                if response.status != 200:
                    raise SourceUnavailableError(
                        f"HTTP {response.status} from {url}", url=url
                    )
                body = await response.text()
    except SourceUnavailableError:
        raise
    except (aiohttp.ClientError, asyncio.TimeoutError, OSError, UnicodeDecodeError) as e:
        raise SourceUnavailableError(f"Request to {url} failed: {e!r}", url=url) from e

    try:
        return json.loads(body), len(body)
    except ValueError as e:
        raise SourceUnavailableError(f"Invalid JSON from {url}: {e}", url=url) from e
