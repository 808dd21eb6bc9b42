import httpx
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Tuple

# Default timeout configuration (in seconds)
DEFAULT_TIMEOUT = 10.0
DEFAULT_CONNECT_TIMEOUT = 5.0
PROBE_TIMEOUT = 5.0

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_client(**kwargs) -> AsyncIterator[httpx.AsyncClient]:
    """
    Opens the HTTP client shared by the page fetch and every file probe.

    The client is closed when the block exits, whichever way it exits.
    Extra keyword arguments are passed to httpx.AsyncClient (e.g. transport).
    """
    timeout_config = httpx.Timeout(timeout=DEFAULT_TIMEOUT, connect=DEFAULT_CONNECT_TIMEOUT)
    async with httpx.AsyncClient(timeout=timeout_config, follow_redirects=True, **kwargs) as client:
        yield client


def _header_block(response: httpx.Response) -> str:
    """Rebuild the raw header block for a response and every redirect before it."""
    lines = []
    for resp in list(response.history) + [response]:
        lines.append(f"{resp.http_version} {resp.status_code} {resp.reason_phrase}")
        for name, value in resp.headers.raw:
            lines.append(f"{name.decode('latin-1')}: {value.decode('latin-1')}")
        lines.append("")
    return "\r\n".join(lines)


async def fetch_page(client: httpx.AsyncClient, url: str, capture_headers: bool = True) -> Tuple[str, str]:
    """
    Fetches a page, following redirects.

    Args:
        client: Open client from open_client()
        url: The URL to fetch
        capture_headers: Also return the raw header block

    Returns:
        (body, raw_headers). Both are empty strings on transport failure;
        raw_headers is empty when capture_headers is False.
    """
    logger.debug(f"HTTP GET {url} (timeout: {DEFAULT_TIMEOUT}s)")
    try:
        response = await client.get(url)
    except httpx.TimeoutException as e:
        logger.error(f"HTTP timeout for {url}: {e}")
        return "", ""
    except (httpx.RequestError, httpx.InvalidURL) as e:
        logger.error(f"HTTP request failed for {url}: {e}")
        return "", ""

    logger.debug(f"HTTP {response.status_code} {url} ({len(response.text)} bytes)")
    raw_headers = _header_block(response) if capture_headers else ""
    return response.text, raw_headers


async def file_exists(client: httpx.AsyncClient, url: str) -> bool:
    """
    Issues a HEAD request and reports whether the resource answered with a
    non-error status. Transport failures count as unreachable.
    """
    try:
        response = await client.head(url, follow_redirects=False, timeout=PROBE_TIMEOUT)
    except (httpx.RequestError, httpx.InvalidURL) as e:
        logger.debug(f"Probe failed for {url}: {e}")
        return False

    reachable = response.status_code < 400
    logger.debug(f"Probe {url}: HTTP {response.status_code} ({'reachable' if reachable else 'missing'})")
    return reachable
