"""Fetch collaborator: the slow remote endpoint and the HTTP calls made to it."""

from __future__ import annotations

import logging

import httpx

from .errors import DecodeError, FetchError, NetworkError, StatusError

logger = logging.getLogger(__name__)

DELAY_HOST = "deelay.me"
DELAY_MS = 1000


def slowly(delay_ms: int = DELAY_MS) -> httpx.URL:
    """Build the URL that answers after *delay_ms* by redirecting to google.com.

    >>> str(slowly(1000))
    'https://deelay.me//https:/1000/google.com'
    """

    return httpx.URL(f"https://{DELAY_HOST}//https:/{delay_ms}/google.com")


def open_client(*, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Create the async client used by the pipelines.

    Redirects are followed since the delay host answers with one. No timeout
    is configured: a hung request hangs its task.
    """

    return httpx.AsyncClient(transport=transport, follow_redirects=True, timeout=None)


async def fetch(client: httpx.AsyncClient, url: httpx.URL | str) -> httpx.Response:
    """Issue one GET and return the fully read response.

    Raises :class:`StatusError` for a non-success status, :class:`NetworkError`
    for transport failures and :class:`FetchError` for a malformed URL. The
    underlying httpx exception is always chained.
    """

    target = str(url)
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise StatusError(target, exc.response.status_code) from exc
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
        raise FetchError(target, str(exc) or type(exc).__name__) from exc
    except httpx.HTTPError as exc:
        raise NetworkError(target, str(exc) or type(exc).__name__) from exc
    logger.debug("GET %s -> %s (%d bytes)", target, response.status_code, len(response.content))
    return response


def decode_text(response: httpx.Response) -> str:
    """Strictly decode the body using the declared charset, defaulting to UTF-8."""

    encoding = response.charset_encoding or "utf-8"
    try:
        return response.content.decode(encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        raise DecodeError(f"response body is not valid {encoding} text") from exc


__all__ = ["DELAY_HOST", "DELAY_MS", "decode_text", "fetch", "open_client", "slowly"]
