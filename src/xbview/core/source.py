"""
Source loading for listings.

Listings come from local files or from http(s) URLs.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from .errors import make_source_error

logger = logging.getLogger(__name__)

_REMOTE_SCHEMES = ("http://", "https://")


def is_remote(location: str) -> bool:
    return location.lower().startswith(_REMOTE_SCHEMES)


def load_source(
    location: str | Path,
    *,
    encoding: str = "utf-8",
    timeout: float = 10.0,
    client: httpx.Client | None = None,
) -> str:
    """
    Load listing text from a file path or URL.

    Args:
        location: Local path or http(s) URL
        encoding: Text encoding for local files
        timeout: HTTP timeout in seconds, used when no client is given
        client: Optional httpx client for remote listings

    Returns:
        The listing text

    Raises:
        SourceError: If the listing cannot be read or fetched
    """
    location = str(location)
    logger.info("Loading %s...", location)

    if is_remote(location):
        text = _fetch(location, timeout=timeout, client=client)
    else:
        path = Path(location)
        try:
            text = path.read_text(encoding=encoding)
        except FileNotFoundError as e:
            raise make_source_error("File not found", location) from e
        except UnicodeDecodeError as e:
            raise make_source_error(f"Cannot decode file as {encoding}: {e.reason}", location) from e
        except OSError as e:
            raise make_source_error(f"Cannot read file: {e.strerror}", location) from e

    logger.info("Loaded %d characters", len(text))
    return text


def _fetch(url: str, *, timeout: float, client: httpx.Client | None) -> str:
    try:
        if client is not None:
            response = client.get(url)
        else:
            with httpx.Client(timeout=timeout, follow_redirects=True) as owned:
                response = owned.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise make_source_error(f"HTTP {e.response.status_code} fetching listing", url) from e
    except httpx.HTTPError as e:
        raise make_source_error(f"Cannot fetch listing: {e}", url) from e
    return response.text
