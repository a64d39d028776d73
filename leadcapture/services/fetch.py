# leadcapture/services/fetch.py
from __future__ import annotations

import asyncio
from typing import Any

import httpx

from leadcapture.core.exceptions import FetchError, FetchTimeoutError, HttpError
from leadcapture.core.logging import get_structlog_logger

logger = get_structlog_logger(__name__)

DEFAULT_TIMEOUT_MS = 2000


async def fetch_with_timeout(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    **kwargs: Any,
) -> httpx.Response:
    """
    Issue a request that is cancelled if no response arrives within timeout_ms.

    Returns the response only for a 2xx status. Timeouts, transport errors
    and bad statuses all raise a FetchError subclass.
    """
    try:
        response = await asyncio.wait_for(
            client.request(method, url, **kwargs),
            timeout=timeout_ms / 1000,
        )
    except asyncio.TimeoutError:
        error: FetchError = FetchTimeoutError(timeout_ms, details={"url": url})
        logger.error("fetch.failed", url=url, method=method, error=error.message)
        raise error
    except httpx.HTTPError as e:
        logger.error("fetch.failed", url=url, method=method, error=str(e))
        raise FetchError(f"Request failed: {e}", details={"url": url}) from e

    if not response.is_success:
        error = HttpError(response.status_code, details={"url": url})
        logger.error(
            "fetch.failed",
            url=url,
            method=method,
            status_code=response.status_code,
            error=error.message,
        )
        raise error

    return response
