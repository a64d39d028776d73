# leadcapture/services/ip_lookup.py
from __future__ import annotations

from typing import Optional

import httpx

from leadcapture.core.config import settings
from leadcapture.core.logging import get_structlog_logger

logger = get_structlog_logger(__name__)


async def get_ip_address(
    client: httpx.AsyncClient,
    url: Optional[str] = None,
) -> Optional[str]:
    """Resolve the caller's public IP. Best effort: any failure yields None."""
    url = url or settings.ip_lookup_url
    try:
        response = await client.get(url, timeout=None)
        data = response.json()
        ip = data.get("ip") if isinstance(data, dict) else None
        if not ip:
            raise ValueError("IP address not found")
        return str(ip)
    except (httpx.HTTPError, ValueError, RecursionError) as e:
        logger.warning("ip_lookup.failed", url=url, error=str(e))
        return None
