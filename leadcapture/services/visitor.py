# leadcapture/services/visitor.py
from __future__ import annotations

from typing import Optional

from leadcapture.core.config import settings


def get_hubspot_cookie(cookie_header: Optional[str], name: Optional[str] = None) -> Optional[str]:
    """
    Return the raw value of the visitor token cookie, or None.

    A cookie that appears more than once is treated as absent.
    """
    name = name or settings.visitor_cookie_name
    parts = f"; {cookie_header or ''}".split(f"; {name}=")
    if len(parts) == 2:
        return parts[1].split(";")[0]
    return None
