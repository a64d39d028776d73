# leadcapture/routes/__init__.py
"""
Web relay route handlers.
"""

from leadcapture.routes.forms import router as forms_router
from leadcapture.routes.health import router as health_router

__all__ = [
    "forms_router",
    "health_router",
]
