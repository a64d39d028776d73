# leadcapture/middleware/__init__.py
from leadcapture.middleware.request_id import RequestIdMiddleware

__all__ = ["RequestIdMiddleware"]
