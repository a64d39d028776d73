# leadcapture/core/exceptions.py
from __future__ import annotations

from typing import Any, Dict, Optional


class LeadCaptureError(Exception):
    """Base exception for all form pipeline errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class FetchError(LeadCaptureError):
    """Network request failed: transport error, timeout or bad status."""
    def __init__(self, message: str = "Fetch failed", **kwargs):
        kwargs.setdefault("code", "fetch_error")
        super().__init__(message, **kwargs)


class FetchTimeoutError(FetchError):
    """Request aborted because its deadline elapsed."""
    def __init__(self, timeout_ms: int, **kwargs):
        kwargs.setdefault("code", "fetch_timeout")
        super().__init__(f"Request aborted after {timeout_ms}ms", **kwargs)
        self.timeout_ms = timeout_ms


class HttpError(FetchError):
    """Response arrived with a non-2xx status."""
    def __init__(self, status_code: int, **kwargs):
        kwargs.setdefault("code", "http_error")
        super().__init__(f"HTTP error! status: {status_code}", **kwargs)
        self.status_code = status_code


class MissingVisitorTokenError(LeadCaptureError):
    """Visitor token cookie not present."""
    def __init__(self, message: str = "Hubspot cookie not found", **kwargs):
        kwargs.setdefault("code", "missing_visitor_token")
        super().__init__(message, **kwargs)


class MissingFormElementError(LeadCaptureError):
    """Form or one of its required fields not present."""
    def __init__(self, message: str = "Form element not found", **kwargs):
        kwargs.setdefault("code", "missing_form_element")
        super().__init__(message, **kwargs)


class SubmissionTransportError(LeadCaptureError):
    """Lead-capture submission did not succeed."""
    def __init__(self, message: str = "Error submitting form", **kwargs):
        kwargs.setdefault("code", "submission_transport_error")
        super().__init__(message, **kwargs)
