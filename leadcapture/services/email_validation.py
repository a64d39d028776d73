# leadcapture/services/email_validation.py
"""Email syntax pre-filter and the remote verification client."""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import httpx

from leadcapture.core.config import settings
from leadcapture.core.exceptions import FetchError, HttpError
from leadcapture.core.logging import get_structlog_logger
from leadcapture.services.fetch import fetch_with_timeout

logger = get_structlog_logger(__name__)

_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

HTTP_TOO_MANY_REQUESTS = 429


class ValidationOutcome(str, Enum):
    # Verdicts returned by the verification service
    VALID = "valid"
    INVALID = "invalid"
    UNKNOWN = "unknown"
    # Local result codes
    INVALID_EMAIL = "invalid_email"
    TOO_MANY_REQUESTS = "too_many_requests"
    ERROR = "error"


@dataclass(frozen=True)
class EmailValidationResult:
    is_valid: bool
    result: str


def is_valid_email(email: Optional[str]) -> bool:
    if not email:
        return False
    return _EMAIL_PATTERN.fullmatch(email) is not None


def _rejected(outcome: ValidationOutcome) -> EmailValidationResult:
    return EmailValidationResult(is_valid=False, result=outcome.value)


async def validate_email(
    email: str,
    *,
    client: httpx.AsyncClient,
    endpoint: Optional[str] = None,
    timeout_ms: Optional[int] = None,
) -> EmailValidationResult:
    """
    Verify an email address against the remote verification service.

    Syntactically invalid addresses never reach the network. The service's
    "invalid" and "unknown" verdicts both collapse to "invalid_email"; only a
    literal "valid" verdict is accepted. Rate limiting maps to
    "too_many_requests" and every other failure to "error".
    """
    if not is_valid_email(email):
        return _rejected(ValidationOutcome.INVALID_EMAIL)

    endpoint = endpoint or settings.email_validation_url
    timeout_ms = timeout_ms or settings.email_validation_timeout_ms

    try:
        response = await fetch_with_timeout(
            client,
            "POST",
            endpoint,
            timeout_ms=timeout_ms,
            params={"email": email},
            headers={"Content-Type": "application/json"},
        )
        data = response.json()
        if not isinstance(data, dict) or not isinstance(data.get("result"), str):
            raise ValueError("verification response has no result")
    except HttpError as e:
        if e.status_code == HTTP_TOO_MANY_REQUESTS:
            logger.warning("email_validation.rate_limited", endpoint=endpoint)
            return _rejected(ValidationOutcome.TOO_MANY_REQUESTS)
        logger.error("email_validation.failed", error=e.message, status_code=e.status_code)
        return _rejected(ValidationOutcome.ERROR)
    except (FetchError, ValueError, RecursionError) as e:
        logger.error("email_validation.failed", error=str(e))
        return _rejected(ValidationOutcome.ERROR)

    result = data["result"]
    if result in (ValidationOutcome.INVALID.value, ValidationOutcome.UNKNOWN.value):
        return _rejected(ValidationOutcome.INVALID_EMAIL)

    return EmailValidationResult(
        is_valid=result == ValidationOutcome.VALID.value,
        result=result,
    )


class EmailVerificationClient:
    """Binds an HTTP client to the verification endpoint settings."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        endpoint: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ):
        self.client = client
        self.endpoint = endpoint or settings.email_validation_url
        self.timeout_ms = timeout_ms or settings.email_validation_timeout_ms

    async def validate(self, email: str) -> EmailValidationResult:
        return await validate_email(
            email,
            client=self.client,
            endpoint=self.endpoint,
            timeout_ms=self.timeout_ms,
        )
