# leadcapture/services/hubspot.py
from __future__ import annotations

from typing import Optional

import httpx

from leadcapture.core.config import settings
from leadcapture.core.exceptions import SubmissionTransportError
from leadcapture.schemas.submission import SubmissionPayload


class HubSpotFormsClient:
    """Posts submissions to the HubSpot Forms v3 integration endpoint."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        form_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        self.client = client
        self.form_url = form_url or settings.hubspot_form_url
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.submission_timeout_seconds

    async def submit(self, payload: SubmissionPayload) -> httpx.Response:
        try:
            response = await self.client.post(
                self.form_url,
                json=payload.to_json(),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as e:
            raise SubmissionTransportError(
                f"Error submitting form: {e}",
                details={"url": self.form_url},
            ) from e

        if not response.is_success:
            raise SubmissionTransportError(
                f"Error submitting form: HTTP {response.status_code}",
                details={"url": self.form_url, "status_code": response.status_code},
            )

        return response
