# leadcapture/routes/forms.py
from __future__ import annotations

from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request, status

from leadcapture.core.config import settings
from leadcapture.core.logging import get_structlog_logger
from leadcapture.schemas.submission import FormSubmitRequest, FormSubmitResponse
from leadcapture.services.attribution import DictStorage
from leadcapture.services.email_validation import EmailVerificationClient
from leadcapture.services.error_display import ElementStateView
from leadcapture.services.hubspot import HubSpotFormsClient
from leadcapture.services.submission import FormSubmitter, PageContext, SubmitEvent

router = APIRouter()


async def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def client_ip(request: Request) -> Optional[str]:
    """
    Visitor address forwarded to HubSpot as the submission's ipAddress.

    X-Forwarded-For is caller-controlled, so its first hop is only used when
    TRUST_FORWARDED_FOR is set. Otherwise the peer address is used.
    """
    forwarded = request.headers.get("X-Forwarded-For") if settings.trust_forwarded_for else None
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.client.host if request.client else None


@router.post(
    "/forms/demo/submit",
    response_model=FormSubmitResponse,
    status_code=status.HTTP_200_OK,
    summary="Verify and relay a demo-form submission"
)
async def submit_demo_form(
    body: FormSubmitRequest,
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> FormSubmitResponse:
    logger = get_structlog_logger().bind(route="/forms/demo/submit", action="submit")

    view = ElementStateView()
    storage = DictStorage(
        {settings.attribution_storage_key: body.attribution} if body.attribution is not None else {}
    )
    submitter = FormSubmitter(
        view=view,
        verifier=EmailVerificationClient(client),
        forms_client=HubSpotFormsClient(client),
        cookies=lambda: request.headers.get("cookie"),
        storage=storage,
        page=PageContext(page_uri=body.page_uri, page_name=body.page_name),
        ip_address=client_ip(request),
    )

    form = {"email": body.email} if body.email is not None else {}
    outcome = await submitter.handle_submit(SubmitEvent(form))

    logger.info("form.handled", state=outcome.state.value)

    return FormSubmitResponse(
        state=outcome.state.value,
        redirect_url=outcome.redirect_url,
        validation_result=outcome.validation.result if outcome.validation else None,
        elements=view.snapshot(),
    )
