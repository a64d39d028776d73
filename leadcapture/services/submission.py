# leadcapture/services/submission.py
"""
Submit-event orchestration for the demo form.

One attempt moves through idle -> validating -> (rejected | submitting) ->
(redirected | failed). A missing visitor token or email field aborts the
attempt before anything else happens. Validation failures are shown to the
visitor; submission failures are only logged.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional
from urllib.parse import urlsplit

import httpx

from leadcapture.core.config import settings
from leadcapture.core.exceptions import (
    MissingFormElementError,
    MissingVisitorTokenError,
    SubmissionTransportError,
)
from leadcapture.core.logging import get_structlog_logger
from leadcapture.schemas.submission import SubmissionContext, SubmissionField, SubmissionPayload
from leadcapture.services.attribution import KeyValueStore, get_additional_fields
from leadcapture.services.email_validation import EmailValidationResult, EmailVerificationClient
from leadcapture.services.error_display import FormView, display_error_messages
from leadcapture.services.hubspot import HubSpotFormsClient
from leadcapture.services.ip_lookup import get_ip_address
from leadcapture.services.visitor import get_hubspot_cookie

logger = get_structlog_logger(__name__)

VALIDATION_RESULT_FIELD = "neverbouncevalidationresult"

# Returns the raw cookie header for the current visitor
CookieSource = Callable[[], Optional[str]]


class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REJECTED = "rejected"
    SUBMITTING = "submitting"
    REDIRECTED = "redirected"
    FAILED = "failed"
    ABORTED = "aborted"


class SubmitEvent:
    def __init__(self, form: Mapping[str, str]):
        self.form: Dict[str, str] = dict(form)
        self.default_prevented = False

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass(frozen=True)
class PageContext:
    page_uri: str
    page_name: str = ""

    @property
    def origin(self) -> str:
        parts = urlsplit(self.page_uri)
        return f"{parts.scheme or 'https'}://{parts.netloc}"


@dataclass(frozen=True)
class SubmissionOutcome:
    state: SubmissionState
    validation: Optional[EmailValidationResult] = None
    redirect_url: Optional[str] = None


def build_redirect_url(page: PageContext, email: str, path: Optional[str] = None) -> str:
    path = path or settings.redirect_path
    return f"{page.origin}{path}?email={email}"


def build_submission_payload(
    *,
    email: str,
    validation: EmailValidationResult,
    additional_fields: List[SubmissionField],
    hutk: str,
    page: PageContext,
    ip_address: Optional[str],
) -> SubmissionPayload:
    fields = [
        SubmissionField(name="email", value=email),
        SubmissionField(name=VALIDATION_RESULT_FIELD, value=validation.result),
        *additional_fields,
    ]
    return SubmissionPayload(
        fields=fields,
        context=SubmissionContext(
            hutk=hutk,
            page_uri=page.page_uri,
            page_name=page.page_name,
            ip_address=ip_address,
        ),
    )


class FormSubmitter:
    def __init__(
        self,
        *,
        view: FormView,
        verifier: EmailVerificationClient,
        forms_client: HubSpotFormsClient,
        cookies: CookieSource,
        storage: KeyValueStore,
        page: PageContext,
        ip_address: Optional[str] = None,
    ):
        self.view = view
        self.verifier = verifier
        self.forms_client = forms_client
        self.cookies = cookies
        self.storage = storage
        self.page = page
        self.ip_address = ip_address
        self.state = SubmissionState.IDLE

    def _transition(self, state: SubmissionState, **kw) -> None:
        logger.debug("submission.state", from_state=self.state.value, to_state=state.value, **kw)
        self.state = state

    def _finish(self, outcome: SubmissionOutcome) -> SubmissionOutcome:
        self._transition(outcome.state)
        self.state = SubmissionState.IDLE
        return outcome

    async def handle_submit(self, event: SubmitEvent) -> SubmissionOutcome:
        event.prevent_default()

        email = event.form.get("email")
        if email is None:
            error = MissingFormElementError("Email input not found")
            logger.error("form.email_missing", code=error.code, error=error.message)
            return self._finish(SubmissionOutcome(state=SubmissionState.ABORTED))

        return await self.submit_form(email)

    async def submit_form(self, email: str) -> SubmissionOutcome:
        additional_fields = get_additional_fields(self.storage)

        hutk = get_hubspot_cookie(self.cookies())
        if not hutk:
            error = MissingVisitorTokenError()
            logger.error("visitor_token.missing", code=error.code, error=error.message)
            return self._finish(SubmissionOutcome(state=SubmissionState.ABORTED))

        self._transition(SubmissionState.VALIDATING)
        self.view.clear_errors()
        validation = await self.verifier.validate(email)

        if not validation.is_valid:
            logger.info("submission.rejected", result=validation.result)
            display_error_messages(self.view, validation.result)
            return self._finish(SubmissionOutcome(state=SubmissionState.REJECTED, validation=validation))

        payload = build_submission_payload(
            email=email,
            validation=validation,
            additional_fields=additional_fields,
            hutk=hutk,
            page=self.page,
            ip_address=self.ip_address,
        )

        self._transition(SubmissionState.SUBMITTING, field_count=len(payload.fields))
        try:
            await self.forms_client.submit(payload)
        except SubmissionTransportError as e:
            logger.error("submission.failed", code=e.code, error=e.message, **e.details)
            return self._finish(SubmissionOutcome(state=SubmissionState.FAILED, validation=validation))

        redirect_url = build_redirect_url(self.page, email)
        logger.info("submission.succeeded", redirect_url=redirect_url)
        self.view.redirect(redirect_url)
        return self._finish(
            SubmissionOutcome(
                state=SubmissionState.REDIRECTED,
                validation=validation,
                redirect_url=redirect_url,
            )
        )


async def load_form(
    view: Optional[FormView],
    *,
    client: httpx.AsyncClient,
    cookies: CookieSource,
    storage: KeyValueStore,
    page: PageContext,
    verifier: Optional[EmailVerificationClient] = None,
    forms_client: Optional[HubSpotFormsClient] = None,
) -> Optional[FormSubmitter]:
    """
    Resolve the visitor IP, then wire a submitter to the form.

    The IP lookup settles before the submitter exists, so every submission
    sees either the resolved address or a definitive None.
    """
    ip_address = await get_ip_address(client)

    if view is None:
        error = MissingFormElementError("Form not found")
        logger.error("form.not_found", code=error.code, error=error.message)
        return None

    return FormSubmitter(
        view=view,
        verifier=verifier or EmailVerificationClient(client),
        forms_client=forms_client or HubSpotFormsClient(client),
        cookies=cookies,
        storage=storage,
        page=page,
        ip_address=ip_address,
    )
