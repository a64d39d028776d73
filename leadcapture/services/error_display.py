# leadcapture/services/error_display.py
from __future__ import annotations

from enum import Enum
from typing import Optional

from leadcapture.schemas.submission import ElementVisibility
from leadcapture.services.email_validation import ValidationOutcome

ERROR_CONTAINER_SELECTOR = ".form-error-messages-container"
INVALID_EMAIL_SELECTOR = ".main-demo-form-invalid-email-error-message"
TOO_MANY_REQUESTS_SELECTOR = ".main-demo-form-too-many-requests"


class ErrorKind(str, Enum):
    INVALID_EMAIL = "invalid_email"
    TOO_MANY_REQUESTS = "too_many_requests"


class FormView:
    """UI capabilities the submission pipeline drives."""

    def clear_errors(self) -> None:
        raise NotImplementedError

    def show_error(self, kind: Optional[ErrorKind]) -> None:
        """Reveal the error container and, when kind is set, only that message."""
        raise NotImplementedError

    def redirect(self, url: str) -> None:
        raise NotImplementedError


class ElementStateView(FormView):
    """
    Tracks visibility of the form's error elements and the pending redirect.

    Element keys are the selectors the host page exposes next to the form.
    """

    def __init__(self) -> None:
        self.visible = {
            ERROR_CONTAINER_SELECTOR: False,
            INVALID_EMAIL_SELECTOR: False,
            TOO_MANY_REQUESTS_SELECTOR: False,
        }
        self.redirect_url: Optional[str] = None

    def clear_errors(self) -> None:
        for selector in self.visible:
            self.visible[selector] = False

    def show_error(self, kind: Optional[ErrorKind]) -> None:
        self.visible[ERROR_CONTAINER_SELECTOR] = True
        self.visible[INVALID_EMAIL_SELECTOR] = kind == ErrorKind.INVALID_EMAIL
        self.visible[TOO_MANY_REQUESTS_SELECTOR] = kind == ErrorKind.TOO_MANY_REQUESTS

    def redirect(self, url: str) -> None:
        self.redirect_url = url

    def snapshot(self) -> ElementVisibility:
        return ElementVisibility(
            error_container=self.visible[ERROR_CONTAINER_SELECTOR],
            invalid_email_message=self.visible[INVALID_EMAIL_SELECTOR],
            too_many_requests_message=self.visible[TOO_MANY_REQUESTS_SELECTOR],
        )


def display_error_messages(view: FormView, result: str) -> None:
    # Unrecognized codes leave the container visible with no message
    if result == ValidationOutcome.TOO_MANY_REQUESTS.value:
        view.show_error(ErrorKind.TOO_MANY_REQUESTS)
    elif result == ValidationOutcome.INVALID_EMAIL.value:
        view.show_error(ErrorKind.INVALID_EMAIL)
    else:
        view.show_error(None)
