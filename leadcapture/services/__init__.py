# leadcapture/services/__init__.py
"""
Form pipeline services: verification, attribution, visitor state, submission.
"""

from leadcapture.services.attribution import (
    FIELD_MAPPINGS,
    DictStorage,
    JsonFileStorage,
    KeyValueStore,
    get_additional_fields,
)
from leadcapture.services.email_validation import (
    EmailValidationResult,
    EmailVerificationClient,
    ValidationOutcome,
    is_valid_email,
    validate_email,
)
from leadcapture.services.error_display import (
    ElementStateView,
    ErrorKind,
    FormView,
    display_error_messages,
)
from leadcapture.services.fetch import fetch_with_timeout
from leadcapture.services.hubspot import HubSpotFormsClient
from leadcapture.services.ip_lookup import get_ip_address
from leadcapture.services.submission import (
    FormSubmitter,
    PageContext,
    SubmissionOutcome,
    SubmissionState,
    SubmitEvent,
    load_form,
)
from leadcapture.services.visitor import get_hubspot_cookie

__all__ = [
    # Attribution
    "FIELD_MAPPINGS",
    "DictStorage",
    "JsonFileStorage",
    "KeyValueStore",
    "get_additional_fields",
    # Email verification
    "EmailValidationResult",
    "EmailVerificationClient",
    "ValidationOutcome",
    "is_valid_email",
    "validate_email",
    # Error display
    "ElementStateView",
    "ErrorKind",
    "FormView",
    "display_error_messages",
    # Transport
    "fetch_with_timeout",
    "get_ip_address",
    "HubSpotFormsClient",
    # Submission
    "FormSubmitter",
    "PageContext",
    "SubmissionOutcome",
    "SubmissionState",
    "SubmitEvent",
    "load_form",
    # Visitor
    "get_hubspot_cookie",
]
