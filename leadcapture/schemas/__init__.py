# leadcapture/schemas/__init__.py
"""
Pydantic schemas for outbound payloads and the web relay.
"""

from leadcapture.schemas.submission import (
    ElementVisibility,
    FormSubmitRequest,
    FormSubmitResponse,
    SubmissionContext,
    SubmissionField,
    SubmissionPayload,
)

__all__ = [
    "ElementVisibility",
    "FormSubmitRequest",
    "FormSubmitResponse",
    "SubmissionContext",
    "SubmissionField",
    "SubmissionPayload",
]
