# leadcapture/schemas/submission.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SubmissionField(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: Any


class SubmissionContext(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hutk: str
    page_uri: str = Field(alias="pageUri")
    page_name: str = Field(alias="pageName")
    ip_address: Optional[str] = Field(default=None, alias="ipAddress")


class SubmissionPayload(BaseModel):
    fields: List[SubmissionField]
    context: SubmissionContext

    def to_json(self) -> Dict[str, Any]:
        # ipAddress stays in the body as null when it could not be resolved
        return self.model_dump(by_alias=True)


class FormSubmitRequest(BaseModel):
    email: Optional[str] = Field(default=None, max_length=320)
    page_uri: str = Field(min_length=1, max_length=2048)
    page_name: str = Field(default="", max_length=512)
    # Raw attribution record text, as persisted by the page's tracking script
    attribution: Optional[str] = Field(default=None, max_length=65536)


class ElementVisibility(BaseModel):
    error_container: bool
    invalid_email_message: bool
    too_many_requests_message: bool


class FormSubmitResponse(BaseModel):
    state: str
    redirect_url: Optional[str] = None
    validation_result: Optional[str] = None
    elements: ElementVisibility
