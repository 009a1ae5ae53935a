from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional
from datetime import datetime

from .errors import APIError
from .utils import is_valid_http_url

class LinkCreate(BaseModel):
    url: str
    note: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "LinkCreate":
        if not isinstance(payload, dict):
            payload = {}
        url = payload.get("url")
        url = url.strip() if isinstance(url, str) else ""
        if not url or not is_valid_http_url(url):
            raise APIError(400, "A valid http/https URL is required")
        note = payload.get("note")
        return cls(url=url, note=note.strip() if isinstance(note, str) else None)

class LinkUpdate(BaseModel):
    """Partial update; only fields present in the payload are applied."""

    target_url: Optional[str] = None
    note: Optional[str] = None
    is_active: Optional[bool] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "LinkUpdate":
        if not isinstance(payload, dict):
            payload = {}
        fields: dict[str, Any] = {}
        if "target_url" in payload:
            if not is_valid_http_url(payload["target_url"]):
                raise APIError(400, "Invalid target_url")
            fields["target_url"] = payload["target_url"]
        if "note" in payload:
            note = payload["note"]
            if note is not None and not isinstance(note, str):
                raise APIError(400, "Invalid note")
            fields["note"] = note
        if "is_active" in payload:
            fields["is_active"] = bool(payload["is_active"])
        if not fields:
            raise APIError(400, "No fields to update")
        return cls(**fields)

    def values(self) -> dict[str, Any]:
        return self.model_dump(include=self.model_fields_set)

class LinkOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    target_url: str
    note: Optional[str]
    is_active: bool
    is_deleted: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

class LinkCreated(BaseModel):
    code: str

class LinkPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data: list[LinkOut]
    page: int
    page_size: int = Field(alias="pageSize")
    total: int

class LinkEnvelope(BaseModel):
    data: Optional[LinkOut]

class Health(BaseModel):
    ok: bool = True
    timestamp: str

class Ok(BaseModel):
    ok: bool = True
