from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Technique(BaseModel):
    """
    One selectable enhancement technique as sent by the browser client.

    `id` picks the instruction template, `name` becomes the wrapping tag once sanitized,
    and `pastResult` (when set) replaces the generic improvement label.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str = ""
    checked: bool = False
    past_result: Optional[str] = Field(default=None, alias="pastResult")

    @field_validator("name", mode="before")
    @classmethod
    def _null_name_is_blank(cls, v):
        # Unselected rows from the client may carry `"name": null`.
        return "" if v is None else v


class EnhancementRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    original_prompt: str = Field(..., alias="originalPrompt")
    techniques: List[Technique] = Field(default_factory=list)


class EnhancementResult(BaseModel):
    """
    Response envelope for `POST /api/enhance-prompt`.

    Serialize with `to_payload()` so absent fields are dropped; error bodies are
    exactly `{"status": "error", "error": ...}`.
    """

    status: Literal["completed", "error"]
    original: Optional[str] = None
    enhanced: Optional[str] = None
    improvements: Optional[List[str]] = None
    error: Optional[str] = None

    @classmethod
    def failed(cls, message: str) -> "EnhancementResult":
        return cls(status="error", error=message)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)
