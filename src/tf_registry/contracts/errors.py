"""
JSON-API error document contract.

The registry reports failures as::

    {"errors": [{"status": "422", "title": "invalid attribute", "detail": "Version has already been taken"}]}

Some endpoints answer with bare strings instead (``{"errors": ["not found"]}``);
both shapes normalize to APIErrorObject.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


class APIErrorObject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: Optional[Union[int, str]] = None
    code: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    source: Optional[Dict[str, Any]] = None

    @property
    def message(self) -> str:
        return self.detail or self.title or self.code or "unknown error"


class ErrorDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    errors: List[APIErrorObject]

    @field_validator("errors", mode="before")
    @classmethod
    def _wrap_plain_messages(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{"detail": item} if isinstance(item, str) else item for item in value]
        return value


__all__ = ["APIErrorObject", "ErrorDocument"]
