"""
API Request and Response Schemas

This module defines the Pydantic models exchanged with the TinyLink API.
Field names and casing follow the wire contract exactly.

Design Principles:
- Request models: Define what the client sends
- Response models: Define what the client accepts back
- Records are frozen: code and created_at never change once created,
  and click data is server-owned
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LinkRecord(BaseModel):
    """A shortened link as returned by the API."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    code: str = Field(..., min_length=1, description="Unique short code")
    target_url: str = Field(..., description="The original long URL")
    total_clicks: int = Field(default=0, ge=0, description="Redirect count (server-owned)")
    last_clicked_at: Optional[datetime] = Field(default=None, description="Last redirect time")
    created_at: Optional[datetime] = Field(default=None, description="Creation time")


class CreateLinkRequest(BaseModel):
    """Request body for POST /api/links."""
    url: str = Field(..., description="The long URL to shorten")
    code: Optional[str] = Field(default=None, description="Custom short code")

    def to_payload(self) -> dict:
        """JSON body, without the code key when no code was requested."""
        return self.model_dump(exclude_none=True)


class ErrorBody(BaseModel):
    """Optional error body of a rejected request."""
    error: Optional[str] = None
