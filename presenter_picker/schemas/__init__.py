# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""
from typing import Optional

from pydantic import BaseModel, Field


# ── Roster Schemas ──

class RosterTextRequest(BaseModel):
    """Editor contents: one name per line."""
    text: str = Field(default="", max_length=100_000, description="Editor text")


class RosterResponse(BaseModel):
    names: list[str]
    count: int
    count_label: str


class RosterClearResponse(BaseModel):
    status: str
    roster: RosterResponse


# ── Selection Schemas ──

class SelectionStartRequest(BaseModel):
    names: Optional[list[str]] = Field(
        default=None,
        description="Names to draw from; the stored roster is used when omitted",
    )


class RoleAssignment(BaseModel):
    role: str
    name: str


class SelectionStateResponse(BaseModel):
    generation: int
    phase: str
    remaining_seconds: int
    highlighted: list[int]
    candidates: list[str]
    winners: list[str]
    assignments: list[RoleAssignment]


# ── Notification Schemas ──

class NotificationResponse(BaseModel):
    message: str
    visible: bool
    shown_at: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    request_id: Optional[str] = None
