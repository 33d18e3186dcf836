"""Pydantic data models for supervisor metrics.

Per-ticket SLA annotations, per-support-agent resolution metrics and the
filter applied to the supervisor ticket table.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from src.ticketfast.tickets.schemas import TicketStatus

SlaStatus = Literal["ok", "warning", "exceeded"]


class SupportAgent(BaseModel):
    """A user with the support role."""

    id: str
    full_name: str
    email: str


class TicketWithMetrics(BaseModel):
    """A ticket annotated with timing metrics for the supervisor table.

    Attributes:
        resolution_time_hours: Hours from creation to resolution, rounded to
            two decimals; None while unresolved.
        time_elapsed_minutes: Whole minutes since creation at ``now``.
        sla_status: SLA band for the elapsed time and urgency.
    """

    id: str
    description: str
    status: TicketStatus
    created_at: datetime
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[str] = None
    resolved_by_name: Optional[str] = None
    resolution_time_hours: Optional[float] = None
    created_by_name: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    is_urgent: bool = False
    time_elapsed_minutes: int
    sla_status: SlaStatus


class SupportMetrics(BaseModel):
    """Resolution metrics for one support agent."""

    support_id: str
    support_name: str
    support_email: str
    tickets_resolved_today: int = Field(ge=0)
    tickets_resolved_this_week: int = Field(ge=0)
    tickets_resolved_this_month: int = Field(ge=0)
    average_resolution_time: float = Field(description="Hours, two decimals")
    total_tickets_resolved: int = Field(ge=0)
    pending_tickets: int = Field(ge=0)


class TicketFilter(BaseModel):
    """Supervisor table filter. ``None`` means no restriction."""

    status: Optional[TicketStatus] = None
    support_id: Optional[str] = None
    query: str = ""
