"""Supervisor metrics: SLA status, per-agent resolution metrics and filters.

All functions take ``now`` explicitly so results are reproducible; callers
pass a timezone-aware timestamp in the supervisor's local zone. Calendar
windows ("today", "this week", "this month") start at local midnight of
``now``.

SLA windows (minutes since creation, upper bound exclusive of the next band):
    urgent:  0-45 ok, 45-60 warning, > 60 exceeded
    normal:  0-20 ok, 20-30 warning, > 30 exceeded
"""

from __future__ import annotations

import calendar
import math
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

import structlog

from src.ticketfast.config import Settings, get_settings
from src.ticketfast.metrics.schemas import (
    SlaStatus,
    SupportAgent,
    SupportMetrics,
    TicketFilter,
    TicketWithMetrics,
)
from src.ticketfast.tickets.schemas import TICKET_STATUSES, Ticket

logger = structlog.get_logger(__name__)


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def _start_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def _one_month_before(moment: datetime) -> datetime:
    """Same day one calendar month earlier, clamped to the month's length.

    Clamps instead of rolling over: 31 March gives 28 February, not 3 March.
    """
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


# ── Per-ticket metrics ───────────────────────────────────────────────────────


def compute_sla_status(
    created_at: datetime,
    is_urgent: bool,
    now: datetime,
    settings: Settings | None = None,
) -> SlaStatus:
    """SLA band for a ticket created at ``created_at``, evaluated at ``now``."""
    settings = settings or get_settings()
    elapsed = int(_round_half_up((now - created_at).total_seconds() / 60))

    if is_urgent:
        warning = settings.SLA_URGENT_WARNING_MINUTES
        exceeded = settings.SLA_URGENT_EXCEEDED_MINUTES
    else:
        warning = settings.SLA_NORMAL_WARNING_MINUTES
        exceeded = settings.SLA_NORMAL_EXCEEDED_MINUTES

    if elapsed > exceeded:
        return "exceeded"
    if elapsed > warning:
        return "warning"
    return "ok"


def build_ticket_metrics(
    ticket: Ticket,
    now: datetime,
    settings: Settings | None = None,
) -> TicketWithMetrics:
    """Annotate a ticket with resolution time, elapsed time and SLA status."""
    resolution_time_hours = None
    if ticket.resolved_at is not None:
        resolution_time_hours = _round_half_up(
            _hours_between(ticket.created_at, ticket.resolved_at), 2
        )

    return TicketWithMetrics(
        id=ticket.id,
        description=ticket.description,
        status=ticket.status,
        created_at=ticket.created_at,
        resolved_at=ticket.resolved_at,
        resolved_by=ticket.resolved_by,
        resolved_by_name=ticket.resolved_by_name,
        resolution_time_hours=resolution_time_hours,
        created_by_name=ticket.created_by_name,
        tags=ticket.tags,
        is_urgent=ticket.is_urgent,
        time_elapsed_minutes=int(
            _round_half_up((now - ticket.created_at).total_seconds() / 60)
        ),
        sla_status=compute_sla_status(ticket.created_at, ticket.is_urgent, now, settings),
    )


# ── Per-agent metrics ────────────────────────────────────────────────────────


def _metrics_for_agent(
    agent: SupportAgent,
    tickets: Sequence[Ticket],
    today: datetime,
    week_ago: datetime,
    month_ago: datetime,
) -> SupportMetrics:
    resolved = [
        t for t in tickets if t.resolved_by == agent.id and t.status == "resolved"
    ]
    resolved_dates = [t.resolved_at for t in resolved if t.resolved_at is not None]
    resolution_times = [
        _hours_between(t.created_at, t.resolved_at)
        for t in resolved
        if t.resolved_at is not None
    ]
    average = (
        sum(resolution_times) / len(resolution_times) if resolution_times else 0.0
    )

    return SupportMetrics(
        support_id=agent.id,
        support_name=agent.full_name,
        support_email=agent.email,
        tickets_resolved_today=sum(1 for d in resolved_dates if d >= today),
        tickets_resolved_this_week=sum(1 for d in resolved_dates if d >= week_ago),
        tickets_resolved_this_month=sum(1 for d in resolved_dates if d >= month_ago),
        average_resolution_time=_round_half_up(average, 2),
        total_tickets_resolved=len(resolved),
        pending_tickets=sum(
            1
            for t in tickets
            if t.status == "in_progress" and t.resolved_by == agent.id
        ),
    )


def build_support_metrics(
    agents: Iterable[SupportAgent],
    tickets: Sequence[Ticket],
    now: datetime,
) -> list[SupportMetrics]:
    """Resolution metrics for every support agent, in ``agents`` order.

    "Pending" counts tickets in progress whose ``resolved_by`` is the agent
    (the store records the assignee in that column while work is ongoing).
    """
    today = _start_of_day(now)
    week_ago = today - timedelta(days=7)
    month_ago = _one_month_before(today)

    metrics = [
        _metrics_for_agent(agent, tickets, today, week_ago, month_ago)
        for agent in agents
    ]
    logger.info(
        "supervisor_metrics.computed",
        supports=len(metrics),
        tickets=len(tickets),
    )
    return metrics


# ── Table helpers ────────────────────────────────────────────────────────────


def filter_tickets(
    tickets: Iterable[TicketWithMetrics],
    ticket_filter: TicketFilter,
) -> list[TicketWithMetrics]:
    """Apply status, support agent and free-text filters."""
    filtered = list(tickets)

    if ticket_filter.status is not None:
        filtered = [t for t in filtered if t.status == ticket_filter.status]

    if ticket_filter.support_id is not None:
        filtered = [t for t in filtered if t.resolved_by == ticket_filter.support_id]

    query = ticket_filter.query.strip().lower()
    if query:
        filtered = [
            t
            for t in filtered
            if query in t.description.lower()
            or query in (t.created_by_name or "").lower()
            or query in (t.resolved_by_name or "").lower()
            or query in t.id.lower()
        ]

    return filtered


def count_by_status(tickets: Iterable[Ticket | TicketWithMetrics]) -> dict[str, int]:
    """Ticket counts for each lifecycle status, zero-filled."""
    counts = dict.fromkeys(TICKET_STATUSES, 0)
    for ticket in tickets:
        counts[ticket.status] += 1
    return counts
