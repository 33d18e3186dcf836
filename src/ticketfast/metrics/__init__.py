"""Supervisor metrics over ticket timestamps.

Exports:
    compute_sla_status: SLA band for one ticket at a given moment.
    build_ticket_metrics: Per-ticket resolution and elapsed times.
    build_support_metrics: Resolution counts and averages per agent.
    filter_tickets: Supervisor table filters.
    count_by_status: Zero-filled ticket counts per status.
"""

from src.ticketfast.metrics.calculator import (
    build_support_metrics,
    build_ticket_metrics,
    compute_sla_status,
    count_by_status,
    filter_tickets,
)

__all__ = [
    "build_support_metrics",
    "build_ticket_metrics",
    "compute_sla_status",
    "count_by_status",
    "filter_tickets",
]
