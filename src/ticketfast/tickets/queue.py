"""Support queue ordering driven by the automatic priority scorer.

Every ticket fetched from storage is scored once per read and carries the
result as an ephemeral annotation; nothing is written back. The queue is
ordered by score descending, ties broken by creation time ascending so the
ticket that has waited longest comes first among equal priorities.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

import structlog
from pydantic import BaseModel

from src.ticketfast.priority.schemas import AutoPriorityResult
from src.ticketfast.priority.scorer import PriorityScorer
from src.ticketfast.tickets.schemas import Ticket, TicketStatus

logger = structlog.get_logger(__name__)


class PrioritizedTicket(BaseModel):
    """A ticket paired with its freshly computed priority."""

    ticket: Ticket
    priority: AutoPriorityResult


def rank_tickets(
    tickets: Iterable[Ticket],
    scorer: PriorityScorer | None = None,
) -> list[PrioritizedTicket]:
    """Score each ticket once and order the result for the support queue."""
    scorer = scorer or PriorityScorer()
    annotated = [
        PrioritizedTicket(ticket=ticket, priority=scorer.score(ticket))
        for ticket in tickets
    ]
    annotated.sort(key=lambda item: (-item.priority.score, item.ticket.created_at))
    return annotated


# ── Repository protocol ───────────────────────────────────────────────────────


class TicketRepositoryProtocol(Protocol):
    """Minimal interface for the external ticket store."""

    async def list_tickets(self) -> list[Ticket]: ...


# ── SupportQueueService ───────────────────────────────────────────────────────


class SupportQueueService:
    """Builds the prioritized support queue from the ticket store.

    Args:
        repository: External ticket store.
        scorer: Priority scorer; defaults to the standard rule set and bands.
    """

    def __init__(
        self,
        repository: TicketRepositoryProtocol,
        scorer: PriorityScorer | None = None,
    ) -> None:
        self._repository = repository
        self._scorer = scorer or PriorityScorer()

    async def get_queue(
        self, status: TicketStatus | None = None
    ) -> list[PrioritizedTicket]:
        """Fetch, optionally filter by status, score and order tickets.

        Raises:
            Whatever the repository raises; failures are logged and
            propagated, never turned into a partial queue.
        """
        try:
            tickets = await self._repository.list_tickets()
        except Exception:
            logger.error("support_queue.fetch_failed", status=status, exc_info=True)
            raise

        if status is not None:
            tickets = [t for t in tickets if t.status == status]

        queue = rank_tickets(tickets, self._scorer)
        logger.info(
            "support_queue.ranked",
            status=status,
            ticket_count=len(queue),
            high_count=sum(1 for item in queue if item.priority.level == "high"),
        )
        return queue
