"""Support tickets: boundary schemas, image attachments and the support queue.

Exports:
    Ticket: Stored ticket row.
    NewTicket: Ticket creation payload.
    SupportQueueService: Prioritized queue over an external ticket store.
"""

from src.ticketfast.tickets.queue import SupportQueueService
from src.ticketfast.tickets.schemas import NewTicket, Ticket

__all__ = [
    "NewTicket",
    "SupportQueueService",
    "Ticket",
]
