"""Pydantic data models for support tickets.

Mirrors the externally-owned ticket row so rows fetched from the data store
are type-checked once at the boundary. Null ``description`` / ``tags``
columns coerce to empty values; anything else with the wrong type raises
``pydantic.ValidationError`` here rather than inside the scorer.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import AwareDatetime, BaseModel, Field, field_validator

TicketStatus = Literal["pending", "in_progress", "resolved"]

TICKET_STATUSES: tuple[str, ...] = ("pending", "in_progress", "resolved")

# Tag labels offered to ticket creators.
TAG_VOCABULARY: tuple[str, ...] = (
    "Impresora",
    "Consulta Técnica",
    "Recepción",
    "Huesped",
    "Sin WiFi",
    "No Proyecta",
    "Solicitud de Adaptador",
    "Sin Internet",
    "Cocina",
    "Problemas con Notebook",
    "Problemas POG",
)


class Ticket(BaseModel):
    """A support ticket as stored by the external data store.

    Attributes:
        id: Store-assigned identifier.
        description: Free-form problem description.
        tags: Tag labels chosen by the creator, in selection order.
        is_urgent: Creator-set urgency flag; drives the SLA window.
        image_url: Public URL of the attached screenshot, if any.
        status: Lifecycle state.
        created_by: User id of the creator.
        created_at: Creation timestamp (timezone-aware).
        updated_at: Last update timestamp.
        resolved_at: When the ticket was resolved, if it has been.
        resolved_by: Support user id working on / resolving the ticket.
        created_by_name: Joined creator display name, when fetched.
        resolved_by_name: Joined resolver display name, when fetched.
    """

    id: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    is_urgent: bool = False
    image_url: Optional[str] = None
    status: TicketStatus = "pending"
    created_by: str
    created_at: AwareDatetime
    updated_at: Optional[AwareDatetime] = None
    resolved_at: Optional[AwareDatetime] = None
    resolved_by: Optional[str] = None
    created_by_name: Optional[str] = None
    resolved_by_name: Optional[str] = None

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("is_urgent", mode="before")
    @classmethod
    def _null_urgent(cls, value: Any) -> Any:
        return False if value is None else value


class NewTicket(BaseModel):
    """Payload for creating a ticket. New tickets always start ``pending``.

    Attributes:
        description: Problem description; must not be blank.
        tags: Labels from ``TAG_VOCABULARY``.
        is_urgent: Creator-set urgency flag.
        image_url: Public URL returned by the image upload, if any.
        created_by: User id of the creator.
    """

    description: str
    tags: list[str] = Field(default_factory=list)
    is_urgent: bool = False
    image_url: Optional[str] = None
    created_by: str = Field(min_length=1)

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("La descripción no puede estar vacía")
        return stripped

    @field_validator("tags")
    @classmethod
    def _tags_in_vocabulary(cls, value: list[str]) -> list[str]:
        unknown = [tag for tag in value if tag not in TAG_VOCABULARY]
        if unknown:
            raise ValueError(f"Etiquetas no reconocidas: {', '.join(unknown)}")
        return value

    def to_row(self) -> dict[str, Any]:
        """Insert payload for the data store, with the initial status."""
        return {**self.model_dump(), "status": "pending"}
