"""Pydantic data models for the automatic ticket-priority engine.

Defines the scorer input (``PriorityInput``), its output
(``AutoPriorityResult``) and the immutable rule models the rule tables are
built from. Rule models are frozen so a rule set constructed at import time
can be shared by reference across every scorer invocation.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PriorityLevel = Literal["low", "medium", "high"]


# -- Scorer Input / Output ----------------------------------------------------


class PriorityInput(BaseModel):
    """The subset of ticket fields that feed the priority scorer.

    ``description`` and ``tags`` accept ``None`` so rows fetched from storage
    with null columns can be scored without pre-processing; both normalize
    to empty values.

    Attributes:
        description: Free-form ticket text; any Unicode.
        tags: Tag display labels in the order the creator picked them.
        is_urgent: Creator-set urgency flag. Not used in scoring.
    """

    description: Optional[str] = ""
    tags: Optional[list[str]] = Field(default_factory=list)
    is_urgent: bool = False


class AutoPriorityResult(BaseModel):
    """Advisory priority classification for one ticket.

    Recomputed on every read of a ticket list; never persisted.

    Attributes:
        score: Sum of fired rule weights, clamped to 100.
        level: Classification band derived from ``score``.
        reasons: One human-readable justification per triggered rule,
            without duplicates.
    """

    score: int = Field(ge=0, le=100)
    level: PriorityLevel
    reasons: list[str] = Field(default_factory=list)

    @field_validator("reasons")
    @classmethod
    def _reasons_unique(cls, value: list[str]) -> list[str]:
        if len(set(value)) != len(value):
            raise ValueError("reasons must not contain duplicates")
        return value


# -- Rule Models --------------------------------------------------------------


class KeywordRule(BaseModel):
    """Fires when ANY keyword is a substring of the search text.

    Used for both the domain keyword family and the general severity family.
    Keywords must already be lower-case; matching is literal.
    """

    model_config = ConfigDict(frozen=True)

    keywords: tuple[str, ...] = Field(min_length=1)
    weight: int = Field(ge=0)
    reason: str


class ComboRule(BaseModel):
    """Fires when ALL required substrings appear anywhere in the search text."""

    model_config = ConfigDict(frozen=True)

    required: tuple[str, ...] = Field(min_length=1)
    weight: int = Field(ge=0)
    reason: str


class PriorityRuleSet(BaseModel):
    """The four additive rule families, evaluated in declaration order.

    Attributes:
        keyword_rules: Domain keyword rules (family a).
        combo_rules: Multi-substring combination rules (family b).
        tag_weights: Registered tag label -> weight (family c). Labels are
            matched case-insensitively by exact equality against each tag.
        general_rules: Broad severity keyword rules (family d).
    """

    model_config = ConfigDict(frozen=True)

    keyword_rules: tuple[KeywordRule, ...] = ()
    combo_rules: tuple[ComboRule, ...] = ()
    tag_weights: tuple[tuple[str, int], ...] = ()
    general_rules: tuple[KeywordRule, ...] = ()
