"""Deterministic automatic priority scoring for support tickets.

Inspects a ticket's description and tag set, applies four families of
weighted rules, clamps the accumulated score to 100 and maps it to a
low / medium / high band with one justification per fired rule.

The score is advisory: it is recomputed on every read of a ticket list and
never written back to storage, so it cannot go stale relative to edits.
``is_urgent`` is carried on the input but does not contribute weight.

Exports:
    PriorityScorer: Rule-set driven scoring engine with configurable bands.
    score_ticket: Score one ticket with the default rule set.
    classify_score: Map a clamped score to its priority level.
    normalize_text: Lower-case a possibly-missing string.
    normalize_tags: Join and lower-case a possibly-missing tag list.
    build_search_text: Combined description + tags search string.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from src.ticketfast.priority.rules import DEFAULT_RULE_SET, TAG_REASON_PREFIX
from src.ticketfast.priority.schemas import (
    AutoPriorityResult,
    KeywordRule,
    PriorityInput,
    PriorityLevel,
    PriorityRuleSet,
)

if TYPE_CHECKING:
    from src.ticketfast.tickets.schemas import Ticket

MAX_SCORE = 100
HIGH_THRESHOLD = 70
MEDIUM_THRESHOLD = 40


# ── Normalization ────────────────────────────────────────────────────────────


def normalize_text(value: str | None) -> str:
    """Lower-case ``value``; ``None`` and empty strings become ``""``."""
    if not value:
        return ""
    return value.lower()


def normalize_tags(tags: Sequence[str] | None) -> str:
    """Join tags with single spaces and lower-case the result."""
    if not tags:
        return ""
    return " ".join(tags).lower()


def build_search_text(description: str | None, tags: Sequence[str] | None) -> str:
    """Combined search text shared by every substring rule family."""
    return f"{normalize_text(description)} {normalize_tags(tags)}"


# ── Classification ───────────────────────────────────────────────────────────


def classify_score(
    score: int,
    *,
    high_threshold: int = HIGH_THRESHOLD,
    medium_threshold: int = MEDIUM_THRESHOLD,
) -> PriorityLevel:
    """Map a score to its band.

    Bands are inclusive on their lower edge:
        score >= 70 -> high
        score >= 40 -> medium
        otherwise   -> low
    """
    if score >= high_threshold:
        return "high"
    if score >= medium_threshold:
        return "medium"
    return "low"


# ── Scorer ───────────────────────────────────────────────────────────────────


class PriorityScorer:
    """Compute an advisory priority (0-100) from ticket text and tags.

    Rule families, all additive and evaluated in order:
        (a) keyword rules:   fire on ANY keyword substring
        (b) combo rules:     fire when ALL required substrings are present
        (c) tag weights:     one contribution per tag matching a registered
                             label (case-insensitive exact equality)
        (d) general rules:   broad severity signals, ANY keyword substring

    A fired rule adds its weight to the score and its reason to the result.
    Reasons shared by several fired rules appear once.

    Args:
        rule_set: Rule tables to evaluate. Shared by reference; never mutated.
        high_threshold: Score at or above this is ``high``.
        medium_threshold: Score at or above this is ``medium`` (below high).
    """

    def __init__(
        self,
        rule_set: PriorityRuleSet = DEFAULT_RULE_SET,
        *,
        high_threshold: int = HIGH_THRESHOLD,
        medium_threshold: int = MEDIUM_THRESHOLD,
    ) -> None:
        self._rules = rule_set
        self._high_threshold = high_threshold
        self._medium_threshold = medium_threshold
        # Display and lower-case variants collapse onto one lookup key.
        self._tag_lookup: dict[str, int] = {
            label.lower(): weight for label, weight in rule_set.tag_weights
        }

    @property
    def rule_set(self) -> PriorityRuleSet:
        return self._rules

    # ── Rule Families (private) ──────────────────────────────────────────

    @staticmethod
    def _match_any(
        rules: Sequence[KeywordRule], text: str
    ) -> list[tuple[int, str]]:
        return [
            (rule.weight, rule.reason)
            for rule in rules
            if any(keyword in text for keyword in rule.keywords)
        ]

    def _evaluate_keywords(self, text: str) -> list[tuple[int, str]]:
        return self._match_any(self._rules.keyword_rules, text)

    def _evaluate_combos(self, text: str) -> list[tuple[int, str]]:
        return [
            (rule.weight, rule.reason)
            for rule in self._rules.combo_rules
            if all(part in text for part in rule.required)
        ]

    def _evaluate_tags(self, tags: Sequence[str] | None) -> list[tuple[int, str]]:
        """Tag weights match the raw tag list, not the search text."""
        fired: list[tuple[int, str]] = []
        for tag in tags or ():
            lowered = tag.lower()
            weight = self._tag_lookup.get(lowered)
            if weight is not None:
                fired.append((weight, f"{TAG_REASON_PREFIX}{lowered}"))
        return fired

    def _evaluate_general(self, text: str) -> list[tuple[int, str]]:
        return self._match_any(self._rules.general_rules, text)

    # ── Main Scoring Method ──────────────────────────────────────────────

    def score(self, ticket: PriorityInput | Ticket) -> AutoPriorityResult:
        """Score a ticket.

        Steps:
        1. Build the lower-cased search text from description and tags.
        2. Evaluate families (a) -> (b) -> (c) -> (d).
        3. Sum weights, clamp to 100.
        4. Derive level from the clamped score.

        Args:
            ticket: Anything carrying ``description`` and ``tags``; a
                ``PriorityInput`` or a full ``Ticket`` row.

        Returns:
            AutoPriorityResult with score, level and deduplicated reasons.
        """
        text = build_search_text(ticket.description, ticket.tags)

        fired = (
            self._evaluate_keywords(text)
            + self._evaluate_combos(text)
            + self._evaluate_tags(ticket.tags)
            + self._evaluate_general(text)
        )

        raw_score = sum(weight for weight, _ in fired)
        final_score = min(MAX_SCORE, raw_score)

        # dict keeps first-fired order while collapsing repeated reasons
        reasons = list(dict.fromkeys(reason for _, reason in fired))

        return AutoPriorityResult(
            score=final_score,
            level=classify_score(
                final_score,
                high_threshold=self._high_threshold,
                medium_threshold=self._medium_threshold,
            ),
            reasons=reasons,
        )


_default_scorer = PriorityScorer()


def score_ticket(ticket: PriorityInput | Ticket) -> AutoPriorityResult:
    """Score ``ticket`` with the default rule set and bands."""
    return _default_scorer.score(ticket)


__all__ = [
    "PriorityScorer",
    "build_search_text",
    "classify_score",
    "normalize_tags",
    "normalize_text",
    "score_ticket",
]
