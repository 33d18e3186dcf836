"""Automatic ticket-priority engine.

Exports:
    PriorityScorer: Four-family weighted rule evaluator.
    score_ticket: Score one ticket with the default rule set.
    AutoPriorityResult: Score, level and reasons for one ticket.
    PriorityInput: Description / tags / is_urgent scorer input.
"""

from src.ticketfast.priority.schemas import AutoPriorityResult, PriorityInput
from src.ticketfast.priority.scorer import PriorityScorer, classify_score, score_ticket

__all__ = [
    "AutoPriorityResult",
    "PriorityInput",
    "PriorityScorer",
    "classify_score",
    "score_ticket",
]
