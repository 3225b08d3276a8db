"""Opportunity score, priority and timeline for alerts built from classified filings."""
import random
from dataclasses import dataclass
from typing import Optional

from app.schemas.alert import AlertType, Priority
from app.utils.filing_classifier import Classification

MIN_SCORE = 60
MAX_SCORE = 100
MIN_TIMELINE_MONTHS = 3
MAX_TIMELINE_MONTHS = 9

SCORING_MODES = ("deterministic", "random")

TIMELINE_BY_CATEGORY = {
    AlertType.POWER_OF_SALE: 3,
    AlertType.TAX_SALE: 4,
    AlertType.ESTATE_SALE: 5,
    AlertType.PROBATE_FILING: 6,
    AlertType.MUNICIPAL_PERMIT: 8,
    AlertType.DEVELOPMENT_APPLICATION: 9,
}

PRIORITY_THRESHOLDS = (
    (90, Priority.URGENT),
    (80, Priority.HIGH),
    (70, Priority.MEDIUM),
)


@dataclass(frozen=True)
class OpportunityAssessment:
    score: int
    priority: Priority
    timeline_months: int


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def priority_for_score(score: int) -> Priority:
    for threshold, priority in PRIORITY_THRESHOLDS:
        if score >= threshold:
            return priority
    return Priority.LOW


class OpportunityScorer:
    """Scores relevant filings.

    ``deterministic`` derives the score from the winning rule weight plus a bonus
    for every additional rule that matched; ``random`` draws uniformly within the
    same bounds.
    """

    def __init__(self, mode: str = "deterministic", rng: Optional[random.Random] = None):
        if mode not in SCORING_MODES:
            raise ValueError(f"Unknown scoring mode: {mode}")
        self.mode = mode
        self.rng = rng or random.Random()

    def assess(self, classification: Classification) -> OpportunityAssessment:
        if not classification.is_relevant:
            raise ValueError("Only relevant filings can be scored")

        if self.mode == "random":
            score = self.rng.randint(MIN_SCORE, MAX_SCORE)
            timeline = self.rng.randint(MIN_TIMELINE_MONTHS, MAX_TIMELINE_MONTHS)
        else:
            extra_hits = max(classification.rule_hits - 1, 0)
            score = clamp(MIN_SCORE + 3 * classification.rule_weight + 5 * extra_hits, MIN_SCORE, MAX_SCORE)
            timeline = clamp(
                TIMELINE_BY_CATEGORY.get(classification.category, MAX_TIMELINE_MONTHS),
                MIN_TIMELINE_MONTHS,
                MAX_TIMELINE_MONTHS,
            )

        return OpportunityAssessment(
            score=score,
            priority=priority_for_score(score),
            timeline_months=timeline,
        )
