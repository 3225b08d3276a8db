"""Real estate relevance rules for court filings.

Rules are evaluated in the order of CLASSIFICATION_RULES and the first rule
with a matching keyword decides the alert category. Specific distress signals
(power of sale, tax sale, probate) come before the generic real estate words,
and the bare word "estate" is checked last so that "real estate" never reads
as an estate sale.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from app.schemas.alert import AlertType


@dataclass(frozen=True)
class ClassificationRule:
    category: AlertType
    keywords: Tuple[str, ...]
    weight: int


@dataclass(frozen=True)
class Classification:
    is_relevant: bool
    category: Optional[AlertType] = None
    matched_keywords: Tuple[str, ...] = field(default_factory=tuple)
    rule_weight: int = 0
    rule_hits: int = 0


NOT_RELEVANT = Classification(is_relevant=False)

CLASSIFICATION_RULES: List[ClassificationRule] = [
    ClassificationRule(
        AlertType.POWER_OF_SALE,
        ("power of sale", "notice of sale", "foreclosure", "mortgage", "judicial sale", "receivership"),
        10,
    ),
    ClassificationRule(
        AlertType.TAX_SALE,
        ("tax sale", "tax arrears", "tax deed", "tax certificate"),
        9,
    ),
    ClassificationRule(
        AlertType.PROBATE_FILING,
        ("probate", "letters of administration", "certificate of appointment"),
        7,
    ),
    ClassificationRule(
        AlertType.ESTATE_SALE,
        ("estate of", "estate sale", "estate trustee", "estates act", "deceased"),
        6,
    ),
    ClassificationRule(
        AlertType.DEVELOPMENT_APPLICATION,
        ("planning act", "development application", "zoning", "official plan", "land tribunal", "subdivision"),
        5,
    ),
    ClassificationRule(
        AlertType.MUNICIPAL_PERMIT,
        ("building permit", "demolition permit", "site plan"),
        3,
    ),
    # generic real estate wording
    ClassificationRule(
        AlertType.POWER_OF_SALE,
        ("real estate", "property", "lien", "land titles", "condominium"),
        4,
    ),
    ClassificationRule(AlertType.ESTATE_SALE, ("estate",), 2),
]


def classify_filing(
    title: Optional[str],
    summary: Optional[str] = None,
    rules: List[ClassificationRule] = CLASSIFICATION_RULES,
) -> Classification:
    """
    Decide whether a filing relates to real estate and which alert category it gets.

    Args:
        title: Filing title
        summary: Optional summary or body text, searched together with the title
        rules: Ordered rule table, highest precedence first

    Returns:
        Classification with the category of the first matching rule, or a
        not-relevant result when no keyword occurs.
    """
    text = " ".join(part for part in (title, summary) if part).lower()
    if not text.strip():
        return NOT_RELEVANT

    matched_rules = []
    matched_keywords = []
    for rule in rules:
        hits = [keyword for keyword in rule.keywords if keyword in text]
        if hits:
            matched_rules.append(rule)
            matched_keywords.extend(hits)

    if not matched_rules:
        return NOT_RELEVANT

    winner = matched_rules[0]
    return Classification(
        is_relevant=True,
        category=winner.category,
        matched_keywords=tuple(matched_keywords),
        rule_weight=winner.weight,
        rule_hits=len(matched_rules),
    )
