import re
from dataclasses import dataclass
from typing import Optional

EXECUTOR_PATTERN = re.compile(r"Executor:\s*([^,\n]+)[,\n]", re.IGNORECASE)
PHONE_PATTERN = re.compile(r"Phone:\s*([\d-]+)", re.IGNORECASE)
EMAIL_PATTERN = re.compile(r"Email:\s*([\w.-]+@[\w.-]+)", re.IGNORECASE)


@dataclass(frozen=True)
class EstateContact:
    executor: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

    def describe(self) -> str:
        parts = []
        if self.executor:
            parts.append(f"Executor: {self.executor}")
        if self.phone:
            parts.append(f"Phone: {self.phone}")
        if self.email:
            parts.append(f"Email: {self.email}")
        return ", ".join(parts)


def _clean(value: str) -> str:
    return value.strip().rstrip(".,")


def parse_estate_notice(text: Optional[str]) -> EstateContact:
    """Pull executor name, phone and email out of a free-text estate notice"""
    if not text:
        return EstateContact()
    executor = EXECUTOR_PATTERN.search(text)
    phone = PHONE_PATTERN.search(text)
    email = EMAIL_PATTERN.search(text)
    return EstateContact(
        executor=executor.group(1).strip() if executor else None,
        phone=_clean(phone.group(1)) if phone else None,
        email=_clean(email.group(1)) if email else None,
    )


def update_bayes(prior: float, prob_true: float, prob_false: float, evidence: bool) -> float:
    p_e_given_h = prob_true if evidence else 1 - prob_true
    p_e_given_not_h = prob_false if evidence else 1 - prob_false
    return (prior * p_e_given_h) / (prior * p_e_given_h + (1 - prior) * p_e_given_not_h)


def score_executor_contact(contact: EstateContact) -> float:
    """Posterior confidence that the notice gives a reachable executor"""
    p = 0.5
    p = update_bayes(p, 0.9, 0.1, bool(contact.executor))
    p = update_bayes(p, 0.8, 0.2, bool(contact.phone))
    p = update_bayes(p, 0.7, 0.3, bool(contact.email))
    return p
