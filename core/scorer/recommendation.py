"""Human-readable reasons attached to a scored match."""

from typing import Optional

PERFECT_MATCH_PERCENTAGE = 100
EXCELLENT_MATCH_PERCENTAGE = 80
GOOD_MATCH_PERCENTAGE = 60

EXPERT_EXPERIENCE_SCORE = 12
ADVANCED_EXPERIENCE_SCORE = 8

WITHIN_BUDGET_RATE_SCORE = 18

FALLBACK_REASON = "Potential match"
FALLBACK_OPPORTUNITY_REASON = "Good potential match"


def _plural(count: int, noun: str) -> str:
    return noun if count == 1 else f"{noun}s"


def _skill_match_phrase(match_percentage: int) -> Optional[str]:
    if match_percentage == PERFECT_MATCH_PERCENTAGE:
        return "Perfect skill match"
    if match_percentage >= EXCELLENT_MATCH_PERCENTAGE:
        return "Excellent skill match"
    if match_percentage >= GOOD_MATCH_PERCENTAGE:
        return "Good skill match"
    return None


def generate_recommendation_reason(
    match_percentage: int,
    availability: Optional[str],
    experience_score: int,
    rate_score: int
) -> str:
    """
    Join threshold-selected phrases with ", ".

    >>> generate_recommendation_reason(100, "available", 14, 19)
    'Perfect skill match, Available now, Expert level skills, Within budget'
    """
    reasons = []

    phrase = _skill_match_phrase(match_percentage)
    if phrase:
        reasons.append(phrase)

    if availability == "available":
        reasons.append("Available now")

    if experience_score >= EXPERT_EXPERIENCE_SCORE:
        reasons.append("Expert level skills")
    elif experience_score >= ADVANCED_EXPERIENCE_SCORE:
        reasons.append("Advanced skills")

    if rate_score >= WITHIN_BUDGET_RATE_SCORE:
        reasons.append("Within budget")

    return ", ".join(reasons) or FALLBACK_REASON


def generate_talent_reason(
    match_percentage: int,
    critical_count: int,
    availability: Optional[str],
    expert_count: int
) -> str:
    """
    Reason shown to a company for a developer matched on its own skills.

    >>> generate_talent_reason(100, 2, "available", 1)
    'Perfect skill match, Matches 2 critical skills, Available now, 1 expert-level skill'
    """
    reasons = []

    phrase = _skill_match_phrase(match_percentage)
    if phrase:
        reasons.append(phrase)

    if critical_count > 0:
        reasons.append(f"Matches {critical_count} critical {_plural(critical_count, 'skill')}")

    if availability == "available":
        reasons.append("Available now")

    if expert_count > 0:
        reasons.append(f"{expert_count} expert-level {_plural(expert_count, 'skill')}")

    return ", ".join(reasons) or FALLBACK_REASON


def generate_opportunity_reason(
    required_count: int,
    preferred_count: int,
    offers_flexible_work: bool,
    industry: Optional[str]
) -> str:
    """
    Reason shown to a developer for a company that lists their skills.

    >>> generate_opportunity_reason(2, 0, True, "Fintech")
    'Actively seeking 2 of your skills, Offers flexible work, Fintech industry'
    """
    reasons = []

    if required_count > 0:
        reasons.append(f"Actively seeking {required_count} of your {_plural(required_count, 'skill')}")

    if preferred_count > 0:
        reasons.append(f"Values {preferred_count} of your {_plural(preferred_count, 'skill')}")

    if offers_flexible_work:
        reasons.append("Offers flexible work")

    if industry:
        reasons.append(f"{industry} industry")

    return ", ".join(reasons) or FALLBACK_OPPORTUNITY_REASON
