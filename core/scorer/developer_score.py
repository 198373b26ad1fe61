#!/usr/bin/env python3
"""
Developer Score - additive capped bands.

Bands (default maxima):
- Skill match      0-40: share of required skills held
- Availability     0-25: available / busy / unavailable, 10 when unknown
- Rate fit         0-20: hourly rate vs. budget_max / hours_per_month, 10 when unknown
- Experience       0-15: points per matched skill level, capped

Each band is an integer capped to its maximum before summation, so the total
stays in [0, 100] without a final clamp.
"""

from typing import AbstractSet, Any, Dict, List, Optional, Tuple
import logging

from core.config_loader import ScorerConfig
from core.scorer.coverage import (
    round_half_up,
    matched_skills as find_matched_skills,
    distinct_skill_count,
    skill_overlap,
    calculate_match_percentage,
)
from core.scorer.models import (
    CandidateSkill,
    CandidateType,
    DeveloperCandidate,
    MatchResult,
)
from core.scorer.recommendation import generate_recommendation_reason

logger = logging.getLogger(__name__)


def calculate_skill_band(matched_count: int, required_count: int, config: ScorerConfig) -> int:
    return round_half_up(config.skill_band_max * skill_overlap(matched_count, required_count))


def calculate_availability_band(availability: Optional[str], config: ScorerConfig) -> int:
    if availability is None:
        return round_half_up(config.availability_default_points)
    key = getattr(availability, 'value', availability)
    points = config.availability_points.get(key, config.availability_default_points)
    return round_half_up(points)


def calculate_rate_band(
    rate: Optional[float],
    project_budget_max: Optional[float],
    config: ScorerConfig
) -> int:
    """
    Compare the developer's hourly rate with the implied hourly budget.

    Only computed when both values are present; otherwise the neutral default.
    A zero rate or budget counts as missing.
    """
    if not rate or not project_budget_max:
        return round_half_up(config.rate_default_points)

    hourly_budget = float(project_budget_max) / config.hours_per_month
    rate = float(rate)

    if rate <= hourly_budget:
        points = config.rate_within_budget_points
    elif rate <= hourly_budget * config.rate_near_multiplier:
        points = config.rate_near_budget_points
    elif rate <= hourly_budget * config.rate_stretch_multiplier:
        points = config.rate_stretch_budget_points
    else:
        points = config.rate_over_budget_points
    return round_half_up(points)


def calculate_experience_band(matched: List[CandidateSkill], config: ScorerConfig) -> int:
    """Sum level points over matched skills only, capped at the band maximum."""
    total = 0.0
    for cs in matched:
        level = getattr(cs.level, 'value', cs.level)
        total += config.experience_points.get(level, 0.0)
    return round_half_up(min(config.experience_band_max, total))


def calculate_developer_score(
    candidate: DeveloperCandidate,
    required_skill_ids: AbstractSet[Any],
    project_budget_max: Optional[float],
    config: ScorerConfig
) -> Tuple[int, Dict[str, int], List[CandidateSkill]]:
    """
    Score one developer.

    Returns:
        Tuple of (total_score, band_scores, matched_skills)
    """
    matched = find_matched_skills(candidate.skills, required_skill_ids)
    required_count = len(required_skill_ids)

    bands = {
        'skill': calculate_skill_band(len(matched), required_count, config),
        'availability': calculate_availability_band(candidate.availability, config),
        'rate': calculate_rate_band(candidate.rate, project_budget_max, config),
        'experience': calculate_experience_band(matched, config),
    }
    total = sum(bands.values())
    assert 0 <= total <= 100, f"developer score {total} out of range"

    return total, {'total': total, **bands}, matched


def score_developer(
    candidate: DeveloperCandidate,
    required_skill_ids: AbstractSet[Any],
    project_budget_max: Optional[float],
    config: ScorerConfig
) -> Optional[MatchResult]:
    """Build a MatchResult for one developer, or None when no skill overlaps."""
    total, scores, matched = calculate_developer_score(
        candidate, required_skill_ids, project_budget_max, config
    )
    if not matched:
        return None

    match_percentage = calculate_match_percentage(len(matched), len(required_skill_ids))
    availability = getattr(candidate.availability, 'value', candidate.availability)

    logger.debug(
        f"Developer {candidate.id}: total={total} skill={scores['skill']} "
        f"availability={scores['availability']} rate={scores['rate']} experience={scores['experience']}"
    )

    return MatchResult(
        candidate=candidate,
        candidate_type=CandidateType.DEVELOPER,
        score=total,
        matched_skills=matched,
        total_skills=distinct_skill_count(candidate.skills),
        match_percentage=match_percentage,
        recommendation_reason=generate_recommendation_reason(
            match_percentage=match_percentage,
            availability=availability,
            experience_score=scores['experience'],
            rate_score=scores['rate'],
        ),
        scores=scores,
        components={
            'matched_count': len(matched),
            'required_count': len(required_skill_ids),
            'project_budget_max': project_budget_max,
            'hours_per_month': config.hours_per_month,
        },
    )
