#!/usr/bin/env python3
"""
Company Score - weighted base with multiplicative boosts.

Formula:
- overlap  = matched / required
- coverage = matched / max(total_skills, 1)
- base     = overlap * 70 + coverage * 30
- x1.1 when current_capacity < max_projects, x1.05 when team_size > 5
- score    = round(min(boosted, 100))

The shape differs from developer scoring (additive bands). Both paths produce
a MatchResult so callers never depend on which formula ran.
"""

from typing import AbstractSet, Any, Dict, Optional, Tuple
import logging

from core.config_loader import ScorerConfig
from core.scorer.coverage import (
    round_half_up,
    matched_skills as find_matched_skills,
    distinct_skill_count,
    skill_overlap,
    calculate_match_percentage,
)
from core.scorer.models import CandidateType, CompanyCandidate, MatchResult
from core.scorer.recommendation import generate_recommendation_reason

logger = logging.getLogger(__name__)


def _has_capacity(candidate: CompanyCandidate) -> bool:
    if candidate.current_capacity is None or candidate.max_projects is None:
        return False
    return candidate.current_capacity < candidate.max_projects


def _is_large_team(candidate: CompanyCandidate, config: ScorerConfig) -> bool:
    if candidate.team_size is None:
        return False
    return candidate.team_size > config.company_team_size_threshold


def calculate_company_score(
    matched_count: int,
    required_count: int,
    total_skill_count: int,
    candidate: CompanyCandidate,
    config: ScorerConfig
) -> Tuple[int, Dict[str, Any]]:
    """
    Returns:
        Tuple of (score, score_components)
    """
    overlap = skill_overlap(matched_count, required_count)
    coverage = matched_count / max(total_skill_count, 1)

    base_score = overlap * config.company_overlap_weight + coverage * config.company_coverage_weight

    boosted = base_score
    capacity_boost = _has_capacity(candidate)
    if capacity_boost:
        boosted *= config.company_capacity_boost

    team_size_boost = _is_large_team(candidate, config)
    if team_size_boost:
        boosted *= config.company_team_size_boost

    # Boosts can push past 100, so clamp before rounding
    score = round_half_up(min(boosted, 100.0))

    score_components = {
        'skill_overlap': overlap,
        'skill_coverage': coverage,
        'base_score': base_score,
        'capacity_boost_applied': capacity_boost,
        'team_size_boost_applied': team_size_boost,
        'boosted_score': boosted,
        'clamped': boosted > 100.0,
    }
    return score, score_components


def score_company(
    candidate: CompanyCandidate,
    required_skill_ids: AbstractSet[Any],
    config: ScorerConfig
) -> Optional[MatchResult]:
    """Build a MatchResult for one company, or None when no skill overlaps."""
    matched = find_matched_skills(candidate.skills, required_skill_ids)
    if not matched:
        return None

    total_skills = candidate.total_skill_count
    if total_skills is None:
        total_skills = distinct_skill_count(candidate.skills)

    score, components = calculate_company_score(
        matched_count=len(matched),
        required_count=len(required_skill_ids),
        total_skill_count=total_skills,
        candidate=candidate,
        config=config,
    )
    match_percentage = calculate_match_percentage(len(matched), len(required_skill_ids))

    logger.debug(
        f"Company {candidate.id}: score={score} base={components['base_score']:.2f} "
        f"boosted={components['boosted_score']:.2f}"
    )

    return MatchResult(
        candidate=candidate,
        candidate_type=CandidateType.COMPANY,
        score=score,
        matched_skills=matched,
        total_skills=total_skills,
        match_percentage=match_percentage,
        recommendation_reason=generate_recommendation_reason(
            match_percentage=match_percentage,
            availability=None,
            experience_score=0,
            rate_score=0,
        ),
        scores={'total': score},
        components=components,
    )
