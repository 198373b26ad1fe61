#!/usr/bin/env python3
"""
Coverage Calculations - Skill overlap between a candidate and a project.

Shared by both developer and company scoring.
"""

from typing import AbstractSet, Any, Dict, List
import math
import logging

from core.config_loader import OpportunityMatchConfig, ScorerConfig, TalentMatchConfig
from core.scorer.exceptions import PreconditionViolation
from core.scorer.models import CandidateSkill

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (12.5 -> 13, not 12)."""
    return int(math.floor(value + 0.5))


def require_skill_set(required_skill_ids: Any) -> None:
    """Reject required-skill inputs that are not a set."""
    if not isinstance(required_skill_ids, (set, frozenset)):
        raise PreconditionViolation(
            f"required_skill_ids must be a set, got {type(required_skill_ids).__name__}"
        )


def validate_scorer_config(config: ScorerConfig) -> None:
    """
    Check that weights are usable before any candidate is scored.

    Raises:
        PreconditionViolation: on negative weights, a non-positive hours_per_month,
            or developer band maxima that could sum above 100.
    """
    weights = {
        'skill_band_max': config.skill_band_max,
        'availability_default_points': config.availability_default_points,
        'rate_within_budget_points': config.rate_within_budget_points,
        'rate_near_budget_points': config.rate_near_budget_points,
        'rate_stretch_budget_points': config.rate_stretch_budget_points,
        'rate_over_budget_points': config.rate_over_budget_points,
        'rate_default_points': config.rate_default_points,
        'rate_near_multiplier': config.rate_near_multiplier,
        'rate_stretch_multiplier': config.rate_stretch_multiplier,
        'experience_band_max': config.experience_band_max,
        'company_overlap_weight': config.company_overlap_weight,
        'company_coverage_weight': config.company_coverage_weight,
        'company_capacity_boost': config.company_capacity_boost,
        'company_team_size_boost': config.company_team_size_boost,
    }
    weights.update({f'availability_points.{k}': v for k, v in config.availability_points.items()})
    weights.update({f'experience_points.{k}': v for k, v in config.experience_points.items()})

    negative = [name for name, value in weights.items() if value < 0]
    if negative:
        raise PreconditionViolation(f"Negative scorer weights: {', '.join(sorted(negative))}")

    if config.hours_per_month <= 0:
        raise PreconditionViolation("hours_per_month must be positive")

    availability_max = max(
        list(config.availability_points.values()) + [config.availability_default_points]
    )
    rate_max = max(
        config.rate_within_budget_points,
        config.rate_near_budget_points,
        config.rate_stretch_budget_points,
        config.rate_over_budget_points,
        config.rate_default_points,
    )
    band_total = config.skill_band_max + availability_max + rate_max + config.experience_band_max
    if band_total > 100:
        raise PreconditionViolation(f"Developer band maxima sum to {band_total}, above 100")


def matched_skills(
    candidate_skills: List[CandidateSkill],
    required_skill_ids: AbstractSet[Any]
) -> List[CandidateSkill]:
    """
    Candidate skills that intersect the required set.

    A required skill is counted once even if the candidate lists it more
    than once; the first listing wins.
    """
    seen = set()
    result = []
    for cs in candidate_skills:
        skill_id = cs.skill.id
        if skill_id in required_skill_ids and skill_id not in seen:
            seen.add(skill_id)
            result.append(cs)
    return result


def distinct_skill_count(candidate_skills: List[CandidateSkill]) -> int:
    return len({cs.skill.id for cs in candidate_skills})


def skill_overlap(matched_count: int, required_count: int) -> float:
    """Fraction of required skills the candidate holds (0.0-1.0)."""
    return matched_count / required_count if required_count > 0 else 0.0


def calculate_match_percentage(matched_count: int, required_count: int) -> int:
    """Skill overlap scaled to 0-100, reported alongside the total score."""
    return round_half_up(100 * skill_overlap(matched_count, required_count))


def _check_weights(weights: Dict[str, float], band_maxima: List[float], label: str) -> None:
    negative = [name for name, value in weights.items() if value < 0]
    if negative:
        raise PreconditionViolation(f"Negative {label} weights: {', '.join(sorted(negative))}")

    band_total = sum(band_maxima)
    if band_total > 100:
        raise PreconditionViolation(f"{label.capitalize()} band maxima sum to {band_total}, above 100")


def validate_talent_config(config: TalentMatchConfig, scorer_config: ScorerConfig) -> None:
    """Talent bands borrow availability and experience from the scorer config."""
    weights = {
        'skill_band_max': config.skill_band_max,
        'importance_band_max': config.importance_band_max,
    }
    weights.update({f'importance_points.{k}': v for k, v in config.importance_points.items()})

    availability_max = max(
        list(scorer_config.availability_points.values()) + [scorer_config.availability_default_points]
    )
    _check_weights(
        weights,
        [config.skill_band_max, config.importance_band_max, availability_max, scorer_config.experience_band_max],
        'talent'
    )


def validate_opportunity_config(config: OpportunityMatchConfig) -> None:
    weights = {
        'skill_band_max': config.skill_band_max,
        'importance_band_max': config.importance_band_max,
        'culture_base_points': config.culture_base_points,
        'flexible_work_points': config.flexible_work_points,
        'growth_stage_points': config.growth_stage_points,
        'culture_band_max': config.culture_band_max,
    }
    weights.update({f'importance_points.{k}': v for k, v in config.importance_points.items()})

    if config.skill_target_share <= 0:
        raise PreconditionViolation("skill_target_share must be positive")

    _check_weights(
        weights,
        [config.skill_band_max, config.importance_band_max, config.culture_band_max],
        'opportunity'
    )
