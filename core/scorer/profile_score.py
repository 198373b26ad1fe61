#!/usr/bin/env python3
"""
Profile Match Score - match a profile's own skills against the other side.

Talent (company looking for developers), default maxima:
- Skill match      0-35: share of the company's skills the developer holds
- Importance       0-25: points per matched skill by the company's importance
- Availability     0-25: same band as project scoring
- Experience       0-15: same band as project scoring

Opportunity (developer looking for companies), default maxima:
- Skill match      0-40: matched skills against 70% of the developer's skills
- Importance       0-35: points per matched skill by the company's importance
- Culture          0-25: base points plus flexible-work and growth-stage bonuses

Matched skills carry both sides: the developer's level and the company's importance.
"""

from typing import AbstractSet, Any, Dict, Iterable, List, Mapping, Optional
import logging

from core.config_loader import OpportunityMatchConfig, ScorerConfig, TalentMatchConfig
from core.scorer.coverage import (
    round_half_up,
    matched_skills as find_matched_skills,
    distinct_skill_count,
    skill_overlap,
    calculate_match_percentage,
)
from core.scorer.developer_score import calculate_availability_band, calculate_experience_band
from core.scorer.models import (
    CandidateSkill,
    CandidateType,
    CompanyCandidate,
    DeveloperCandidate,
    MatchResult,
    ProficiencyLevel,
    SkillImportance,
)
from core.scorer.recommendation import generate_talent_reason, generate_opportunity_reason

logger = logging.getLogger(__name__)


def _value(enum_or_str: Any) -> Any:
    return getattr(enum_or_str, 'value', enum_or_str)


def calculate_importance_band(
    importances: Iterable[Optional[str]],
    points: Dict[str, float],
    band_max: float
) -> int:
    """Sum importance points over matched skills, capped at the band maximum."""
    total = sum(points.get(_value(importance), 0.0) for importance in importances)
    return round_half_up(min(band_max, total))


def calculate_culture_band(
    work_style: Optional[str],
    size: Optional[str],
    config: OpportunityMatchConfig
) -> int:
    points = config.culture_base_points
    if work_style in config.flexible_work_styles:
        points += config.flexible_work_points
    if size in config.growth_stage_sizes:
        points += config.growth_stage_points
    return round_half_up(min(config.culture_band_max, points))


def calculate_opportunity_skill_band(
    matched_count: int,
    developer_skill_count: int,
    config: OpportunityMatchConfig
) -> int:
    """Full points once the company wants skill_target_share of the developer's skills."""
    target = max(1.0, developer_skill_count * config.skill_target_share)
    return round_half_up(config.skill_band_max * min(1.0, matched_count / target))


def _count(matched: List[CandidateSkill], attr: str, value: str) -> int:
    return sum(1 for cs in matched if _value(getattr(cs, attr)) == value)


def score_talent_candidate(
    candidate: DeveloperCandidate,
    company_skill_ids: AbstractSet[Any],
    importance_by_skill: Mapping[Any, Optional[str]],
    config: ScorerConfig,
    talent: TalentMatchConfig
) -> Optional[MatchResult]:
    """Score one developer against a company's skills, or None when none overlap."""
    held = find_matched_skills(candidate.skills, company_skill_ids)
    if not held:
        return None

    matched = [
        CandidateSkill(skill=cs.skill, level=cs.level, importance=importance_by_skill.get(cs.skill.id))
        for cs in held
    ]
    required_count = len(company_skill_ids)

    bands = {
        'skill': round_half_up(talent.skill_band_max * skill_overlap(len(matched), required_count)),
        'availability': calculate_availability_band(candidate.availability, config),
        'experience': calculate_experience_band(matched, config),
        'importance': calculate_importance_band(
            [cs.importance for cs in matched], talent.importance_points, talent.importance_band_max
        ),
    }
    total = sum(bands.values())
    match_percentage = calculate_match_percentage(len(matched), required_count)
    critical_count = _count(matched, 'importance', SkillImportance.REQUIRED.value)

    logger.debug(
        f"Talent {candidate.id}: total={total} skill={bands['skill']} importance={bands['importance']} "
        f"availability={bands['availability']} experience={bands['experience']}"
    )

    return MatchResult(
        candidate=candidate,
        candidate_type=CandidateType.DEVELOPER,
        score=total,
        matched_skills=matched,
        total_skills=distinct_skill_count(candidate.skills),
        match_percentage=match_percentage,
        recommendation_reason=generate_talent_reason(
            match_percentage=match_percentage,
            critical_count=critical_count,
            availability=_value(candidate.availability),
            expert_count=_count(matched, 'level', ProficiencyLevel.EXPERT.value),
        ),
        scores={'total': total, **bands},
        components={
            'matched_count': len(matched),
            'required_count': required_count,
            'critical_count': critical_count,
        },
    )


def score_opportunity_candidate(
    candidate: CompanyCandidate,
    developer_skill_ids: AbstractSet[Any],
    developer_levels: Mapping[Any, Optional[str]],
    config: OpportunityMatchConfig
) -> Optional[MatchResult]:
    """Score one company against a developer's skills, or None when none overlap."""
    listed = find_matched_skills(candidate.skills, developer_skill_ids)
    if not listed:
        return None

    matched = [
        CandidateSkill(skill=cs.skill, level=developer_levels.get(cs.skill.id), importance=cs.importance)
        for cs in listed
    ]
    developer_skill_count = len(developer_skill_ids)

    bands = {
        'skill': calculate_opportunity_skill_band(len(matched), developer_skill_count, config),
        'importance': calculate_importance_band(
            [cs.importance for cs in matched], config.importance_points, config.importance_band_max
        ),
        'culture': calculate_culture_band(candidate.work_style, candidate.size, config),
    }
    total = sum(bands.values())

    logger.debug(
        f"Opportunity {candidate.id}: total={total} skill={bands['skill']} "
        f"importance={bands['importance']} culture={bands['culture']}"
    )

    return MatchResult(
        candidate=candidate,
        candidate_type=CandidateType.COMPANY,
        score=total,
        matched_skills=matched,
        total_skills=distinct_skill_count(candidate.skills),
        match_percentage=calculate_match_percentage(len(matched), developer_skill_count),
        recommendation_reason=generate_opportunity_reason(
            required_count=_count(matched, 'importance', SkillImportance.REQUIRED.value),
            preferred_count=_count(matched, 'importance', SkillImportance.PREFERRED.value),
            offers_flexible_work=candidate.work_style in config.flexible_work_styles,
            industry=candidate.industry,
        ),
        scores={'total': total, **bands},
        components={
            'matched_count': len(matched),
            'developer_skill_count': developer_skill_count,
        },
    )
