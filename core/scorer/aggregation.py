#!/usr/bin/env python3
"""
Candidate Aggregation - fold flattened (candidate, skill) rows into candidates.

The store returns one row per candidate skill. Rows are grouped by candidate id
before scoring so each candidate is scored independently. Grouping preserves
the order in which candidates first appear; that order is the tie-break for
equal scores.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from core.scorer.models import (
    CandidateSkill,
    CompanyCandidate,
    DeveloperCandidate,
    Skill,
)


@dataclass
class DeveloperSkillRow:
    """One (developer, skill) pair as read from the store."""
    user_id: Any
    display_name: Optional[str]
    skill_id: Any
    skill_label: str
    level: Optional[str] = None
    skill_slug: Optional[str] = None
    availability: Optional[str] = None
    rate: Optional[float] = None
    profile: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CompanySkillRow:
    """One (company, skill) pair as read from the store."""
    user_id: Any
    display_name: Optional[str]
    skill_id: Any
    skill_label: str
    importance: Optional[str] = None
    skill_slug: Optional[str] = None
    company_name: Optional[str] = None
    team_size: Optional[int] = None
    current_capacity: Optional[int] = None
    max_projects: Optional[int] = None
    rate_min: Optional[float] = None
    rate_max: Optional[float] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    work_style: Optional[str] = None
    total_skill_count: Optional[int] = None
    profile: Dict[str, Any] = field(default_factory=dict)


def group_developer_rows(rows: Iterable[DeveloperSkillRow]) -> List[DeveloperCandidate]:
    grouped: Dict[Any, DeveloperCandidate] = {}
    for row in rows:
        candidate = grouped.get(row.user_id)
        if candidate is None:
            candidate = DeveloperCandidate(
                id=row.user_id,
                display_name=row.display_name,
                availability=row.availability,
                rate=row.rate,
                profile=dict(row.profile),
            )
            grouped[row.user_id] = candidate
        candidate.skills.append(CandidateSkill(
            skill=Skill(id=row.skill_id, label=row.skill_label, slug=row.skill_slug),
            level=row.level,
        ))
    return list(grouped.values())


def group_company_rows(rows: Iterable[CompanySkillRow]) -> List[CompanyCandidate]:
    grouped: Dict[Any, CompanyCandidate] = {}
    for row in rows:
        candidate = grouped.get(row.user_id)
        if candidate is None:
            candidate = CompanyCandidate(
                id=row.user_id,
                display_name=row.display_name,
                company_name=row.company_name,
                team_size=row.team_size,
                current_capacity=row.current_capacity,
                max_projects=row.max_projects,
                rate_min=row.rate_min,
                rate_max=row.rate_max,
                industry=row.industry,
                size=row.size,
                work_style=row.work_style,
                total_skill_count=row.total_skill_count,
                profile=dict(row.profile),
            )
            grouped[row.user_id] = candidate
        candidate.skills.append(CandidateSkill(
            skill=Skill(id=row.skill_id, label=row.skill_label, slug=row.skill_slug),
            importance=row.importance,
        ))
    return list(grouped.values())
