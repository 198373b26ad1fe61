#!/usr/bin/env python3
"""
Scoring Models - In-memory data structures consumed and produced by the scorer.

Candidates arrive already fetched from the profile/skill store; match results
are ephemeral and never persisted.
"""

from enum import Enum
from typing import List, Dict, Any, Optional, Union
from dataclasses import dataclass, field


class ProficiencyLevel(str, Enum):
    BEGINNER = 'beginner'
    INTERMEDIATE = 'intermediate'
    ADVANCED = 'advanced'
    EXPERT = 'expert'


class Availability(str, Enum):
    AVAILABLE = 'available'
    BUSY = 'busy'
    UNAVAILABLE = 'unavailable'


class SkillImportance(str, Enum):
    REQUIRED = 'required'
    PREFERRED = 'preferred'
    NICE_TO_HAVE = 'nice_to_have'


class CandidateType(str, Enum):
    DEVELOPER = 'developer'
    COMPANY = 'company'


@dataclass(frozen=True)
class Skill:
    """A skill identifier plus its display label. Equality is by id only."""
    id: Any
    label: str = field(compare=False)
    slug: Optional[str] = field(default=None, compare=False)


@dataclass
class CandidateSkill:
    """One skill held by a candidate, with a level (developers) or importance (companies)."""
    skill: Skill
    level: Optional[str] = None
    importance: Optional[str] = None


@dataclass
class DeveloperCandidate:
    id: Any
    display_name: Optional[str]
    skills: List[CandidateSkill] = field(default_factory=list)
    availability: Optional[str] = None
    rate: Optional[float] = None
    profile: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CompanyCandidate:
    id: Any
    display_name: Optional[str]
    company_name: Optional[str] = None
    skills: List[CandidateSkill] = field(default_factory=list)
    team_size: Optional[int] = None
    current_capacity: Optional[int] = None
    max_projects: Optional[int] = None
    rate_min: Optional[float] = None
    rate_max: Optional[float] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    work_style: Optional[str] = None
    # Total skills listed on the profile; defaults to len(skills) when unknown
    total_skill_count: Optional[int] = None
    profile: Dict[str, Any] = field(default_factory=dict)


Candidate = Union[DeveloperCandidate, CompanyCandidate]


@dataclass
class MatchResult:
    """Scored match of one candidate against a project's required skills."""
    candidate: Candidate
    candidate_type: CandidateType
    score: int = 0
    matched_skills: List[CandidateSkill] = field(default_factory=list)
    total_skills: int = 0
    match_percentage: int = 0
    recommendation_reason: str = ""
    scores: Dict[str, int] = field(default_factory=dict)
    components: Dict[str, Any] = field(default_factory=dict)

    @property
    def matched_skill_labels(self) -> List[str]:
        return [cs.skill.label for cs in self.matched_skills]
