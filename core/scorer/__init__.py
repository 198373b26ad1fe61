#!/usr/bin/env python3
"""
Scoring Module - ranks developers and companies against project skills.

Public API:
- score_developers / score_companies: score a candidate pool for a project
- score_talent / score_opportunities: score a candidate pool for a profile's own skills
- rank_matches: merge and order scored pools
- MatchResult: scored match of one candidate
- PreconditionViolation: raised on invalid inputs or configuration

Modules:
- models.py: In-memory candidate and result types
- aggregation.py: Group flattened store rows into candidates
- coverage.py: Skill overlap, rounding and config validation
- developer_score.py: Developer bands (skill, availability, rate, experience)
- company_score.py: Company overlap/coverage base with boosts
- profile_score.py: Talent and opportunity bands for profile-level matching
- recommendation.py: Human-readable match reasons
- service.py: Scorer strategies and entry points
"""

from core.scorer.exceptions import PreconditionViolation, ScoringError
from core.scorer.models import (
    Availability,
    CandidateSkill,
    CandidateType,
    CompanyCandidate,
    DeveloperCandidate,
    MatchResult,
    ProficiencyLevel,
    Skill,
    SkillImportance,
)
from core.scorer.service import (
    CandidateScorer,
    CompanyScorer,
    DeveloperScorer,
    OpportunityScorer,
    TalentScorer,
    rank_matches,
    score_companies,
    score_developers,
    score_opportunities,
    score_talent,
)

__all__ = [
    'Availability',
    'CandidateScorer',
    'CandidateSkill',
    'CandidateType',
    'CompanyCandidate',
    'CompanyScorer',
    'DeveloperCandidate',
    'DeveloperScorer',
    'MatchResult',
    'OpportunityScorer',
    'PreconditionViolation',
    'ProficiencyLevel',
    'ScoringError',
    'Skill',
    'SkillImportance',
    'TalentScorer',
    'rank_matches',
    'score_companies',
    'score_developers',
    'score_opportunities',
    'score_talent',
]
