#!/usr/bin/env python3
"""
Response models for API endpoints.

Fields are declared in snake_case and serialized in camelCase.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional, Dict, Any, Literal, Union


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SkillInfo(ApiModel):
    """A skill, with a developer's level or a company's importance when attached to a profile."""
    id: Any
    label: str
    slug: Optional[str] = None
    level: Optional[str] = None
    importance: Optional[str] = None


class MatchScores(ApiModel):
    """Developer band breakdown."""
    total: int = Field(ge=0, le=100)
    skill: int = Field(ge=0)
    availability: int = Field(ge=0)
    rate: int = Field(ge=0)
    experience: int = Field(ge=0)


class DeveloperMatch(ApiModel):
    """One ranked developer for a project."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "developer": {
                    "id": "dev_123",
                    "role": "developer",
                    "displayName": "Ada",
                    "headline": "Full-stack engineer",
                    "rate": 80.0,
                    "availability": "available",
                    "country": "UK"
                },
                "skills": [
                    {"id": 1, "label": "React", "slug": "react", "level": "expert"},
                    {"id": 2, "label": "Node.js", "slug": "nodejs", "level": "advanced"}
                ],
                "matchingSkills": [
                    {"id": 1, "label": "React", "level": "expert"},
                    {"id": 2, "label": "Node.js", "level": "advanced"}
                ],
                "scores": {"total": 93, "skill": 40, "availability": 25, "rate": 20, "experience": 8},
                "matchPercentage": 100,
                "recommendationReason": "Perfect skill match, Available now, Advanced skills, Within budget"
            }
        }
    )

    developer: Dict[str, Any]
    skills: List[SkillInfo]
    matching_skills: List[SkillInfo]
    scores: MatchScores
    match_percentage: int = Field(ge=0, le=100)
    recommendation_reason: str


class ProjectInfo(ApiModel):
    id: str
    title: str
    description: Optional[str] = None
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    currency: Optional[str] = None
    timeline: Optional[str] = None
    status: Optional[str] = None


class SearchCriteria(ApiModel):
    skills_required: int
    budget_range: str
    timeline: str


class SmartMatchResponse(ApiModel):
    """Developer ranking for a project."""
    success: bool = True
    project: Optional[ProjectInfo] = None
    required_skills: List[SkillInfo] = Field(default_factory=list)
    matches: List[DeveloperMatch] = Field(default_factory=list)
    total_matches: int = 0
    search_criteria: Optional[SearchCriteria] = None
    message: Optional[str] = None


class HourlyRate(ApiModel):
    min: Optional[float] = None
    max: Optional[float] = None


class CandidateMatch(ApiModel):
    """One ranked developer or company in the merged project ranking."""
    type: str
    profile: Dict[str, Any]
    match_score: int = Field(ge=0, le=100)
    matched_skills: List[str]
    total_skills: int = Field(ge=0)
    match_percentage: int = Field(ge=0, le=100)
    recommendation_reason: str
    availability_status: Optional[str] = None
    hourly_rate: Optional[HourlyRate] = None
    team_size: Optional[int] = None


class MatchedProject(ApiModel):
    id: str
    title: str
    required_skills: List[str]


class MatchesSummary(ApiModel):
    total: int
    developers: int
    companies: int
    top_match_score: int


class ProjectMatchesResponse(ApiModel):
    """Merged developer and company ranking for a project."""
    success: bool = True
    project: MatchedProject
    matches: List[CandidateMatch] = Field(default_factory=list)
    summary: MatchesSummary
    message: Optional[str] = None


class TalentScores(ApiModel):
    """Band breakdown for a developer matched on a company's own skills."""
    total: int = Field(ge=0, le=100)
    skill: int = Field(ge=0)
    availability: int = Field(ge=0)
    experience: int = Field(ge=0)
    importance: int = Field(ge=0)


class TalentMatch(ApiModel):
    developer: Dict[str, Any]
    profile: Dict[str, Any]
    skills: List[SkillInfo]
    matching_skills: List[SkillInfo]
    scores: TalentScores
    match_percentage: int = Field(ge=0, le=100)
    recommendation_reason: str


class CompanyPreferences(ApiModel):
    experience_level: Optional[str] = None
    work_style: Optional[str] = None
    industry: Optional[str] = None


class TalentMatchResponse(ApiModel):
    """Developers ranked for the calling company."""
    success: bool = True
    user_role: Literal['company'] = 'company'
    required_skills: List[SkillInfo] = Field(default_factory=list)
    matches: List[TalentMatch] = Field(default_factory=list)
    total_matches: int = 0
    company_preferences: Optional[CompanyPreferences] = None
    message: Optional[str] = None


class OpportunityScores(ApiModel):
    """Band breakdown for a company matched on a developer's own skills."""
    total: int = Field(ge=0, le=100)
    skill: int = Field(ge=0)
    importance: int = Field(ge=0)
    culture: int = Field(ge=0)


class DemandedSkill(ApiModel):
    """A developer skill the company lists, with both sides' view of it."""
    id: Any
    label: str
    developer_level: Optional[str] = None
    importance: Optional[str] = None


class SkillDemand(ApiModel):
    skill: str
    importance: Optional[str] = None


class OpportunityMatch(ApiModel):
    company: Dict[str, Any]
    company_profile: Dict[str, Any]
    matching_skills: List[DemandedSkill]
    skill_demand: List[SkillDemand]
    scores: OpportunityScores
    match_percentage: int = Field(ge=0, le=100)
    recommendation_reason: str


class OpportunityMatchResponse(ApiModel):
    """Companies ranked for the calling developer."""
    success: bool = True
    user_role: Literal['developer'] = 'developer'
    developer_skills: List[SkillInfo] = Field(default_factory=list)
    matches: List[OpportunityMatch] = Field(default_factory=list)
    total_matches: int = 0
    message: Optional[str] = None


# userRole tells the two shapes apart
ProfileSmartMatchResponse = Union[TalentMatchResponse, OpportunityMatchResponse]
