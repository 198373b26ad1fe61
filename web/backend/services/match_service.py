#!/usr/bin/env python3
"""
Match service - business logic for project match operations.

Loads the project and its candidates from the store, hands them to the
scorer and shapes the ranked results for the API.
"""

import logging
from typing import List, Optional, Dict, Any, Tuple

from core.config_loader import MatchingConfig
from core.scorer import (
    CandidateType,
    DeveloperScorer,
    CompanyScorer,
    MatchResult,
    OpportunityScorer,
    TalentScorer,
    rank_matches,
)
from core.scorer.aggregation import group_developer_rows, group_company_rows
from database.models import Project, Skill
from database.uow import MatchRepositories
from ..dependencies import Caller
from ..exceptions import ProjectNotFoundException, AccessDeniedException
from ..models.responses import (
    SkillInfo,
    MatchScores,
    DeveloperMatch,
    ProjectInfo,
    SearchCriteria,
    SmartMatchResponse,
    HourlyRate,
    CandidateMatch,
    MatchedProject,
    MatchesSummary,
    ProjectMatchesResponse,
    TalentScores,
    TalentMatch,
    CompanyPreferences,
    TalentMatchResponse,
    OpportunityScores,
    DemandedSkill,
    SkillDemand,
    OpportunityMatch,
    OpportunityMatchResponse,
    ProfileSmartMatchResponse,
)
from ..utils import safe_float, format_budget_range

logger = logging.getLogger(__name__)

SMART_MATCH_ROLES = frozenset({'company', 'admin'})

NO_SKILLS_SMART_MATCH_MESSAGE = "No skills defined for this project. Please add skills to get smart matches."
NO_SKILLS_MATCHES_MESSAGE = "No skills defined for this project"
NO_COMPANY_SKILLS_MESSAGE = (
    "No skill requirements defined. Please add skills to your company profile to get smart matches."
)
NO_DEVELOPER_SKILLS_MESSAGE = "No skills found in your profile. Please add skills to get smart matches."


class MatchService:
    """
    Service for ranking candidates against a project or against a profile's own skills.

    A caller of None means an operator (CLI) and skips role and ownership checks.
    """

    def __init__(self, repos: MatchRepositories, matching: Optional[MatchingConfig] = None):
        self.repos = repos
        self.matching = matching or MatchingConfig()
        self.developer_scorer = DeveloperScorer(self.matching.scorer)
        self.company_scorer = CompanyScorer(self.matching.scorer)
        self.talent_scorer = TalentScorer(self.matching.scorer, self.matching.profile_match.talent)
        self.opportunity_scorer = OpportunityScorer(
            self.matching.scorer, self.matching.profile_match.opportunity
        )

    def get_smart_matches(self, project_id: str, caller: Optional[Caller] = None) -> SmartMatchResponse:
        """
        Rank approved developers for a project.

        Args:
            project_id: The project ID.
            caller: The requesting user, or None for operator access.

        Returns:
            Top N developer matches with the pre-truncation count.

        Raises:
            AccessDeniedException: If the caller is not a company/admin or does not own the project.
            ProjectNotFoundException: If the project does not exist.
        """
        if caller is not None and caller.role not in SMART_MATCH_ROLES:
            logger.warning(
                f"Smart match on project {project_id} denied for {caller.user_id} with role {caller.role}"
            )
            raise AccessDeniedException("Only company accounts can request smart matches")

        project = self._get_owned_project(project_id, caller)
        required_skills = self.repos.projects.get_required_skills(project_id)
        required_ids = frozenset(skill.id for skill in required_skills)

        if not required_ids:
            return SmartMatchResponse(
                project=self._to_project_info(project),
                matches=[],
                message=NO_SKILLS_SMART_MATCH_MESSAGE
            )

        budget_max = safe_float(project.budget_max, default=None)
        developers = group_developer_rows(self.repos.candidates.find_developer_rows(required_ids))
        results = rank_matches(
            self.developer_scorer.score_all(required_ids, developers, project_budget_max=budget_max)
        )
        top = results[:self.matching.result_policy.top_n]

        logger.info(
            f"Smart match for project {project_id}: {len(results)} developers matched, returning {len(top)}"
        )

        return SmartMatchResponse(
            project=self._to_project_info(project),
            required_skills=[self._to_skill_info(skill) for skill in required_skills],
            matches=[self._to_developer_match(result) for result in top],
            total_matches=len(results),
            search_criteria=SearchCriteria(
                skills_required=len(required_ids),
                budget_range=format_budget_range(
                    safe_float(project.budget_min, default=None), budget_max
                ),
                timeline=project.timeline or "Timeline not specified"
            )
        )

    def get_project_matches(self, project_id: str, caller: Optional[Caller] = None) -> ProjectMatchesResponse:
        """
        Rank developers and companies together for a project.

        The merged list is not truncated.

        Raises:
            ProjectNotFoundException: If the project does not exist.
            AccessDeniedException: If the caller does not own the project.
        """
        project = self._get_owned_project(project_id, caller)
        required_skills = self.repos.projects.get_required_skills(project_id)
        required_ids = frozenset(skill.id for skill in required_skills)
        matched_project = MatchedProject(
            id=project.id,
            title=project.title,
            required_skills=[skill.label for skill in required_skills]
        )

        if not required_ids:
            return ProjectMatchesResponse(
                project=matched_project,
                matches=[],
                summary=MatchesSummary(total=0, developers=0, companies=0, top_match_score=0),
                message=NO_SKILLS_MATCHES_MESSAGE
            )

        developer_results, company_results = self._score_all_candidates(project, required_ids)
        ranked = rank_matches(developer_results, company_results)

        return ProjectMatchesResponse(
            project=matched_project,
            matches=[self._to_candidate_match(result) for result in ranked],
            summary=MatchesSummary(
                total=len(ranked),
                developers=len(developer_results),
                companies=len(company_results),
                top_match_score=ranked[0].score if ranked else 0
            )
        )

    def get_profile_smart_matches(
        self,
        caller: Caller
    ) -> ProfileSmartMatchResponse:
        """
        Rank the other side of the marketplace against the caller's own skills.

        Companies get developers scored on their listed skills; developers get
        companies that list their skills.

        Raises:
            AccessDeniedException: If the caller is neither a company nor a developer.
        """
        if caller.role == CandidateType.COMPANY.value:
            return self.get_talent_matches(caller.user_id)
        if caller.role == CandidateType.DEVELOPER.value:
            return self.get_opportunity_matches(caller.user_id)

        logger.warning(f"Profile smart match denied for {caller.user_id} with role {caller.role}")
        raise AccessDeniedException("Invalid role for smart matching")

    def get_talent_matches(self, company_id: str) -> TalentMatchResponse:
        company_skills = self.repos.profiles.get_company_skills(company_id)
        if not company_skills:
            return TalentMatchResponse(matches=[], message=NO_COMPANY_SKILLS_MESSAGE)

        importance_by_skill = {skill.id: importance for skill, importance in company_skills}
        skill_ids = frozenset(importance_by_skill)

        developers = group_developer_rows(self.repos.candidates.find_developer_rows(skill_ids))
        results = rank_matches(
            self.talent_scorer.score_all(skill_ids, developers, importance_by_skill=importance_by_skill)
        )
        top = results[:self.matching.result_policy.top_n]

        logger.info(
            f"Talent match for company {company_id}: {len(results)} developers matched, returning {len(top)}"
        )

        company = self.repos.profiles.get_company_profile(company_id)
        preferences = None
        if company is not None:
            preferences = CompanyPreferences(
                experience_level=company.experience_level,
                work_style=company.work_style,
                industry=company.industry
            )

        return TalentMatchResponse(
            required_skills=[
                SkillInfo(id=skill.id, label=skill.label, slug=skill.slug, importance=importance)
                for skill, importance in company_skills
            ],
            matches=[self._to_talent_match(result) for result in top],
            total_matches=len(results),
            company_preferences=preferences
        )

    def get_opportunity_matches(self, developer_id: str) -> OpportunityMatchResponse:
        developer_skills = self.repos.profiles.get_developer_skills(developer_id)
        if not developer_skills:
            return OpportunityMatchResponse(matches=[], message=NO_DEVELOPER_SKILLS_MESSAGE)

        levels = {skill.id: level for skill, level in developer_skills}
        skill_ids = frozenset(levels)

        companies = group_company_rows(self.repos.candidates.find_company_rows(skill_ids))
        results = rank_matches(
            self.opportunity_scorer.score_all(skill_ids, companies, developer_levels=levels)
        )
        top = results[:self.matching.result_policy.top_n]

        logger.info(
            f"Opportunity match for developer {developer_id}: {len(results)} companies matched, "
            f"returning {len(top)}"
        )

        return OpportunityMatchResponse(
            developer_skills=[
                SkillInfo(id=skill.id, label=skill.label, slug=skill.slug, level=level)
                for skill, level in developer_skills
            ],
            matches=[self._to_opportunity_match(result) for result in top],
            total_matches=len(results)
        )

    def _score_all_candidates(
        self,
        project: Project,
        required_ids: frozenset
    ) -> Tuple[List[MatchResult], List[MatchResult]]:
        developers = group_developer_rows(self.repos.candidates.find_developer_rows(required_ids))
        companies = group_company_rows(self.repos.candidates.find_company_rows(required_ids))

        developer_results = self.developer_scorer.score_all(
            required_ids, developers, project_budget_max=safe_float(project.budget_max, default=None)
        )
        company_results = self.company_scorer.score_all(required_ids, companies)
        return developer_results, company_results

    def _get_owned_project(self, project_id: str, caller: Optional[Caller]) -> Project:
        project = self.repos.projects.get_project(project_id)
        if project is None:
            raise ProjectNotFoundException(f"Project {project_id} not found")

        if caller is not None and project.company_id != caller.user_id:
            logger.warning(f"Access to project {project_id} denied for {caller.user_id}: not the owner")
            raise AccessDeniedException("Access denied")

        return project

    def _to_project_info(self, project: Project) -> ProjectInfo:
        return ProjectInfo(
            id=project.id,
            title=project.title,
            description=project.description,
            budget_min=safe_float(project.budget_min, default=None),
            budget_max=safe_float(project.budget_max, default=None),
            currency=project.currency,
            timeline=project.timeline,
            status=project.status
        )

    def _to_skill_info(self, skill: Skill) -> SkillInfo:
        return SkillInfo(id=skill.id, label=skill.label, slug=skill.slug)

    def _to_developer_match(self, result: MatchResult) -> DeveloperMatch:
        developer = result.candidate
        return DeveloperMatch(
            developer={**developer.profile, 'role': CandidateType.DEVELOPER.value},
            skills=[
                SkillInfo(id=cs.skill.id, label=cs.skill.label, slug=cs.skill.slug, level=cs.level)
                for cs in developer.skills
            ],
            matching_skills=[
                SkillInfo(id=cs.skill.id, label=cs.skill.label, level=cs.level)
                for cs in result.matched_skills
            ],
            scores=MatchScores(**result.scores),
            match_percentage=result.match_percentage,
            recommendation_reason=result.recommendation_reason
        )

    def _to_candidate_match(self, result: MatchResult) -> CandidateMatch:
        candidate = result.candidate
        fields: Dict[str, Any] = {}

        if result.candidate_type == CandidateType.DEVELOPER:
            fields['availability_status'] = candidate.availability
            if candidate.rate:
                fields['hourly_rate'] = HourlyRate(min=candidate.rate, max=candidate.rate)
        else:
            fields['team_size'] = candidate.team_size
            if candidate.rate_min or candidate.rate_max:
                fields['hourly_rate'] = HourlyRate(
                    min=candidate.rate_min or None,
                    max=candidate.rate_max or None
                )

        return CandidateMatch(
            type=result.candidate_type.value,
            profile=candidate.profile,
            match_score=result.score,
            matched_skills=result.matched_skill_labels,
            total_skills=result.total_skills,
            match_percentage=result.match_percentage,
            recommendation_reason=result.recommendation_reason,
            **fields
        )

    def _to_talent_match(self, result: MatchResult) -> TalentMatch:
        developer = result.candidate
        return TalentMatch(
            developer={
                'id': developer.id,
                'displayName': developer.display_name,
                'avatarUrl': developer.profile.get('avatarUrl'),
                'role': CandidateType.DEVELOPER.value,
            },
            profile=developer.profile,
            skills=[
                SkillInfo(id=cs.skill.id, label=cs.skill.label, slug=cs.skill.slug, level=cs.level)
                for cs in developer.skills
            ],
            matching_skills=[
                SkillInfo(id=cs.skill.id, label=cs.skill.label, level=cs.level, importance=cs.importance)
                for cs in result.matched_skills
            ],
            scores=TalentScores(**result.scores),
            match_percentage=result.match_percentage,
            recommendation_reason=result.recommendation_reason
        )

    def _to_opportunity_match(self, result: MatchResult) -> OpportunityMatch:
        company = result.candidate
        return OpportunityMatch(
            company={
                'id': company.id,
                'displayName': company.display_name,
                'avatarUrl': company.profile.get('avatarUrl'),
                'role': CandidateType.COMPANY.value,
            },
            company_profile=company.profile,
            matching_skills=[
                DemandedSkill(
                    id=cs.skill.id,
                    label=cs.skill.label,
                    developer_level=cs.level,
                    importance=cs.importance
                )
                for cs in result.matched_skills
            ],
            skill_demand=[
                SkillDemand(skill=cs.skill.label, importance=cs.importance)
                for cs in result.matched_skills
            ],
            scores=OpportunityScores(**result.scores),
            match_percentage=result.match_percentage,
            recommendation_reason=result.recommendation_reason
        )
