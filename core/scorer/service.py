#!/usr/bin/env python3
"""
Match Scorer - ranks candidates against a set of skills, either a project's
required skills or a profile's own skills.

One strategy per matching direction, all producing MatchResult:
- DeveloperScorer: developers for a project, additive capped bands (skill, availability, rate, experience)
- CompanyScorer: companies for a project, weighted overlap/coverage base with multiplicative boosts
- TalentScorer: developers for a company's own skills (skill, importance, availability, experience)
- OpportunityScorer: companies for a developer's own skills (skill, importance, culture)

The scorer is pure and synchronous: no I/O, no shared state. Data fetching,
top-N truncation and serialization belong to the caller.
"""

from abc import ABC, abstractmethod
from typing import AbstractSet, Any, List, Mapping, Optional, Sequence
import logging

from core.config_loader import OpportunityMatchConfig, ScorerConfig, TalentMatchConfig
from core.scorer.coverage import (
    require_skill_set,
    validate_opportunity_config,
    validate_scorer_config,
    validate_talent_config,
)
from core.scorer.developer_score import score_developer
from core.scorer.company_score import score_company
from core.scorer.profile_score import score_talent_candidate, score_opportunity_candidate
from core.scorer.models import CompanyCandidate, DeveloperCandidate, MatchResult

logger = logging.getLogger(__name__)


class CandidateScorer(ABC):
    """Scores one candidate type. Subclasses return None for non-matching candidates."""

    candidate_type: str = ""

    def __init__(self, config: Optional[ScorerConfig] = None):
        self.config = config or ScorerConfig()
        validate_scorer_config(self.config)

    @abstractmethod
    def score_candidate(
        self,
        candidate: Any,
        required_skill_ids: AbstractSet[Any],
        **context: Any
    ) -> Optional[MatchResult]:
        ...

    def score_all(
        self,
        required_skill_ids: AbstractSet[Any],
        candidates: Sequence[Any],
        **context: Any
    ) -> List[MatchResult]:
        """Score every candidate, dropping those with no matched skill.

        Returns an empty list immediately when no skills are required; callers
        should ask for project skills rather than show an empty ranking.
        """
        require_skill_set(required_skill_ids)
        if not required_skill_ids:
            return []

        results = []
        for candidate in candidates:
            result = self.score_candidate(candidate, required_skill_ids, **context)
            if result is not None:
                results.append(result)

        logger.info(
            f"Scored {len(candidates)} {self.candidate_type} candidates, "
            f"{len(results)} share at least one of {len(required_skill_ids)} required skills"
        )
        return results


class DeveloperScorer(CandidateScorer):
    candidate_type = "developer"

    def score_candidate(
        self,
        candidate: DeveloperCandidate,
        required_skill_ids: AbstractSet[Any],
        project_budget_max: Optional[float] = None,
        **context: Any
    ) -> Optional[MatchResult]:
        return score_developer(candidate, required_skill_ids, project_budget_max, self.config)


class CompanyScorer(CandidateScorer):
    candidate_type = "company"

    def score_candidate(
        self,
        candidate: CompanyCandidate,
        required_skill_ids: AbstractSet[Any],
        **context: Any
    ) -> Optional[MatchResult]:
        return score_company(candidate, required_skill_ids, self.config)


class TalentScorer(CandidateScorer):
    """Developers for a company, scored against the company's own skills."""

    candidate_type = "developer"

    def __init__(
        self,
        config: Optional[ScorerConfig] = None,
        talent_config: Optional[TalentMatchConfig] = None
    ):
        super().__init__(config)
        self.talent_config = talent_config or TalentMatchConfig()
        validate_talent_config(self.talent_config, self.config)

    def score_candidate(
        self,
        candidate: DeveloperCandidate,
        required_skill_ids: AbstractSet[Any],
        importance_by_skill: Optional[Mapping[Any, Optional[str]]] = None,
        **context: Any
    ) -> Optional[MatchResult]:
        return score_talent_candidate(
            candidate, required_skill_ids, importance_by_skill or {}, self.config, self.talent_config
        )


class OpportunityScorer(CandidateScorer):
    """Companies for a developer, scored against the developer's own skills."""

    candidate_type = "company"

    def __init__(
        self,
        config: Optional[ScorerConfig] = None,
        opportunity_config: Optional[OpportunityMatchConfig] = None
    ):
        super().__init__(config)
        self.opportunity_config = opportunity_config or OpportunityMatchConfig()
        validate_opportunity_config(self.opportunity_config)

    def score_candidate(
        self,
        candidate: CompanyCandidate,
        required_skill_ids: AbstractSet[Any],
        developer_levels: Optional[Mapping[Any, Optional[str]]] = None,
        **context: Any
    ) -> Optional[MatchResult]:
        return score_opportunity_candidate(
            candidate, required_skill_ids, developer_levels or {}, self.opportunity_config
        )


def score_developers(
    required_skill_ids: AbstractSet[Any],
    candidates: Sequence[DeveloperCandidate],
    project_budget_max: Optional[float] = None,
    config: Optional[ScorerConfig] = None
) -> List[MatchResult]:
    return DeveloperScorer(config).score_all(
        required_skill_ids, candidates, project_budget_max=project_budget_max
    )


def score_companies(
    required_skill_ids: AbstractSet[Any],
    candidates: Sequence[CompanyCandidate],
    config: Optional[ScorerConfig] = None
) -> List[MatchResult]:
    return CompanyScorer(config).score_all(required_skill_ids, candidates)


def score_talent(
    company_skill_ids: AbstractSet[Any],
    candidates: Sequence[DeveloperCandidate],
    importance_by_skill: Optional[Mapping[Any, Optional[str]]] = None,
    config: Optional[ScorerConfig] = None,
    talent_config: Optional[TalentMatchConfig] = None
) -> List[MatchResult]:
    return TalentScorer(config, talent_config).score_all(
        company_skill_ids, candidates, importance_by_skill=importance_by_skill
    )


def score_opportunities(
    developer_skill_ids: AbstractSet[Any],
    candidates: Sequence[CompanyCandidate],
    developer_levels: Optional[Mapping[Any, Optional[str]]] = None,
    opportunity_config: Optional[OpportunityMatchConfig] = None
) -> List[MatchResult]:
    return OpportunityScorer(opportunity_config=opportunity_config).score_all(
        developer_skill_ids, candidates, developer_levels=developer_levels
    )


def rank_matches(*result_lists: Sequence[MatchResult]) -> List[MatchResult]:
    """Merge result lists and sort by descending score.

    The sort is stable: equal scores keep their input order (earlier lists first).
    """
    merged = [result for results in result_lists for result in results]
    return sorted(merged, key=lambda r: r.score, reverse=True)
