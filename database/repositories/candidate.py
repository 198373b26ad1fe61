import logging
from typing import Any, Collection, Dict, List, Optional
from sqlalchemy import select, func

from database.models import (
    Profile, DeveloperProfile, CompanyProfile,
    DeveloperSkill, CompanySkill, Skill
)
from database.repositories.base import BaseRepository
from core.scorer.aggregation import DeveloperSkillRow, CompanySkillRow

logger = logging.getLogger(__name__)

APPROVED = 'approved'
DEVELOPER_ROLE = 'developer'
COMPANY_ROLE = 'company'


def _to_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


class CandidateRepository(BaseRepository):
    """
    Profile/skill store reads for matching.

    Both finders return one row per (candidate, skill) for every skill the
    candidate holds, restricted to candidates sharing at least one of the
    given skills. Rows are ordered by candidate id, then skill id.
    """

    def find_developer_rows(self, skill_ids: Collection[Any]) -> List[DeveloperSkillRow]:
        """Approved profiles with the developer role only."""
        if not skill_ids:
            return []

        holders = select(DeveloperSkill.user_id).where(DeveloperSkill.skill_id.in_(skill_ids))
        stmt = (
            select(Profile, DeveloperProfile, DeveloperSkill.level, Skill)
            .join(DeveloperProfile, DeveloperProfile.user_id == Profile.id)
            .join(DeveloperSkill, DeveloperSkill.user_id == Profile.id)
            .join(Skill, Skill.id == DeveloperSkill.skill_id)
            .where(
                Profile.role == DEVELOPER_ROLE,
                DeveloperProfile.approval_status == APPROVED,
                Profile.id.in_(holders)
            )
            .order_by(Profile.id, Skill.id)
        )

        rows = []
        for profile, developer, level, skill in self.db.execute(stmt).all():
            rate = _to_float(developer.rate)
            rows.append(DeveloperSkillRow(
                user_id=profile.id,
                display_name=profile.display_name,
                skill_id=skill.id,
                skill_label=skill.label,
                skill_slug=skill.slug,
                level=level,
                availability=developer.availability,
                rate=rate,
                profile={
                    'id': profile.id,
                    'displayName': profile.display_name,
                    'avatarUrl': profile.avatar_url,
                    'headline': developer.headline,
                    'rate': rate,
                    'availability': developer.availability,
                    'country': developer.country,
                },
            ))

        logger.debug(f"Loaded {len(rows)} developer skill rows for {len(skill_ids)} skills")
        return rows

    def find_company_rows(self, skill_ids: Collection[Any]) -> List[CompanySkillRow]:
        """Profiles with the company role. Companies have no approval gate."""
        if not skill_ids:
            return []

        holders = select(CompanySkill.user_id).where(CompanySkill.skill_id.in_(skill_ids))
        stmt = (
            select(Profile, CompanyProfile, CompanySkill.importance, Skill)
            .join(CompanyProfile, CompanyProfile.user_id == Profile.id)
            .join(CompanySkill, CompanySkill.user_id == Profile.id)
            .join(Skill, Skill.id == CompanySkill.skill_id)
            .where(Profile.role == COMPANY_ROLE, Profile.id.in_(holders))
            .order_by(Profile.id, Skill.id)
        )
        results = self.db.execute(stmt).all()

        skill_counts = self.count_company_skills({profile.id for profile, _, _, _ in results})

        rows = []
        for profile, company, importance, skill in results:
            rows.append(CompanySkillRow(
                user_id=profile.id,
                display_name=profile.display_name,
                skill_id=skill.id,
                skill_label=skill.label,
                skill_slug=skill.slug,
                importance=importance,
                company_name=company.company_name,
                team_size=company.team_size,
                current_capacity=company.current_capacity,
                max_projects=company.max_projects,
                rate_min=_to_float(company.hourly_rate_min),
                rate_max=_to_float(company.hourly_rate_max),
                industry=company.industry,
                size=company.size,
                work_style=company.work_style,
                total_skill_count=skill_counts.get(profile.id, 0),
                profile={
                    'id': profile.id,
                    'displayName': profile.display_name,
                    'avatarUrl': profile.avatar_url,
                    'companyName': company.company_name,
                    'about': company.about,
                    'actualTeamSize': company.team_size,
                    'currentCapacity': company.current_capacity,
                    'maxProjects': company.max_projects,
                    'industry': company.industry,
                    'size': company.size,
                    'workStyle': company.work_style,
                    'experienceLevel': company.experience_level,
                },
            ))

        logger.debug(f"Loaded {len(rows)} company skill rows for {len(skill_ids)} skills")
        return rows

    def count_company_skills(self, user_ids: Collection[Any]) -> Dict[Any, int]:
        """Total skills listed per company, in one query."""
        if not user_ids:
            return {}

        stmt = (
            select(CompanySkill.user_id, func.count(CompanySkill.skill_id))
            .where(CompanySkill.user_id.in_(user_ids))
            .group_by(CompanySkill.user_id)
        )
        return {user_id: count for user_id, count in self.db.execute(stmt).all()}
