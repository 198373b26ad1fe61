import logging
from typing import Any, List, Optional, Tuple
from sqlalchemy import select

from database.models import CompanyProfile, CompanySkill, DeveloperSkill, Skill
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository):
    """A single profile's own skills, for profile-level matching."""

    def get_company_profile(self, user_id: Any) -> Optional[CompanyProfile]:
        stmt = select(CompanyProfile).where(CompanyProfile.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_company_skills(self, user_id: Any) -> List[Tuple[Skill, str]]:
        """(skill, importance) pairs ordered by skill id."""
        stmt = (
            select(Skill, CompanySkill.importance)
            .join(CompanySkill, CompanySkill.skill_id == Skill.id)
            .where(CompanySkill.user_id == user_id)
            .order_by(Skill.id)
        )
        return [(skill, importance) for skill, importance in self.db.execute(stmt).all()]

    def get_developer_skills(self, user_id: Any) -> List[Tuple[Skill, str]]:
        """(skill, level) pairs ordered by skill id."""
        stmt = (
            select(Skill, DeveloperSkill.level)
            .join(DeveloperSkill, DeveloperSkill.skill_id == Skill.id)
            .where(DeveloperSkill.user_id == user_id)
            .order_by(Skill.id)
        )
        return [(skill, level) for skill, level in self.db.execute(stmt).all()]
