import logging
from typing import List, Optional, Any
from sqlalchemy import select

from database.models import Project, ProjectSkill, Skill
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ProjectRepository(BaseRepository):
    def get_project(self, project_id: Any) -> Optional[Project]:
        stmt = select(Project).where(Project.id == project_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_required_skills(self, project_id: Any) -> List[Skill]:
        stmt = (
            select(Skill)
            .join(ProjectSkill, ProjectSkill.skill_id == Skill.id)
            .where(ProjectSkill.project_id == project_id)
            .order_by(Skill.id)
        )
        return self.db.execute(stmt).scalars().all()
