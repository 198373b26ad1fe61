import uuid

from sqlalchemy import Column, Integer, Text, Numeric, TIMESTAMP, ForeignKey, Index, func
from sqlalchemy.orm import relationship

from .base import Base


class Project(Base):
    __tablename__ = 'projects'

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(Text, ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    budget_min = Column(Numeric(10, 2))
    budget_max = Column(Numeric(10, 2))
    currency = Column(Text, nullable=False, default='USD')
    timeline = Column(Text)
    location_pref = Column(Text)
    status = Column(Text, nullable=False, default='open')  # open|in_progress|closed
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    company = relationship("Profile", back_populates="projects")
    project_skills = relationship("ProjectSkill", back_populates="project", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_projects_company', 'company_id'),
        Index('idx_projects_status', 'status'),
    )


class ProjectSkill(Base):
    __tablename__ = 'project_skills'

    project_id = Column(Text, ForeignKey('projects.id', ondelete='CASCADE'), primary_key=True)
    skill_id = Column(Integer, ForeignKey('skills.id', ondelete='CASCADE'), primary_key=True)

    project = relationship("Project", back_populates="project_skills")
    skill = relationship("Skill", back_populates="project_skills")
