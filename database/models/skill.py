from sqlalchemy import Column, Integer, Text, Index
from sqlalchemy.orm import relationship

from .base import Base


class Skill(Base):
    __tablename__ = 'skills'

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(Text, nullable=False, unique=True)
    label = Column(Text, nullable=False)

    developer_skills = relationship("DeveloperSkill", back_populates="skill")
    company_skills = relationship("CompanySkill", back_populates="skill")
    project_skills = relationship("ProjectSkill", back_populates="skill")

    __table_args__ = (
        Index('idx_skills_slug', 'slug'),
    )
