from sqlalchemy import Column, Integer, Text, Numeric, TIMESTAMP, ForeignKey, Index, func
from sqlalchemy.orm import relationship

from .base import Base


class Profile(Base):
    """
    Marketplace account profile. Role decides which detail table applies.
    """
    __tablename__ = 'profiles'

    id = Column(Text, primary_key=True)
    role = Column(Text, nullable=False)  # developer|company|admin
    display_name = Column(Text)
    avatar_url = Column(Text)
    timezone = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    developer_profile = relationship("DeveloperProfile", back_populates="profile", uselist=False)
    company_profile = relationship("CompanyProfile", back_populates="profile", uselist=False)
    developer_skills = relationship("DeveloperSkill", back_populates="profile", cascade="all, delete-orphan")
    company_skills = relationship("CompanySkill", back_populates="profile", cascade="all, delete-orphan")
    projects = relationship("Project", back_populates="company")

    __table_args__ = (
        Index('idx_profiles_role', 'role'),
    )


class DeveloperProfile(Base):
    __tablename__ = 'developer_profiles'

    user_id = Column(Text, ForeignKey('profiles.id', ondelete='CASCADE'), primary_key=True)
    headline = Column(Text)
    bio = Column(Text)
    rate = Column(Numeric(10, 2))  # hourly
    availability = Column(Text, default='available')  # available|busy|unavailable
    approval_status = Column(Text, nullable=False, default='pending')  # pending|approved|rejected
    country = Column(Text)
    portfolio_url = Column(Text)
    github_url = Column(Text)
    website_url = Column(Text)

    profile = relationship("Profile", back_populates="developer_profile")

    __table_args__ = (
        Index('idx_developer_profiles_approval', 'approval_status'),
    )


class CompanyProfile(Base):
    __tablename__ = 'company_profiles'

    user_id = Column(Text, ForeignKey('profiles.id', ondelete='CASCADE'), primary_key=True)
    company_name = Column(Text, nullable=False)
    logo_url = Column(Text)
    about = Column(Text)
    website_url = Column(Text)
    industry = Column(Text)
    size = Column(Text)  # startup|scale-up|sme|enterprise
    work_style = Column(Text, default='flexible')  # remote|hybrid|onsite|flexible
    experience_level = Column(Text, default='any')  # junior|mid|senior|lead|any

    # Capacity fields drive the company boosts; all optional
    team_size = Column(Integer)
    current_capacity = Column(Integer)
    max_projects = Column(Integer)
    hourly_rate_min = Column(Numeric(10, 2))
    hourly_rate_max = Column(Numeric(10, 2))

    profile = relationship("Profile", back_populates="company_profile")


class DeveloperSkill(Base):
    __tablename__ = 'developer_skills'

    user_id = Column(Text, ForeignKey('profiles.id', ondelete='CASCADE'), primary_key=True)
    skill_id = Column(Integer, ForeignKey('skills.id', ondelete='CASCADE'), primary_key=True)
    level = Column(Text, nullable=False)  # beginner|intermediate|advanced|expert

    profile = relationship("Profile", back_populates="developer_skills")
    skill = relationship("Skill", back_populates="developer_skills")

    __table_args__ = (
        Index('idx_developer_skills_skill', 'skill_id'),
    )


class CompanySkill(Base):
    __tablename__ = 'company_skills'

    user_id = Column(Text, ForeignKey('profiles.id', ondelete='CASCADE'), primary_key=True)
    skill_id = Column(Integer, ForeignKey('skills.id', ondelete='CASCADE'), primary_key=True)
    importance = Column(Text, nullable=False, default='required')  # required|preferred|nice_to_have

    profile = relationship("Profile", back_populates="company_skills")
    skill = relationship("Skill", back_populates="company_skills")

    __table_args__ = (
        Index('idx_company_skills_skill', 'skill_id'),
    )
