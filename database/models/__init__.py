from .base import Base
from .skill import Skill
from .profile import Profile, DeveloperProfile, CompanyProfile, DeveloperSkill, CompanySkill
from .project import Project, ProjectSkill

__all__ = [
    'Base',
    'Skill',
    'Profile',
    'DeveloperProfile',
    'CompanyProfile',
    'DeveloperSkill',
    'CompanySkill',
    'Project',
    'ProjectSkill',
]
