from database.repositories.base import BaseRepository
from database.repositories.project import ProjectRepository
from database.repositories.candidate import CandidateRepository
from database.repositories.profile import ProfileRepository

__all__ = [
    'BaseRepository',
    'ProjectRepository',
    'CandidateRepository',
    'ProfileRepository',
]
