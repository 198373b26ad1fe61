import contextlib
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.orm import Session

from database.repositories import ProjectRepository, CandidateRepository, ProfileRepository

logger = logging.getLogger(__name__)


@dataclass
class MatchRepositories:
    """Repositories bound to one Session, so all reads share one transaction."""
    db: Session
    projects: ProjectRepository
    candidates: CandidateRepository
    profiles: ProfileRepository

    @classmethod
    def bind(cls, session: Session) -> "MatchRepositories":
        return cls(
            db=session,
            projects=ProjectRepository(session),
            candidates=CandidateRepository(session),
            profiles=ProfileRepository(session),
        )


@contextlib.contextmanager
def match_uow(session_factory: Optional[Callable[[], Session]] = None):
    """Per-unit-of-work transaction scope.

    Yields MatchRepositories bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with match_uow() as repos:
            project = repos.projects.get_project(project_id)
    """
    if session_factory is None:
        from database.database import SessionLocal
        session_factory = SessionLocal

    session = session_factory()
    try:
        yield MatchRepositories.bind(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
