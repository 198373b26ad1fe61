#!/usr/bin/env python3
"""
Match endpoints - rank candidates for a project.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.uow import MatchRepositories
from ..config import get_config
from ..dependencies import get_db, get_current_caller, Caller
from ..services.match_service import MatchService
from ..models.responses import SmartMatchResponse, ProjectMatchesResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["matches"])


def get_match_service(db: Session = Depends(get_db)) -> MatchService:
    return MatchService(MatchRepositories.bind(db), get_config().matching)


@router.get(
    "/{project_id}/smart-match",
    response_model=SmartMatchResponse,
    response_model_exclude_none=True
)
def get_smart_matches(
    project_id: str,
    caller: Caller = Depends(get_current_caller),
    service: MatchService = Depends(get_match_service)
):
    """
    Get the best developers for a project.

    Only the owning company (or an admin who owns it) may ask. Developers are
    scored on skill match, availability, rate fit and experience, and the top
    matches are returned highest score first.
    """
    return service.get_smart_matches(project_id, caller)


@router.get(
    "/{project_id}/matches",
    response_model=ProjectMatchesResponse,
    response_model_exclude_none=True
)
def get_project_matches(
    project_id: str,
    caller: Caller = Depends(get_current_caller),
    service: MatchService = Depends(get_match_service)
):
    """
    Get developers and companies for a project in one ranking.

    Both candidate types are merged and sorted by match score.
    """
    return service.get_project_matches(project_id, caller)
