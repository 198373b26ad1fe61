#!/usr/bin/env python3
"""
Profile smart-match endpoint - rank the other side of the marketplace for the caller.
"""

import logging
from fastapi import APIRouter, Depends

from ..dependencies import get_current_caller, Caller
from ..services.match_service import MatchService
from ..models.responses import ProfileSmartMatchResponse
from .matches import get_match_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["smart-match"])


@router.get(
    "/smart-match",
    response_model=ProfileSmartMatchResponse,
    response_model_exclude_none=True
)
def get_profile_smart_matches(
    caller: Caller = Depends(get_current_caller),
    service: MatchService = Depends(get_match_service)
):
    """
    Get matches for the caller's own profile.

    Companies receive developers scored against the skills on their company
    profile. Developers receive companies that list their skills. Other roles
    are refused.
    """
    return service.get_profile_smart_matches(caller)
