"""API route handlers."""

from .matches import router as matches_router
from .smart_match import router as smart_match_router
