#!/usr/bin/env python3
"""
SkillMatch Web API - FastAPI Application

Ranks developers and companies against a project's required skills.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI

from .config import get_config
from .exceptions import register_exception_handlers
from .routers import matches_router, smart_match_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="SkillMatch API",
        description="API for matching developers and companies to projects",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    register_exception_handlers(app)
    app.include_router(matches_router)
    app.include_router(smart_match_router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "skillmatch-web"}

    return app


app = create_app()


def main():
    """Run the web server."""
    import uvicorn

    config = get_config()
    logger.info(f"Starting SkillMatch Web Server on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
