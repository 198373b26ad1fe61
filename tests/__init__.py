#!/usr/bin/env python3
"""
Test suite configuration and utilities.

This module provides an in-memory database and a small seeded marketplace
shared by the repository and API tests. All tests can be run with standard
Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Using unittest
    python -m unittest discover tests -v

Seeded marketplace:
    Skills: React (1), Node.js (2), CSS (3), Python (4)

    Developers:
        dev_ada  approved, available, 80/hr  React expert, Node.js advanced, CSS beginner
        dev_bob  approved, busy, no rate     React beginner
        dev_cat  pending                     React expert
        dev_dan  approved                    Python expert
        dev_eve  approved                    no skills

    Companies:
        co_acme  team of 10, 1 of 3 projects  React (required), Python (preferred)
                 Fintech scale-up, remote
        co_beta  no capacity info             Node.js (nice_to_have)
                 enterprise, onsite

    Projects (owned by owner_co):
        proj_web    React + Node.js, budget 5000 - 19200, "3 months"
        proj_empty  no skills
"""

from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from database.models import (
    Base,
    Skill,
    Profile,
    DeveloperProfile,
    CompanyProfile,
    DeveloperSkill,
    CompanySkill,
    Project,
    ProjectSkill,
)

OWNER_ID = "owner_co"
OTHER_COMPANY_ID = "other_co"
PROJECT_ID = "proj_web"
EMPTY_PROJECT_ID = "proj_empty"


def create_test_engine():
    """In-memory SQLite shared across threads (the TestClient runs handlers in a worker thread)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine


def create_test_session_factory(engine=None):
    engine = engine or create_test_engine()
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _developer(session: Session, user_id: str, approval: str, availability, rate, skills):
    session.add(Profile(id=user_id, role="developer", display_name=user_id.split("_")[1].title()))
    session.add(DeveloperProfile(
        user_id=user_id,
        headline=f"{user_id} headline",
        rate=rate,
        availability=availability,
        approval_status=approval,
        country="UK",
    ))
    for skill_id, level in skills:
        session.add(DeveloperSkill(user_id=user_id, skill_id=skill_id, level=level))


def _company(session: Session, user_id: str, skills, **fields):
    session.add(Profile(id=user_id, role="company", display_name=user_id.split("_")[1].title()))
    session.add(CompanyProfile(user_id=user_id, company_name=f"{user_id} Inc", **fields))
    for skill_id, importance in skills:
        session.add(CompanySkill(user_id=user_id, skill_id=skill_id, importance=importance))


def seed_marketplace(session: Session) -> None:
    session.add_all([
        Skill(id=1, slug="react", label="React"),
        Skill(id=2, slug="nodejs", label="Node.js"),
        Skill(id=3, slug="css", label="CSS"),
        Skill(id=4, slug="python", label="Python"),
    ])
    session.flush()

    _developer(session, "dev_ada", "approved", "available", Decimal("80.00"),
               [(1, "expert"), (2, "advanced"), (3, "beginner")])
    _developer(session, "dev_bob", "approved", "busy", None, [(1, "beginner")])
    _developer(session, "dev_cat", "pending", "available", Decimal("50.00"), [(1, "expert")])
    _developer(session, "dev_dan", "approved", "available", Decimal("60.00"), [(4, "expert")])
    _developer(session, "dev_eve", "approved", "available", None, [])

    _company(session, "co_acme", [(1, "required"), (4, "preferred")],
             team_size=10, current_capacity=1, max_projects=3,
             hourly_rate_min=Decimal("90.00"), hourly_rate_max=Decimal("150.00"),
             industry="Fintech", size="scale-up", work_style="remote", experience_level="senior")
    _company(session, "co_beta", [(2, "nice_to_have")], size="enterprise", work_style="onsite")

    # Project owners hold no skills, so they never appear as candidates
    session.add(Profile(id=OWNER_ID, role="company", display_name="Owner"))
    session.add(Profile(id=OTHER_COMPANY_ID, role="company", display_name="Other"))
    session.flush()

    session.add(Project(
        id=PROJECT_ID,
        company_id=OWNER_ID,
        title="Web platform rebuild",
        description="Rebuild the customer portal",
        budget_min=Decimal("5000.00"),
        budget_max=Decimal("19200.00"),
        timeline="3 months",
    ))
    session.add(Project(
        id=EMPTY_PROJECT_ID,
        company_id=OWNER_ID,
        title="Discovery",
        description="Scope not yet defined",
    ))
    session.flush()
    session.add_all([
        ProjectSkill(project_id=PROJECT_ID, skill_id=1),
        ProjectSkill(project_id=PROJECT_ID, skill_id=2),
    ])
    session.commit()
