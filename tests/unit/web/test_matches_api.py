#!/usr/bin/env python3
"""
Unit tests for match endpoints.
Tests GET /api/projects/{id}/smart-match, GET /api/projects/{id}/matches
and GET /api/smart-match.
"""

import unittest

import pytest

from tests import (
    create_test_session_factory,
    seed_marketplace,
    PROJECT_ID,
    EMPTY_PROJECT_ID,
    OWNER_ID,
    OTHER_COMPANY_ID,
)

OWNER_HEADERS = {"X-User-Id": OWNER_ID, "X-User-Role": "company"}


class MatchesApiTestCase(unittest.TestCase):
    """Router mounted on a bare app with an in-memory database."""

    def setUp(self):
        from fastapi import FastAPI
        from fastapi.testclient import TestClient
        from web.backend.dependencies import get_db
        from web.backend.exceptions import register_exception_handlers
        from web.backend.routers import matches_router, smart_match_router

        self.session_factory = create_test_session_factory()
        with self.session_factory() as session:
            seed_marketplace(session)

        def override_get_db():
            session = self.session_factory()
            try:
                yield session
            finally:
                session.close()

        self.app = FastAPI()
        register_exception_handlers(self.app)
        self.app.include_router(matches_router)
        self.app.include_router(smart_match_router)
        self.app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(self.app, raise_server_exceptions=False)

    def tearDown(self):
        self.app.dependency_overrides.clear()

    def override_matching(self, matching):
        from fastapi import Depends
        from database.uow import MatchRepositories
        from web.backend.dependencies import get_db
        from web.backend.routers.matches import get_match_service
        from web.backend.services.match_service import MatchService

        def override(db=Depends(get_db)):
            return MatchService(MatchRepositories.bind(db), matching)

        self.app.dependency_overrides[get_match_service] = override


@pytest.mark.db
class TestSmartMatchEndpoint(MatchesApiTestCase):

    def test_ranks_developers(self):
        response = self.client.get(f"/api/projects/{PROJECT_ID}/smart-match", headers=OWNER_HEADERS)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["success"])
        self.assertEqual(data["totalMatches"], 2)
        self.assertEqual([m["developer"]["id"] for m in data["matches"]], ["dev_ada", "dev_bob"])

        ada = data["matches"][0]
        self.assertEqual(ada["scores"], {"total": 93, "skill": 40, "availability": 25, "rate": 20, "experience": 8})
        self.assertEqual(ada["matchPercentage"], 100)
        self.assertEqual(
            ada["recommendationReason"],
            "Perfect skill match, Available now, Advanced skills, Within budget"
        )
        self.assertEqual(ada["developer"]["role"], "developer")
        self.assertEqual([s["label"] for s in ada["skills"]], ["React", "Node.js", "CSS"])
        self.assertEqual(
            [(s["label"], s["level"]) for s in ada["matchingSkills"]],
            [("React", "expert"), ("Node.js", "advanced")]
        )

    def test_default_bands_for_missing_rate(self):
        response = self.client.get(f"/api/projects/{PROJECT_ID}/smart-match", headers=OWNER_HEADERS)

        bob = response.json()["matches"][1]
        self.assertEqual(bob["scores"], {"total": 45, "skill": 20, "availability": 15, "rate": 10, "experience": 0})
        self.assertEqual(bob["recommendationReason"], "Potential match")

    def test_project_and_search_criteria(self):
        data = self.client.get(f"/api/projects/{PROJECT_ID}/smart-match", headers=OWNER_HEADERS).json()

        self.assertEqual(data["project"]["id"], PROJECT_ID)
        self.assertEqual(data["project"]["budgetMax"], 19200.0)
        self.assertEqual([s["slug"] for s in data["requiredSkills"]], ["react", "nodejs"])
        self.assertEqual(data["searchCriteria"], {
            "skillsRequired": 2,
            "budgetRange": "$5000 - $19200",
            "timeline": "3 months",
        })

    def test_top_n_truncates_but_reports_total(self):
        from core.config_loader import MatchingConfig, ResultPolicy

        self.override_matching(MatchingConfig(result_policy=ResultPolicy(top_n=1)))
        data = self.client.get(f"/api/projects/{PROJECT_ID}/smart-match", headers=OWNER_HEADERS).json()

        self.assertEqual(len(data["matches"]), 1)
        self.assertEqual(data["matches"][0]["developer"]["id"], "dev_ada")
        self.assertEqual(data["totalMatches"], 2)

    def test_project_without_skills(self):
        response = self.client.get(f"/api/projects/{EMPTY_PROJECT_ID}/smart-match", headers=OWNER_HEADERS)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["matches"], [])
        self.assertEqual(
            data["message"],
            "No skills defined for this project. Please add skills to get smart matches."
        )

    def test_requires_identity(self):
        response = self.client.get(f"/api/projects/{PROJECT_ID}/smart-match")

        self.assertEqual(response.status_code, 401)
        self.assertFalse(response.json()["success"])

    def test_developer_role_forbidden(self):
        response = self.client.get(
            f"/api/projects/{PROJECT_ID}/smart-match",
            headers={"X-User-Id": "dev_ada", "X-User-Role": "developer"}
        )
        self.assertEqual(response.status_code, 403)

    def test_role_checked_before_project_lookup(self):
        response = self.client.get(
            "/api/projects/missing/smart-match",
            headers={"X-User-Id": "dev_ada", "X-User-Role": "developer"}
        )
        self.assertEqual(response.status_code, 403)

    def test_non_owner_forbidden(self):
        response = self.client.get(
            f"/api/projects/{PROJECT_ID}/smart-match",
            headers={"X-User-Id": OTHER_COMPANY_ID, "X-User-Role": "company"}
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["type"], "AccessDeniedException")

    def test_admin_must_still_own_project(self):
        response = self.client.get(
            f"/api/projects/{PROJECT_ID}/smart-match",
            headers={"X-User-Id": "site_admin", "X-User-Role": "admin"}
        )
        self.assertEqual(response.status_code, 403)

    def test_missing_project(self):
        response = self.client.get("/api/projects/missing/smart-match", headers=OWNER_HEADERS)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["type"], "ProjectNotFoundException")

    def test_invalid_scorer_config_is_bad_request(self):
        from core.config_loader import MatchingConfig, ScorerConfig

        self.override_matching(MatchingConfig(scorer=ScorerConfig(skill_band_max=-1)))
        response = self.client.get(f"/api/projects/{PROJECT_ID}/smart-match", headers=OWNER_HEADERS)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["type"], "PreconditionViolation")


@pytest.mark.db
class TestProjectMatchesEndpoint(MatchesApiTestCase):

    def test_merged_ranking(self):
        response = self.client.get(f"/api/projects/{PROJECT_ID}/matches", headers={"X-User-Id": OWNER_ID})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(
            [(m["type"], m["profile"]["id"], m["matchScore"]) for m in data["matches"]],
            [
                ("developer", "dev_ada", 93),
                ("company", "co_beta", 65),
                ("company", "co_acme", 58),
                ("developer", "dev_bob", 45),
            ]
        )
        self.assertEqual(data["summary"], {"total": 4, "developers": 2, "companies": 2, "topMatchScore": 93})
        self.assertEqual(data["project"], {
            "id": PROJECT_ID,
            "title": "Web platform rebuild",
            "requiredSkills": ["React", "Node.js"],
        })

    def test_candidate_details(self):
        data = self.client.get(f"/api/projects/{PROJECT_ID}/matches", headers={"X-User-Id": OWNER_ID}).json()
        by_id = {m["profile"]["id"]: m for m in data["matches"]}

        ada = by_id["dev_ada"]
        self.assertEqual(ada["matchedSkills"], ["React", "Node.js"])
        self.assertEqual(ada["totalSkills"], 3)
        self.assertEqual(ada["availabilityStatus"], "available")
        self.assertEqual(ada["hourlyRate"], {"min": 80.0, "max": 80.0})

        acme = by_id["co_acme"]
        self.assertEqual(acme["matchedSkills"], ["React"])
        self.assertEqual(acme["totalSkills"], 2)
        self.assertEqual(acme["teamSize"], 10)
        self.assertEqual(acme["hourlyRate"], {"min": 90.0, "max": 150.0})
        self.assertEqual(acme["matchPercentage"], 50)
        self.assertEqual(acme["recommendationReason"], "Potential match")

        self.assertNotIn("hourlyRate", by_id["dev_bob"])

    def test_pending_developers_excluded(self):
        data = self.client.get(f"/api/projects/{PROJECT_ID}/matches", headers={"X-User-Id": OWNER_ID}).json()
        self.assertNotIn("dev_cat", [m["profile"]["id"] for m in data["matches"]])

    def test_project_without_skills(self):
        data = self.client.get(f"/api/projects/{EMPTY_PROJECT_ID}/matches", headers={"X-User-Id": OWNER_ID}).json()

        self.assertEqual(data["matches"], [])
        self.assertEqual(data["summary"]["total"], 0)
        self.assertEqual(data["message"], "No skills defined for this project")

    def test_non_owner_forbidden(self):
        response = self.client.get(
            f"/api/projects/{PROJECT_ID}/matches",
            headers={"X-User-Id": OTHER_COMPANY_ID, "X-User-Role": "admin"}
        )
        self.assertEqual(response.status_code, 403)

    def test_missing_project(self):
        response = self.client.get("/api/projects/missing/matches", headers={"X-User-Id": OWNER_ID})
        self.assertEqual(response.status_code, 404)

    def test_requires_identity(self):
        response = self.client.get(f"/api/projects/{PROJECT_ID}/matches")
        self.assertEqual(response.status_code, 401)


@pytest.mark.db
class TestProfileSmartMatchEndpoint(MatchesApiTestCase):

    def get(self, user_id, role):
        return self.client.get("/api/smart-match", headers={"X-User-Id": user_id, "X-User-Role": role})

    def test_company_gets_developers(self):
        response = self.get("co_acme", "company")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["success"])
        self.assertEqual(data["userRole"], "company")
        self.assertEqual(data["totalMatches"], 3)
        self.assertEqual(
            [(m["developer"]["id"], m["scores"]["total"]) for m in data["matches"]],
            [("dev_ada", 56), ("dev_dan", 53), ("dev_bob", 41)]
        )

    def test_company_match_details(self):
        data = self.get("co_acme", "company").json()

        ada = data["matches"][0]
        self.assertEqual(ada["scores"], {
            "total": 56, "skill": 18, "availability": 25, "experience": 5, "importance": 8
        })
        self.assertEqual(ada["matchPercentage"], 50)
        self.assertEqual(
            ada["recommendationReason"],
            "Matches 1 critical skill, Available now, 1 expert-level skill"
        )
        self.assertEqual(ada["matchingSkills"], [
            {"id": 1, "label": "React", "level": "expert", "importance": "required"}
        ])
        self.assertEqual([s["label"] for s in ada["skills"]], ["React", "Node.js", "CSS"])
        self.assertEqual(ada["developer"]["role"], "developer")
        self.assertEqual(ada["profile"]["headline"], "dev_ada headline")

        self.assertEqual(data["matches"][1]["recommendationReason"], "Available now, 1 expert-level skill")
        self.assertEqual(data["matches"][2]["recommendationReason"], "Matches 1 critical skill")

    def test_company_skills_and_preferences(self):
        data = self.get("co_acme", "company").json()

        self.assertEqual(data["requiredSkills"], [
            {"id": 1, "label": "React", "slug": "react", "importance": "required"},
            {"id": 4, "label": "Python", "slug": "python", "importance": "preferred"},
        ])
        self.assertEqual(data["companyPreferences"], {
            "experienceLevel": "senior",
            "workStyle": "remote",
            "industry": "Fintech",
        })

    def test_pending_developers_excluded(self):
        data = self.get("co_acme", "company").json()
        self.assertNotIn("dev_cat", [m["developer"]["id"] for m in data["matches"]])

    def test_developer_gets_companies(self):
        response = self.get("dev_ada", "developer")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["userRole"], "developer")
        self.assertEqual(data["totalMatches"], 2)
        self.assertEqual(
            [(m["company"]["id"], m["scores"]) for m in data["matches"]],
            [
                ("co_acme", {"total": 54, "skill": 19, "importance": 10, "culture": 25}),
                ("co_beta", {"total": 37, "skill": 19, "importance": 3, "culture": 15}),
            ]
        )
        self.assertEqual(
            [(s["label"], s["level"]) for s in data["developerSkills"]],
            [("React", "expert"), ("Node.js", "advanced"), ("CSS", "beginner")]
        )

    def test_developer_match_details(self):
        data = self.get("dev_ada", "developer").json()

        acme, beta = data["matches"]
        self.assertEqual(acme["matchPercentage"], 33)
        self.assertEqual(
            acme["recommendationReason"],
            "Actively seeking 1 of your skill, Offers flexible work, Fintech industry"
        )
        self.assertEqual(acme["matchingSkills"], [
            {"id": 1, "label": "React", "developerLevel": "expert", "importance": "required"}
        ])
        self.assertEqual(acme["skillDemand"], [{"skill": "React", "importance": "required"}])
        self.assertEqual(acme["companyProfile"]["companyName"], "co_acme Inc")
        self.assertEqual(acme["companyProfile"]["workStyle"], "remote")
        self.assertEqual(beta["recommendationReason"], "Good potential match")

    def test_preferred_skill_reason(self):
        data = self.get("dev_dan", "developer").json()

        self.assertEqual(len(data["matches"]), 1)
        acme = data["matches"][0]
        self.assertEqual(acme["scores"], {"total": 72, "skill": 40, "importance": 7, "culture": 25})
        self.assertEqual(acme["matchPercentage"], 100)
        self.assertEqual(
            acme["recommendationReason"],
            "Values 1 of your skill, Offers flexible work, Fintech industry"
        )

    def test_company_without_skills(self):
        response = self.get(OWNER_ID, "company")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["matches"], [])
        self.assertEqual(data["userRole"], "company")
        self.assertEqual(
            data["message"],
            "No skill requirements defined. Please add skills to your company profile to get smart matches."
        )

    def test_developer_without_skills(self):
        data = self.get("dev_eve", "developer").json()

        self.assertEqual(data["matches"], [])
        self.assertEqual(data["userRole"], "developer")
        self.assertEqual(
            data["message"],
            "No skills found in your profile. Please add skills to get smart matches."
        )

    def test_top_n_truncates_but_reports_total(self):
        from core.config_loader import MatchingConfig, ResultPolicy

        self.override_matching(MatchingConfig(result_policy=ResultPolicy(top_n=1)))
        data = self.get("co_acme", "company").json()

        self.assertEqual([m["developer"]["id"] for m in data["matches"]], ["dev_ada"])
        self.assertEqual(data["totalMatches"], 3)

    def test_admin_role_forbidden(self):
        response = self.get("site_admin", "admin")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error"], "Invalid role for smart matching")

    def test_missing_role_forbidden(self):
        response = self.client.get("/api/smart-match", headers={"X-User-Id": "co_acme"})
        self.assertEqual(response.status_code, 403)

    def test_requires_identity(self):
        response = self.client.get("/api/smart-match")
        self.assertEqual(response.status_code, 401)

    def test_invalid_profile_config_is_bad_request(self):
        from core.config_loader import MatchingConfig, ProfileMatchConfig, TalentMatchConfig

        self.override_matching(MatchingConfig(
            profile_match=ProfileMatchConfig(talent=TalentMatchConfig(skill_band_max=90))
        ))
        response = self.get("co_acme", "company")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["type"], "PreconditionViolation")


class TestErrorHandling(MatchesApiTestCase):

    def test_unexpected_error_is_internal_server_error(self):
        from web.backend.routers.matches import get_match_service

        def broken_service():
            raise RuntimeError("database exploded")

        self.app.dependency_overrides[get_match_service] = broken_service
        response = self.client.get(f"/api/projects/{PROJECT_ID}/matches", headers={"X-User-Id": OWNER_ID})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        })

    def test_unknown_route_uses_error_body(self):
        response = self.client.get("/api/nowhere", headers=OWNER_HEADERS)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {
            "success": False,
            "error": "Not Found",
            "type": "HTTPException"
        })

    def test_wrong_method_uses_error_body(self):
        response = self.client.post(f"/api/projects/{PROJECT_ID}/matches", headers=OWNER_HEADERS)

        self.assertEqual(response.status_code, 405)
        self.assertFalse(response.json()["success"])
        self.assertEqual(response.json()["type"], "HTTPException")
        self.assertIn("GET", response.headers["allow"])


class TestHealthEndpoint(unittest.TestCase):

    def test_health(self):
        from fastapi.testclient import TestClient
        from web.backend.app import create_app

        response = TestClient(create_app()).get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")


if __name__ == '__main__':
    unittest.main()
