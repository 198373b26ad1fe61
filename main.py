import logging
import sys
import json
import argparse

from core.config_loader import load_config
from database.init_db import init_db
from database.uow import match_uow
from web.backend.dependencies import Caller
from web.backend.exceptions import ServiceException
from web.backend.services.match_service import MatchService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def run_match(mode: str, project_id: str) -> dict:
    """
    Rank candidates for a project as an operator.

    Role and ownership checks do not apply here.
    """
    config = load_config()
    with match_uow() as repos:
        service = MatchService(repos, config.matching)
        if mode == 'smart-match':
            response = service.get_smart_matches(project_id)
        else:
            response = service.get_project_matches(project_id)
        return response.model_dump(by_alias=True, exclude_none=True)


def run_profile_match(user_id: str, role: str) -> dict:
    """Rank matches for one profile's own skills, as that profile would see them."""
    config = load_config()
    with match_uow() as repos:
        response = MatchService(repos, config.matching).get_profile_smart_matches(Caller(user_id, role))
        return response.model_dump(by_alias=True, exclude_none=True)


def main():
    parser = argparse.ArgumentParser(description="SkillMatch Driver")
    parser.add_argument('--mode', type=str, choices=['init-db', 'smart-match', 'matches', 'profile-match'],
                        default='init-db',
                        help='init-db (default) creates tables; the other modes print rankings as JSON')
    parser.add_argument('--project-id', type=str, default=None,
                        help='Project to rank candidates for (required by smart-match and matches)')
    parser.add_argument('--user-id', type=str, default=None,
                        help='Profile to rank matches for (required by profile-match)')
    parser.add_argument('--role', type=str, choices=['company', 'developer'], default=None,
                        help='Role of the profile (required by profile-match)')
    args = parser.parse_args()

    mode = args.mode
    logger.info(f"Driver starting in {mode.upper()} mode...")

    if mode == 'init-db':
        # Retries while the database comes up
        init_db()
        return

    if mode == 'profile-match':
        if not args.user_id or not args.role:
            parser.error("--user-id and --role are required for --mode profile-match")
    elif not args.project_id:
        parser.error(f"--project-id is required for --mode {mode}")

    try:
        if mode == 'profile-match':
            result = run_profile_match(args.user_id, args.role)
        else:
            result = run_match(mode, args.project_id)
    except ServiceException as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        sys.exit(1)

    print(json.dumps(result, indent=2, default=str))


if __name__ == "__main__":
    main()
