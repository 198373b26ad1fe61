from sqlalchemy.orm import Session


class BaseRepository:
    """Read access over a session owned by the caller; match_uow commits or rolls back."""

    def __init__(self, db: Session):
        self.db = db
