"""Row store backed by the registration_rows table"""

import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ..services.sheet_row import sheet_headers
from .models import RegistrationRowDB


logger = logging.getLogger(__name__)


class DatabaseRowStore:
    """Appends flattened registration rows to the database

    Mirrors the spreadsheet the form writes to: a fixed header row and one
    appended row per submission, every header cell filled.

    Attributes:
        db: SQLAlchemy session
        headers: column order used for new rows
        last_row_id: id of the most recently stored row
    """

    def __init__(self, db: Session, headers: Optional[List[str]] = None):
        self.db = db
        self.headers = headers or sheet_headers()
        self.last_row_id: Optional[int] = None

    def append_row(self, row: Dict[str, str]) -> RegistrationRowDB:
        """Store one row

        Raises:
            SQLAlchemyError: the insert failed (the session is rolled back)
        """
        values = {header: row.get(header, "") for header in self.headers}
        entry = RegistrationRowDB(
            corporation_name=values.get('corporationNames.name1') or None,
            headers=list(self.headers),
            values=values
        )
        try:
            self.db.add(entry)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(entry)
        self.last_row_id = entry.id
        logger.info("Stored registration row %s (%s)", entry.id, entry.corporation_name)
        return entry

    def list_rows(self) -> List[Dict[str, str]]:
        """All stored rows, oldest first"""
        entries = self.db.query(RegistrationRowDB).order_by(RegistrationRowDB.id).all()
        return [entry.to_row() for entry in entries]
