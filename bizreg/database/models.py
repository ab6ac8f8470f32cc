"""Database models"""

from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class RegistrationRowDB(Base):
    """Submitted registrations, one spreadsheet-shaped row each

    The header list is stored with the row so that a later change of
    columns does not reinterpret older rows.
    """
    __tablename__ = "registration_rows"

    id = Column(Integer, primary_key=True, index=True)

    submitted_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # First proposed name, for lookup
    corporation_name = Column(String(255), nullable=True, index=True)

    headers = Column(JSON, nullable=False, comment="column order")
    values = Column(JSON, nullable=False, comment="header -> cell text")

    def to_row(self) -> dict:
        """Cells in header order"""
        return {header: (self.values or {}).get(header, "") for header in self.headers or []}

    def __repr__(self):
        return (
            f"<RegistrationRow(id={self.id}, name={self.corporation_name!r}, "
            f"submitted_at={self.submitted_at})>"
        )
