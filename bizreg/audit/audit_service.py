"""Audit log service"""

import json
import logging
from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Dict, Any, List, Optional

from ..config import Config


logger = logging.getLogger(__name__)


class AuditEventType(Enum):
    """Audit event types"""
    API_REQUEST = "API_REQUEST"
    API_RESPONSE = "API_RESPONSE"
    VALIDATION_RUN = "VALIDATION_RUN"
    FEES_CALCULATED = "FEES_CALCULATED"
    PURPOSE_GENERATED = "PURPOSE_GENERATED"
    SUBMISSION_ACCEPTED = "SUBMISSION_ACCEPTED"
    SUBMISSION_REJECTED = "SUBMISSION_REJECTED"
    ERROR_OCCURRED = "ERROR_OCCURRED"


@dataclass
class AuditEntry:
    """Audit log entry"""
    event_type: AuditEventType
    timestamp: datetime
    registration_id: Optional[str] = None
    user_id: Optional[str] = None
    request_data: Optional[Dict[str, Any]] = None
    response_data: Optional[Dict[str, Any]] = None
    error_data: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['event_type'] = self.event_type.value
        data['timestamp'] = self.timestamp.isoformat()
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


class AuditService:
    """Records significant events of a registration session

    Entries are kept in memory and, when a log file is configured, appended
    to it as JSON lines.
    """

    def __init__(self, log_file: Optional[str] = None):
        """
        Args:
            log_file: JSON-lines file (None keeps entries in memory only)
        """
        self.log_file = log_file
        self.entries: List[AuditEntry] = []

    async def log_entry(self, entry: AuditEntry):
        """Record one entry"""
        self.entries.append(entry)
        logger.info(
            "[AUDIT] %s registration=%s",
            entry.event_type.value, entry.registration_id or "-"
        )

        if self.log_file:
            self._write_to_file(entry)

    async def log_event(
        self,
        event_type: AuditEventType,
        registration_id: Optional[str] = None,
        **data: Any
    ) -> AuditEntry:
        """Build and record an entry from keyword fields"""
        entry = AuditEntry(
            event_type=event_type,
            timestamp=datetime.now(),
            registration_id=registration_id,
            **data
        )
        await self.log_entry(entry)
        return entry

    def _write_to_file(self, entry: AuditEntry):
        try:
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(entry.to_json())
                f.write('\n')
        except OSError as e:
            logger.warning("Failed to write audit log: %s", e)

    async def get_registration_audit_trail(self, registration_id: str) -> List[AuditEntry]:
        """All entries of one registration, oldest first"""
        return [
            entry for entry in self.entries
            if entry.registration_id == registration_id
        ]

    async def generate_audit_report(self, registration_id: str) -> Dict[str, Any]:
        """Audit report for one registration"""
        trail = await self.get_registration_audit_trail(registration_id)

        if not trail:
            return {
                "registration_id": registration_id,
                "message": "No audit trail found"
            }

        return {
            "registration_id": registration_id,
            "total_events": len(trail),
            "start_time": trail[0].timestamp.isoformat(),
            "end_time": trail[-1].timestamp.isoformat(),
            "events": [entry.to_dict() for entry in trail],
            "summary": self._generate_summary(trail)
        }

    def _generate_summary(self, trail: List[AuditEntry]) -> Dict[str, Any]:
        event_counts: Dict[str, int] = {}
        for entry in trail:
            event_type = entry.event_type.value
            event_counts[event_type] = event_counts.get(event_type, 0) + 1

        return {
            "event_counts": event_counts,
            "has_errors": any(
                entry.event_type == AuditEventType.ERROR_OCCURRED
                for entry in trail
            )
        }


# Global audit service instance
audit_service = AuditService(log_file=Config.AUDIT_LOG_FILE or None)
