"""Audit trail module"""

from .audit_middleware import AuditMiddleware
from .audit_service import AuditService, AuditEntry, AuditEventType, audit_service

__all__ = [
    'AuditMiddleware',
    'AuditService',
    'AuditEntry',
    'AuditEventType',
    'audit_service',
]
