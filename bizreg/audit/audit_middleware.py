"""FastAPI audit middleware"""

import time
from datetime import datetime
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from .audit_service import AuditService, AuditEntry, AuditEventType, audit_service


REGISTRATION_ID_HEADER = "x-registration-id"


class AuditMiddleware(BaseHTTPMiddleware):
    """Records every API request/response pair

    The form layer tags requests with its session id in the
    X-Registration-Id header so entries can be grouped per registration.
    """

    def __init__(self, app: ASGIApp, audit_service: AuditService = audit_service):
        super().__init__(app)
        self.audit_service = audit_service

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        registration_id = self._extract_registration_id(request)

        await self.audit_service.log_entry(AuditEntry(
            event_type=AuditEventType.API_REQUEST,
            timestamp=datetime.now(),
            registration_id=registration_id,
            request_data={
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "client_host": request.client.host if request.client else None,
                "user_agent": request.headers.get("user-agent"),
            }
        ))

        try:
            response = await call_next(request)
        except Exception as e:
            await self.audit_service.log_entry(AuditEntry(
                event_type=AuditEventType.ERROR_OCCURRED,
                timestamp=datetime.now(),
                registration_id=registration_id,
                error_data={
                    "exception_type": type(e).__name__,
                    "exception_message": str(e),
                    "processing_time_seconds": time.time() - start_time
                }
            ))
            raise

        await self.audit_service.log_entry(AuditEntry(
            event_type=AuditEventType.API_RESPONSE,
            timestamp=datetime.now(),
            registration_id=registration_id,
            response_data={
                "status_code": response.status_code,
                "processing_time_seconds": time.time() - start_time,
            }
        ))
        return response

    def _extract_registration_id(self, request: Request) -> Optional[str]:
        return request.headers.get(REGISTRATION_ID_HEADER) or None
