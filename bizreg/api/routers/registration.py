"""Registration API router: defaults, recompute, validate, primary purpose, submit"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ...agents import PrimaryPurposeAgent, PurposeGenerationError
from ...audit import AuditEventType, audit_service
from ...core import RegistrationRecord, ValidationEngine, recompute
from ...database import get_db, DatabaseRowStore
from ...services import submit_registration
from ..schemas import (
    RegistrationRequest,
    RecomputeResponse,
    ValidationResponse,
    ViolationItem,
    PurposeRequest,
    PurposeResponse,
    SubmissionResponse,
    ErrorResponse
)

logger = logging.getLogger(__name__)

router = APIRouter()

_purpose_agent = None


def get_purpose_agent() -> PrimaryPurposeAgent:
    """Shared primary purpose agent (created on first use)"""
    global _purpose_agent
    if _purpose_agent is None:
        _purpose_agent = PrimaryPurposeAgent()
    return _purpose_agent


def get_validation_engine() -> ValidationEngine:
    return ValidationEngine()


def _to_record(request: RegistrationRequest) -> RegistrationRecord:
    return RegistrationRecord.from_dict(request.to_record_dict())


@router.get("/defaults")
async def get_defaults():
    """Blank record the form opens with"""
    return recompute(RegistrationRecord.create_default()).to_dict()


@router.post("/recompute", response_model=RecomputeResponse)
async def recompute_record(request: RegistrationRequest):
    """Recompute amountSubscribed and treasurerEsecureId"""
    record = recompute(_to_record(request))
    return RecomputeResponse(record=record.to_dict())


@router.post("/validate", response_model=ValidationResponse)
async def validate_record(
    request: RegistrationRequest,
    engine: ValidationEngine = Depends(get_validation_engine)
):
    """Validate the whole record

    Violations are part of a normal response; the returned record carries
    the recomputed derived fields.
    """
    record = recompute(_to_record(request))
    report = engine.validate(record)

    await audit_service.log_event(
        AuditEventType.VALIDATION_RUN,
        registration_id=record.registration_id,
        metadata={'is_valid': report.is_valid, 'violation_count': len(report.violations)}
    )

    return ValidationResponse(
        is_valid=report.is_valid,
        violations=[ViolationItem(**v.to_dict()) for v in report.violations],
        rule_version=report.rule_version,
        record=record.to_dict()
    )


@router.post(
    "/purpose",
    response_model=PurposeResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}}
)
async def generate_purpose(
    request: PurposeRequest,
    agent: PrimaryPurposeAgent = Depends(get_purpose_agent)
):
    """Draft the primary purpose from the industry description"""
    if not request.industry_description.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please describe your industry before generating the primary purpose."
        )

    try:
        purpose = await agent.generate(request.industry_description)
    except PurposeGenerationError as e:
        logger.warning("Primary purpose generation failed: %s", e)
        await audit_service.log_event(
            AuditEventType.ERROR_OCCURRED,
            error_data={'action': 'generate_primary_purpose', 'exception_message': str(e)}
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="There was an error generating the primary purpose."
        )

    await audit_service.log_event(AuditEventType.PURPOSE_GENERATED, metadata={'length': len(purpose)})
    return PurposeResponse(primary_purpose=purpose)


@router.post(
    "",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": SubmissionResponse}, 502: {"model": SubmissionResponse}}
)
async def submit(
    request: RegistrationRequest,
    db: Session = Depends(get_db),
    engine: ValidationEngine = Depends(get_validation_engine)
):
    """Submit a registration

    The record is validated again here; an invalid record is refused with
    its violations and nothing is stored.
    """
    record = _to_record(request)
    store = DatabaseRowStore(db)
    result = await submit_registration(record, store, engine)

    response = SubmissionResponse(
        success=result.success,
        message=result.message,
        violations=[ViolationItem(**v.to_dict()) for v in result.violations]
    )

    if result.violations:
        await audit_service.log_event(
            AuditEventType.SUBMISSION_REJECTED,
            registration_id=record.registration_id,
            metadata={'violations': [v.to_dict() for v in result.violations]}
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=response.model_dump(mode='json', by_alias=True)
        )

    if not result.success:
        await audit_service.log_event(
            AuditEventType.ERROR_OCCURRED,
            registration_id=record.registration_id,
            error_data={'action': 'submit', 'message': result.message}
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=response.model_dump(mode='json', by_alias=True)
        )

    await audit_service.log_event(AuditEventType.SUBMISSION_ACCEPTED, registration_id=record.registration_id)
    response.row_id = store.last_row_id
    return response
