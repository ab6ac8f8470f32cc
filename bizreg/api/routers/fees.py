"""Fee estimate API router"""

from fastapi import APIRouter

from ...audit import AuditEventType, audit_service
from ...core import FeeCalculator
from ..schemas import FeeRequest, FeeBreakdownResponse, FeeTraceItem

router = APIRouter()


@router.post("", response_model=FeeBreakdownResponse)
async def calculate_fees(request: FeeRequest):
    """Estimated SEC and BIR fees

    Missing, negative or non-numeric figures count as zero.
    """
    breakdown = FeeCalculator().calculate(
        authorized_capital=request.authorized_capital,
        subscribed_capital=request.subscribed_capital,
        par_value=request.par_value,
        lease_rent=request.lease_rent
    )

    await audit_service.log_event(
        AuditEventType.FEES_CALCULATED,
        metadata={'grand_total': str(breakdown.grand_total)}
    )

    return FeeBreakdownResponse(
        sec=breakdown.sec.to_dict(),
        bir=breakdown.bir.to_dict(),
        grand_total=breakdown.grand_total,
        chart=breakdown.chart_data(),
        traces=[
            FeeTraceItem(
                step_name=trace.step_name,
                applied_rule=trace.applied_rule,
                output_value=trace.to_dict()['output_value'],
                legal_basis=trace.legal_basis,
                formula=trace.formula
            )
            for trace in breakdown.traces
        ],
        rule_version=breakdown.rule_version
    )
