"""RegistrationForm: one editing session over a registration record

Each edit is a discrete synchronous step: assign the value, recompute the
derived fields, re-run validation. The two external calls (primary purpose
generation and submission) are async, attempted once per trigger, and end in
a single ActionOutcome; the record is left as it was when they fail.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..audit.audit_service import AuditEventType, AuditService
from ..core.derivations import recompute
from ..core.fee_calculator import FeeCalculator
from ..core.fee_trace import FeeBreakdown
from ..core.record import Incorporator, RegistrationRecord, is_blank
from ..core.validation import ValidationEngine, ValidationReport
from .submission import RowStore, submit_registration


logger = logging.getLogger(__name__)

PurposeGenerator = Callable[[str], Awaitable[str]]


@dataclass
class ActionOutcome:
    """User-facing result of a form action

    Attributes:
        success: whether the action succeeded
        title: short headline
        message: details
    """
    success: bool
    title: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {'success': self.success, 'title': self.title, 'message': self.message}


class RegistrationForm:
    """Editing session for a single registration

    Attributes:
        engine: validation engine
        fee_calculator: fee calculator
        audit: optional audit service
        record: current record (derived fields always up to date)
        report: latest validation report
    """

    def __init__(
        self,
        engine: Optional[ValidationEngine] = None,
        fee_calculator: Optional[FeeCalculator] = None,
        audit: Optional[AuditService] = None,
        record: Optional[RegistrationRecord] = None
    ):
        self.engine = engine or ValidationEngine()
        self.fee_calculator = fee_calculator or FeeCalculator(self.engine.rulebook)
        self.audit = audit
        self.record = recompute(record or RegistrationRecord.create_default())
        self.report = self.engine.validate(self.record)
        self.is_generating_purpose = False
        self.is_submitting = False

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def edit(self, path: str, value: Any) -> ValidationReport:
        """Assign one field, recompute, re-validate

        Raises:
            ReadOnlyFieldError: the path is a derived field
            UnknownFieldError: the path does not exist
            TypeError: a nested part was given a non-mapping value
        """
        updated = copy.deepcopy(self.record)
        updated.set_value(path, value)
        self.record = recompute(updated)
        return self.validate()

    def add_incorporator(self) -> int:
        """Append a blank incorporator

        Returns:
            index of the new incorporator

        Raises:
            ValueError: the maximum number of incorporators is reached
        """
        _, max_count = self.engine.rulebook.get_incorporator_limits()
        if len(self.record.incorporators) >= max_count:
            raise ValueError(f"Maximum of {max_count} incorporators")

        updated = copy.deepcopy(self.record)
        updated.incorporators.append(Incorporator())
        self.record = recompute(updated)
        self.validate()
        return len(self.record.incorporators) - 1

    def remove_incorporator(self, index: int) -> None:
        """Remove an incorporator by index

        Raises:
            ValueError: only the minimum number of incorporators is left
            IndexError: no incorporator at that index
        """
        min_count, _ = self.engine.rulebook.get_incorporator_limits()
        if len(self.record.incorporators) <= min_count:
            raise ValueError("At least one incorporator is required")
        if not 0 <= index < len(self.record.incorporators):
            raise IndexError(f"No incorporator at index {index}")

        updated = copy.deepcopy(self.record)
        del updated.incorporators[index]
        self.record = recompute(updated)
        self.validate()

    def incorporator_names(self) -> List[str]:
        """Names available in the treasurer selection"""
        return [inc.name for inc in self.record.incorporators if inc.name]

    def validate(self) -> ValidationReport:
        self.report = self.engine.validate(self.record)
        return self.report

    def fees(self) -> FeeBreakdown:
        return self.fee_calculator.calculate_for(self.record)

    def reset(self) -> None:
        """Start over with a blank record"""
        self.record = recompute(RegistrationRecord.create_default())
        self.validate()

    # ------------------------------------------------------------------
    # External actions
    # ------------------------------------------------------------------

    async def generate_primary_purpose(self, generator: PurposeGenerator) -> ActionOutcome:
        """Fill primaryPurpose from the industry description

        The generator is called once; on failure primaryPurpose is untouched.
        """
        description = self.record.industry_description
        if is_blank(description):
            return ActionOutcome(
                success=False,
                title="Industry Description is empty",
                message="Please describe your industry before generating the primary purpose."
            )

        self.is_generating_purpose = True
        try:
            purpose = await generator(description)
        except Exception as e:
            logger.warning("Failed to generate primary purpose: %s", e)
            await self._audit(AuditEventType.ERROR_OCCURRED, error_data={
                'action': 'generate_primary_purpose',
                'exception_type': type(e).__name__,
                'exception_message': str(e),
            })
            return ActionOutcome(
                success=False,
                title="Generation Failed",
                message="There was an error generating the primary purpose."
            )
        finally:
            self.is_generating_purpose = False

        if is_blank(purpose):
            return ActionOutcome(
                success=False,
                title="Generation Failed",
                message="There was an error generating the primary purpose."
            )

        self.edit("primaryPurpose", purpose.strip())
        await self._audit(AuditEventType.PURPOSE_GENERATED, metadata={'length': len(purpose.strip())})
        return ActionOutcome(
            success=True,
            title="Primary Purpose Generated!",
            message="The Primary Purpose has been filled in for you."
        )

    async def submit(self, store: RowStore) -> ActionOutcome:
        """Submit the record once; reset the form on success"""
        report = self.validate()
        if not report.is_valid:
            await self._audit(AuditEventType.SUBMISSION_REJECTED, metadata={
                'violations': [v.to_dict() for v in report.violations]
            })
            return ActionOutcome(
                success=False,
                title="Submission Failed",
                message="Please correct the highlighted fields before submitting."
            )

        self.is_submitting = True
        try:
            result = await submit_registration(self.record, store, self.engine)
        finally:
            self.is_submitting = False

        if not result.success:
            await self._audit(AuditEventType.ERROR_OCCURRED, error_data={
                'action': 'submit', 'message': result.message
            })
            return ActionOutcome(success=False, title="Submission Failed", message=result.message)

        await self._audit(AuditEventType.SUBMISSION_ACCEPTED)
        self.reset()
        return ActionOutcome(
            success=True,
            title="Form Submitted Successfully!",
            message="Your business registration data has been submitted."
        )

    async def _audit(self, event_type: AuditEventType, **data: Any) -> None:
        if self.audit:
            await self.audit.log_event(event_type, registration_id=self.record.registration_id, **data)
