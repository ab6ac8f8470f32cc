"""Registration submission flow"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from ..core.derivations import recompute
from ..core.record import RegistrationRecord
from ..core.validation import ValidationEngine, Violation
from .sheet_row import flatten_record


logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Data submitted successfully."


class RowStore(Protocol):
    """Persistence collaborator: appends one flattened row

    Implementations raise on failure; append_row may be a coroutine.
    """

    def append_row(self, row: Dict[str, str]) -> Any:
        ...


@dataclass
class SubmissionResult:
    """Outcome of one submission attempt

    Attributes:
        success: whether the row was stored
        message: user-facing message
        violations: validation violations that blocked the submission
        row: the stored row (on success)
    """
    success: bool
    message: str
    violations: List[Violation] = field(default_factory=list)
    row: Optional[Dict[str, str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'message': self.message,
            'violations': [v.to_dict() for v in self.violations],
        }


async def submit_registration(
    record: RegistrationRecord,
    store: RowStore,
    engine: Optional[ValidationEngine] = None
) -> SubmissionResult:
    """Validate, flatten and hand the record to the row store once

    The record itself is never modified. Store failures are caught here
    and reported in the result; there is no retry.

    Args:
        record: registration record to submit
        store: row store
        engine: validation engine (default rule set when None)

    Returns:
        SubmissionResult
    """
    engine = engine or ValidationEngine()

    # 1. Derived fields are recomputed, never taken from the caller
    current = recompute(record)

    # 2. Submission is refused while any rule fails
    report = engine.validate(current)
    if not report.is_valid:
        logger.info(
            "Registration %s rejected with %d violation(s)",
            current.registration_id, len(report.violations)
        )
        return SubmissionResult(
            success=False,
            message="Failed to submit data: the registration has validation errors.",
            violations=report.violations
        )

    # 3. Flatten and append
    row = flatten_record(current)
    try:
        result = store.append_row(row)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        logger.exception("Error submitting registration %s", current.registration_id)
        return SubmissionResult(success=False, message=f"Failed to submit data: {e}")

    logger.info("Registration %s submitted", current.registration_id)
    return SubmissionResult(success=True, message=SUCCESS_MESSAGE, row=row)
