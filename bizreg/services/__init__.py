"""Submission flow and editing session"""

from .sheet_row import sheet_headers, flatten, flatten_record
from .submission import RowStore, SubmissionResult, submit_registration
from .form_session import RegistrationForm, ActionOutcome

__all__ = [
    'sheet_headers',
    'flatten',
    'flatten_record',
    'RowStore',
    'SubmissionResult',
    'submit_registration',
    'RegistrationForm',
    'ActionOutcome',
]
