"""Core business logic"""

from .record import (
    Address,
    Incorporator,
    CorporationNames,
    SharesDetails,
    RegistrationRecord,
    ReadOnlyFieldError,
    UnknownFieldError,
)
from .rulebook import RuleBook, get_default_rulebook, reset_default_rulebook
from .derivations import recompute, derive_amounts, derive_treasurer_esecure_id, is_derived_path
from .validation import Violation, ValidationReport, ValidationRule, ValidationEngine
from .fee_trace import FeeTrace, FeeBreakdown, SecFees, BirFees
from .fee_calculator import FeeCalculator
from .formatting import (
    format_tin,
    parse_tin,
    is_canonical_tin,
    format_money,
    parse_money,
    format_currency,
    TIN_CODEC,
    MONEY_CODEC,
)

__all__ = [
    'Address',
    'Incorporator',
    'CorporationNames',
    'SharesDetails',
    'RegistrationRecord',
    'ReadOnlyFieldError',
    'UnknownFieldError',
    'RuleBook',
    'get_default_rulebook',
    'reset_default_rulebook',
    'recompute',
    'derive_amounts',
    'derive_treasurer_esecure_id',
    'is_derived_path',
    'Violation',
    'ValidationReport',
    'ValidationRule',
    'ValidationEngine',
    'FeeTrace',
    'FeeBreakdown',
    'SecFees',
    'BirFees',
    'FeeCalculator',
    'format_tin',
    'parse_tin',
    'is_canonical_tin',
    'format_money',
    'parse_money',
    'format_currency',
    'TIN_CODEC',
    'MONEY_CODEC',
]
