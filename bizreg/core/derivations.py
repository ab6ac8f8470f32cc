"""Derived-field recomputation

Two fields of the record are never typed by the user:

- ``incorporators[i].amountSubscribed = sharesSubscribed × parValue``
- ``treasurerEsecureId`` = eSecure ID of the incorporator named as treasurer

Both depend only on input fields, so a single pass reaches the fixed point
and recomputing again changes nothing.
"""

import copy
from decimal import Decimal
from typing import List

from .record import RegistrationRecord, Incorporator, amount_or_zero, is_derived_path


DERIVED_FIELDS = ("incorporators.*.amountSubscribed", "treasurerEsecureId")

__all__ = [
    'DERIVED_FIELDS',
    'is_derived_path',
    'derive_amounts',
    'derive_treasurer_esecure_id',
    'recompute',
]


def derive_amounts(record: RegistrationRecord) -> List[Decimal]:
    """amountSubscribed for every incorporator, in order

    parValue is global, so every incorporator is recomputed, not only the
    one that changed. Unusable numbers count as 0.
    """
    par_value = amount_or_zero(record.shares_details.par_value)
    return [
        amount_or_zero(incorporator.shares_subscribed) * par_value
        for incorporator in record.incorporators
    ]


def derive_treasurer_esecure_id(record: RegistrationRecord) -> str:
    """eSecure ID of the selected treasurer, or "" when none matches"""
    if not record.corporate_treasurer:
        return ""

    for incorporator in record.incorporators:
        if incorporator.name == record.corporate_treasurer:
            return incorporator.esecure_id or ""
    return ""


def recompute(record: RegistrationRecord) -> RegistrationRecord:
    """Return a copy of the record with both derived fields overwritten

    Stored values for derived fields are ignored; the input record is not
    modified.
    """
    result = copy.deepcopy(record)

    amounts = derive_amounts(result)
    incorporators: List[Incorporator] = result.incorporators
    for incorporator, amount in zip(incorporators, amounts):
        incorporator.amount_subscribed = amount

    result.treasurer_esecure_id = derive_treasurer_esecure_id(result)
    return result
