"""Flatten a registration record into a spreadsheet-shaped row

Nested objects become dot-joined keys (``sharesDetails.parValue``), the
incorporators list is spread positionally over ``incorporator_1`` ..
``incorporator_5`` column groups, dates are written as yyyy-MM-dd and any
other list as a JSON string. Every header is always present; missing values
are empty strings so the row shape never changes between submissions.
"""

import json
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from ..core.record import RegistrationRecord


MAX_SHEET_INCORPORATORS = 5

RECORD_HEADERS = [
    'corporationNames.name1', 'corporationNames.name2', 'corporationNames.name3',
    'principalOfficeAddress.street', 'principalOfficeAddress.barangay',
    'principalOfficeAddress.city', 'principalOfficeAddress.province',
    'principalOfficeAddress.zipCode',
    'industryDescription', 'primaryPurpose', 'secondaryPurpose',
    'companyEmail', 'companyPhone', 'alternateEmail', 'alternatePhone',
    'corporateTreasurer', 'treasurerEsecureId', 'annualMeetingDate',
    'sharesDetails.authorizedCapital', 'sharesDetails.subscribedCapital',
    'sharesDetails.paidUpCapital', 'sharesDetails.parValue',
]

INCORPORATOR_COLUMNS = [
    'name', 'tin', 'nationality',
    'residence.street', 'residence.barangay', 'residence.city',
    'residence.province', 'residence.zipCode',
    'sharesSubscribed', 'amountSubscribed', 'birthdate', 'esecureId',
]


def sheet_headers(max_incorporators: int = MAX_SHEET_INCORPORATORS) -> List[str]:
    """Column order of the registration sheet"""
    headers = list(RECORD_HEADERS)
    for i in range(1, max_incorporators + 1):
        headers.extend(f"incorporator_{i}.{column}" for column in INCORPORATOR_COLUMNS)
    return headers


def flatten(data: Dict[str, Any], parent_key: str = "", result: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Flatten a nested mapping into dot-joined keys"""
    if result is None:
        result = {}

    for key, value in data.items():
        new_key = f"{parent_key}.{key}" if parent_key else key

        if isinstance(value, dict):
            flatten(value, new_key, result)
        elif isinstance(value, list):
            if key == 'incorporators':
                for index, item in enumerate(value, 1):
                    flatten(item, f"incorporator_{index}", result)
            else:
                result[new_key] = json.dumps(value, default=str)
        elif isinstance(value, (date, datetime)):
            result[new_key] = value.strftime('%Y-%m-%d')
        else:
            result[new_key] = value

    return result


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def flatten_record(record: RegistrationRecord, headers: Optional[List[str]] = None) -> Dict[str, str]:
    """Row for one submission, keyed and ordered by the sheet headers"""
    flat = flatten(record.to_dict())
    return {header: _cell(flat.get(header)) for header in (headers or sheet_headers())}
