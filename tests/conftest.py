"""Shared fixtures"""

from datetime import date
from decimal import Decimal

import pytest

from bizreg.core import (
    Address,
    CorporationNames,
    Incorporator,
    RegistrationRecord,
    SharesDetails,
    recompute,
)


def make_address(zip_code: str = "1223") -> Address:
    return Address(
        street="123 Ayala Ave",
        barangay="San Lorenzo",
        city="Makati",
        province="Metro Manila",
        zip_code=zip_code,
    )


def make_valid_record() -> RegistrationRecord:
    """A record that passes every rule

    Two incorporators holding 15,000 + 10,000 shares of a 25,000 subscribed
    capital at par 1; Maria Santos is treasurer.
    """
    record = RegistrationRecord(
        corporation_names=CorporationNames(
            name1="Acme Trading Corp",
            name2="Acme Ventures Inc",
            name3="Acme Holdings Corp",
        ),
        principal_office_address=make_address(),
        industry_description="Wholesale of office supplies",
        primary_purpose="To engage in the wholesale trade of office supplies",
        company_email="info@acme.ph",
        company_phone="09171234567",
        incorporators=[
            Incorporator(
                name="Juan Dela Cruz",
                tin="123-456-789",
                residence=make_address("1210"),
                shares_subscribed=Decimal('15000'),
                birthdate=date(1980, 1, 15),
                esecure_id="ES-0001",
            ),
            Incorporator(
                name="Maria Santos",
                tin="987-654-321",
                residence=make_address("1630"),
                shares_subscribed=Decimal('10000'),
                birthdate=date(1985, 6, 30),
                esecure_id="ES-0002",
            ),
        ],
        corporate_treasurer="Maria Santos",
        annual_meeting_date=date(2025, 4, 15),
        shares_details=SharesDetails(
            authorized_capital=Decimal('100000'),
            subscribed_capital=Decimal('25000'),
            paid_up_capital=Decimal('6250'),
            par_value=Decimal('1'),
        ),
    )
    return recompute(record)


@pytest.fixture
def valid_record() -> RegistrationRecord:
    return make_valid_record()


@pytest.fixture
def valid_record_dict() -> dict:
    """camelCase form of the valid record, as posted by the form"""
    return make_valid_record().to_dict()
