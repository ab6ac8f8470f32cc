"""RegistrationRecord tests"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from bizreg.core import (
    Address,
    Incorporator,
    SharesDetails,
    RegistrationRecord,
    ReadOnlyFieldError,
    UnknownFieldError,
)
from bizreg.core.record import to_decimal, to_date, is_derived_path


class TestDefaults:

    def test_create_default(self):
        record = RegistrationRecord.create_default()

        assert len(record.incorporators) == 1
        assert record.incorporators[0].shares_subscribed == Decimal('0')
        assert record.incorporators[0].amount_subscribed == Decimal('0')
        assert record.incorporators[0].nationality == "Filipino"
        assert record.incorporators[0].birthdate is None
        assert record.shares_details.authorized_capital == Decimal('100000')
        assert record.shares_details.subscribed_capital == Decimal('25000')
        assert record.shares_details.paid_up_capital == Decimal('6250')
        assert record.shares_details.par_value == Decimal('10')
        assert record.lease_rent == Decimal('0')
        assert record.annual_meeting_date is None

    def test_each_default_has_its_own_id(self):
        assert RegistrationRecord.create_default().registration_id != (
            RegistrationRecord.create_default().registration_id
        )


class TestSerialization:

    def test_to_dict_camel_case(self, valid_record):
        data = valid_record.to_dict()

        assert data['corporationNames']['name1'] == "Acme Trading Corp"
        assert data['principalOfficeAddress']['zipCode'] == "1223"
        assert data['incorporators'][0]['sharesSubscribed'] == "15000"
        assert data['incorporators'][0]['birthdate'] == "1980-01-15"
        assert data['annualMeetingDate'] == "2025-04-15"
        assert 'registrationId' not in data

    def test_from_dict(self, valid_record):
        restored = RegistrationRecord.from_dict(valid_record.to_dict())

        assert restored.incorporators[1].name == "Maria Santos"
        assert restored.incorporators[1].birthdate == date(1985, 6, 30)
        assert to_decimal(restored.shares_details.par_value) == Decimal('1')

    def test_from_dict_accepts_datetime_strings(self):
        record = RegistrationRecord.from_dict({
            'annualMeetingDate': "2025-04-15T00:00:00.000Z",
            'incorporators': [{'name': "Juan", 'birthdate': "1980-01-15T08:00:00Z"}],
        })

        assert record.annual_meeting_date == date(2025, 4, 15)
        assert record.incorporators[0].birthdate == date(1980, 1, 15)

    def test_from_dict_missing_sections(self):
        record = RegistrationRecord.from_dict({})

        assert record.corporation_names.name1 == ""
        assert record.incorporators == []


class TestFieldPaths:

    def test_get_value(self, valid_record):
        assert valid_record.get_value("corporationNames.name2") == "Acme Ventures Inc"
        assert valid_record.get_value("incorporators.1.residence.zipCode") == "1630"
        assert valid_record.get_value("sharesDetails.parValue") == Decimal('1')

    def test_set_value(self, valid_record):
        valid_record.set_value("incorporators.0.residence.city", "Pasig")
        valid_record.set_value("sharesDetails.parValue", "5")

        assert valid_record.incorporators[0].residence.city == "Pasig"
        assert valid_record.shares_details.par_value == "5"

    def test_set_date_from_string(self, valid_record):
        valid_record.set_value("annualMeetingDate", "2026-03-01")

        assert valid_record.annual_meeting_date == date(2026, 3, 1)

    @pytest.mark.parametrize("path", ["treasurerEsecureId", "incorporators.0.amountSubscribed"])
    def test_derived_paths_are_read_only(self, valid_record, path):
        with pytest.raises(ReadOnlyFieldError):
            valid_record.set_value(path, "x")

    @pytest.mark.parametrize("path", [
        "corporationNames.name4",
        "incorporators.7.name",
        "incorporators.x.name",
        "sharesDetails.more",
        "nothing",
    ])
    def test_unknown_paths(self, valid_record, path):
        with pytest.raises(UnknownFieldError):
            valid_record.get_value(path)

    def test_is_derived_path(self):
        assert is_derived_path("incorporators.3.amountSubscribed")
        assert is_derived_path("treasurerEsecureId")
        assert not is_derived_path("incorporators.3.sharesSubscribed")


class TestCompositeAssignment:
    """Whole parts of the record assigned by path"""

    def test_address_from_mapping(self, valid_record):
        valid_record.set_value("incorporators.0.residence", {
            "street": "5 Mabini St", "barangay": "Poblacion",
            "city": "Pasig", "province": "Metro Manila", "zipCode": "1600",
        })

        residence = valid_record.incorporators[0].residence
        assert isinstance(residence, Address)
        assert residence.zip_code == "1600"

    def test_incorporator_from_mapping(self, valid_record):
        valid_record.set_value("incorporators.1", {"name": "Pedro Reyes", "sharesSubscribed": "10000"})

        assert isinstance(valid_record.incorporators[1], Incorporator)
        assert valid_record.incorporators[1].name == "Pedro Reyes"

    def test_incorporators_list_from_mappings(self, valid_record):
        valid_record.set_value("incorporators", [{"name": "A"}, Incorporator(name="B")])

        assert [inc.name for inc in valid_record.incorporators] == ["A", "B"]

    def test_shares_details_from_mapping(self, valid_record):
        valid_record.set_value("sharesDetails", {"authorizedCapital": "40000", "parValue": "1"})

        assert isinstance(valid_record.shares_details, SharesDetails)
        assert valid_record.shares_details.authorized_capital == "40000"

    @pytest.mark.parametrize("path, value", [
        ("incorporators.0.residence", "Makati"),
        ("incorporators.0", None),
        ("incorporators", {"name": "A"}),
        ("corporationNames", ["a", "b", "c"]),
    ])
    def test_non_mapping_rejected(self, valid_record, path, value):
        with pytest.raises(TypeError):
            valid_record.set_value(path, value)


class TestCoercion:

    @pytest.mark.parametrize("value, expected", [
        (Decimal('1.5'), Decimal('1.5')),
        (10, Decimal('10')),
        (0.1, Decimal('0.1')),
        (" 2500 ", Decimal('2500')),
        ("", None),
        ("abc", None),
        (None, None),
        (True, None),
        (float('nan'), None),
        ("Infinity", None),
        ("9e999999", None),
        ("1e-999999", None),
        ("0e-999999", Decimal('0')),
        (10 ** 101, None),
        (10 ** 100, Decimal(10) ** 100),
    ])
    def test_to_decimal(self, value, expected):
        assert to_decimal(value) == expected

    def test_to_date(self):
        assert to_date("2025-01-02") == date(2025, 1, 2)
        assert to_date(datetime(2025, 1, 2, 10, 30)) == date(2025, 1, 2)
        assert to_date("not a date") is None
        assert to_date("") is None
