"""RegistrationForm session tests"""

import copy
from decimal import Decimal

import pytest

from bizreg.audit import AuditService, AuditEventType
from bizreg.core import Address, ReadOnlyFieldError, RegistrationRecord
from bizreg.services import RegistrationForm


class ListRowStore:

    def __init__(self, fail: bool = False):
        self.rows = []
        self.fail = fail

    def append_row(self, row):
        if self.fail:
            raise ConnectionError("network down")
        self.rows.append(row)


@pytest.fixture
def form(valid_record):
    return RegistrationForm(record=valid_record, audit=AuditService())


class TestEditing:

    def test_new_form_starts_from_defaults(self):
        form = RegistrationForm()

        assert form.record == RegistrationRecord.create_default()
        assert not form.report.is_valid

    def test_edit_recomputes_and_validates(self, form):
        report = form.edit("sharesDetails.parValue", Decimal('2'))

        assert form.record.incorporators[0].amount_subscribed == Decimal('30000')
        assert form.record.incorporators[1].amount_subscribed == Decimal('20000')
        assert report.is_valid

    def test_edit_reports_violation(self, form):
        report = form.edit("companyEmail", "nope")

        assert report.messages("companyEmail") == ["Invalid email address"]
        assert form.report is report

    def test_treasurer_change(self, form):
        form.edit("corporateTreasurer", "Juan Dela Cruz")

        assert form.record.treasurer_esecure_id == "ES-0001"

    def test_renaming_treasurer_clears_esecure_id(self, form):
        form.edit("incorporators.1.name", "Maria S. Santos")

        assert form.record.treasurer_esecure_id == ""
        assert form.report.messages("corporateTreasurer") == [
            "The selected treasurer must have an eSecure ID."
        ]

    def test_derived_field_rejected(self, form):
        with pytest.raises(ReadOnlyFieldError):
            form.edit("treasurerEsecureId", "X")

    def test_edit_whole_residence(self, form):
        """A nested part sent as a mapping becomes the record's own type"""
        report = form.edit("incorporators.0.residence", {
            "street": "12 Rizal Ave",
            "barangay": "San Antonio",
            "city": "Quezon City",
            "province": "Metro Manila",
            "zipCode": "1210",
        })

        assert isinstance(form.record.incorporators[0].residence, Address)
        assert form.record.incorporators[0].residence.city == "Quezon City"
        assert report.is_valid

    def test_edit_residence_with_text_rejected(self, form):
        before = copy.deepcopy(form.record)

        with pytest.raises(TypeError):
            form.edit("incorporators.0.residence", "12 Rizal Ave, Quezon City")

        assert form.record == before
        assert form.validate().is_valid

    def test_incorporator_names(self, form):
        assert form.incorporator_names() == ["Juan Dela Cruz", "Maria Santos"]


class TestIncorporatorList:

    def test_add_incorporator(self, form):
        index = form.add_incorporator()

        assert index == 2
        assert form.record.incorporators[2].nationality == "Filipino"
        assert "incorporators.2.name" in form.report.fields

    def test_add_beyond_maximum(self, form):
        for _ in range(3):
            form.add_incorporator()

        with pytest.raises(ValueError):
            form.add_incorporator()
        assert len(form.record.incorporators) == 5

    def test_remove_incorporator(self, form):
        form.remove_incorporator(1)

        assert form.incorporator_names() == ["Juan Dela Cruz"]
        assert form.record.treasurer_esecure_id == ""

    def test_remove_last_incorporator(self):
        form = RegistrationForm()

        with pytest.raises(ValueError):
            form.remove_incorporator(0)

    def test_remove_out_of_range(self, form):
        with pytest.raises(IndexError):
            form.remove_incorporator(5)


class TestFees:

    def test_fees_follow_record(self, form):
        form.edit("sharesDetails.parValue", Decimal('10'))

        assert form.fees().bir.dst_on_subscribed == Decimal('2500')


class TestGeneratePrimaryPurpose:

    @pytest.mark.asyncio
    async def test_success(self, form):
        async def generator(description):
            return "  To engage in the wholesale trade of office supplies.  "

        outcome = await form.generate_primary_purpose(generator)

        assert outcome.success
        assert outcome.title == "Primary Purpose Generated!"
        assert form.record.primary_purpose == "To engage in the wholesale trade of office supplies."
        assert not form.is_generating_purpose

    @pytest.mark.asyncio
    async def test_empty_description(self, form):
        form.edit("industryDescription", "   ")
        calls = []

        async def generator(description):
            calls.append(description)
            return "x"

        outcome = await form.generate_primary_purpose(generator)

        assert not outcome.success
        assert outcome.title == "Industry Description is empty"
        assert calls == []

    @pytest.mark.asyncio
    async def test_failure_leaves_record_untouched(self, form):
        before = form.record.primary_purpose

        async def generator(description):
            raise RuntimeError("quota exceeded")

        outcome = await form.generate_primary_purpose(generator)

        assert not outcome.success
        assert outcome.title == "Generation Failed"
        assert form.record.primary_purpose == before
        assert not form.is_generating_purpose

        trail = await form.audit.get_registration_audit_trail(form.record.registration_id)
        assert trail[-1].event_type == AuditEventType.ERROR_OCCURRED

    @pytest.mark.asyncio
    async def test_blank_answer_is_failure(self, form):
        async def generator(description):
            return "  "

        outcome = await form.generate_primary_purpose(generator)

        assert not outcome.success
        assert outcome.message == "There was an error generating the primary purpose."


class TestSubmit:

    @pytest.mark.asyncio
    async def test_success_resets_form(self, form):
        store = ListRowStore()
        registration_id = form.record.registration_id

        outcome = await form.submit(store)

        assert outcome.success
        assert outcome.title == "Form Submitted Successfully!"
        assert len(store.rows) == 1
        assert form.record == RegistrationRecord.create_default()
        assert form.record.registration_id != registration_id

        trail = await form.audit.get_registration_audit_trail(registration_id)
        assert trail[-1].event_type == AuditEventType.SUBMISSION_ACCEPTED

    @pytest.mark.asyncio
    async def test_invalid_record_not_sent(self, form):
        form.edit("primaryPurpose", "")
        store = ListRowStore()

        outcome = await form.submit(store)

        assert not outcome.success
        assert outcome.message == "Please correct the highlighted fields before submitting."
        assert store.rows == []

    @pytest.mark.asyncio
    async def test_store_failure_keeps_record(self, form):
        before = form.record

        outcome = await form.submit(ListRowStore(fail=True))

        assert not outcome.success
        assert outcome.title == "Submission Failed"
        assert outcome.message == "Failed to submit data: network down"
        assert form.record == before
        assert not form.is_submitting
