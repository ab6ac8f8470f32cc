"""Derived-field recomputation tests"""

from decimal import Decimal

from bizreg.core import recompute, derive_amounts, derive_treasurer_esecure_id


class TestAmountSubscribed:
    """amountSubscribed = sharesSubscribed × parValue"""

    def test_amounts(self, valid_record):
        valid_record.shares_details.par_value = Decimal('2.5')

        assert derive_amounts(valid_record) == [Decimal('37500'), Decimal('25000')]

    def test_par_value_change_updates_every_incorporator(self, valid_record):
        valid_record.shares_details.par_value = Decimal('10')

        result = recompute(valid_record)

        assert [inc.amount_subscribed for inc in result.incorporators] == [
            Decimal('150000'), Decimal('100000')
        ]

    def test_unusable_numbers_count_as_zero(self, valid_record):
        valid_record.incorporators[0].shares_subscribed = "lots"
        valid_record.shares_details.par_value = ""

        result = recompute(valid_record)

        assert result.incorporators[0].amount_subscribed == Decimal('0')
        assert result.incorporators[1].amount_subscribed == Decimal('0')

    def test_stored_amount_is_overwritten(self, valid_record):
        valid_record.incorporators[0].amount_subscribed = Decimal('999')

        result = recompute(valid_record)

        assert result.incorporators[0].amount_subscribed == Decimal('15000')


class TestTreasurerEsecureId:

    def test_mirrors_treasurer(self, valid_record):
        assert derive_treasurer_esecure_id(valid_record) == "ES-0002"

    def test_follows_treasurer_change(self, valid_record):
        valid_record.corporate_treasurer = "Juan Dela Cruz"

        assert recompute(valid_record).treasurer_esecure_id == "ES-0001"

    def test_cleared_when_treasurer_not_found(self, valid_record):
        valid_record.corporate_treasurer = "Nobody"

        assert recompute(valid_record).treasurer_esecure_id == ""

    def test_cleared_when_treasurer_removed(self, valid_record):
        del valid_record.incorporators[1]

        assert recompute(valid_record).treasurer_esecure_id == ""

    def test_first_matching_name_wins(self, valid_record):
        valid_record.incorporators[0].name = "Maria Santos"

        assert recompute(valid_record).treasurer_esecure_id == "ES-0001"


class TestRecompute:

    def test_idempotent(self, valid_record):
        once = recompute(valid_record)
        twice = recompute(once)

        assert once == twice

    def test_input_not_modified(self, valid_record):
        valid_record.incorporators[0].amount_subscribed = Decimal('1')
        valid_record.treasurer_esecure_id = "stale"

        recompute(valid_record)

        assert valid_record.incorporators[0].amount_subscribed == Decimal('1')
        assert valid_record.treasurer_esecure_id == "stale"


class TestOutOfRangeInput:
    """Numbers too large to be real amounts count as zero"""

    def test_huge_exponents(self, valid_record):
        valid_record.incorporators[0].shares_subscribed = "9e999999"
        valid_record.shares_details.par_value = "9e999999"

        result = recompute(valid_record)

        assert result.incorporators[0].amount_subscribed == Decimal('0')
        assert result.incorporators[1].amount_subscribed == Decimal('0')
