"""FeeCalculator: SEC and BIR incorporation fee estimate"""

from decimal import Decimal, ROUND_CEILING
from typing import Any, List, Optional

from .fee_trace import FeeTrace, FeeBreakdown, SecFees, BirFees
from .record import RegistrationRecord, amount_or_zero
from .rulebook import RuleBook, get_default_rulebook


def _non_negative(value: Any) -> Decimal:
    """Unusable or negative input counts as 0"""
    return max(amount_or_zero(value), Decimal('0'))


class FeeCalculator:
    """Incorporation fee calculator

    Derives the SEC fees (rate-based filing and legal research fees plus
    fixed fees) and the BIR documentary stamp taxes (on subscribed shares
    and on the office lease) from the capital structure. The calculation
    never fails: negative or non-numeric inputs are treated as 0.

    Attributes:
        rulebook: rule book supplying rates and fixed amounts
    """

    def __init__(self, rulebook: Optional[RuleBook] = None):
        self.rulebook = rulebook or get_default_rulebook()

    def calculate(
        self,
        authorized_capital: Any,
        subscribed_capital: Any,
        par_value: Any,
        lease_rent: Any = None
    ) -> FeeBreakdown:
        """Compute the fee breakdown

        Args:
            authorized_capital: authorized capital stock
            subscribed_capital: subscribed capital stock
            par_value: par value per share
            lease_rent: total rent over the lease term (optional)

        Returns:
            FeeBreakdown with traces
        """
        authorized = _non_negative(authorized_capital)
        subscribed = _non_negative(subscribed_capital)
        par = _non_negative(par_value)
        rent = _non_negative(lease_rent)

        traces: List[FeeTrace] = []

        # 1. SEC fees
        sec = self._calculate_sec_fees(authorized, traces)

        # 2. BIR fees
        bir = self._calculate_bir_fees(subscribed, par, rent, traces)

        # 3. Grand total
        grand_total = sec.total + bir.total
        traces.append(FeeTrace(
            step_name="calculate_grand_total",
            input_values={'sec_total': sec.total, 'bir_total': bir.total},
            applied_rule="sum",
            output_value=grand_total,
            formula="sec_total + bir_total"
        ))

        return FeeBreakdown(
            sec=sec,
            bir=bir,
            grand_total=grand_total,
            traces=traces,
            rule_version=self.rulebook.version
        )

    def calculate_for(self, record: RegistrationRecord) -> FeeBreakdown:
        """Fee breakdown for the capital figures of a registration record"""
        shares = record.shares_details
        return self.calculate(
            authorized_capital=shares.authorized_capital,
            subscribed_capital=shares.subscribed_capital,
            par_value=shares.par_value,
            lease_rent=record.lease_rent
        )

    def _calculate_sec_fees(self, authorized: Decimal, traces: List[FeeTrace]) -> SecFees:
        """Rate-based fees on authorized capital, then the fixed fees"""
        rated = {}
        for fee_key in ('filing_fee', 'legal_research_fee'):
            fee = self.rulebook.get_sec_rate(fee_key)
            amount = authorized * fee['rate']
            rated[fee_key] = amount
            traces.append(FeeTrace(
                step_name=f"calculate_{fee_key}",
                input_values={'authorized_capital': authorized, 'rate': fee['rate']},
                applied_rule=fee['name'],
                output_value=amount,
                formula=f"authorized_capital × {fee['rate']}",
                legal_basis=fee['legal_basis']
            ))

        fixed = self.rulebook.get_sec_fixed_fees()
        for fee_key, fee in fixed.items():
            traces.append(FeeTrace(
                step_name=f"apply_{fee_key}",
                input_values={},
                applied_rule=fee['name'],
                output_value=fee['amount'],
                notes="fixed fee"
            ))

        def fixed_amount(key: str) -> Decimal:
            return fixed[key]['amount'] if key in fixed else Decimal('0')

        total = sum(rated.values(), Decimal('0')) + sum(
            (fee['amount'] for fee in fixed.values()), Decimal('0')
        )
        traces.append(FeeTrace(
            step_name="calculate_sec_total",
            input_values={**rated, **{key: fee['amount'] for key, fee in fixed.items()}},
            applied_rule="sum",
            output_value=total,
            formula=" + ".join(list(rated) + list(fixed))
        ))

        return SecFees(
            filing_fee=rated['filing_fee'],
            legal_research_fee=rated['legal_research_fee'],
            by_laws_fee=fixed_amount('by_laws_fee'),
            stock_transfer_book_fee=fixed_amount('stock_transfer_book_fee'),
            name_verification_fee=fixed_amount('name_verification_fee'),
            documentary_stamp_fee=fixed_amount('documentary_stamp_fee'),
            total=total
        )

    def _calculate_bir_fees(
        self,
        subscribed: Decimal,
        par: Decimal,
        rent: Decimal,
        traces: List[FeeTrace]
    ) -> BirFees:
        """DST on subscribed shares and on the lease"""
        dst_rule = self.rulebook.get_dst_on_subscribed()
        dst_on_subscribed = subscribed * par * dst_rule['rate']
        traces.append(FeeTrace(
            step_name="calculate_dst_on_subscribed",
            input_values={'subscribed_capital': subscribed, 'par_value': par, 'rate': dst_rule['rate']},
            applied_rule=dst_rule['name'],
            output_value=dst_on_subscribed,
            formula=f"subscribed_capital × par_value × {dst_rule['rate']}",
            legal_basis=dst_rule['legal_basis']
        ))

        schedule = self.rulebook.get_lease_dst_schedule()
        dst_on_lease = self.dst_on_lease(rent)
        traces.append(FeeTrace(
            step_name="calculate_dst_on_lease",
            input_values={'lease_rent': rent},
            applied_rule=schedule['name'],
            output_value=dst_on_lease,
            formula=(
                f"0 if rent <= 0; {schedule['base_amount']} up to {schedule['base_threshold']}; "
                f"+{schedule['step_amount']} per started {schedule['step_size']} above"
            ),
            legal_basis=schedule['legal_basis']
        ))

        total = dst_on_subscribed + dst_on_lease
        traces.append(FeeTrace(
            step_name="calculate_bir_total",
            input_values={'dst_on_subscribed': dst_on_subscribed, 'dst_on_lease': dst_on_lease},
            applied_rule="sum",
            output_value=total,
            formula="dst_on_subscribed + dst_on_lease"
        ))

        return BirFees(dst_on_subscribed=dst_on_subscribed, dst_on_lease=dst_on_lease, total=total)

    def dst_on_lease(self, lease_rent: Any) -> Decimal:
        """Progressive DST on lease rent

        Nothing when there is no rent, a flat amount up to the base
        threshold, plus the step amount for every full or partial step
        above it (6 for the first 2,000, then 2 per 1,000 or fraction).
        """
        rent = _non_negative(lease_rent)
        if rent <= 0:
            return Decimal('0')

        schedule = self.rulebook.get_lease_dst_schedule()
        if rent <= schedule['base_threshold']:
            return schedule['base_amount']

        steps = ((rent - schedule['base_threshold']) / schedule['step_size']).to_integral_value(
            rounding=ROUND_CEILING
        )
        return schedule['base_amount'] + steps * schedule['step_amount']
