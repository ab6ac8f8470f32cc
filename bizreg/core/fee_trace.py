"""FeeTrace / FeeBreakdown: fee calculation result with its audit trail"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, List

from .formatting import format_currency


@dataclass
class FeeTrace:
    """One step of the fee calculation

    Attributes:
        step_name: calculation step name
        input_values: inputs used by the step
        applied_rule: rule book entry applied
        output_value: resulting amount
        calculation_time: time of the step
        legal_basis: statutory basis, when there is one
        formula: formula used
        notes: extra remarks
    """

    step_name: str
    input_values: Dict[str, Any]
    applied_rule: str
    output_value: Any
    calculation_time: datetime = field(default_factory=datetime.now)
    legal_basis: Optional[str] = None
    formula: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'step_name': self.step_name,
            'input_values': {k: self._serialize_value(v) for k, v in self.input_values.items()},
            'applied_rule': self.applied_rule,
            'output_value': self._serialize_value(self.output_value),
            'calculation_time': self.calculation_time.isoformat(),
            'legal_basis': self.legal_basis,
            'formula': self.formula,
            'notes': self.notes,
        }

    def _serialize_value(self, value: Any) -> Any:
        if isinstance(value, Decimal):
            return str(value)
        return value

    def __str__(self) -> str:
        output_str = format_currency(self.output_value) if isinstance(self.output_value, Decimal) else str(self.output_value)
        return f"[{self.step_name}] rule: {self.applied_rule}, result: {output_str}"


@dataclass
class SecFees:
    """SEC registration fees"""

    filing_fee: Decimal
    legal_research_fee: Decimal
    by_laws_fee: Decimal
    stock_transfer_book_fee: Decimal
    name_verification_fee: Decimal
    documentary_stamp_fee: Decimal
    total: Decimal

    def to_dict(self) -> Dict[str, str]:
        return {
            'filingFee': str(self.filing_fee),
            'legalResearchFee': str(self.legal_research_fee),
            'byLawsFee': str(self.by_laws_fee),
            'stockTransferBookFee': str(self.stock_transfer_book_fee),
            'nameVerificationFee': str(self.name_verification_fee),
            'documentaryStampFee': str(self.documentary_stamp_fee),
            'total': str(self.total),
        }


@dataclass
class BirFees:
    """BIR documentary stamp taxes"""

    dst_on_subscribed: Decimal
    dst_on_lease: Decimal
    total: Decimal

    def to_dict(self) -> Dict[str, str]:
        return {
            'dstOnSubscribed': str(self.dst_on_subscribed),
            'dstOnLease': str(self.dst_on_lease),
            'total': str(self.total),
        }


@dataclass
class FeeBreakdown:
    """Estimated incorporation fees

    Attributes:
        sec: SEC line items and total
        bir: BIR line items and total
        grand_total: sec.total + bir.total
        traces: calculation steps
        rule_version: rule book version
        calculation_time: time of the calculation
    """

    sec: SecFees
    bir: BirFees
    grand_total: Decimal
    traces: List[FeeTrace] = field(default_factory=list)
    rule_version: str = "unknown"
    calculation_time: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            'sec': self.sec.to_dict(),
            'bir': self.bir.to_dict(),
            'grandTotal': str(self.grand_total),
            'traces': [trace.to_dict() for trace in self.traces],
            'ruleVersion': self.rule_version,
            'calculationTime': self.calculation_time.isoformat(),
        }

    def chart_data(self) -> List[Dict[str, Any]]:
        """SEC vs BIR totals, as plotted next to the fee table"""
        return [
            {'name': 'SEC Fees', 'value': self.sec.total},
            {'name': 'BIR Fees', 'value': self.bir.total},
        ]

    def get_summary(self) -> str:
        """Fee table as shown to the applicant"""
        rows = [
            ("SEC Fees", self.sec.total),
            ("  Filing Fee", self.sec.filing_fee),
            ("  By-Laws", self.sec.by_laws_fee),
            ("  Legal Research Fee (LRF)", self.sec.legal_research_fee),
            ("  Stock and Transfer Book (STB)", self.sec.stock_transfer_book_fee),
            ("  Name Verification", self.sec.name_verification_fee),
            ("  Documentary Stamp Tax (DST)", self.sec.documentary_stamp_fee),
            ("BIR Fees", self.bir.total),
            ("  DST on Subscribed Shares", self.bir.dst_on_subscribed),
            ("  DST on Lease", self.bir.dst_on_lease),
        ]
        lines = ["=== Incorporation Fee Estimates ===", ""]
        lines.extend(f"{label:<34}{format_currency(amount):>16}" for label, amount in rows)
        lines.append("─" * 50)
        lines.append(f"{'Grand Total':<34}{format_currency(self.grand_total):>16}")
        lines.append("")
        lines.append(f"Rule version: {self.rule_version}")
        return "\n".join(lines)

    def get_trace_summary(self) -> str:
        lines = ["=== Fee calculation trace ===\n"]
        for i, trace in enumerate(self.traces, 1):
            lines.append(f"{i}. {trace}")
            if trace.legal_basis:
                lines.append(f"   basis: {trace.legal_basis}")
            if trace.formula:
                lines.append(f"   formula: {trace.formula}")
            lines.append("")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.get_summary()
