"""ValidationEngine: field-level and cross-field rules over a registration record

Every rule is an independent object evaluated against the whole record.
Rule order only affects display order. Failures are returned as
Violation values; nothing here raises for bad user input.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email

from .derivations import recompute
from .formatting import TIN_PATTERN
from .record import (
    Address,
    RegistrationRecord,
    amount_or_zero,
    is_blank,
    to_decimal,
)
from .rulebook import RuleBook, get_default_rulebook


ZIP_CODE_PATTERN = re.compile(r"^\d{4}$")
PHONE_PATTERN = re.compile(r"^(09\d{9}|\d{8})$")

INVALID_EMAIL = "Invalid email address"
INVALID_PHONE = "Must be a valid 11-digit mobile (e.g., 09xxxxxxxxx) or 8-digit landline number."
NAMES_NOT_UNIQUE = "Proposed names must be unique."


@dataclass(frozen=True)
class Violation:
    """A failed rule, attached to the field the UI should highlight

    Attributes:
        field: camelCase field path (e.g. 'sharesDetails.subscribedCapital')
        message: display message
    """
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {'field': self.field, 'message': self.message}


def _is_under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + ".")


@dataclass
class ValidationReport:
    """Result of one validation run

    Attributes:
        violations: violations in rule order
        rule_version: version of the rule book used
        validated_at: time of the run
    """
    violations: List[Violation] = field(default_factory=list)
    rule_version: str = "unknown"
    validated_at: datetime = field(default_factory=datetime.now)

    @property
    def is_valid(self) -> bool:
        """A record can be submitted only when there is no violation"""
        return not self.violations

    @property
    def fields(self) -> List[str]:
        """Field paths with at least one violation, first-seen order"""
        seen: List[str] = []
        for violation in self.violations:
            if violation.field not in seen:
                seen.append(violation.field)
        return seen

    def for_field(self, path: str) -> List[Violation]:
        """Violations on a field or anywhere below it"""
        return [v for v in self.violations if _is_under(v.field, path)]

    def messages(self, path: str) -> List[str]:
        """Messages attached exactly to one field"""
        return [v.message for v in self.violations if v.field == path]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_valid': self.is_valid,
            'violations': [v.to_dict() for v in self.violations],
            'rule_version': self.rule_version,
            'validated_at': self.validated_at.isoformat(),
        }


# ============================================================================
# Rule objects
# ============================================================================

class ValidationRule(ABC):
    """One independent business rule

    Subclasses implement evaluate(); it must not depend on any other rule
    having run.
    """

    name: str = "rule"

    @abstractmethod
    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        """Violations of this rule for the given record"""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class RequiredTextRule(ValidationRule):
    """Text field must be non-empty after trimming"""

    def __init__(self, path: str, message: str):
        self.name = f"required:{path}"
        self.path = path
        self.message = message

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        if is_blank(record.get_value(self.path)):
            return [Violation(self.path, self.message)]
        return []


class RequiredDateRule(ValidationRule):
    """Date field must be set"""

    def __init__(self, path: str, message: str):
        self.name = f"required_date:{path}"
        self.path = path
        self.message = message

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        if record.get_value(self.path) is None:
            return [Violation(self.path, self.message)]
        return []


class PatternRule(ValidationRule):
    """Text field must match a pattern

    With optional=True an empty value is treated as absent and skipped;
    otherwise an empty value fails the pattern like any other text.
    """

    def __init__(self, path: str, pattern: re.Pattern, message: str, optional: bool = False):
        self.name = f"pattern:{path}"
        self.path = path
        self.pattern = pattern
        self.message = message
        self.optional = optional

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        value = record.get_value(self.path)
        if self.optional and is_blank(value):
            return []
        if not isinstance(value, str) or not self.pattern.match(value):
            return [Violation(self.path, self.message)]
        return []


class EmailRule(ValidationRule):
    """Email address syntax, checked with email-validator (no DNS lookup)

    With optional=True an empty value is treated as absent and skipped.
    """

    def __init__(self, path: str, message: str = INVALID_EMAIL, optional: bool = False):
        self.name = f"email:{path}"
        self.path = path
        self.message = message
        self.optional = optional

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        value = record.get_value(self.path)
        if self.optional and is_blank(value):
            return []
        if not isinstance(value, str):
            return [Violation(self.path, self.message)]
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return [Violation(self.path, self.message)]
        return []


class MinimumRule(ValidationRule):
    """Numeric field must be at least a minimum (non-numeric counts as below)"""

    def __init__(self, path: str, minimum: Decimal, message: Optional[str] = None):
        self.name = f"minimum:{path}"
        self.path = path
        self.minimum = minimum
        self.message = message or f"Must be at least {minimum}"

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        value = to_decimal(record.get_value(self.path))
        if value is None or value < self.minimum:
            return [Violation(self.path, self.message)]
        return []


def _address_violations(address: Address, prefix: str) -> List[Violation]:
    violations = []
    for attribute, key, message in (
        ('street', 'street', 'Street is required'),
        ('barangay', 'barangay', 'Barangay is required'),
        ('city', 'city', 'City/Town is required'),
        ('province', 'province', 'Province is required'),
    ):
        if is_blank(getattr(address, attribute)):
            violations.append(Violation(f"{prefix}.{key}", message))

    if not ZIP_CODE_PATTERN.match(address.zip_code or ""):
        violations.append(Violation(f"{prefix}.zipCode", "Must be a valid 4-digit zip code"))
    return violations


class AddressRule(ValidationRule):
    """Street, barangay, city and province required; 4-digit zip code"""

    def __init__(self, path: str):
        self.name = f"address:{path}"
        self.path = path

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        return _address_violations(record.get_value(self.path), self.path)


class DistinctNamesRule(ValidationRule):
    """The proposed names must differ, ignoring case and surrounding whitespace

    Only non-empty names take part. A collision between any pair is
    reported once, always on corporationNames.name1.
    """

    name = "distinct_names"

    @staticmethod
    def fold(name: str) -> str:
        return name.strip().casefold()

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        names = [n for n in record.corporation_names.as_list() if not is_blank(n)]
        folded = {self.fold(n) for n in names}
        if len(folded) != len(names):
            return [Violation("corporationNames.name1", NAMES_NOT_UNIQUE)]
        return []


class DistinctContactRule(ValidationRule):
    """Alternate contact must differ from the official one

    An empty alternate value means "not provided" and is never compared.
    With require_both=True an empty official value also skips the check.
    """

    def __init__(self, official_path: str, alternate_path: str, message: str, require_both: bool = False):
        self.name = f"distinct:{alternate_path}"
        self.official_path = official_path
        self.alternate_path = alternate_path
        self.message = message
        self.require_both = require_both

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        official = record.get_value(self.official_path)
        alternate = record.get_value(self.alternate_path)

        if is_blank(alternate):
            return []
        if self.require_both and is_blank(official):
            return []
        if official == alternate:
            return [Violation(self.alternate_path, self.message)]
        return []


class IncorporatorCountRule(ValidationRule):
    """Between the minimum and maximum number of incorporators"""

    name = "incorporator_count"

    def __init__(self, rulebook: RuleBook):
        self.min_count, self.max_count = rulebook.get_incorporator_limits()

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        count = len(record.incorporators)
        if count < self.min_count:
            if self.min_count == 1:
                message = "At least one incorporator is required"
            else:
                message = f"At least {self.min_count} incorporators are required"
            return [Violation("incorporators", message)]
        if count > self.max_count:
            return [Violation("incorporators", f"Maximum of {self.max_count} incorporators")]
        return []


class IncorporatorFieldsRule(ValidationRule):
    """Per-incorporator field checks, keyed by index"""

    name = "incorporator_fields"

    def __init__(self, rulebook: RuleBook):
        self.min_shares = rulebook.get_min_shares_subscribed()

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        violations = []
        for index, incorporator in enumerate(record.incorporators):
            prefix = f"incorporators.{index}"

            if is_blank(incorporator.name):
                violations.append(Violation(f"{prefix}.name", "Name is required"))
            if not TIN_PATTERN.match(incorporator.tin or ""):
                violations.append(Violation(f"{prefix}.tin", "TIN must be in the format 000-000-000"))
            if is_blank(incorporator.nationality):
                violations.append(Violation(f"{prefix}.nationality", "Nationality is required"))

            violations.extend(_address_violations(incorporator.residence, f"{prefix}.residence"))

            shares = to_decimal(incorporator.shares_subscribed)
            if shares is None or shares < self.min_shares:
                violations.append(Violation(
                    f"{prefix}.sharesSubscribed",
                    "Must subscribe to at least one share"
                ))

            amount = to_decimal(incorporator.amount_subscribed)
            if amount is None or amount < 0:
                violations.append(Violation(f"{prefix}.amountSubscribed", "Cannot be negative"))

            if is_blank(incorporator.esecure_id):
                violations.append(Violation(f"{prefix}.esecureId", "eSecure ID is required"))

        return violations


class IncorporatorBirthdateRule(ValidationRule):
    """Each incorporator needs a birthdate; one violation per missing index"""

    name = "incorporator_birthdate"

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        return [
            Violation(f"incorporators.{index}.birthdate", "Birthdate is required")
            for index, incorporator in enumerate(record.incorporators)
            if incorporator.birthdate is None
        ]


class TreasurerEsecureIdRule(ValidationRule):
    """The selected treasurer must be an incorporator with an eSecure ID

    Fires only when a treasurer is selected; an empty selection is the
    required-field rule's concern.
    """

    name = "treasurer_esecure_id"

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        if is_blank(record.corporate_treasurer):
            return []

        treasurer = next(
            (inc for inc in record.incorporators if inc.name == record.corporate_treasurer),
            None
        )
        if treasurer is None or is_blank(treasurer.esecure_id):
            return [Violation("corporateTreasurer", "The selected treasurer must have an eSecure ID.")]
        return []


class MinimumRatioRule(ValidationRule):
    """value >= ratio × base"""

    def __init__(self, path: str, base_path: str, ratio: Decimal, message: str):
        self.name = f"min_ratio:{path}"
        self.path = path
        self.base_path = base_path
        self.ratio = ratio
        self.message = message

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        value = amount_or_zero(record.get_value(self.path))
        base = amount_or_zero(record.get_value(self.base_path))
        if value < base * self.ratio:
            return [Violation(self.path, self.message)]
        return []


class CeilingRule(ValidationRule):
    """value <= ceiling"""

    def __init__(self, path: str, ceiling_path: str, message: str):
        self.name = f"ceiling:{path}"
        self.path = path
        self.ceiling_path = ceiling_path
        self.message = message

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        value = amount_or_zero(record.get_value(self.path))
        ceiling = amount_or_zero(record.get_value(self.ceiling_path))
        if value > ceiling:
            return [Violation(self.path, self.message)]
        return []


class SharesTotalRule(ValidationRule):
    """Incorporators' shares must add up to the subscribed capital

    The total is summed fresh on every evaluation. The violation belongs
    to sharesDetails.subscribedCapital, not to the incorporator rows.
    """

    name = "shares_total"

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        total = sum(
            (amount_or_zero(inc.shares_subscribed) for inc in record.incorporators),
            Decimal('0')
        )
        subscribed = amount_or_zero(record.shares_details.subscribed_capital)
        if total != subscribed:
            return [Violation(
                "sharesDetails.subscribedCapital",
                "Total shares subscribed by incorporators must equal the Subscribed Capital Stock."
            )]
        return []


class LeaseRentRule(ValidationRule):
    """Optional lease rent; when given it must be a non-negative number"""

    name = "lease_rent"

    def evaluate(self, record: RegistrationRecord) -> List[Violation]:
        if is_blank(record.lease_rent):
            return []
        value = to_decimal(record.lease_rent)
        if value is None or value < 0:
            return [Violation("leaseRent", "Cannot be negative")]
        return []


def default_rules(rulebook: RuleBook) -> List[ValidationRule]:
    """The registration rule set, in display order"""
    min_capital = rulebook.get_min_capital_amount()
    subscribed_ratio = rulebook.get_min_subscribed_ratio()
    paid_up_ratio = rulebook.get_min_paid_up_ratio()

    return [
        RequiredTextRule("corporationNames.name1", "1st proposed name is required"),
        RequiredTextRule("corporationNames.name2", "2nd proposed name is required"),
        RequiredTextRule("corporationNames.name3", "3rd proposed name is required"),
        DistinctNamesRule(),
        AddressRule("principalOfficeAddress"),
        RequiredTextRule("industryDescription", "Industry description is required"),
        RequiredTextRule("primaryPurpose", "Primary purpose is required"),
        EmailRule("companyEmail"),
        PatternRule("companyPhone", PHONE_PATTERN, INVALID_PHONE, optional=True),
        EmailRule("alternateEmail", optional=True),
        PatternRule("alternatePhone", PHONE_PATTERN, INVALID_PHONE, optional=True),
        DistinctContactRule(
            "companyEmail", "alternateEmail",
            "Alternate email must be different from the official email."
        ),
        DistinctContactRule(
            "companyPhone", "alternatePhone",
            "Alternate contact number must be different from the official contact number.",
            require_both=True
        ),
        IncorporatorCountRule(rulebook),
        IncorporatorFieldsRule(rulebook),
        IncorporatorBirthdateRule(),
        RequiredTextRule("corporateTreasurer", "A treasurer must be selected"),
        TreasurerEsecureIdRule(),
        RequiredDateRule("annualMeetingDate", "Annual meeting date is required"),
        MinimumRule("sharesDetails.authorizedCapital", min_capital),
        MinimumRule("sharesDetails.subscribedCapital", min_capital),
        MinimumRule("sharesDetails.paidUpCapital", min_capital),
        MinimumRule("sharesDetails.parValue", rulebook.get_min_par_value()),
        MinimumRatioRule(
            "sharesDetails.subscribedCapital", "sharesDetails.authorizedCapital", subscribed_ratio,
            f"Subscribed Capital must be at least {subscribed_ratio * 100:.0f}% of Authorized Capital."
        ),
        MinimumRatioRule(
            "sharesDetails.paidUpCapital", "sharesDetails.subscribedCapital", paid_up_ratio,
            f"Paid-up Capital must be at least {paid_up_ratio * 100:.0f}% of Subscribed Capital."
        ),
        CeilingRule(
            "sharesDetails.subscribedCapital", "sharesDetails.authorizedCapital",
            "Subscribed Capital Stock cannot exceed Authorized Capital Stock."
        ),
        CeilingRule(
            "sharesDetails.paidUpCapital", "sharesDetails.subscribedCapital",
            "Paid-up Capital Stock cannot exceed Subscribed Capital Stock."
        ),
        SharesTotalRule(),
        LeaseRentRule(),
    ]


class ValidationEngine:
    """Runs the rule set over a registration record

    Derived fields are recomputed before any rule runs, so values injected
    into amountSubscribed or treasurerEsecureId are never trusted.

    Attributes:
        rulebook: rule book supplying limits and ratios
        rules: ordered rule objects
    """

    def __init__(
        self,
        rulebook: Optional[RuleBook] = None,
        rules: Optional[List[ValidationRule]] = None
    ):
        self.rulebook = rulebook or get_default_rulebook()
        self.rules = rules if rules is not None else default_rules(self.rulebook)

    def validate(self, record: RegistrationRecord) -> ValidationReport:
        """Evaluate every rule over the whole record"""
        current = recompute(record)

        violations: List[Violation] = []
        for rule in self.rules:
            violations.extend(rule.evaluate(current))

        return ValidationReport(violations=violations, rule_version=self.rulebook.version)

    def validate_field(self, record: RegistrationRecord, path: str) -> List[Violation]:
        """Violations for one field subtree (incremental re-validation)"""
        return self.validate(record).for_field(path)

    def is_submittable(self, record: RegistrationRecord) -> bool:
        return self.validate(record).is_valid
