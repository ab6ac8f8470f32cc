"""RegistrationRecord: the incorporation form data under validation"""

import re
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Union
from uuid import uuid4


# Raw numeric input as typed by the user; coerced by to_decimal()
NumberInput = Union[Decimal, int, float, str, None]

DEFAULT_NATIONALITY = "Filipino"

# Derived paths are never assigned from outside
_DERIVED_PATH = re.compile(r"^(treasurerEsecureId|incorporators\.\d+\.amountSubscribed)$")

_DATE_FIELDS = {"birthdate", "annual_meeting_date"}

# Largest decimal exponent accepted from user input; products of two such
# values stay well inside the default decimal context
MAX_INPUT_EXPONENT = 100


class UnknownFieldError(LookupError):
    """Field path does not exist on the record"""


class ReadOnlyFieldError(ValueError):
    """Attempt to assign a derived field"""


def to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce user input to Decimal

    Returns None for blanks, booleans, non-numeric text, non-finite numbers
    and magnitudes beyond MAX_INPUT_EXPONENT; callers decide whether None
    means "absent" or "zero".
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not result.is_finite():
        return None
    if not result:
        return Decimal('0')
    if abs(result.adjusted()) > MAX_INPUT_EXPONENT:
        return None
    return result


def amount_or_zero(value: Any) -> Decimal:
    """to_decimal() with 0 for anything unusable"""
    result = to_decimal(value)
    return result if result is not None else Decimal('0')


def is_blank(value: Any) -> bool:
    """Empty strings (after trimming) and None count as not provided"""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def to_date(value: Any) -> Optional[date]:
    """Coerce a date, datetime or ISO string to a date (None if unparsable)"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def is_derived_path(path: str) -> bool:
    """True for paths whose value is computed from other fields"""
    return bool(_DERIVED_PATH.match(path))


def _snake(segment: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", segment).lower()


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _serialize(value: Any) -> Any:
    if is_dataclass(value):
        return {_camel(f.name): _serialize(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, list):
        return [_serialize(item) for item in value]
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


@dataclass
class Address:
    """Postal address (principal office or incorporator residence)"""

    street: str = ""
    barangay: str = ""
    city: str = ""
    province: str = ""
    zip_code: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Address":
        data = data or {}
        return cls(
            street=data.get("street") or "",
            barangay=data.get("barangay") or "",
            city=data.get("city") or "",
            province=data.get("province") or "",
            zip_code=data.get("zipCode") or "",
        )


@dataclass
class Incorporator:
    """A natural person co-founding the corporation

    Attributes:
        name: full name (also the key used to pick the treasurer)
        tin: tax identification number, NNN-NNN-NNN
        nationality: nationality
        residence: residence address
        shares_subscribed: number of shares subscribed (raw input)
        amount_subscribed: shares_subscribed × par value (derived)
        birthdate: date of birth
        esecure_id: SEC eSecure ID
    """

    name: str = ""
    tin: str = ""
    nationality: str = DEFAULT_NATIONALITY
    residence: Address = field(default_factory=Address)
    shares_subscribed: NumberInput = Decimal('0')
    amount_subscribed: NumberInput = Decimal('0')
    birthdate: Optional[date] = None
    esecure_id: str = ""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Incorporator":
        data = data or {}
        return cls(
            name=data.get("name") or "",
            tin=data.get("tin") or "",
            nationality=data.get("nationality") or "",
            residence=Address.from_dict(data.get("residence")),
            shares_subscribed=data.get("sharesSubscribed"),
            amount_subscribed=data.get("amountSubscribed"),
            birthdate=to_date(data.get("birthdate")),
            esecure_id=data.get("esecureId") or "",
        )


@dataclass
class CorporationNames:
    """Three proposed corporate names, in order of preference"""

    name1: str = ""
    name2: str = ""
    name3: str = ""

    def as_list(self) -> List[str]:
        return [self.name1, self.name2, self.name3]

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CorporationNames":
        data = data or {}
        return cls(
            name1=data.get("name1") or "",
            name2=data.get("name2") or "",
            name3=data.get("name3") or "",
        )


@dataclass
class SharesDetails:
    """Capital structure

    Attributes:
        authorized_capital: authorized capital stock
        subscribed_capital: subscribed capital stock
        paid_up_capital: paid-up capital stock
        par_value: par value per share
    """

    authorized_capital: NumberInput = Decimal('100000')
    subscribed_capital: NumberInput = Decimal('25000')
    paid_up_capital: NumberInput = Decimal('6250')
    par_value: NumberInput = Decimal('10')

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SharesDetails":
        data = data or {}
        return cls(
            authorized_capital=data.get("authorizedCapital"),
            subscribed_capital=data.get("subscribedCapital"),
            paid_up_capital=data.get("paidUpCapital"),
            par_value=data.get("parValue"),
        )


@dataclass
class RegistrationRecord:
    """Incorporation intake record

    Built with defaults when the form opens, edited field by field, and
    consumed once on submission. Field paths use the camelCase form names
    (``sharesDetails.parValue``, ``incorporators.0.birthdate``); attributes
    are their snake_case equivalents.

    Attributes:
        corporation_names: three proposed names
        principal_office_address: principal office
        industry_description: free-text industry description
        primary_purpose: primary purpose statement
        secondary_purpose: optional secondary purpose
        company_email: official email
        company_phone: official contact number
        alternate_email: optional alternate email
        alternate_phone: optional alternate contact number
        incorporators: 1 to 5 incorporators
        corporate_treasurer: name of the incorporator acting as treasurer
        treasurer_esecure_id: treasurer's eSecure ID (derived)
        annual_meeting_date: date of the annual stockholders' meeting
        shares_details: capital structure
        lease_rent: total rent over the lease term (fee computation only)
        registration_id: session identifier (not part of the form data)
    """

    corporation_names: CorporationNames = field(default_factory=CorporationNames)
    principal_office_address: Address = field(default_factory=Address)
    industry_description: str = ""
    primary_purpose: str = ""
    secondary_purpose: str = ""
    company_email: str = ""
    company_phone: str = ""
    alternate_email: str = ""
    alternate_phone: str = ""
    incorporators: List[Incorporator] = field(default_factory=lambda: [Incorporator()])
    corporate_treasurer: str = ""
    treasurer_esecure_id: str = ""
    annual_meeting_date: Optional[date] = None
    shares_details: SharesDetails = field(default_factory=SharesDetails)
    lease_rent: NumberInput = Decimal('0')

    registration_id: str = field(default_factory=lambda: str(uuid4()), compare=False)

    @classmethod
    def create_default(cls) -> "RegistrationRecord":
        """Blank record: one blank incorporator, baseline capital figures"""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegistrationRecord":
        """Build a record from the camelCase form mapping

        Missing sections fall back to blanks; numeric values are kept as
        given and coerced later by the rules that read them.
        """
        incorporators = data.get("incorporators")
        record = cls(
            corporation_names=CorporationNames.from_dict(data.get("corporationNames")),
            principal_office_address=Address.from_dict(data.get("principalOfficeAddress")),
            industry_description=data.get("industryDescription") or "",
            primary_purpose=data.get("primaryPurpose") or "",
            secondary_purpose=data.get("secondaryPurpose") or "",
            company_email=data.get("companyEmail") or "",
            company_phone=data.get("companyPhone") or "",
            alternate_email=data.get("alternateEmail") or "",
            alternate_phone=data.get("alternatePhone") or "",
            incorporators=[Incorporator.from_dict(item) for item in incorporators or []],
            corporate_treasurer=data.get("corporateTreasurer") or "",
            treasurer_esecure_id=data.get("treasurerEsecureId") or "",
            annual_meeting_date=to_date(data.get("annualMeetingDate")),
            shares_details=SharesDetails.from_dict(data.get("sharesDetails")),
            lease_rent=data.get("leaseRent"),
        )
        if data.get("registrationId"):
            record.registration_id = data["registrationId"]
        return record

    def to_dict(self) -> Dict[str, Any]:
        """camelCase nested mapping of the form data

        Decimals become strings and dates ISO strings; the registration id
        is left out.
        """
        result = _serialize(self)
        result.pop("registrationId", None)
        return result

    # ------------------------------------------------------------------
    # Field paths
    # ------------------------------------------------------------------

    def get_value(self, path: str) -> Any:
        """Read a value by camelCase field path

        Raises:
            UnknownFieldError: the path does not exist
        """
        target = self
        for segment in path.split("."):
            target = _step(target, segment, path)
        return target

    def set_value(self, path: str, value: Any) -> None:
        """Assign a value by camelCase field path (in place)

        Date fields accept ISO strings. Composite fields (an address, an
        incorporator, the incorporators list, names, shares details) accept
        the camelCase mapping form or the dataclass itself. Derived fields
        are refused.

        Raises:
            ReadOnlyFieldError: the path is a derived field
            UnknownFieldError: the path does not exist
            TypeError: a composite field was given a non-mapping value
        """
        if is_derived_path(path):
            raise ReadOnlyFieldError(f"{path} is computed and cannot be edited")

        *parents, last = path.split(".")
        target = self
        for segment in parents:
            target = _step(target, segment, path)

        if isinstance(target, list):
            index = _index(target, last, path)
            target[index] = _coerce_part(Incorporator, value, path)
            return

        attribute = _snake(last)
        if not is_dataclass(target) or attribute not in {f.name for f in fields(target)}:
            raise UnknownFieldError(path)
        if attribute in _DATE_FIELDS:
            value = to_date(value)
        elif attribute == "incorporators":
            if not isinstance(value, list):
                raise TypeError(f"{path} expects a list of incorporators")
            value = [_coerce_part(Incorporator, item, path) for item in value]
        elif attribute in _COMPOSITE_FIELDS:
            value = _coerce_part(_COMPOSITE_FIELDS[attribute], value, path)
        setattr(target, attribute, value)


def _index(items: list, segment: str, path: str) -> int:
    if not segment.isdigit() or int(segment) >= len(items):
        raise UnknownFieldError(path)
    return int(segment)


def _step(target: Any, segment: str, path: str) -> Any:
    if isinstance(target, list):
        return target[_index(target, segment, path)]

    attribute = _snake(segment)
    if not is_dataclass(target) or attribute not in {f.name for f in fields(target)}:
        raise UnknownFieldError(path)
    return getattr(target, attribute)


def _coerce_part(cls: type, value: Any, path: str) -> Any:
    if isinstance(value, cls):
        return value
    if isinstance(value, dict):
        return cls.from_dict(value)
    raise TypeError(f"{path} expects a mapping or {cls.__name__}")


_COMPOSITE_FIELDS = {
    "corporation_names": CorporationNames,
    "principal_office_address": Address,
    "residence": Address,
    "shares_details": SharesDetails,
}
