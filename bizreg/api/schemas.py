"""API request/response schemas (Pydantic)

Field names are snake_case in Python and camelCase on the wire, matching the
field paths used in validation messages.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Raw numeric input: numbers or the text typed into the form. Values that do
# not parse are kept and reported by validation instead of rejected here.
NumberField = Optional[Union[Decimal, str]]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Registration record
# ============================================================================

class AddressSchema(CamelModel):
    """Philippine address"""
    street: str = ""
    barangay: str = ""
    city: str = ""
    province: str = ""
    zip_code: str = ""


class IncorporatorSchema(CamelModel):
    """Incorporator

    amountSubscribed is accepted but ignored; it is always recomputed.
    """
    name: str = ""
    tin: str = ""
    nationality: str = "Filipino"
    residence: AddressSchema = Field(default_factory=AddressSchema)
    shares_subscribed: NumberField = None
    amount_subscribed: NumberField = None
    birthdate: Optional[str] = Field(None, description="ISO date")
    esecure_id: str = ""


class CorporationNamesSchema(CamelModel):
    name1: str = ""
    name2: str = ""
    name3: str = ""


class SharesDetailsSchema(CamelModel):
    """Capital structure"""
    authorized_capital: NumberField = None
    subscribed_capital: NumberField = None
    paid_up_capital: NumberField = None
    par_value: NumberField = None


class RegistrationRequest(CamelModel):
    """Registration record as held by the form"""
    corporation_names: CorporationNamesSchema = Field(default_factory=CorporationNamesSchema)
    principal_office_address: AddressSchema = Field(default_factory=AddressSchema)
    industry_description: str = ""
    primary_purpose: str = ""
    secondary_purpose: str = ""
    company_email: str = ""
    company_phone: str = ""
    alternate_email: str = ""
    alternate_phone: str = ""
    incorporators: List[IncorporatorSchema] = Field(default_factory=list)
    corporate_treasurer: str = ""
    treasurer_esecure_id: str = ""
    annual_meeting_date: Optional[str] = Field(None, description="ISO date")
    shares_details: SharesDetailsSchema = Field(default_factory=SharesDetailsSchema)
    lease_rent: NumberField = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "corporationNames": {"name1": "Acme Trading Corp", "name2": "Acme Ventures Inc", "name3": "Acme Holdings Corp"},
                "principalOfficeAddress": {
                    "street": "123 Ayala Ave", "barangay": "San Lorenzo",
                    "city": "Makati", "province": "Metro Manila", "zipCode": "1223"
                },
                "industryDescription": "Wholesale of office supplies",
                "primaryPurpose": "To engage in the wholesale of office supplies",
                "companyEmail": "info@acme.ph",
                "companyPhone": "09171234567",
                "incorporators": [{
                    "name": "Juan Dela Cruz", "tin": "123-456-789", "nationality": "Filipino",
                    "residence": {
                        "street": "1 Rizal St", "barangay": "Poblacion",
                        "city": "Makati", "province": "Metro Manila", "zipCode": "1210"
                    },
                    "sharesSubscribed": 25000, "birthdate": "1980-01-15", "esecureId": "ES-0001"
                }],
                "corporateTreasurer": "Juan Dela Cruz",
                "annualMeetingDate": "2025-04-15",
                "sharesDetails": {
                    "authorizedCapital": 100000, "subscribedCapital": 25000,
                    "paidUpCapital": 6250, "parValue": 1
                },
                "leaseRent": 2500
            }
        }
    )

    def to_record_dict(self) -> Dict[str, Any]:
        """camelCase mapping accepted by RegistrationRecord.from_dict"""
        return self.model_dump(by_alias=True)


# ============================================================================
# Validation
# ============================================================================

class ViolationItem(BaseModel):
    """One rule violation"""
    field: str = Field(..., description="camelCase field path")
    message: str


class ValidationResponse(CamelModel):
    """Validation result with the recomputed record"""
    is_valid: bool
    violations: List[ViolationItem]
    rule_version: str
    record: Dict[str, Any]


class RecomputeResponse(CamelModel):
    """Record with derived fields recomputed"""
    record: Dict[str, Any]


# ============================================================================
# Fees
# ============================================================================

class FeeRequest(CamelModel):
    """Capital figures used by the fee estimate"""
    authorized_capital: NumberField = None
    subscribed_capital: NumberField = None
    par_value: NumberField = None
    lease_rent: NumberField = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "authorizedCapital": 100000,
                "subscribedCapital": 25000,
                "parValue": 1,
                "leaseRent": 2500
            }
        }
    )


class SecFeesSchema(CamelModel):
    filing_fee: Decimal
    legal_research_fee: Decimal
    by_laws_fee: Decimal
    stock_transfer_book_fee: Decimal
    name_verification_fee: Decimal
    documentary_stamp_fee: Decimal
    total: Decimal


class BirFeesSchema(CamelModel):
    dst_on_subscribed: Decimal
    dst_on_lease: Decimal
    total: Decimal


class FeeTraceItem(BaseModel):
    """One calculation step"""
    step_name: str
    applied_rule: str
    output_value: Any
    legal_basis: Optional[str] = None
    formula: Optional[str] = None


class ChartItem(BaseModel):
    name: str
    value: Decimal


class FeeBreakdownResponse(CamelModel):
    """Estimated fees"""
    sec: SecFeesSchema
    bir: BirFeesSchema
    grand_total: Decimal
    chart: List[ChartItem]
    traces: List[FeeTraceItem]
    rule_version: str


# ============================================================================
# Primary purpose / submission
# ============================================================================

class PurposeRequest(CamelModel):
    """Primary purpose generation request"""
    industry_description: str = Field(..., description="free-text industry description")


class PurposeResponse(CamelModel):
    primary_purpose: str


class SubmissionResponse(CamelModel):
    """Submission outcome"""
    success: bool
    message: str
    violations: List[ViolationItem] = Field(default_factory=list)
    row_id: Optional[int] = None


class ErrorResponse(BaseModel):
    """Error response"""
    error: str
    detail: Optional[str] = None
