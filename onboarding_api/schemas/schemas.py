"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Python attributes are snake_case; the wire uses camelCase through the
alias generator, with explicit aliases where the form's names differ.
"""

from datetime import date
from enum import Enum
from typing import Annotated, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, Json, StringConstraints, field_validator
)
from pydantic.alias_generators import to_camel

TRUTHY_CONSENT = {"on", "true", "1", "yes"}


# ============================================================
# ENUMS
# ============================================================

class EmploymentStatus(str, Enum):
    fresher = "fresher"
    experienced = "experienced"


class ReviewStatus(str, Enum):
    # Not enforced on update, any string is stored
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalStr = Annotated[Optional[str], BeforeValidator(_blank_to_none)]
OptionalDate = Annotated[Optional[date], BeforeValidator(_blank_to_none)]


def _check_email(value: str) -> str:
    # Checked only; the address is stored exactly as submitted
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}")
    return value


EmailAddress = Annotated[str, AfterValidator(_check_email)]


# ============================================================
# SUBMISSION SCHEMAS
# ============================================================

class EducationEntry(WireModel):
    level: RequiredStr
    stream: OptionalStr = None
    institution: OptionalStr = None
    year: OptionalStr = None
    score: OptionalStr = None


class EmploymentEntry(WireModel):
    company_name: RequiredStr
    designation: OptionalStr = None
    last_project: OptionalStr = None
    start_date: OptionalDate = Field(None, alias="companyStartDate")
    end_date: OptionalDate = Field(None, alias="companyEndDate")


class OnboardingForm(WireModel):
    """Scalar part of POST /api/submit-onboarding."""

    # Personal
    full_name: RequiredStr
    email: EmailAddress
    phone_no: RequiredStr
    alternate_number: OptionalStr = None
    guardian_name: RequiredStr
    guardian_contact: RequiredStr
    marital_status: RequiredStr
    gender: RequiredStr
    blood_group: RequiredStr
    date_of_birth: date
    employment_status: EmploymentStatus

    # Government IDs
    aadhar_no: RequiredStr
    pan_no: RequiredStr

    # Previous employment
    pf_no: OptionalStr = None
    uan_no: OptionalStr = None

    # Address
    current_address: RequiredStr
    current_city: RequiredStr
    current_state: RequiredStr
    current_pincode: RequiredStr
    permanent_address: RequiredStr
    permanent_city: RequiredStr
    permanent_state: RequiredStr
    permanent_pincode: RequiredStr

    # Bank
    bank_name: RequiredStr = Field(..., alias="bankNameAsPerForm")
    account_no: RequiredStr
    ifsc_code: RequiredStr
    branch_name: RequiredStr

    # Repeated blocks, sent as JSON text
    education_details: Json[List[EducationEntry]]
    employment_details: Json[List[EmploymentEntry]] = Field(default_factory=list)

    # Signature
    consent_checkbox: bool = False

    @field_validator("employment_status", mode="before")
    @classmethod
    def normalize_status(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("employment_details", mode="before")
    @classmethod
    def blank_employment(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return "[]"
        return value

    @field_validator("consent_checkbox", mode="before")
    @classmethod
    def parse_consent(cls, value):
        if isinstance(value, bool):
            return value
        return str(value or "").strip().lower() in TRUTHY_CONSENT

    @property
    def is_experienced(self) -> bool:
        return self.employment_status == EmploymentStatus.experienced


class SubmitResponse(BaseModel):
    message: str
    employeeId: int


# ============================================================
# EMPLOYEE VIEW SCHEMAS
# ============================================================

class EducationResponse(WireModel):
    level: Optional[str] = None
    stream: Optional[str] = None
    institution: Optional[str] = None
    year: Optional[str] = None
    score: Optional[str] = None
    doc: Optional[str] = None


class EmploymentResponse(WireModel):
    company_name: Optional[str] = None
    designation: Optional[str] = None
    last_project: Optional[str] = None
    start_date: Optional[date] = Field(None, alias="companyStartDate")
    end_date: Optional[date] = Field(None, alias="companyEndDate")
    doc: Optional[str] = None


class EmployeeResponse(WireModel):
    id: int
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone_no: Optional[str] = None
    alternate_number: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_contact: Optional[str] = None
    marital_status: Optional[str] = None
    gender: Optional[str] = None
    blood_group: Optional[str] = None
    date_of_birth: Optional[date] = None
    employment_status: Optional[str] = None
    aadhar_no: Optional[str] = None
    aadhar_file: Optional[str] = None
    pan_no: Optional[str] = None
    pan_file: Optional[str] = None
    pf_no: Optional[str] = None
    uan_no: Optional[str] = None
    current_address: Optional[str] = None
    current_city: Optional[str] = None
    current_state: Optional[str] = None
    current_pincode: Optional[str] = None
    permanent_address: Optional[str] = None
    permanent_city: Optional[str] = None
    permanent_state: Optional[str] = None
    permanent_pincode: Optional[str] = None
    bank_name: Optional[str] = Field(None, alias="bankNameAsPerForm")
    account_no: Optional[str] = None
    ifsc_code: Optional[str] = None
    branch_name: Optional[str] = None
    signature: Optional[str] = None
    consent: Optional[bool] = None
    status: str = ReviewStatus.pending.value
    education_details: List[EducationResponse] = []
    employment_details: List[EmploymentResponse] = []


# ============================================================
# ADMIN SCHEMAS
# ============================================================

class StatusUpdate(BaseModel):
    status: str


class MessageResponse(BaseModel):
    message: str


class ClearResponse(BaseModel):
    message: str
    filesRemoved: int = 0
