from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, StringConstraints
from pydantic.alias_generators import to_camel

from domain.workflow import ApplicationStatus, ContactStatus

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Relationship(str, Enum):
    SPOUSE = "spouse"
    SON = "son"
    DAUGHTER = "daughter"
    PARENT = "parent"


class MaritalStatus(str, Enum):
    SINGLE = "single"
    MARRIED = "married"
    DIVORCED = "divorced"
    WIDOWED = "widowed"


class AdminRole(str, Enum):
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


def _as_date(value: Any) -> Any:
    # accepts ISO dates and ISO datetimes, and BSON datetimes read back from Mongo
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            return value
    return value


IsoDate = Annotated[date, BeforeValidator(_as_date)]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python and in the store."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Address(CamelModel):
    street: NonEmptyStr
    city: NonEmptyStr
    state: NonEmptyStr
    pincode: NonEmptyStr


class BankDetails(CamelModel):
    bank_name: NonEmptyStr
    account_number: NonEmptyStr
    ifsc_code: NonEmptyStr


class DocumentItem(CamelModel):
    document_type: NonEmptyStr
    document_number: Optional[str] = None
    submitted: bool = False


class PensionApplicationIn(CamelModel):
    applicant_name: NonEmptyStr
    employee_id: NonEmptyStr
    date_of_birth: IsoDate
    date_of_joining: IsoDate
    date_of_retirement: IsoDate
    designation: NonEmptyStr
    department: NonEmptyStr
    basic_pay: float = Field(ge=0, allow_inf_nan=False)
    address: Address
    contact_number: NonEmptyStr
    email: EmailStr
    bank_details: BankDetails


class FamilyPensionApplicationIn(CamelModel):
    deceased_employee_name: NonEmptyStr
    deceased_employee_id: NonEmptyStr
    date_of_death: IsoDate
    applicant_name: NonEmptyStr
    relationship: Relationship
    date_of_birth: IsoDate
    marital_status: MaritalStatus
    address: Address
    contact_number: NonEmptyStr
    email: EmailStr
    bank_details: BankDetails
    documents_submitted: List[DocumentItem] = []


class ContactMessageIn(CamelModel):
    name: NonEmptyStr
    email: EmailStr
    phone: NonEmptyStr
    subject: NonEmptyStr
    message: NonEmptyStr


class RecordMeta(CamelModel):
    id: str
    submitted_at: datetime
    updated_at: Optional[datetime] = None
    notes: Optional[str] = None


class PensionApplication(PensionApplicationIn, RecordMeta):
    status: ApplicationStatus = ApplicationStatus.PENDING


class FamilyPensionApplication(FamilyPensionApplicationIn, RecordMeta):
    status: ApplicationStatus = ApplicationStatus.PENDING


class ContactMessage(ContactMessageIn, RecordMeta):
    status: ContactStatus = ContactStatus.UNREAD


class Admin(CamelModel):
    id: str
    username: str
    email: str
    role: AdminRole = AdminRole.ADMIN
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None
