"""
Field rules for public submissions.

Pydantic checks every field and reports all violations at once; this module
turns those into ``{"field", "message"}`` items with form-friendly messages
and raises them together as ``ValidationFailed``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError

from core.errors import ValidationFailed
from domain.models import ContactMessageIn, FamilyPensionApplicationIn, PensionApplicationIn
from domain.workflow import RecordKind

INPUT_MODELS: dict[RecordKind, type[BaseModel]] = {
    RecordKind.PENSION: PensionApplicationIn,
    RecordKind.FAMILY_PENSION: FamilyPensionApplicationIn,
    RecordKind.CONTACT: ContactMessageIn,
}

_ADDRESS_BANK = {
    "address": "Address is required",
    "address.street": "Street address is required",
    "address.city": "City is required",
    "address.state": "State is required",
    "address.pincode": "Pincode is required",
    "bankDetails": "Bank details are required",
    "bankDetails.bankName": "Bank name is required",
    "bankDetails.accountNumber": "Account number is required",
    "bankDetails.ifscCode": "IFSC code is required",
}

FIELD_MESSAGES: dict[RecordKind, dict[str, str]] = {
    RecordKind.PENSION: {
        "applicantName": "Applicant name is required",
        "employeeId": "Employee ID is required",
        "dateOfBirth": "Valid date of birth is required",
        "dateOfJoining": "Valid date of joining is required",
        "dateOfRetirement": "Valid date of retirement is required",
        "designation": "Designation is required",
        "department": "Department is required",
        "basicPay": "Basic pay must be a non-negative number",
        "contactNumber": "Contact number is required",
        "email": "Valid email is required",
        **_ADDRESS_BANK,
    },
    RecordKind.FAMILY_PENSION: {
        "deceasedEmployeeName": "Deceased employee name is required",
        "deceasedEmployeeId": "Deceased employee ID is required",
        "dateOfDeath": "Valid date of death is required",
        "applicantName": "Applicant name is required",
        "relationship": "Valid relationship is required",
        "dateOfBirth": "Valid date of birth is required",
        "maritalStatus": "Valid marital status is required",
        "contactNumber": "Contact number is required",
        "email": "Valid email is required",
        **_ADDRESS_BANK,
    },
    RecordKind.CONTACT: {
        "name": "Name is required",
        "email": "Valid email is required",
        "phone": "Phone number is required",
        "subject": "Subject is required",
        "message": "Message is required",
    },
}


def _field_path(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc)


def collect_errors(kind: RecordKind, exc: ValidationError) -> list[dict[str, str]]:
    messages = FIELD_MESSAGES[kind]
    out: list[dict[str, str]] = []
    seen: set[str] = set()
    for err in exc.errors():
        field = _field_path(err.get("loc", ()))
        if field in seen:
            continue
        seen.add(field)
        out.append({"field": field, "message": messages.get(field, err.get("msg", "Invalid value"))})
    return out


def validate_submission(kind: RecordKind, payload: Any) -> BaseModel:
    """Return the validated model or raise ValidationFailed with every violation."""
    if not isinstance(payload, dict):
        raise ValidationFailed([{"field": "body", "message": "Request body must be a JSON object"}])
    try:
        return INPUT_MODELS[kind].model_validate(payload)
    except ValidationError as e:
        raise ValidationFailed(collect_errors(kind, e)) from e
