"""
Bootstrap data: the default administrator and a handful of sample records.

Both steps are safe to re-run: an existing admin is left alone, and sample
records are only added to collections that are still empty.
"""

from __future__ import annotations

import logging
from typing import Any

from core.errors import DuplicateRecord
from domain.models import AdminRole
from domain.workflow import RecordKind
from services.auth.admins import register_admin
from services.intake.submissions import create_record
from services.persistence.store import AdminStore, RecordStore
from services.workflow.engine import transition

logger = logging.getLogger(__name__)

_ADDRESS = {"street": "123 Main Street", "city": "Mumbai", "state": "Maharashtra", "pincode": "400001"}

SAMPLE_RECORDS: list[tuple[RecordKind, dict[str, Any], str | None]] = [
    (
        RecordKind.PENSION,
        {
            "applicantName": "Rajesh Kumar",
            "employeeId": "EMP001",
            "dateOfBirth": "1960-05-15",
            "dateOfJoining": "1985-03-01",
            "dateOfRetirement": "2020-05-31",
            "designation": "Senior Accountant",
            "department": "Finance",
            "basicPay": 45000,
            "contactNumber": "9876543210",
            "email": "rajesh.kumar@example.com",
            "address": _ADDRESS,
            "bankDetails": {
                "bankName": "State Bank of India",
                "accountNumber": "1234567890",
                "ifscCode": "SBIN0001234",
            },
        },
        None,
    ),
    (
        RecordKind.PENSION,
        {
            "applicantName": "Priya Sharma",
            "employeeId": "EMP002",
            "dateOfBirth": "1962-08-20",
            "dateOfJoining": "1988-07-15",
            "dateOfRetirement": "2022-08-31",
            "designation": "Deputy Accountant",
            "department": "Audit",
            "basicPay": 52000,
            "contactNumber": "9876543211",
            "email": "priya.sharma@example.com",
            "address": {**_ADDRESS, "street": "456 Park Avenue", "pincode": "400002"},
            "bankDetails": {
                "bankName": "HDFC Bank",
                "accountNumber": "0987654321",
                "ifscCode": "HDFC0000987",
            },
        },
        "approved",
    ),
    (
        RecordKind.FAMILY_PENSION,
        {
            "deceasedEmployeeName": "Amit Patel",
            "deceasedEmployeeId": "EMP003",
            "dateOfDeath": "2023-01-15",
            "applicantName": "Sunita Patel",
            "relationship": "spouse",
            "dateOfBirth": "1965-12-10",
            "maritalStatus": "widowed",
            "contactNumber": "9876543212",
            "email": "sunita.patel@example.com",
            "address": {**_ADDRESS, "street": "789 Lake Road", "pincode": "400003"},
            "bankDetails": {
                "bankName": "ICICI Bank",
                "accountNumber": "1122334455",
                "ifscCode": "ICIC0001122",
            },
            "documentsSubmitted": [
                {"documentType": "death_certificate", "documentNumber": "DC-2023-118", "submitted": True}
            ],
        },
        None,
    ),
    (
        RecordKind.CONTACT,
        {
            "name": "Vikram Singh",
            "email": "vikram.singh@example.com",
            "phone": "9876543213",
            "subject": "Pension Application Status",
            "message": "I submitted my pension application last month. Can you please provide an update on the status?",
        },
        None,
    ),
    (
        RecordKind.CONTACT,
        {
            "name": "Meera Desai",
            "email": "meera.desai@example.com",
            "phone": "9876543214",
            "subject": "Family Pension Query",
            "message": "I need information about the documents required for family pension application.",
        },
        "read",
    ),
]


def create_default_admin(
    admins: AdminStore, username: str, password: str, email: str
) -> bool:
    if admins.get_by_username(username) is not None:
        logger.info("admin %s already exists", username)
        return False
    register_admin(admins, username, email, password, role=AdminRole.SUPER_ADMIN)
    logger.info("default admin %s created", username)
    return True


def create_sample_data(store: RecordStore) -> dict[RecordKind, int]:
    created = {kind: 0 for kind in RecordKind}
    populated = {kind for kind in RecordKind if store.list(kind, limit=1)}
    for kind, payload, status in SAMPLE_RECORDS:
        if kind in populated:
            continue
        try:
            record_id = create_record(store, kind, payload)
        except DuplicateRecord:
            logger.info("sample %s record already present, skipping", kind.value)
            continue
        if status:
            transition(store, kind, record_id, status)
        created[kind] += 1
    return created
