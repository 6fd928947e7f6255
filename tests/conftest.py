"""
Pytest configuration and fixtures
"""
import os

# must be set before core.config is imported
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient

from apps.api.deps import get_admin_store, get_record_store
from apps.api.main import app
from services.persistence.memory import InMemoryAdminStore, InMemoryRecordStore
from services.persistence.seed import create_default_admin

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def admin_store() -> InMemoryAdminStore:
    store = InMemoryAdminStore()
    create_default_admin(store, ADMIN_USERNAME, ADMIN_PASSWORD, "admin@pagmumbai.gov.in")
    return store


@pytest.fixture
def client(record_store, admin_store):
    """Test client with both stores swapped for fresh in-memory ones."""
    app.dependency_overrides[get_record_store] = lambda: record_store
    app.dependency_overrides[get_admin_store] = lambda: admin_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    resp = client.post(
        "/api/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
    )
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def pension_payload() -> dict:
    return {
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
        "address": {
            "street": "123 Main Street",
            "city": "Mumbai",
            "state": "Maharashtra",
            "pincode": "400001",
        },
        "bankDetails": {
            "bankName": "State Bank of India",
            "accountNumber": "1234567890",
            "ifscCode": "SBIN0001234",
        },
    }


@pytest.fixture
def family_pension_payload() -> dict:
    return {
        "deceasedEmployeeName": "Amit Patel",
        "deceasedEmployeeId": "EMP003",
        "dateOfDeath": "2023-01-15",
        "applicantName": "Sunita Patel",
        "relationship": "spouse",
        "dateOfBirth": "1965-12-10",
        "maritalStatus": "widowed",
        "contactNumber": "9876543212",
        "email": "sunita.patel@example.com",
        "address": {
            "street": "789 Lake Road",
            "city": "Mumbai",
            "state": "Maharashtra",
            "pincode": "400003",
        },
        "bankDetails": {
            "bankName": "ICICI Bank",
            "accountNumber": "1122334455",
            "ifscCode": "ICIC0001122",
        },
        "documentsSubmitted": [
            {"documentType": "death_certificate", "documentNumber": "DC-1", "submitted": True}
        ],
    }


@pytest.fixture
def contact_payload() -> dict:
    return {
        "name": "Vikram Singh",
        "email": "vikram.singh@example.com",
        "phone": "9876543213",
        "subject": "Pension Application Status",
        "message": "Can you please provide an update on my application?",
    }
