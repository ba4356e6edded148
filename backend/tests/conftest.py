"""Shared fixtures for validation and API tests."""

import copy

import pytest

from permitgate.validators import ValidationEngine

# One fully valid payload per catalog schema
VALID_PAYLOADS: dict[str, dict] = {
    "login": {"id": "stu123", "password": "secret123"},
    "createPermit": {
        "id": "B21CS001",
        "name": "Asha Verma",
        "phoneNumber": "9876543210",
        "outTime": "2025-01-01T09:00:00Z",
        "inTime": "2025-01-01T10:00:00Z",
        "purpose": 2,
        "hostel": "h1",
    },
    "updatePermit": {"name": "Asha Verma"},
    "verifyPermit": {"id": "P-1", "type": 1, "inApprovedBy": "warden"},
    "remark": {"id": "B21CS001"},
    "setStatus": {"id": ["B21CS001", "B21CS002"], "status": True},
    "outgoingStudents": {"date": "2025-01-01T00:00:00Z", "hostel": "h2"},
    "idParam": {"id": "42"},
    "hostelParam": {"hostel": "h3"},
}

# Fields whose absence alone must produce a presence violation
REQUIRED_FIELDS: dict[str, list[str]] = {
    "login": ["id", "password"],
    "createPermit": ["id", "name", "phoneNumber", "outTime", "inTime", "purpose", "hostel"],
    "updatePermit": [],
    "verifyPermit": ["id", "type"],
    "remark": ["id"],
    "setStatus": ["id", "status"],
    "outgoingStudents": ["date"],
    "idParam": ["id"],
    "hostelParam": ["hostel"],
}


@pytest.fixture
def engine() -> ValidationEngine:
    return ValidationEngine()


@pytest.fixture
def valid_payloads() -> dict[str, dict]:
    return copy.deepcopy(VALID_PAYLOADS)


@pytest.fixture
def permit_payload() -> dict:
    return copy.deepcopy(VALID_PAYLOADS["createPermit"])
