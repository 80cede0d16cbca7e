from unittest.mock import MagicMock

import pytest

from api.client import SchoolApiClient
from schemas.directory import GroupKeySet
from schemas.resource import ResourceRecord
from schemas.user import UserRecord

BASE_URL = "http://school.test"


@pytest.fixture
def keys():
    return GroupKeySet()


@pytest.fixture
def users():
    return [
        UserRecord(id=1, username="STU101", full_name="Asha", role="student", class_group="Class 3"),
        UserRecord(
            id=2,
            username="ravi@school.com",
            full_name="Ravi",
            role="teacher",
            class_group="Teachers",
            subjects_taught=["Math", "Science"],
        ),
        UserRecord(id=3, username="STU102", full_name="Bala", role="student", class_group="LKG"),
        UserRecord(id=4, username="STU103", full_name="Chitra", role="student", class_group="Class 3"),
    ]


@pytest.fixture
def material():
    return ResourceRecord.model_validate(
        {
            "material_id": 7,
            "title": "Fractions",
            "subject": "Math",
            "material_type": "Notes",
            "description": "Chapter 4 notes",
            "file_path": "/uploads/fractions.pdf",
            "external_link": "https://video.test/fractions",
            "class_group": "Class 3",
            "uploaded_by": 2,
        }
    )


@pytest.fixture
def api():
    client = MagicMock(spec=SchoolApiClient)
    client.base_url = BASE_URL
    return client
