import json
from unittest.mock import MagicMock

import pytest
import requests

from api.client import SchoolApiClient
from core.exceptions import NetworkFailureError
from schemas.resource import MultipartSubmission, PickedFile
from schemas.user import StudentPayload, TeacherPayload

BASE_URL = "http://school.test"


def _response(status_code=200, body=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return SchoolApiClient(base_url=BASE_URL + "/", session=session, timeout=None)


def test_list_users_parses_records(client, session):
    session.request.return_value = _response(
        body=[
            {"id": 1, "username": "STU101", "full_name": "Asha", "role": "student",
             "class_group": "Class 3", "subjects_taught": None},
            {"id": 2, "username": "t@s.com", "full_name": "T", "role": "teacher",
             "class_group": "Teachers", "subjects_taught": ["Math"]},
        ]
    )

    users = client.list_users()

    session.request.assert_called_once_with("GET", "http://school.test/api/users", timeout=None)
    assert [u.username for u in users] == ["STU101", "t@s.com"]
    assert users[0].subjects_taught is None
    assert users[1].subjects_taught == ["Math"]


def test_create_student_omits_subjects(client, session):
    session.request.return_value = _response(201, {"id": 5})

    client.create_user(
        StudentPayload(username="STU5", full_name="E", class_group="UKG", password="pw")
    )

    _, kwargs = session.request.call_args
    assert kwargs["json"] == {
        "role": "student",
        "username": "STU5",
        "full_name": "E",
        "class_group": "UKG",
        "password": "pw",
    }


def test_update_teacher_uses_put(client, session):
    session.request.return_value = _response(200, {"message": "ok"})

    client.update_user(
        2, TeacherPayload(username="t", full_name="T", class_group="Teachers", subjects_taught=["Art"])
    )

    args, kwargs = session.request.call_args
    assert args == ("PUT", "http://school.test/api/users/2")
    assert kwargs["json"]["subjects_taught"] == ["Art"]
    assert "password" not in kwargs["json"]


def test_server_message_is_passed_through(client, session):
    session.request.return_value = _response(409, {"message": "Username already exists."})

    with pytest.raises(NetworkFailureError) as exc:
        client.create_user(StudentPayload(username="x", full_name="x", class_group="LKG"))
    assert exc.value.message == "Username already exists."
    assert exc.value.status_code == 409


def test_default_message_without_body(client, session):
    session.request.return_value = _response(500)

    with pytest.raises(NetworkFailureError) as exc:
        client.delete_user(3)
    assert str(exc.value) == "Failed to delete the user."


def test_transport_error(client, session):
    session.request.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(NetworkFailureError) as exc:
        client.list_users()
    assert "connection refused" in exc.value.message
    assert exc.value.status_code is None


def test_reset_password_returns_server_message(client, session):
    session.request.return_value = _response(200, {"message": "Password has been reset."})

    message = client.reset_password(4, "newpass")

    args, kwargs = session.request.call_args
    assert args == ("PATCH", "http://school.test/api/users/4/reset-password")
    assert kwargs["json"] == {"newPassword": "newpass"}
    assert message == "Password has been reset."


def test_list_teacher_materials(client, session):
    session.request.return_value = _response(
        body=[{"material_id": 7, "title": "Fractions", "file_path": "/u/f.pdf", "external_link": ""}]
    )

    materials = client.list_teacher_materials(2)

    args, _ = session.request.call_args
    assert args == ("GET", "http://school.test/api/study-materials/teacher/2")
    assert materials[0].id == 7
    assert materials[0].external_link is None


def test_multipart_upload_sends_file(client, session, tmp_path):
    path = tmp_path / "notes.pdf"
    path.write_bytes(b"%PDF")
    session.request.return_value = _response(201, {"message": "created"})
    submission = MultipartSubmission(
        fields={"title": "Notes"}, files={"materialFile": PickedFile.from_path(path)}
    )

    client.create_material(submission)

    args, kwargs = session.request.call_args
    assert args == ("POST", "http://school.test/api/study-materials")
    assert kwargs["data"] == {"title": "Notes"}
    name, _, content_type = kwargs["files"]["materialFile"]
    assert (name, content_type) == ("notes.pdf", "application/pdf")


def test_multipart_update_without_file(client, session):
    session.request.return_value = _response(200, {})

    client.update_material(7, MultipartSubmission(fields={"existing_file_path": "/u/f.pdf"}))

    args, kwargs = session.request.call_args
    assert args == ("PUT", "http://school.test/api/study-materials/7")
    assert kwargs["files"] is None


def test_student_classes_failure_yields_empty_list(client, session):
    session.request.return_value = _response(500)

    assert client.list_student_classes() == []


def test_student_classes(client, session):
    session.request.return_value = _response(body=["Class 1", "Class 2"])

    assert client.list_student_classes() == ["Class 1", "Class 2"]
