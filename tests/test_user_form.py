import pytest

from core.exceptions import MissingPasswordError, MissingRequiredFieldError
from schemas.user import StudentPayload, TeacherPayload, payload_to_json
from utils import user_form


def test_new_form_defaults(keys):
    state = user_form.init_user_form(None, keys)

    assert state.role == "student"
    assert state.class_group == "LKG"
    assert state.subjects_taught == []
    assert state.password == ""


def test_edit_form_copies_record_and_clears_password(keys, users):
    teacher = users[1]
    state = user_form.init_user_form(teacher, keys)

    assert state.username == "ravi@school.com"
    assert state.subjects_taught == ["Math", "Science"]
    assert state.class_group == "Teachers"
    assert state.password == ""


def test_edit_form_coerces_missing_subjects(keys, users):
    state = user_form.init_user_form(users[0], keys)

    assert state.subjects_taught == []


def test_switch_to_teacher_forces_staff_group(keys):
    state = user_form.init_user_form(None, keys)
    state = user_form.set_class_group(state, "Class 5", keys)

    teacher = user_form.set_role(state, "teacher", keys)
    again = user_form.set_role(teacher, "teacher", keys)

    assert teacher.class_group == "Teachers"
    assert again == teacher


def test_switch_back_to_student_restores_last_class(keys):
    state = user_form.init_user_form(None, keys)
    state = user_form.set_class_group(state, "Class 5", keys)

    state = user_form.set_role(state, "teacher", keys)
    state = user_form.set_role(state, "student", keys)

    assert state.class_group == "Class 5"


def test_teacher_turned_student_gets_first_class(keys, users):
    state = user_form.init_user_form(users[1], keys)

    state = user_form.set_role(state, "student", keys)

    assert state.class_group == "LKG"


def test_teacher_cannot_pick_class(keys):
    state = user_form.set_role(user_form.init_user_form(None, keys), "teacher", keys)

    with pytest.raises(ValueError):
        user_form.set_class_group(state, "Class 1", keys)


def test_student_cannot_pick_staff_group(keys):
    state = user_form.init_user_form(None, keys)

    with pytest.raises(ValueError):
        user_form.set_class_group(state, "Teachers", keys)


def test_subjects_text_parsing_drops_empty_tokens():
    state = user_form.UserFormState(role="teacher")

    state = user_form.set_subjects_from_text(state, "Math, Science, ")

    assert state.subjects_taught == ["Math", "Science"]


def test_subjects_text_keeps_duplicates_and_order():
    state = user_form.set_subjects_from_text(
        user_form.UserFormState(role="teacher"), " English ,Math,,English"
    )

    assert state.subjects_taught == ["English", "Math", "English"]
    assert user_form.subjects_text(state) == "English, Math, English"


def test_student_scenario_validates_without_subjects(keys):
    state = user_form.init_user_form(None, keys).model_copy(
        update={"username": "STU101", "full_name": "Asha", "password": "temp123"}
    )
    state = user_form.set_class_group(state, "Class 3", keys)

    payload = user_form.validate(state, is_editing=False)

    assert isinstance(payload, StudentPayload)
    body = payload_to_json(payload)
    assert body["class_group"] == "Class 3"
    assert "subjects_taught" not in body


def test_student_payload_drops_subjects_after_role_switch(keys):
    state = user_form.init_user_form(None, keys)
    state = user_form.set_role(state, "teacher", keys)
    state = user_form.set_subjects_from_text(state, "Math")
    state = user_form.set_role(state, "student", keys)

    body = payload_to_json(user_form.to_payload(state))

    assert "subjects_taught" not in body
    assert body["role"] == "student"


def test_teacher_payload_carries_subjects_and_staff_group(keys):
    state = user_form.init_user_form(None, keys).model_copy(
        update={"username": "t@school.com", "full_name": "T", "password": "pw"}
    )
    state = user_form.set_role(state, "teacher", keys)
    state = user_form.set_subjects_from_text(state, "Math, Science, ")

    payload = user_form.validate(state, is_editing=False)

    assert isinstance(payload, TeacherPayload)
    assert payload.subjects_taught == ["Math", "Science"]
    assert payload.class_group == "Teachers"


@pytest.mark.parametrize("field", ["username", "full_name"])
def test_blank_required_field_fails(keys, field):
    state = user_form.init_user_form(None, keys).model_copy(
        update={"username": "STU1", "full_name": "A", "password": "pw", field: "  "}
    )

    with pytest.raises(MissingRequiredFieldError) as exc:
        user_form.validate(state, is_editing=False)
    assert exc.value.field == field


def test_password_required_only_on_create(keys, users):
    state = user_form.init_user_form(users[0], keys)

    with pytest.raises(MissingPasswordError):
        user_form.validate(state, is_editing=False)

    body = payload_to_json(user_form.validate(state, is_editing=True))
    assert "password" not in body
    assert "id" not in body


def test_subjects_display_keeps_order(users):
    reordered = users[1].model_copy(update={"subjects_taught": ["Science", "Math"]})

    assert users[1].subjects_display() == "Math, Science"
    assert reordered.subjects_display() == "Science, Math"


def test_existing_teacher_with_class_group_is_forced_to_staff(keys):
    teacher = user_form.UserRecord(
        id=5, username="m@school.com", full_name="Mira", role="teacher",
        class_group="Class 3", subjects_taught=["Art"],
    )

    state = user_form.init_user_form(teacher, keys)
    payload = user_form.validate(state, is_editing=True, keys=keys)

    assert state.class_group == "Teachers"
    assert isinstance(payload, TeacherPayload)
    assert payload.class_group == "Teachers"


def test_validate_coerces_teacher_class_group_to_staff(keys):
    state = user_form.UserFormState(
        username="t@school.com", full_name="T", role="teacher", class_group="Class 3"
    )

    payload = user_form.validate(state, is_editing=True, keys=keys)

    assert payload.class_group == "Teachers"


def test_student_record_drops_subjects():
    record = user_form.UserRecord(
        id=1, username="S", role="student", class_group="LKG", subjects_taught=["Art"]
    )

    assert record.subjects_taught is None
