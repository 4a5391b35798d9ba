# tests/test_forms.py

from datetime import date, datetime

from conftest import make_student
from models.student import validate_student
from ui.forms import GENDER_OPTIONS, StudentForm, form_to_payload, record_to_form, validate_form


def test_record_to_form_uses_native_date():
    form = record_to_form(make_student(middleName="Reyes", dateOfBirth=datetime(2000, 5, 1)))

    assert form.dateOfBirth == date(2000, 5, 1)
    assert form.middleName == "Reyes"
    assert form.yearLevel == 2


def test_form_to_payload_sends_utc_midnight_instant():
    form = StudentForm(firstName="Ana", lastName="Cruz", dateOfBirth=date(2000, 5, 1), course="CS", yearLevel=2)

    payload = form_to_payload(form)

    assert payload["dateOfBirth"] == "2000-05-01T00:00:00Z"
    assert payload["gender"] == "Male"
    assert validate_student(payload).dateOfBirth == datetime(2000, 5, 1)


def test_form_round_trip_keeps_calendar_date():
    student = make_student(dateOfBirth=datetime(1999, 12, 31))

    payload = form_to_payload(record_to_form(student))

    assert validate_student(payload).dateOfBirth.date() == date(1999, 12, 31)


def test_validate_form_reports_required_fields():
    errors = validate_form(StudentForm(firstName="  ", gender=None))

    assert errors == {
        "firstName": "Please enter first name",
        "lastName": "Please enter last name",
        "dateOfBirth": "Please select date of birth",
        "gender": "Please select gender",
        "course": "Please enter course",
        "yearLevel": "Please enter year level",
    }


def test_validate_form_middle_name_is_optional():
    form = record_to_form(make_student())

    assert validate_form(form) == {}


def test_gender_options():
    assert [value for value, _ in GENDER_OPTIONS] == ["Male", "Female", "Other"]
