# ui/forms.py
"""Conversion between form-native values and the wire format.

The form works with ``datetime.date`` for the date of birth; the service
stores an instant. Dates are sent as the UTC midnight instant and read back
by taking the UTC calendar date.
"""
from datetime import date, datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel

from models.student import Gender, Student

GENDER_OPTIONS = [(g.value, g.value) for g in Gender]
YEAR_LEVEL_OPTIONS = [(1, "1st Year"), (2, "2nd Year"), (3, "3rd Year"), (4, "4th Year"), (5, "5th Year")]

REQUIRED_MESSAGES = {
    "firstName": "Please enter first name",
    "lastName": "Please enter last name",
    "dateOfBirth": "Please select date of birth",
    "gender": "Please select gender",
    "course": "Please enter course",
    "yearLevel": "Please enter year level",
}


class StudentForm(BaseModel):
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    middleName: Optional[str] = None
    dateOfBirth: Optional[date] = None
    gender: Optional[str] = Gender.MALE.value
    course: Optional[str] = None
    yearLevel: Optional[int] = None


def record_to_form(student: Student) -> StudentForm:
    dob = student.dateOfBirth
    if dob.tzinfo is not None:
        dob = dob.astimezone(timezone.utc)
    return StudentForm(
        firstName=student.firstName,
        lastName=student.lastName,
        middleName=student.middleName,
        dateOfBirth=dob.date(),
        gender=student.gender,
        course=student.course,
        yearLevel=student.yearLevel,
    )


def form_to_payload(form: StudentForm) -> dict:
    payload = form.model_dump()
    if form.dateOfBirth is not None:
        instant = datetime(form.dateOfBirth.year, form.dateOfBirth.month, form.dateOfBirth.day, tzinfo=timezone.utc)
        payload["dateOfBirth"] = instant.isoformat().replace("+00:00", "Z")
    return payload


def validate_form(form: StudentForm) -> Dict[str, str]:
    errors = {}
    for field, message in REQUIRED_MESSAGES.items():
        value = getattr(form, field)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors[field] = message
    return errors
