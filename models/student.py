# models/student.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional

from errors import ValidationError


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


EDITABLE_FIELDS = (
    "firstName",
    "lastName",
    "middleName",
    "dateOfBirth",
    "gender",
    "course",
    "yearLevel",
)


def to_utc_naive(value: datetime) -> datetime:
    """MongoDB stores naive UTC datetimes; normalise aware values to that."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class StudentIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)

    firstName: str = Field(..., min_length=1)
    lastName: str = Field(..., min_length=1)
    middleName: Optional[str] = None
    dateOfBirth: datetime
    gender: Gender
    course: str = Field(..., min_length=1)
    yearLevel: int = Field(..., ge=1, strict=True)

    @field_validator("middleName")
    @classmethod
    def blank_middle_name(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("dateOfBirth", mode="before")
    @classmethod
    def date_only_is_midnight(cls, value: Any) -> Any:
        # Calendar dates are stored as the UTC midnight instant; only ISO
        # YYYY-MM-DD strings count as bare dates, anything else is parsed as a datetime
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime(value.year, value.month, value.day)
        if isinstance(value, str) and len(value.strip()) == 10:
            try:
                return datetime.combine(date.fromisoformat(value.strip()), datetime.min.time())
            except ValueError:
                return value
        return value

    @field_validator("dateOfBirth")
    @classmethod
    def normalise_instant(cls, value: datetime) -> datetime:
        return to_utc_naive(value)


class Student(StudentIn):
    id: str
    createdAt: datetime
    updatedAt: datetime


def validate_student(candidate: Any) -> StudentIn:
    """Validate a candidate record, reporting every violated field at once."""
    try:
        return StudentIn.model_validate(candidate)
    except PydanticValidationError as e:
        errors = []
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or "body"
            errors.append({"field": field, "message": error["msg"]})
        raise ValidationError(errors)
