import json
import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_PATTERN = re.compile(r"^\d{10}$")
GITHUB_PATTERN = re.compile(r"^https://github\.com/[\w-]+/?$")
LINKEDIN_PATTERN = re.compile(r"^https://.*linkedin\.com/in/[\w-]+/?$")

PROJECT_IDEA_MIN_LENGTH = 50
CGPA_MIN = 0.0
CGPA_MAX = 10.0


class Degree(str, Enum):
    btech = "B.Tech"
    mtech = "M.Tech"
    bca = "BCA"
    mca = "MCA"
    bsc = "B.Sc"
    msc = "M.Sc"
    other = "Other"


class YearOfStudy(str, Enum):
    first = "1st"
    second = "2nd"
    third = "3rd"
    fourth = "4th"
    fifth = "5th"


class VerificationStatus(str, Enum):
    pending = "pending"
    verified = "verified"
    rejected = "rejected"


class ProfileKind(str, Enum):
    github = "github"
    linkedin = "linkedin"


REQUIRED_LABELS = {
    "full_name": "Full name",
    "email": "Email",
    "phone_number": "Phone number",
    "college_name": "College name",
    "degree": "Degree",
    "year_of_study": "Year of study",
    "cgpa": "CGPA",
}


def _fail(kind: str, message: str) -> PydanticCustomError:
    return PydanticCustomError(kind, message)


def _clean_text(value: Any, label: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise _fail("text_type", f"{label} must be text")
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        raise _fail("text_type", f"{label} must be text")
    value = value.strip()
    return value or None


def _require_text(value: Any, field: str) -> str:
    label = REQUIRED_LABELS[field]
    cleaned = _clean_text(value, label)
    if cleaned is None:
        raise _fail("required", f"{label} is required")
    return cleaned


class ParticipantSubmission(BaseModel):
    """Loosely typed intake body; validators coerce and collect every failure."""

    model_config = ConfigDict(validate_default=True, extra="ignore")

    full_name: Any = None
    email: Any = None
    phone_number: Any = None
    college_name: Any = None
    degree: Any = None
    year_of_study: Any = None
    cgpa: Any = None
    tech_stack: Any = None
    other_skills: Any = None
    project_idea: Any = None
    github: Any = None
    linkedin: Any = None

    @field_validator("full_name", "college_name")
    @classmethod
    def validate_required_text(cls, value: Any, info: ValidationInfo) -> str:
        return _require_text(value, info.field_name)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: Any) -> str:
        email = _require_text(value, "email")
        if not EMAIL_PATTERN.match(email):
            raise _fail("email_format", "Please provide a valid email")
        return email

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, value: Any) -> str:
        phone = _require_text(value, "phone_number")
        if not PHONE_PATTERN.match(phone):
            raise _fail("phone_format", "Phone number must be 10 digits")
        return phone

    @field_validator("degree")
    @classmethod
    def validate_degree(cls, value: Any) -> str:
        degree = _require_text(value, "degree")
        allowed = [item.value for item in Degree]
        if degree not in allowed:
            raise _fail("degree_choice", f"Degree must be one of: {', '.join(allowed)}")
        return degree

    @field_validator("year_of_study")
    @classmethod
    def validate_year(cls, value: Any) -> str:
        year = _require_text(value, "year_of_study")
        allowed = [item.value for item in YearOfStudy]
        if year not in allowed:
            raise _fail("year_choice", f"Year of study must be one of: {', '.join(allowed)}")
        return year

    @field_validator("cgpa")
    @classmethod
    def validate_cgpa(cls, value: Any) -> float:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise _fail("required", "CGPA is required")
        if isinstance(value, bool):
            raise _fail("cgpa_range", "CGPA must be between 0 and 10")
        try:
            cgpa = float(value.strip() if isinstance(value, str) else value)
        except (TypeError, ValueError):
            raise _fail("cgpa_range", "CGPA must be between 0 and 10")
        if not CGPA_MIN <= cgpa <= CGPA_MAX:
            raise _fail("cgpa_range", "CGPA must be between 0 and 10")
        return cgpa

    @field_validator("tech_stack")
    @classmethod
    def validate_tech_stack(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            if not value.strip():
                value = []
            else:
                try:
                    value = json.loads(value)
                except ValueError:
                    raise _fail("tech_stack_format", "Invalid tech_stack format")
        if not isinstance(value, list):
            raise _fail("tech_stack_empty", "Please select at least one tech stack")

        tags = []
        for item in value:
            if isinstance(item, bool) or not isinstance(item, (str, int, float)):
                raise _fail("tech_stack_format", "Invalid tech_stack format")
            tag = str(item).strip()
            if tag:
                tags.append(tag)
        if not tags:
            raise _fail("tech_stack_empty", "Please select at least one tech stack")
        return tags

    @field_validator("other_skills")
    @classmethod
    def validate_other_skills(cls, value: Any) -> str | None:
        return _clean_text(value, "Other skills")

    @field_validator("project_idea")
    @classmethod
    def validate_project_idea(cls, value: Any) -> str | None:
        idea = _clean_text(value, "Project idea")
        if idea is not None and len(idea) < PROJECT_IDEA_MIN_LENGTH:
            raise _fail(
                "project_idea_length",
                "Project idea must be at least 50 characters if provided",
            )
        return idea

    @field_validator("github")
    @classmethod
    def validate_github(cls, value: Any) -> str | None:
        url = _clean_text(value, "GitHub URL")
        if url is not None and not GITHUB_PATTERN.match(url):
            raise _fail("github_format", "Please provide a valid GitHub URL")
        return url

    @field_validator("linkedin")
    @classmethod
    def validate_linkedin(cls, value: Any) -> str | None:
        url = _clean_text(value, "LinkedIn URL")
        if url is not None and not LINKEDIN_PATTERN.match(url):
            raise _fail("linkedin_format", "Please provide a valid LinkedIn URL")
        return url


class ParticipantResponse(BaseModel):
    id: str
    full_name: str
    email: str
    phone_number: str
    college_name: str
    degree: str
    year_of_study: str
    cgpa: float
    tech_stack: list[str]
    other_skills: str | None = None
    project_idea: str | None = None
    github: str | None = None
    linkedin: str | None = None
    registration_date: datetime
    verification_status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProfileVerifyRequest(BaseModel):
    kind: str
    url: str
