import json
import logging
from dataclasses import dataclass

from hackathon_api.errors import InvalidParameters
from hackathon_api.schemas.participant import ProfileKind
from hackathon_api.services import validation_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormSection:
    name: str
    fields: tuple[str, ...]


SECTIONS = (
    FormSection("Personal Information", ("full_name", "email", "phone_number")),
    FormSection("Education Information", ("college_name", "degree", "year_of_study", "cgpa")),
    FormSection("Technical Skills", ("tech_stack", "other_skills")),
    FormSection("Project Idea", ("project_idea",)),
    FormSection("Social Profiles", ("github", "linkedin")),
    FormSection("Review & Submit", ()),
)
SOCIAL_PROFILES = 4
REVIEW = len(SECTIONS) - 1
SUBMITTED = len(SECTIONS)

PROFILE_LABELS = {"github": "GitHub", "linkedin": "LinkedIn"}


class FormStateError(RuntimeError):
    """Raised for transitions the form does not allow."""


class RegistrationForm:
    """Section indices plus a terminal submitted state; editing a verified
    profile URL drops its verification.
    """

    def __init__(self, values: dict | None = None):
        self.values = {
            "full_name": "",
            "email": "",
            "phone_number": "",
            "college_name": "",
            "degree": "",
            "year_of_study": "",
            "cgpa": "",
            "tech_stack": [],
            "other_skills": "",
            "project_idea": "",
            "github": "",
            "linkedin": "",
        }
        self.verified = {"github": False, "linkedin": False}
        self.errors: dict[str, str] = {}
        self.state = 0
        for name, value in (values or {}).items():
            self.set_field(name, value)

    @property
    def section(self) -> FormSection | None:
        return SECTIONS[self.state] if self.state < SUBMITTED else None

    @property
    def submitted(self) -> bool:
        return self.state == SUBMITTED

    def _ensure_open(self) -> None:
        if self.submitted:
            raise FormStateError("Form already submitted")

    def set_field(self, name: str, value) -> None:
        self._ensure_open()
        if name not in self.values:
            raise KeyError(name)
        if name in self.verified and value != self.values[name]:
            self.verified[name] = False
        self.values[name] = value
        self.errors.pop(name, None)

    def validate_section(self, index: int) -> bool:
        errors = validation_service.validate_fields(self.values, SECTIONS[index].fields)
        if index == SOCIAL_PROFILES:
            for kind, label in PROFILE_LABELS.items():
                if kind in errors:
                    continue
                if str(self.values[kind] or "").strip() and not self.verified[kind]:
                    errors[kind] = f"{label} profile must be verified"
        self.errors = errors
        return not errors

    def next(self) -> bool:
        self._ensure_open()
        if self.state >= REVIEW:
            return False
        if not self.validate_section(self.state):
            return False
        self.state += 1
        return True

    def back(self) -> bool:
        self._ensure_open()
        if self.state == 0:
            return False
        self.state -= 1
        return True

    async def verify_profile(self, kind: str, verifier) -> bool:
        self._ensure_open()
        if kind not in self.verified:
            raise InvalidParameters("Unsupported profile type")
        url = self.values[kind]
        result = await verifier.verify(kind, url)
        # The URL may have been edited while the check was in flight.
        if self.values[kind] != url:
            return False
        self.verified[kind] = result.verified
        if result.verified:
            self.errors.pop(kind, None)
        else:
            self.errors[kind] = result.detail or f"{PROFILE_LABELS[kind]} profile could not be verified"
        return result.verified

    async def submit(self, verifier=None) -> dict | None:
        """Run every section check and return the payload to POST, or None."""
        self._ensure_open()
        if verifier is not None:
            for kind in ProfileKind:
                if str(self.values[kind.value] or "").strip() and not self.verified[kind.value]:
                    await self.verify_profile(kind.value, verifier)

        for index in range(REVIEW):
            if not self.validate_section(index):
                logger.debug("Form submission stopped at section %s", SECTIONS[index].name)
                self.state = index
                return None

        self.state = SUBMITTED
        payload = dict(self.values)
        if isinstance(payload["tech_stack"], list):
            payload["tech_stack"] = json.dumps(payload["tech_stack"])
        return payload
