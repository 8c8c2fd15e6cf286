import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from hackathon_api.schemas.participant import ParticipantSubmission

logger = logging.getLogger(__name__)

SERVER_OWNED_FIELDS = {"id", "verification_status", "registration_date", "created_at", "updated_at"}


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    data: dict | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors]


def _to_field_error(error: dict) -> FieldError:
    loc = error.get("loc") or ("body",)
    return FieldError(field=str(loc[0]), message=error.get("msg", "Invalid value"))


def validate(raw: Any) -> ValidationResult:
    """Validate a raw submission and return the normalized record or its errors."""
    if not isinstance(raw, Mapping):
        return ValidationResult(errors=[FieldError("body", "Request body must be a JSON object")])

    try:
        submission = ParticipantSubmission.model_validate(dict(raw))
    except ValidationError as exc:
        errors = [_to_field_error(error) for error in exc.errors()]
        logger.debug("Submission rejected with %s error(s)", len(errors))
        return ValidationResult(errors=errors)

    return ValidationResult(data=submission.model_dump())


def validate_fields(raw: Mapping, fields: Iterable[str]) -> dict[str, str]:
    """Validate only ``fields`` of ``raw``; returns the first message per failing field."""
    wanted = set(fields)
    result = validate(raw)
    messages: dict[str, str] = {}
    for error in result.errors:
        if error.field in wanted and error.field not in messages:
            messages[error.field] = error.message
    return messages


def merge_patch(current: Mapping, patch: Mapping) -> dict:
    """Overlay a partial update on the current record, ignoring server-owned keys."""
    merged = dict(current)
    for key, value in patch.items():
        if key in SERVER_OWNED_FIELDS:
            continue
        merged[key] = value
    return merged
