from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session, selectinload

from hackathon_api.errors import Conflict, InvalidId, InvalidParameters, NotFound, ValidationFailed
from hackathon_api.models.participant import Participant, ParticipantTechTag
from hackathon_api.schemas.participant import ParticipantResponse, ProfileKind, VerificationStatus
from hackathon_api.services import validation_service
from hackathon_api.services.query_service import ParticipantFilter

logger = logging.getLogger(__name__)

SETTABLE_STATUSES = {VerificationStatus.verified.value, VerificationStatus.rejected.value}
EDITABLE_FIELDS = (
    "full_name",
    "email",
    "phone_number",
    "college_name",
    "degree",
    "year_of_study",
    "cgpa",
    "tech_stack",
    "other_skills",
    "project_idea",
    "github",
    "linkedin",
)


def _parse_id(participant_id) -> str:
    try:
        return str(uuid.UUID(str(participant_id)))
    except (TypeError, ValueError, AttributeError):
        raise InvalidId()


class ParticipantStore:
    """Create/read/update/delete over the participants table.

    Email uniqueness is checked explicitly before writes; the unique index
    only catches a concurrent insert that slipped past the check.
    """

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def to_dict(participant: Participant) -> dict:
        return ParticipantResponse.model_validate(participant).model_dump()

    def _base_query(self) -> Query:
        return self.db.query(Participant).options(selectinload(Participant.tech_tags))

    def _email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        query = self.db.query(Participant.id).filter(Participant.email == email)
        if exclude_id:
            query = query.filter(Participant.id != exclude_id)
        return query.first() is not None

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning("Unique constraint rejected a participant write")
            raise Conflict()

    def create(self, normalized: Mapping) -> Participant:
        if self._email_taken(normalized["email"]):
            raise Conflict()

        participant = Participant(**{key: normalized[key] for key in EDITABLE_FIELDS})
        self.db.add(participant)
        self._commit()
        self.db.refresh(participant)
        logger.info("Registered participant id=%s", participant.id)
        return participant

    def get_by_id(self, participant_id) -> Participant:
        parsed_id = _parse_id(participant_id)
        participant = self._base_query().filter(Participant.id == parsed_id).first()
        if not participant:
            raise NotFound()
        return participant

    def update(self, participant_id, patch: Mapping) -> Participant:
        participant = self.get_by_id(participant_id)
        if not isinstance(patch, Mapping):
            raise ValidationFailed(["Request body must be a JSON object"])

        current = {key: getattr(participant, key) for key in EDITABLE_FIELDS}
        result = validation_service.validate(validation_service.merge_patch(current, patch))
        if not result.ok:
            raise ValidationFailed(result.messages)

        data = result.data
        if data["email"] != participant.email and self._email_taken(data["email"], participant.id):
            raise Conflict()

        for key in EDITABLE_FIELDS:
            if key == "tech_stack":
                if data[key] != participant.tech_stack:
                    participant.tech_stack = data[key]
                continue
            setattr(participant, key, data[key])
        self._commit()
        self.db.refresh(participant)
        logger.info("Updated participant id=%s", participant.id)
        return participant

    def delete(self, participant_id) -> None:
        participant = self.get_by_id(participant_id)
        deleted_id = participant.id
        self.db.delete(participant)
        self.db.commit()
        logger.info("Deleted participant id=%s", deleted_id)

    def set_verification_status(self, participant_id, kind, status) -> Participant:
        kinds = {item.value for item in ProfileKind}
        valid_pair = (
            isinstance(kind, str)
            and isinstance(status, str)
            and kind in kinds
            and status in SETTABLE_STATUSES
        )
        if not valid_pair:
            raise InvalidParameters()

        participant = self.get_by_id(participant_id)
        participant.verification_status = status
        self.db.commit()
        self.db.refresh(participant)
        logger.info("Set verification_status=%s (%s) for participant id=%s", status, kind, participant.id)
        return participant

    def _filtered(self, filters: ParticipantFilter | None) -> Query:
        query = self._base_query()
        if filters is None:
            return query
        if filters.tech_stack:
            query = query.filter(
                Participant.tech_tags.any(ParticipantTechTag.tag.in_(filters.tech_stack))
            )
        if filters.degree:
            query = query.filter(Participant.degree == filters.degree)
        if filters.year_of_study:
            query = query.filter(Participant.year_of_study == filters.year_of_study)
        return query

    def _ordered(self, query: Query) -> Query:
        return query.order_by(Participant.registration_date.desc(), Participant.id.asc())

    def list(self, filters: ParticipantFilter | None = None) -> list[Participant]:
        return self._ordered(self._filtered(filters)).all()

    def count(self, filters: ParticipantFilter | None = None) -> int:
        return self._filtered(filters).count()

    def page(self, filters: ParticipantFilter | None, page: int, limit: int) -> list[Participant]:
        return self._ordered(self._filtered(filters)).offset((page - 1) * limit).limit(limit).all()
