from fastapi import Depends
from sqlalchemy.orm import Session

from hackathon_api.database import get_db
from hackathon_api.services.participant_store import ParticipantStore
from hackathon_api.services.profile_verifier import ProfileVerifier


def get_store(db: Session = Depends(get_db)) -> ParticipantStore:
    return ParticipantStore(db)


def get_profile_verifier() -> ProfileVerifier:
    return ProfileVerifier.from_settings()
