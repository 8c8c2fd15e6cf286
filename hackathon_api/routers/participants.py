import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from hackathon_api.dependencies import get_store
from hackathon_api.errors import ValidationFailed
from hackathon_api.services import query_service, validation_service
from hackathon_api.services.participant_store import ParticipantStore
from hackathon_api.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/participants", tags=["Participants"])
logger = logging.getLogger(__name__)


@router.get("")
def list_participants(
    page: str | None = Query(None, description="Page number, defaults to 1."),
    limit: str | None = Query(None, description="Page size, defaults to 10."),
    tech_stack: str | None = Query(None, description="Comma separated tags; any match counts."),
    degree: str | None = Query(None),
    year_of_study: str | None = Query(None),
    store: ParticipantStore = Depends(get_store),
):
    try:
        query = query_service.compose(
            {
                "page": page,
                "limit": limit,
                "tech_stack": tech_stack,
                "degree": degree,
                "year_of_study": year_of_study,
            }
        )
        total = store.count(query.filters)
        participants = store.page(query.filters, query.page, query.limit)
        return create_response(
            data=[store.to_dict(participant) for participant in participants],
            count=len(participants),
            pagination=query_service.paginate(query, len(participants), total),
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/{participant_id}")
def get_participant(participant_id: str, store: ParticipantStore = Depends(get_store)):
    try:
        participant = store.get_by_id(participant_id)
        return create_response(data=store.to_dict(participant))
    except Exception as exc:
        return handle_exception(exc)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_participant(body: Any = Body(None), store: ParticipantStore = Depends(get_store)):
    try:
        result = validation_service.validate(body)
        if not result.ok:
            logger.info("Registration rejected with %s error(s)", len(result.errors))
            raise ValidationFailed(result.messages)
        participant = store.create(result.data)
        return create_response(data=store.to_dict(participant), status_code=status.HTTP_201_CREATED)
    except Exception as exc:
        return handle_exception(exc)


@router.put("/{participant_id}")
def update_participant(
    participant_id: str,
    body: Any = Body(None),
    store: ParticipantStore = Depends(get_store),
):
    try:
        participant = store.update(participant_id, body)
        return create_response(data=store.to_dict(participant))
    except Exception as exc:
        return handle_exception(exc)


@router.delete("/{participant_id}")
def delete_participant(participant_id: str, store: ParticipantStore = Depends(get_store)):
    try:
        store.delete(participant_id)
        return create_response(data={})
    except Exception as exc:
        return handle_exception(exc)


@router.patch("/{participant_id}/verify")
def verify_participant(
    participant_id: str,
    body: Any = Body(None),
    store: ParticipantStore = Depends(get_store),
):
    try:
        body = body if isinstance(body, dict) else {}
        participant = store.set_verification_status(participant_id, body.get("type"), body.get("status"))
        return create_response(data=store.to_dict(participant))
    except Exception as exc:
        return handle_exception(exc)
