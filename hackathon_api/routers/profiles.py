import logging

from fastapi import APIRouter, Depends

from hackathon_api.dependencies import get_profile_verifier
from hackathon_api.errors import ExternalUnavailable, NotFound, RegistrationError
from hackathon_api.schemas.participant import ProfileVerifyRequest
from hackathon_api.services.profile_verifier import ProfileVerifier, VerificationOutcome
from hackathon_api.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/profiles", tags=["Profiles"])
logger = logging.getLogger(__name__)


@router.post("/verify")
async def verify_profile(
    body: ProfileVerifyRequest,
    verifier: ProfileVerifier = Depends(get_profile_verifier),
):
    """Live check of a claimed profile. Nothing is stored."""
    try:
        result = await verifier.verify(body.kind, body.url)
        logger.info("Profile check kind=%s outcome=%s", result.kind.value, result.outcome.value)
        if result.outcome == VerificationOutcome.invalid_url:
            raise RegistrationError(result.detail)
        if result.outcome == VerificationOutcome.not_found:
            raise NotFound(result.detail)
        if result.outcome == VerificationOutcome.unreachable:
            raise ExternalUnavailable(result.detail)
        return create_response(data=result.model_dump(mode="json"))
    except Exception as exc:
        return handle_exception(exc)
