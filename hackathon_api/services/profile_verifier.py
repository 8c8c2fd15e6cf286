import logging
import re
from enum import Enum
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel

from hackathon_api.config import settings
from hackathon_api.errors import InvalidParameters
from hackathon_api.schemas.participant import ProfileKind

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[\w-]+$")
USER_AGENT = "HackathonRegistration/1.0"


class VerificationOutcome(str, Enum):
    verified = "verified"
    not_found = "not_found"
    unreachable = "unreachable"
    invalid_url = "invalid_url"


class VerificationResult(BaseModel):
    kind: ProfileKind
    url: str
    outcome: VerificationOutcome
    username: str | None = None
    weak: bool = False
    detail: str | None = None

    @property
    def verified(self) -> bool:
        return self.outcome == VerificationOutcome.verified


def _parse(url: str):
    try:
        parsed = urlparse(url.strip())
    except (AttributeError, ValueError):
        return None
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return None
    return parsed


class ProfileVerifier:
    """GitHub is looked up through the users API. LinkedIn only gets a
    reachability probe whose result is always verified and flagged ``weak``;
    it is not proof the profile exists.
    """

    def __init__(
        self,
        github_api_url: str,
        timeout: float,
        github_token: str = "",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.github_api_url = github_api_url.rstrip("/")
        self.timeout = timeout
        self.github_token = github_token
        self.transport = transport

    @classmethod
    def from_settings(cls) -> "ProfileVerifier":
        return cls(
            github_api_url=settings.GITHUB_API_URL,
            timeout=settings.PROFILE_VERIFY_TIMEOUT_SECONDS,
            github_token=settings.GITHUB_TOKEN,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            headers={"User-Agent": USER_AGENT},
        )

    async def verify(self, kind, url) -> VerificationResult:
        try:
            kind = ProfileKind(kind)
        except ValueError:
            raise InvalidParameters("Unsupported profile type")

        if kind == ProfileKind.github:
            return await self.verify_github(url)
        return await self.verify_linkedin(url)

    async def verify_github(self, url) -> VerificationResult:
        url = str(url or "")
        parsed = _parse(url)
        segments = [part for part in parsed.path.split("/") if part] if parsed else []
        if not parsed or parsed.hostname != "github.com" or not segments:
            return VerificationResult(
                kind=ProfileKind.github,
                url=url,
                outcome=VerificationOutcome.invalid_url,
                detail="Not a valid GitHub profile URL",
            )

        username = segments[0]
        if not USERNAME_PATTERN.match(username):
            return VerificationResult(
                kind=ProfileKind.github,
                url=url,
                outcome=VerificationOutcome.invalid_url,
                detail="Not a valid GitHub profile URL",
            )

        headers = {"Accept": "application/vnd.github.v3+json"}
        if self.github_token:
            headers["Authorization"] = f"Bearer {self.github_token}"

        try:
            async with self._client() as client:
                response = await client.get(f"{self.github_api_url}/users/{username}", headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("GitHub lookup failed for %s: %s", username, exc)
            return VerificationResult(
                kind=ProfileKind.github,
                url=url,
                username=username,
                outcome=VerificationOutcome.unreachable,
                detail="Error connecting to GitHub API",
            )

        if response.status_code == 200:
            outcome, detail = VerificationOutcome.verified, None
        elif response.status_code == 404:
            outcome, detail = VerificationOutcome.not_found, "GitHub profile not found"
        else:
            logger.warning("GitHub lookup for %s returned %s", username, response.status_code)
            outcome, detail = VerificationOutcome.unreachable, "Error verifying GitHub profile"

        return VerificationResult(
            kind=ProfileKind.github,
            url=url,
            username=username,
            outcome=outcome,
            detail=detail,
        )

    async def verify_linkedin(self, url) -> VerificationResult:
        url = str(url or "")
        parsed = _parse(url)
        if not parsed or "linkedin.com" not in parsed.hostname:
            return VerificationResult(
                kind=ProfileKind.linkedin,
                url=url,
                outcome=VerificationOutcome.invalid_url,
                detail="Not a valid LinkedIn URL",
            )

        segments = [part for part in parsed.path.split("/") if part]
        username = segments[1] if len(segments) > 1 and segments[0] == "in" else None

        # LinkedIn blocks anonymous lookups; whatever the probe sees, the
        # answer is "verified" and flagged weak.
        try:
            async with self._client() as client:
                response = await client.get(url)
            logger.debug("LinkedIn probe for %s returned %s", url, response.status_code)
        except httpx.HTTPError as exc:
            logger.info("LinkedIn probe for %s failed, accepting anyway: %s", url, exc)

        return VerificationResult(
            kind=ProfileKind.linkedin,
            url=url,
            username=username,
            outcome=VerificationOutcome.verified,
            weak=True,
            detail="LinkedIn profiles cannot be looked up; reachability probe only",
        )
