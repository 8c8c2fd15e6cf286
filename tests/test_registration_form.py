import asyncio
import json

import pytest

from hackathon_api.services.registration_form import SUBMITTED, FormStateError, RegistrationForm
from hackathon_api.services.profile_verifier import VerificationOutcome, VerificationResult


class StubVerifier:
    def __init__(self, outcome=VerificationOutcome.verified):
        self.outcome = outcome
        self.calls = []

    async def verify(self, kind, url):
        self.calls.append((kind, url))
        return VerificationResult(kind=kind, url=url, outcome=self.outcome)


def _filled_form(participant_payload, **overrides) -> RegistrationForm:
    return RegistrationForm(participant_payload(**overrides))


def test_next_is_gated_by_current_section():
    form = RegistrationForm()

    assert form.next() is False
    assert form.state == 0
    assert form.errors == {
        "full_name": "Full name is required",
        "email": "Email is required",
        "phone_number": "Phone number is required",
    }

    form.set_field("full_name", "Priya Patel")
    form.set_field("email", "priya@example.com")
    form.set_field("phone_number", "9876543210")

    assert form.errors == {}
    assert form.next() is True
    assert form.state == 1
    assert form.section.name == "Education Information"


def test_back_never_goes_below_first_section(participant_payload):
    form = _filled_form(participant_payload)

    assert form.back() is False
    assert form.next() is True
    assert form.back() is True
    assert form.state == 0


def test_walks_to_review_with_valid_values(participant_payload):
    form = _filled_form(participant_payload)

    while form.next():
        pass

    assert form.section.name == "Review & Submit"
    assert form.next() is False


def test_supplied_profile_must_be_verified(participant_payload):
    form = _filled_form(participant_payload, github="https://github.com/octocat")

    assert form.validate_section(4) is False
    assert form.errors == {"github": "GitHub profile must be verified"}


def test_editing_verified_url_resets_verification(participant_payload):
    form = _filled_form(participant_payload, github="https://github.com/octocat")
    verifier = StubVerifier()

    assert asyncio.run(form.verify_profile("github", verifier)) is True
    assert form.validate_section(4) is True

    form.set_field("github", "https://github.com/someone-else")

    assert form.verified["github"] is False
    assert form.validate_section(4) is False
    assert asyncio.run(form.submit()) is None
    assert form.state == 4


def test_setting_same_url_keeps_verification(participant_payload):
    form = _filled_form(participant_payload, linkedin="https://www.linkedin.com/in/jane")
    asyncio.run(form.verify_profile("linkedin", StubVerifier()))

    form.set_field("linkedin", "https://www.linkedin.com/in/jane")

    assert form.verified["linkedin"] is True


def test_failed_verification_records_error(participant_payload):
    form = _filled_form(participant_payload, github="https://github.com/ghost")

    verified = asyncio.run(form.verify_profile("github", StubVerifier(VerificationOutcome.not_found)))

    assert verified is False
    assert "github" in form.errors


def test_submit_verifies_pending_profiles_and_returns_payload(participant_payload):
    form = _filled_form(participant_payload, github="https://github.com/octocat")
    verifier = StubVerifier()

    payload = asyncio.run(form.submit(verifier))

    assert verifier.calls == [("github", "https://github.com/octocat")]
    assert form.state == SUBMITTED
    assert form.submitted
    assert json.loads(payload["tech_stack"]) == ["AI/ML", "IoT"]
    with pytest.raises(FormStateError):
        form.set_field("full_name", "Changed")


def test_submit_jumps_to_first_invalid_section(participant_payload):
    form = _filled_form(participant_payload, cgpa="12")

    assert asyncio.run(form.submit()) is None
    assert form.state == 1
    assert form.errors == {"cgpa": "CGPA must be between 0 and 10"}


def test_submitted_payload_is_accepted_by_api(client, participant_payload):
    form = _filled_form(participant_payload)
    payload = asyncio.run(form.submit())

    response = client.post("/api/participants", json=payload)

    assert response.status_code == 201
    assert response.json()["data"]["tech_stack"] == ["AI/ML", "IoT"]
