from fastapi import status


class RegistrationError(Exception):
    """Base for errors that map to a client-facing status code."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def payload(self):
        return self.message


class ValidationFailed(RegistrationError):
    """One or more field rules failed; every message is kept, in order."""

    default_message = "Validation failed"

    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages) or self.default_message)

    @property
    def payload(self):
        return self.messages


class Conflict(RegistrationError):
    default_message = "A participant with this email already exists"


class NotFound(RegistrationError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Participant not found"


class InvalidId(RegistrationError):
    default_message = "Invalid participant ID"


class InvalidParameters(RegistrationError):
    default_message = "Invalid verification parameters"


class ExternalUnavailable(RegistrationError):
    """Raised to verification callers only, never from store operations."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Profile verification service unavailable"
