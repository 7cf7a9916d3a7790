"""
Error types raised by the session backend services.
Routers translate these into HTTP responses.
"""
from typing import Optional


class SessionBackendError(Exception):
    pass


class ValidationError(SessionBackendError):
    """A required field is missing or empty."""


class QuizNotFoundError(SessionBackendError):
    def __init__(self, quiz_id: str):
        super().__init__(f"Quiz not found: {quiz_id}")
        self.quiz_id = quiz_id


class DuplicateQuizError(SessionBackendError):
    def __init__(self, quiz_id: str):
        super().__init__(f"Quiz already exists: {quiz_id}")
        self.quiz_id = quiz_id


class GenerationError(SessionBackendError):
    """
    Quiz generation failed. `kind` tells callers whether the model answered
    with something unusable or the model call itself failed.
    """
    INVALID_FORMAT = "invalid_format"
    UPSTREAM_FAILURE = "upstream_failure"

    def __init__(self, message: str, kind: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.kind = kind
        self.cause = cause


class InvalidFormatError(GenerationError):
    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, GenerationError.INVALID_FORMAT, cause)


class UpstreamFailureError(GenerationError):
    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, GenerationError.UPSTREAM_FAILURE, cause)


class LLMServiceError(SessionBackendError):
    pass


class LiveKitServiceError(SessionBackendError):
    pass


class LiveKitConfigError(LiveKitServiceError):
    pass
