"""
Response envelope and error taxonomy.

A client must be able to tell "this deck has no combos" apart from "the
combo catalog could not be loaded", so every response carries an outcome:

- success: the lookup ran (the lists may be empty)
- known_failure: the lookup did not run and the reason is known
- unknown_failure: the lookup did not run for an unexpected reason

Endpoints build responses only through the create_* helpers, which all pass
through `finalize_response()`.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """What went wrong."""

    INVALID_INPUT = "invalid_input"
    CATALOG_UNAVAILABLE = "catalog_unavailable"
    CATALOG_DECODE_ERROR = "catalog_decode_error"
    EXTERNAL_API_ERROR = "external_api_error"
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Failure payload shown to the client."""

    kind: FailureKind = Field(..., description="Failure classification")
    message: str = Field(..., description="Short explanation for the user")
    detail: str | None = Field(default=None, description="Technical detail, if any")
    suggestion: str | None = Field(default=None, description="What the user can try next")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope returned by every endpoint: data on success, failure otherwise."""

    outcome: OutcomeType = Field(..., description="Outcome of the request")
    data: T | None = Field(default=None, description="Payload on success")
    failure: FailureDetail | None = Field(default=None, description="Details on failure")

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        failure = FailureDetail(kind=kind, message=message, detail=detail, suggestion=suggestion)
        return cls(outcome=OutcomeType.KNOWN_FAILURE, failure=failure)


class KnownError(Exception):
    """
    An error whose cause we can explain to the user.

    Attributes:
        kind: Failure classification
        message: User-facing explanation
        detail: Technical detail (file path, entry index, ...)
        suggestion: Next step for the user
        status_code: HTTP status the API answers with
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code

    def to_response(self) -> ApiResponse[Any]:
        return ApiResponse.known_failure(self.kind, self.message, self.detail, self.suggestion)


class CatalogDecodeError(KnownError):
    """
    A catalog entry could not be decoded.

    Fatal in strict mode. In lenient mode the entry is skipped and the
    error is kept on the decoded catalog.
    """

    def __init__(self, index: int, reason: str, combo_id: object | None = None):
        self.index = index
        self.combo_id = combo_id
        self.reason = reason
        where = f"entry {index}" if combo_id is None else f"entry {index} (id {combo_id})"
        super().__init__(
            kind=FailureKind.CATALOG_DECODE_ERROR,
            message=f"Combo catalog {where} is malformed: {reason}",
            detail=reason,
            suggestion="Refresh the combo catalog and try again.",
            status_code=503,
        )


class CatalogUnavailableError(KnownError):
    """The catalog snapshot could not be read or fetched."""

    def __init__(self, detail: str):
        super().__init__(
            kind=FailureKind.CATALOG_UNAVAILABLE,
            message="The combo catalog failed to load.",
            detail=detail,
            suggestion="Try again later.",
            status_code=503,
        )


class InvalidDeckInputError(KnownError):
    """A decklist line could not be turned into a card and quantity."""

    def __init__(self, line: str, reason: str):
        self.line = line
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Could not read decklist line {line!r}: {reason}",
            detail=reason,
            suggestion="Use one card per line, e.g. '1x Sol Ring'.",
            status_code=400,
        )


# =============================================================================
# RESPONSE BOUNDARY
# =============================================================================

# Fixed wording, never built from exception text
STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "The combo lookup failed for a known reason.",
    OutcomeType.UNKNOWN_FAILURE: "The combo lookup failed unexpectedly. Please retry.",
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "Check the failure details and adjust the request.",
    OutcomeType.UNKNOWN_FAILURE: "If this keeps happening, please report it.",
}

# id() of every response that went through finalize_response()
_finalized_responses: set[int] = set()


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Check a response's shape and mark it as finalized.

    Raises:
        ValueError: If a success carries failure details, or a failure lacks them
    """
    is_success = response.outcome == OutcomeType.SUCCESS
    if is_success and response.failure is not None:
        raise ValueError("Success response must not have failure details")
    if not is_success and response.failure is None:
        raise ValueError(f"{response.outcome.value} response must have failure details")

    _finalized_responses.add(id(response))
    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    return id(response) in _finalized_responses


def create_unknown_failure(
    exception: Exception,
    include_type: bool = True,
) -> ApiResponse[Any]:
    """Finalized unknown failure; only the exception's type name is exposed."""
    outcome = OutcomeType.UNKNOWN_FAILURE
    failure = FailureDetail(
        kind=FailureKind.UNKNOWN,
        message=STANDARD_MESSAGES[outcome],
        detail=type(exception).__name__ if include_type else None,
        suggestion=STANDARD_SUGGESTIONS[outcome],
    )
    return finalize_response(ApiResponse(outcome=outcome, failure=failure))


def create_known_failure(error: KnownError) -> ApiResponse[Any]:
    """Finalized known failure built from a KnownError."""
    return finalize_response(error.to_response())


def create_success(data: T) -> ApiResponse[T]:
    """Finalized success response."""
    return finalize_response(ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data))
