import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

log = logging.getLogger(__name__)


class BracketError(Exception):
    code = "bracket_error"
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "", **extra):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__
        self.extra = extra

    def as_payload(self) -> dict:
        return {"error": self.code, "detail": self.message, **self.extra}


# ---------- validation: rejected synchronously, no state change ----------

class BracketValidationError(BracketError):
    code = "validation_error"


class InvalidParticipantCount(BracketValidationError):
    code = "invalid_participant_count"


class DuplicateSeed(BracketValidationError):
    code = "duplicate_seed"


class SeedOutOfRange(BracketValidationError):
    code = "seed_out_of_range"


class InvalidGroupCount(BracketValidationError):
    code = "invalid_group_count"


class AmbiguousResult(BracketValidationError):
    code = "ambiguous_result"


class MissingParticipant(BracketValidationError):
    code = "missing_participant"


class InvalidParticipant(BracketValidationError):
    code = "invalid_participant"


class InvalidTransition(BracketValidationError):
    code = "invalid_transition"


class UnsupportedFormat(BracketValidationError):
    code = "unsupported_format"


class InvalidFormatSettings(BracketValidationError):
    code = "invalid_format_settings"


# ---------- conflict: caller may retry with force / cascade / fresh version ----------

class BracketConflict(BracketError):
    code = "conflict"
    http_status = status.HTTP_409_CONFLICT
    retry_with = None

    def as_payload(self) -> dict:
        payload = super().as_payload()
        if self.retry_with:
            payload["retry_with"] = self.retry_with
        return payload


class BracketAlreadyExists(BracketConflict):
    code = "bracket_already_exists"
    retry_with = "force"


class ConcurrentModification(BracketConflict):
    code = "concurrent_modification"
    retry_with = "version"


class DownstreamAlreadyFinalized(BracketConflict):
    code = "downstream_already_finalized"
    retry_with = "cascade"


# ---------- integrity: internal invariant violation ----------

class BracketIntegrityError(BracketError):
    code = "integrity_error"
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR


def api_exception_handler(exc, context):
    if isinstance(exc, BracketIntegrityError):
        log.error("Bracket integrity violation: %s", exc, exc_info=exc)
        return Response(
            {"error": exc.code, "detail": "Internal bracket error"},
            status=exc.http_status,
        )
    if isinstance(exc, BracketError):
        return Response(exc.as_payload(), status=exc.http_status)
    return exception_handler(exc, context)
