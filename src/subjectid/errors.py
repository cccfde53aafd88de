"""Error taxonomy for Subject Identifier parsing and decoding.

Every error carries a stable ``code`` so the service layer can turn it
into a :class:`~subjectid.services.result.ServiceError` without
inspecting messages.  All errors subclass :class:`ValueError`, which lets
pydantic report them as ``ValidationError`` when identifiers are embedded
in other models.
"""

from __future__ import annotations

from typing import Any


class SubjectIdError(ValueError):
    """Base class for all subjectid errors."""

    code = "SUBJECT_ID_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def detail(self) -> dict[str, Any]:
        """Structured context for ``ServiceError.detail``."""
        return {}


class InvalidPhoneNumberError(SubjectIdError):
    """Input does not match the E.164 phone number grammar."""

    code = "INVALID_PHONE_NUMBER"

    def __init__(self, value: str) -> None:
        super().__init__("invalid E.164 formatted phone number")
        self.value = value

    def detail(self) -> dict[str, Any]:
        return {"value": self.value}


class DecodeError(SubjectIdError):
    """A wire object could not be decoded into a Subject Identifier."""

    code = "DECODE_ERROR"


class MissingFormatError(DecodeError):
    """The object has no usable ``format`` member."""

    code = "MISSING_FORMAT"


class UnknownFormatError(DecodeError):
    """The ``format`` member names a format outside the registry."""

    code = "UNKNOWN_FORMAT"

    def __init__(self, fmt: str) -> None:
        super().__init__(f"unrecognized identifier format {fmt!r}")
        self.format = fmt

    def detail(self) -> dict[str, Any]:
        return {"format": self.format}


class SchemaMismatchError(DecodeError):
    """Members of the object do not match its named format."""

    code = "SCHEMA_MISMATCH"

    def __init__(
        self,
        fmt: str,
        message: str,
        *,
        missing: list[str] | None = None,
        extra: list[str] | None = None,
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(f"{fmt}: {message}")
        self.format = fmt
        self.missing = missing or []
        self.extra = extra or []
        self.errors = errors or []

    def detail(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "missing": self.missing,
            "extra": self.extra,
            "errors": self.errors,
        }


class NoMatchingShapeError(DecodeError):
    """Neither the atomic nor the aliases interpretation applies.

    The per-branch failures are kept in ``attempts`` for debugging; the
    message itself stays a single sentence.
    """

    code = "NO_MATCHING_SHAPE"

    def __init__(self, fmt: object, attempts: dict[str, DecodeError]) -> None:
        if isinstance(fmt, str):
            message = f"object with format {fmt!r} matches no known subject identifier shape"
        else:
            message = "object matches no known subject identifier shape"
        super().__init__(message)
        self.format = fmt if isinstance(fmt, str) else None
        self.attempts = attempts

    def detail(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "attempts": {name: err.message for name, err in self.attempts.items()},
        }
