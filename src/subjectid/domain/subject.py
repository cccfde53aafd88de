"""Aliases format and the composite :class:`SubjectId`.

A Subject Identifier is either one atomic identifier or an ``aliases``
identifier listing atomic identifiers believed to denote the same
subject.  Aliases never nest.

The wire form has no outer discriminator: :func:`decode_subject_id`
tries the atomic shape first and the aliases shape second, and the first
success wins.  The two branches stay disjoint because ``aliases`` can
never be registered as an atomic format name.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, ClassVar, Self

from pydantic import (
    BaseModel,
    Field,
    ModelWrapValidatorHandler,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_serializer,
    model_validator,
)

from subjectid.domain.atomic import AtomicId, decode_atomic, describe_error, read_format
from subjectid.domain.formats import FORMAT_MEMBER, IdentifierFormat
from subjectid.domain.policy import DEFAULT_POLICY, DecodePolicy, policy_from_context
from subjectid.errors import (
    DecodeError,
    NoMatchingShapeError,
    SchemaMismatchError,
    UnknownFormatError,
)

logger = logging.getLogger(__name__)

IDENTIFIERS_MEMBER = "identifiers"


class AliasesId(BaseModel):
    """Composite identifier made of one or more atomic identifiers.

    Entries keep their order.  Exact duplicates are discouraged but pass
    through unless the decode policy rejects them.

    Wire shape::

        {"format": "aliases", "identifiers": [{"format": "email", ...}, ...]}
    """

    model_config = {"frozen": True, "extra": "forbid"}

    FORMAT: ClassVar[IdentifierFormat] = IdentifierFormat.ALIASES

    identifiers: tuple[AtomicId, ...] = Field(min_length=1)

    @field_validator("identifiers", mode="before")
    @classmethod
    def _decode_entries(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            return value
        policy = policy_from_context(info.context)
        entries: list[AtomicId] = []
        for index, entry in enumerate(value):
            if isinstance(entry, SubjectId):
                entry = entry.value
            if isinstance(entry, AtomicId):
                entries.append(entry)
                continue
            if isinstance(entry, AliasesId) or (
                isinstance(entry, Mapping) and entry.get(FORMAT_MEMBER) == IdentifierFormat.ALIASES
            ):
                raise ValueError(f"entry {index}: aliases identifiers must not nest")
            try:
                entries.append(decode_atomic(entry, policy))
            except DecodeError as exc:
                raise ValueError(f"entry {index}: {exc.message}") from exc
        return entries

    @model_validator(mode="after")
    def _check_duplicates(self, info: ValidationInfo) -> Self:
        if policy_from_context(info.context).reject_duplicate_aliases and self.duplicates():
            raise ValueError("aliases must not contain duplicate identifiers")
        return self

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, Any]:
        return self.to_dict()

    def format(self) -> str:
        return self.FORMAT.value

    def duplicates(self) -> list[int]:
        """Indexes of entries equal to an earlier entry."""
        seen: set[AtomicId] = set()
        repeated: list[int] = []
        for index, entry in enumerate(self.identifiers):
            if entry in seen:
                repeated.append(index)
            seen.add(entry)
        return repeated

    def to_dict(self) -> dict[str, Any]:
        return {
            FORMAT_MEMBER: self.format(),
            IDENTIFIERS_MEMBER: [entry.to_dict() for entry in self.identifiers],
        }


def decode_aliases(obj: Any, policy: DecodePolicy | None = None) -> AliasesId:
    """Decode a wire object into an :class:`AliasesId`.

    Raises:
        MissingFormatError: No usable ``format`` member.
        UnknownFormatError: ``format`` is not ``aliases``.
        SchemaMismatchError: ``identifiers`` is missing, empty, holds a
            nested aliases identifier or an invalid entry, or other members
            are present.
    """
    fmt = read_format(obj)
    if fmt != IdentifierFormat.ALIASES:
        raise UnknownFormatError(fmt)

    extra = sorted(str(key) for key in obj if key not in (FORMAT_MEMBER, IDENTIFIERS_MEMBER))
    if extra:
        raise SchemaMismatchError(fmt, f"unexpected members: {', '.join(extra)}", extra=extra)
    if IDENTIFIERS_MEMBER not in obj:
        raise SchemaMismatchError(
            fmt, f"missing members: {IDENTIFIERS_MEMBER}", missing=[IDENTIFIERS_MEMBER]
        )

    context = (policy or DEFAULT_POLICY).as_context()
    try:
        return AliasesId.model_validate(
            {IDENTIFIERS_MEMBER: obj[IDENTIFIERS_MEMBER]}, context=context
        )
    except ValidationError as exc:
        errors = [describe_error(err) for err in exc.errors()]
        raise SchemaMismatchError(fmt, "; ".join(errors), errors=errors) from exc


class SubjectId(BaseModel):
    """A Subject Identifier: one atomic identifier or an aliases identifier.

    Validating a wire object (``SubjectId.model_validate(obj)``) runs the
    same trial decode as :func:`decode_subject_id`; dumping produces the
    wire object again.
    """

    model_config = {"frozen": True}

    value: AtomicId | AliasesId

    @model_validator(mode="wrap")
    @classmethod
    def _from_wire(
        cls, data: Any, handler: ModelWrapValidatorHandler[Self], info: ValidationInfo
    ) -> Self:
        if isinstance(data, Mapping) and FORMAT_MEMBER in data:
            return decode_subject_id(data, policy_from_context(info.context))  # type: ignore[return-value]
        return handler(data)

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, Any]:
        return self.to_dict()

    @classmethod
    def from_dict(cls, obj: Any, policy: DecodePolicy | None = None) -> SubjectId:
        return decode_subject_id(obj, policy)

    @property
    def is_aliases(self) -> bool:
        return isinstance(self.value, AliasesId)

    def format(self) -> str:
        """Name of the format: the atomic format, or ``aliases``."""
        return self.value.format()

    def atomics(self) -> tuple[AtomicId, ...]:
        """The atomic identifiers this subject identifier carries."""
        if isinstance(self.value, AliasesId):
            return self.value.identifiers
        return (self.value,)

    def to_dict(self) -> dict[str, Any]:
        return self.value.to_dict()


_SHAPES: tuple[tuple[str, Callable[[Any, DecodePolicy | None], AtomicId | AliasesId]], ...] = (
    ("atomic", decode_atomic),
    ("aliases", decode_aliases),
)


def decode_subject_id(obj: Any, policy: DecodePolicy | None = None) -> SubjectId:
    """Decode a wire object by trying each shape in turn.

    The decoded value is already validated under *policy*, so it is
    wrapped as is.

    Raises:
        NoMatchingShapeError: Neither shape accepts *obj*.  The per-shape
            errors are available on ``attempts``.
    """
    attempts: dict[str, DecodeError] = {}
    for name, decode in _SHAPES:
        try:
            value = decode(obj, policy)
        except DecodeError as exc:
            attempts[name] = exc
            continue
        return SubjectId.model_construct(value=value)
    fmt = obj.get(FORMAT_MEMBER) if isinstance(obj, Mapping) else None
    logger.debug(
        "No subject identifier shape matched: %s",
        {name: err.message for name, err in attempts.items()},
    )
    raise NoMatchingShapeError(fmt, attempts)


def loads(text: str | bytes, policy: DecodePolicy | None = None) -> SubjectId:
    """Decode a Subject Identifier from JSON text.

    Bytes must be UTF-8 (or UTF-16/32, as :func:`json.loads` detects).
    """
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"invalid JSON: {exc.msg}") from exc
    except UnicodeDecodeError as exc:
        raise DecodeError(f"invalid JSON: {exc.reason}") from exc
    return decode_subject_id(obj, policy)


def dumps(subject_id: SubjectId | AtomicId | AliasesId, **kwargs: Any) -> str:
    """Encode a Subject Identifier as JSON text."""
    return json.dumps(subject_id.to_dict(), **kwargs)
