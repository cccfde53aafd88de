"""Atomic Subject Identifier formats and their wire codec.

Atomic identifiers never contain other identifiers (unlike ``aliases``).
Each variant is a frozen pydantic model whose fields are exactly the
members its Identifier Format requires; the format name lives on the
class, so an instance can never disagree with its own format.

Variants register themselves in :data:`ATOMIC_FORMATS` when the class is
created.  The registry is the single dispatch table for decoding.

Wire shape::

    {"format": "email", "email": "user@example.com"}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ValidationError, ValidationInfo, model_validator

from subjectid.domain.formats import ATOMIC_FORMAT_NAMES, FORMAT_MEMBER, IdentifierFormat
from subjectid.domain.phone import PhoneNumber
from subjectid.domain.policy import DEFAULT_POLICY, DecodePolicy, policy_from_context
from subjectid.errors import MissingFormatError, SchemaMismatchError, UnknownFormatError

logger = logging.getLogger(__name__)

ATOMIC_FORMATS: dict[IdentifierFormat, type[AtomicId]] = {}


class AtomicId(BaseModel):
    """Base for the closed set of atomic identifier formats.

    Subclasses set ``FORMAT``; every declared field is a required string.
    """

    model_config = {"frozen": True, "extra": "forbid", "strict": True}

    FORMAT: ClassVar[IdentifierFormat]

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        fmt = cls.__dict__.get("FORMAT")
        if fmt is None:
            return
        if fmt is IdentifierFormat.ALIASES:
            msg = f"{cls.__name__}: 'aliases' is reserved for the composite format"
            raise TypeError(msg)
        if fmt in ATOMIC_FORMATS:
            msg = f"{cls.__name__}: format {fmt.value!r} already registered"
            raise TypeError(msg)
        ATOMIC_FORMATS[fmt] = cls

    def format(self) -> str:
        """The registered name of this identifier's format."""
        return self.FORMAT.value

    def to_dict(self) -> dict[str, str]:
        """Encode as a wire object with the members flattened next to ``format``."""
        return {FORMAT_MEMBER: self.format(), **self.model_dump()}

    @model_validator(mode="before")
    @classmethod
    def _check_member_values(cls, data: Any, info: ValidationInfo) -> Any:
        # Instances were checked when they were built.
        if not isinstance(data, Mapping):
            return data
        if not policy_from_context(info.context).allow_empty_fields:
            empty = [name for name in cls.model_fields if data.get(name) == ""]
            if empty:
                raise ValueError(f"members must not be empty: {', '.join(empty)}")
        return data


class AccountId(AtomicId):
    """Subject identified by an account at a service provider.

    ``uri`` is the "acct" URI for the subject (RFC 7565).  The account
    holder need not be human; it can be a bot, a role-based alias or an
    account representing an organization.
    """

    FORMAT: ClassVar[IdentifierFormat] = IdentifierFormat.ACCOUNT

    uri: str


class EmailId(AtomicId):
    """Subject identified by an email address.

    ``email`` is an "addr-spec" (RFC 5322 section 3.4.1) naming a mailbox
    to which mail may be delivered (RFC 5321).  Email canonicalization is
    not standardized, so the address is stored as given; recipients apply
    their own canonicalization.
    """

    FORMAT: ClassVar[IdentifierFormat] = IdentifierFormat.EMAIL

    email: str


class IssSubId(AtomicId):
    """Subject identified by an issuer and subject pair.

    Analogous to the "iss" and "sub" claims of OpenID Connect ID Tokens.
    Both members follow the RFC 7519 ``StringOrURI`` rules; ``subject`` is
    unique either within the issuer or globally.
    """

    FORMAT: ClassVar[IdentifierFormat] = IdentifierFormat.ISSUER_SUBJECT

    issuer: str
    subject: str


class OpaqueId(AtomicId):
    """Subject identified by a string with no further semantics (UUID, hash)."""

    FORMAT: ClassVar[IdentifierFormat] = IdentifierFormat.OPAQUE

    id: str


class PhoneId(AtomicId):
    """Subject identified by a telephone number.

    ``phone_number`` is the full number including the international
    dialing prefix.  It is kept as a plain string; E.164 syntax is only
    enforced when the decode policy asks for it (see :class:`PhoneNumber`
    for the standalone value type).
    """

    FORMAT: ClassVar[IdentifierFormat] = IdentifierFormat.PHONE_NUMBER

    phone_number: str

    @model_validator(mode="after")
    def _check_phone_syntax(self, info: ValidationInfo) -> Self:
        if policy_from_context(info.context).validate_phone_numbers:
            PhoneNumber.parse(self.phone_number)
        return self


class DidId(AtomicId):
    """Subject identified by a Decentralized Identifier URL (a bare DID is allowed)."""

    FORMAT: ClassVar[IdentifierFormat] = IdentifierFormat.DID

    url: str


class UriId(AtomicId):
    """Subject identified by a URI (RFC 3986).

    No assumptions are made about the scheme, content or reachability of
    the URI.
    """

    FORMAT: ClassVar[IdentifierFormat] = IdentifierFormat.URI

    uri: str


Atomic = AccountId | EmailId | IssSubId | OpaqueId | PhoneId | DidId | UriId


def _check_registry() -> None:
    """Fail at import if a registered atomic format has no variant."""
    unhandled = sorted(f.value for f in ATOMIC_FORMAT_NAMES - ATOMIC_FORMATS.keys())
    if unhandled:
        raise RuntimeError(f"unhandled atomic identifier formats: {', '.join(unhandled)}")


_check_registry()


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------


def read_format(obj: Any) -> str:
    """Return the ``format`` member of a wire object.

    Raises:
        MissingFormatError: *obj* is not an object, or its ``format``
            member is absent or not a string.
    """
    if not isinstance(obj, Mapping):
        raise MissingFormatError("subject identifier must be an object")
    fmt = obj.get(FORMAT_MEMBER)
    if fmt is None:
        raise MissingFormatError(f"missing {FORMAT_MEMBER!r} member")
    if not isinstance(fmt, str):
        raise MissingFormatError(f"{FORMAT_MEMBER!r} member must be a string")
    return fmt


def describe_error(error: Mapping[str, Any]) -> str:
    """Render one pydantic error entry as ``loc: message``."""
    loc = ".".join(str(part) for part in error.get("loc", ()))
    return f"{loc}: {error['msg']}" if loc else str(error["msg"])


def decode_atomic(obj: Any, policy: DecodePolicy | None = None) -> AtomicId:
    """Decode a wire object into one of the atomic variants.

    The object must carry exactly the members of the format it names.

    Raises:
        MissingFormatError: No usable ``format`` member.
        UnknownFormatError: ``format`` is not an atomic format name.
        SchemaMismatchError: Missing, extra or invalid members.
    """
    fmt = read_format(obj)
    cls = ATOMIC_FORMATS.get(fmt)  # type: ignore[call-overload]
    if cls is None:
        raise UnknownFormatError(fmt)

    members = {key: value for key, value in obj.items() if key != FORMAT_MEMBER}
    declared = set(cls.model_fields)
    missing = sorted(declared - members.keys())
    extra = sorted(str(key) for key in members.keys() - declared)
    if missing or extra:
        parts = []
        if missing:
            parts.append(f"missing members: {', '.join(missing)}")
        if extra:
            parts.append(f"unexpected members: {', '.join(extra)}")
        raise SchemaMismatchError(fmt, "; ".join(parts), missing=missing, extra=extra)

    context = (policy or DEFAULT_POLICY).as_context()
    try:
        return cls.model_validate(members, context=context)
    except ValidationError as exc:
        errors = [describe_error(err) for err in exc.errors()]
        logger.debug("Invalid %s identifier: %s", fmt, errors)
        raise SchemaMismatchError(fmt, "; ".join(errors), errors=errors) from exc
