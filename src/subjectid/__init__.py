"""subjectid — Subject Identifiers for Security Event Tokens."""

from subjectid.domain.atomic import (
    AccountId,
    Atomic,
    AtomicId,
    DidId,
    EmailId,
    IssSubId,
    OpaqueId,
    PhoneId,
    UriId,
    decode_atomic,
)
from subjectid.domain.formats import IdentifierFormat
from subjectid.domain.phone import PhoneNumber
from subjectid.domain.policy import DecodePolicy
from subjectid.domain.subject import (
    AliasesId,
    SubjectId,
    decode_aliases,
    decode_subject_id,
    dumps,
    loads,
)
from subjectid.errors import (
    DecodeError,
    InvalidPhoneNumberError,
    MissingFormatError,
    NoMatchingShapeError,
    SchemaMismatchError,
    SubjectIdError,
    UnknownFormatError,
)

__version__ = "0.1.0"

__all__ = [
    "AccountId",
    "AliasesId",
    "Atomic",
    "AtomicId",
    "DecodeError",
    "DecodePolicy",
    "DidId",
    "EmailId",
    "IdentifierFormat",
    "InvalidPhoneNumberError",
    "IssSubId",
    "MissingFormatError",
    "NoMatchingShapeError",
    "OpaqueId",
    "PhoneId",
    "PhoneNumber",
    "SchemaMismatchError",
    "SubjectId",
    "SubjectIdError",
    "UnknownFormatError",
    "UriId",
    "decode_aliases",
    "decode_atomic",
    "decode_subject_id",
    "dumps",
    "loads",
]
