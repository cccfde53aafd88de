"""Identifier Format names from the Security Event Identifier Formats registry.

The ``format`` member of every Subject Identifier carries one of these
values.  The member is reserved: no Identifier Format may declare rules
for it or use it for anything else.
"""

from __future__ import annotations

from enum import StrEnum

FORMAT_MEMBER = "format"


class IdentifierFormat(StrEnum):
    """Registered Identifier Format names (case-sensitive, snake_case)."""

    ACCOUNT = "account"
    EMAIL = "email"
    ISSUER_SUBJECT = "iss_sub"
    OPAQUE = "opaque"
    PHONE_NUMBER = "phone_number"
    DID = "did"
    URI = "uri"
    ALIASES = "aliases"


# Formats that never contain other identifiers.
ATOMIC_FORMAT_NAMES: frozenset[IdentifierFormat] = frozenset(
    f for f in IdentifierFormat if f is not IdentifierFormat.ALIASES
)
