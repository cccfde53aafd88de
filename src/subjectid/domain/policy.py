"""Decode policy — the validation knobs applied on top of the wire schema.

The wire schema alone only checks member presence.  The policy decides
how strictly member values are checked.  It travels to the models through
pydantic's validation context under :data:`POLICY_CONTEXT_KEY`; models
validated without a context use :data:`DEFAULT_POLICY`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

POLICY_CONTEXT_KEY = "subjectid_policy"


class DecodePolicy(BaseModel):
    """Value-level checks applied while decoding or constructing identifiers.

    Attributes:
        allow_empty_fields: Accept empty-string member values.
        validate_phone_numbers: Require the ``phone_number`` member of the
            phone format to parse as E.164.
        reject_duplicate_aliases: Reject aliases lists containing the same
            identifier twice instead of passing them through.
    """

    model_config = {"frozen": True}

    allow_empty_fields: bool = False
    validate_phone_numbers: bool = False
    reject_duplicate_aliases: bool = False

    def as_context(self) -> dict[str, Any]:
        """Wrap the policy as a pydantic validation context."""
        return {POLICY_CONTEXT_KEY: self}


DEFAULT_POLICY = DecodePolicy()


def policy_from_context(context: Any) -> DecodePolicy:
    """Extract the policy from a validation context, falling back to the default."""
    if isinstance(context, dict):
        policy = context.get(POLICY_CONTEXT_KEY)
        if isinstance(policy, DecodePolicy):
            return policy
    return DEFAULT_POLICY
