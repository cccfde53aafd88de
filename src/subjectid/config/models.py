"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, subjectid.toml only contains
overrides.  An empty file (or no file at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel

from subjectid.domain.policy import DecodePolicy


class DecodeConfig(BaseModel):
    """[decode] section."""

    model_config = {"frozen": True}

    allow_empty_fields: bool = False
    validate_phone_numbers: bool = False
    reject_duplicate_aliases: bool = False

    def to_policy(self) -> DecodePolicy:
        """Build the domain decode policy from this section."""
        return DecodePolicy(
            allow_empty_fields=self.allow_empty_fields,
            validate_phone_numbers=self.validate_phone_numbers,
            reject_duplicate_aliases=self.reject_duplicate_aliases,
        )
