"""E.164 telephone number value type.

A number may optionally begin with ``+``; at most 15 digits make up the
country code prefix and the subscriber part.  Parsing is the only way to
obtain a :class:`PhoneNumber`, so every instance is already canonical:
a leading ``+`` followed by the captured digits.

Only ASCII digits count.  A Unicode-aware ``\\d`` would also accept
digits from other scripts (``"+١٢٣"``), which no dialing plan uses.

See https://www.itu.int/rec/T-REC-E.164-201011-I/en
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from subjectid.errors import InvalidPhoneNumberError

E164_PATTERN: re.Pattern[str] = re.compile(r"\+?([0-9]{1,15})")


class PhoneNumber:
    """Immutable E.164 phone number.

    >>> str(PhoneNumber("12065550100"))
    '+12065550100'
    """

    __slots__ = ("_number",)

    _number: str

    def __init__(self, text: str) -> None:
        if not isinstance(text, str):
            raise InvalidPhoneNumberError(repr(text))
        match = E164_PATTERN.fullmatch(text)
        if match is None:
            raise InvalidPhoneNumberError(text)
        object.__setattr__(self, "_number", "+" + match.group(1))

    @classmethod
    def parse(cls, text: str) -> PhoneNumber:
        """Parse *text*, raising :class:`InvalidPhoneNumberError` on mismatch."""
        return cls(text)

    @property
    def digits(self) -> str:
        """The digits of the number without the ``+`` prefix."""
        return self._number[1:]

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type[PhoneNumber], tuple[str]]:
        return (type(self), (self._number,))

    def __str__(self) -> str:
        return self._number

    def __repr__(self) -> str:
        return f"PhoneNumber({self._number!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PhoneNumber):
            return NotImplemented
        return self._number == other._number

    def __hash__(self) -> int:
        return hash(self._number)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Validate from a plain string and serialize back to one."""
        from_str = core_schema.no_info_after_validator_function(cls, core_schema.str_schema())
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_str]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )
