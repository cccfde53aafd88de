"""SubjectIdService — validation, inspection and phone normalization.

Wraps the domain codec so every outcome is a :class:`ServiceResult`.
The decode policy is fixed at construction (usually from settings).
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

import structlog

from subjectid.domain.atomic import ATOMIC_FORMATS
from subjectid.domain.formats import IdentifierFormat
from subjectid.domain.phone import PhoneNumber
from subjectid.domain.policy import DEFAULT_POLICY, DecodePolicy
from subjectid.domain.subject import IDENTIFIERS_MEMBER, AliasesId, SubjectId, decode_subject_id
from subjectid.errors import DecodeError, InvalidPhoneNumberError
from subjectid.services.result import ServiceError, ServiceResult

log = structlog.get_logger(__name__)


class SubjectIdService:
    """Handles Subject Identifier validation for interfaces (CLI, callers)."""

    def __init__(self, policy: DecodePolicy | None = None) -> None:
        self._policy = policy or DEFAULT_POLICY

    @property
    def policy(self) -> DecodePolicy:
        return self._policy

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, obj: Any) -> ServiceResult:
        """Decode one wire object and describe the identifier it holds."""
        try:
            subject_id = decode_subject_id(obj, self._policy)
        except DecodeError as exc:
            log.info("subject_id_rejected", code=exc.code, reason=exc.message)
            return ServiceResult.failure("validate", exc)

        log.debug("subject_id_accepted", format=subject_id.format())
        return ServiceResult(
            ok=True,
            op="validate",
            data=self._describe(subject_id),
            warnings=self._warnings(subject_id),
        )

    def validate_many(self, objs: Iterable[Any]) -> ServiceResult:
        """Validate a batch; the result is ok only when every item decodes."""
        items: list[dict[str, Any]] = []
        warnings: list[str] = []
        failed = 0
        for index, obj in enumerate(objs):
            result = self.validate(obj)
            if result.ok:
                items.append({"index": index, "ok": True, **result.data})
                warnings.extend(f"item {index}: {w}" for w in result.warnings)
            else:
                failed += 1
                assert result.error is not None
                items.append(
                    {
                        "index": index,
                        "ok": False,
                        "code": result.error.code,
                        "error": result.error.message,
                    }
                )

        data = {"items": items, "valid": len(items) - failed, "invalid": failed}
        if failed:
            return ServiceResult(
                ok=False,
                op="validate_batch",
                data=data,
                warnings=warnings,
                error=ServiceError(
                    code="BATCH_PARTIAL",
                    message=f"{failed} of {len(items)} identifiers failed",
                ),
            )
        return ServiceResult(ok=True, op="validate_batch", data=data, warnings=warnings)

    def validate_document(self, text: str | bytes, *, lines: bool = False) -> ServiceResult:
        """Validate JSON text holding one identifier or an array of them.

        Bytes are decoded as UTF-8.  With *lines*, every non-blank line is
        a separate JSON object.
        """
        op = "validate_batch" if lines else "validate"
        if isinstance(text, bytes):
            try:
                text = text.decode("utf-8-sig")
            except UnicodeDecodeError as exc:
                err = DecodeError(f"invalid UTF-8 at byte {exc.start}: {exc.reason}")
                return ServiceResult.failure(op, err)
        try:
            if lines:
                docs = [json.loads(line) for line in text.splitlines() if line.strip()]
                return self.validate_many(docs)
            doc = json.loads(text)
        except json.JSONDecodeError as exc:
            err = DecodeError(f"invalid JSON: {exc.msg} (line {exc.lineno})")
            return ServiceResult.failure(op, err)
        if isinstance(doc, list):
            return self.validate_many(doc)
        return self.validate(doc)

    def normalize_phone(self, text: str) -> ServiceResult:
        """Parse *text* as an E.164 number and return its canonical form."""
        try:
            number = PhoneNumber.parse(text)
        except InvalidPhoneNumberError as exc:
            return ServiceResult.failure("normalize_phone", exc)
        return ServiceResult(
            ok=True,
            op="normalize_phone",
            data={"phone_number": str(number), "digits": number.digits},
        )

    def formats(self) -> ServiceResult:
        """List every registered Identifier Format with its members."""
        items = [
            {"format": fmt.value, "members": list(cls.model_fields)}
            for fmt, cls in ATOMIC_FORMATS.items()
        ]
        items.append({"format": IdentifierFormat.ALIASES.value, "members": [IDENTIFIERS_MEMBER]})
        return ServiceResult(ok=True, op="formats", data={"items": items, "count": len(items)})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _describe(subject_id: SubjectId) -> dict[str, Any]:
        atomics = subject_id.atomics()
        return {
            "format": subject_id.format(),
            "identifier": subject_id.to_dict(),
            "count": len(atomics),
            "formats": [entry.format() for entry in atomics],
        }

    @staticmethod
    def _warnings(subject_id: SubjectId) -> list[str]:
        if not isinstance(subject_id.value, AliasesId):
            return []
        return [
            f"aliases entry {index} duplicates an earlier entry"
            for index in subject_id.value.duplicates()
        ]
