"""Data models shared by the MRZ decoding pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional, Tuple


class DecodeOutcome(Enum):
    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial_success"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"

    @property
    def found(self) -> bool:
        """True when MRZ lines were located and decoded."""
        return self in (DecodeOutcome.SUCCESS, DecodeOutcome.PARTIAL_SUCCESS)


@dataclass(frozen=True, slots=True)
class Td3Fields:
    """Raw slices of a TD3 MRZ, filler left in place."""

    document_type: str
    issuing_state: str
    name_field: str
    surname: str
    given_names: str
    document_number: str
    document_number_check: str
    nationality: str
    birth_date: str
    birth_date_check: str
    sex: str
    expiry_date: str
    expiry_date_check: str
    optional_data: str
    optional_data_check: str
    composite_check: str

    @property
    def composite_span(self) -> str:
        """Line-2 text covered by the composite check digit."""
        return (
            self.document_number + self.document_number_check
            + self.birth_date + self.birth_date_check
            + self.expiry_date + self.expiry_date_check
            + self.optional_data + self.optional_data_check
        )


@dataclass(frozen=True, slots=True)
class ChecksumFlags:
    document_number: bool
    birth_date: bool
    expiry_date: bool
    optional_data: bool
    composite: bool

    @property
    def all_valid(self) -> bool:
        return all(asdict(self).values())

    def failed_fields(self) -> Tuple[str, ...]:
        """Names of the checks that did not match, in MRZ order."""
        return tuple(name for name, ok in asdict(self).items() if not ok)


@dataclass(frozen=True, slots=True)
class MrzRecord:
    """Decoded passport MRZ. Dates stay as YYMMDD text."""

    document_type: str
    issuing_state: str
    surname: str
    given_names: str
    document_number: str
    document_number_check_digit: str
    nationality: str
    birth_date: str
    birth_date_check_digit: str
    sex: str
    expiry_date: str
    expiry_date_check_digit: str
    optional_data: str
    optional_data_check_digit: str
    composite_check_digit: str
    document_number_valid: bool
    birth_date_valid: bool
    expiry_date_valid: bool
    optional_data_valid: bool
    composite_valid: bool

    @property
    def checksums(self) -> ChecksumFlags:
        return ChecksumFlags(
            document_number=self.document_number_valid,
            birth_date=self.birth_date_valid,
            expiry_date=self.expiry_date_valid,
            optional_data=self.optional_data_valid,
            composite=self.composite_valid,
        )

    @property
    def checksums_valid(self) -> bool:
        return self.checksums.all_valid

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class DecodeResult:
    """
    Everything one decode call produced.

    raw_text is kept for every outcome so the caller can decide whether to
    show it. record is None unless the outcome is SUCCESS or PARTIAL_SUCCESS.
    """

    outcome: DecodeOutcome
    raw_text: str
    record: Optional[MrzRecord] = None
    candidate_lines: Optional[Tuple[str, str]] = None
    normalized_lines: Optional[Tuple[str, str]] = None
    message: str = ""
    format: str = "TD3"

    @property
    def found(self) -> bool:
        return self.outcome.found


__all__ = [
    "ChecksumFlags",
    "DecodeOutcome",
    "DecodeResult",
    "MrzRecord",
    "Td3Fields",
]
