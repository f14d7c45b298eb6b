from passport_mrz.records import DecodeOutcome

OUTCOME_MESSAGES = {
    DecodeOutcome.SUCCESS: "MRZ decoded",
    DecodeOutcome.PARTIAL_SUCCESS: "MRZ decoded, some fields need checking",
    DecodeOutcome.NOT_FOUND: "MRZ not detected, retake image",
    DecodeOutcome.MALFORMED: "MRZ could not be decoded, retake image",
}

FIELD_LABELS = {
    "document_number": "Passport number",
    "birth_date": "Date of birth",
    "expiry_date": "Expiration date",
    "optional_data": "Personal number",
}


def outcome_message(result):
    """User-facing summary of a DecodeResult."""
    return OUTCOME_MESSAGES[result.outcome]


def fields_to_verify(record):
    """
    Returns "please verify" hints for every check digit that did not match.
    1. Per-field failures name the field.
    2. A composite failure on its own points at line 2 as a whole.
    """
    if record is None:
        return []

    hints = []
    failed = record.checksums.failed_fields()
    for field in failed:
        if field in FIELD_LABELS:
            hints.append(f"Please verify {FIELD_LABELS[field]}: check digit does not match")

    if "composite" in failed and len(failed) == 1:
        hints.append(
            "Please verify passport number, dates and personal number: "
            "the overall check digit does not match"
        )
    return hints
