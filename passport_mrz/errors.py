"""
Exceptions raised by the MRZ engine and the OCR collaborator.

Checksum mismatches are not errors: they are reported through the
validity flags on MrzRecord.
"""


class MrzError(Exception):
    """Base exception for MRZ reader errors"""
    def __init__(self, message, error_code, details=None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self):
        """Convert error to a JSON-serializable dict"""
        return {
            "success": False,
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details
        }


class MalformedMrzError(MrzError):
    """A normalized MRZ line does not have the TD3 structure"""
    def __init__(self, reason, line_index=None):
        super().__init__(
            message=f"MRZ is malformed: {reason}",
            error_code="MRZ_MALFORMED",
            details={
                "line_index": line_index,
                "suggestion": "Retake the image with the whole MRZ visible"
            }
        )


class MrzInvariantError(MalformedMrzError):
    """A character outside the MRZ alphabet reached the decoder"""
    def __init__(self, line_index, char):
        super().__init__(
            reason=f"unexpected character {char!r} on line {line_index + 1}",
            line_index=line_index,
        )
        self.error_code = "MRZ_INVARIANT_VIOLATION"
        self.details["char"] = char


class OcrError(MrzError):
    """The OCR engine could not produce text for an image"""
    def __init__(self, source, reason=None):
        super().__init__(
            message=f"Text recognition failed for {source}",
            error_code="OCR_FAILED",
            details={
                "source": str(source),
                "reason": reason,
                "suggestion": "Check that the file is a readable image or PDF"
            }
        )
