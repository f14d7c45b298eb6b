"""
MRZ decoding pipeline: raw OCR text in, DecodeResult out.

    raw text -> recover_lines -> normalize_line x2 -> decode_td3
             -> validate_td3 -> assemble_record

Nothing here performs I/O or keeps state between calls, so a single
MrzDecoder can be shared freely.
"""
from passport_mrz.assembler import assemble_record, outcome_for
from passport_mrz.checksum import validate_td3
from passport_mrz.errors import MalformedMrzError, MrzInvariantError
from passport_mrz.normalizer import DEFAULT_REMAP, normalize_line
from passport_mrz.records import DecodeOutcome, DecodeResult
from passport_mrz.recovery import last_two_filler_lines, recover_lines
from passport_mrz.td3 import decode_td3
from passport_mrz.utils import setup_logger
from passport_mrz.validators import OUTCOME_MESSAGES

logger = setup_logger(__name__)


def _as_text(raw_text):
    if raw_text is None:
        return ""
    if isinstance(raw_text, str):
        return raw_text
    return "\n".join(str(line) for line in raw_text)


class MrzDecoder:
    def __init__(self, selection_policy=last_two_filler_lines, remap=DEFAULT_REMAP, strict=False):
        """
        Args:
            selection_policy: function (ordered lines) -> (line1, line2) or None
            remap (CharRemap): OCR-specific character substitutions
            strict (bool): re-raise MrzInvariantError instead of reporting MALFORMED
        """
        self.selection_policy = selection_policy
        self.remap = remap
        self.strict = strict

    def decode(self, raw_text):
        if raw_text is not None and not isinstance(raw_text, str):
            raw_text = list(raw_text)
        text = _as_text(raw_text)

        pair = recover_lines(raw_text, policy=self.selection_policy)
        if pair is None:
            logger.info("MRZ not detected in OCR text")
            return DecodeResult(
                outcome=DecodeOutcome.NOT_FOUND,
                raw_text=text,
                message=OUTCOME_MESSAGES[DecodeOutcome.NOT_FOUND],
            )

        normalized = (normalize_line(pair[0], self.remap), normalize_line(pair[1], self.remap))
        logger.debug(f"Normalized MRZ: {normalized[0]} / {normalized[1]}")

        try:
            fields = decode_td3(*normalized)
        except MrzInvariantError as e:
            if self.strict:
                raise
            logger.error(f"MRZ invariant violated after normalization: {e.message}")
            return self._malformed(text, pair, normalized)
        except MalformedMrzError as e:
            logger.warning(e.message)
            return self._malformed(text, pair, normalized)

        flags = validate_td3(fields)
        record = assemble_record(fields, flags)
        outcome = outcome_for(flags)

        if outcome is DecodeOutcome.PARTIAL_SUCCESS:
            logger.info(f"MRZ decoded with check digit mismatches: {', '.join(flags.failed_fields())}")
        else:
            logger.info("MRZ decoded, all check digits valid")

        return DecodeResult(
            outcome=outcome,
            raw_text=text,
            record=record,
            candidate_lines=pair,
            normalized_lines=normalized,
            message=OUTCOME_MESSAGES[outcome],
        )

    @staticmethod
    def _malformed(text, pair, normalized):
        return DecodeResult(
            outcome=DecodeOutcome.MALFORMED,
            raw_text=text,
            candidate_lines=pair,
            normalized_lines=normalized,
            message=OUTCOME_MESSAGES[DecodeOutcome.MALFORMED],
        )


_default_decoder = MrzDecoder()


def decode_mrz(raw_text, **kwargs):
    """
    Decodes a passport MRZ from raw OCR text.
    Keyword arguments are passed to MrzDecoder (selection_policy, remap, strict).
    """
    decoder = MrzDecoder(**kwargs) if kwargs else _default_decoder
    return decoder.decode(raw_text)
