"""
Locating the two MRZ lines inside raw OCR output.

The OCR engine returns whatever it read on the page: visual-zone labels,
names, dates and, usually at the bottom, the MRZ. A selection policy is a
plain function taking the cleaned lines in document order and returning the
pair of lines to decode, or None.
"""
from passport_mrz.utils import FILLER, setup_logger

logger = setup_logger(__name__)


def split_raw_text(raw_text):
    """
    Splits OCR output into trimmed, non-empty lines.
    Accepts a newline-separated string or an iterable of lines (EasyOCR with detail=0).
    """
    if raw_text is None:
        return []
    if isinstance(raw_text, str):
        chunks = raw_text.splitlines()
    else:
        chunks = []
        for item in raw_text:
            chunks.extend(str(item).splitlines())
    return [line.strip() for line in chunks if line.strip()]


def last_two_filler_lines(lines):
    """
    Default policy: the last two lines containing a filler character.
    The MRZ is the trailing filler-dense block, so trailing matches win over leading ones.
    """
    candidates = [line for line in lines if FILLER in line]
    if len(candidates) < 2:
        return None
    return candidates[-2], candidates[-1]


def recover_lines(raw_text, policy=last_two_filler_lines):
    """Returns the (line1, line2) candidate pair or None when no MRZ is detected."""
    lines = split_raw_text(raw_text)
    pair = policy(lines)
    if pair is None:
        logger.debug(f"No MRZ candidates among {len(lines)} OCR lines")
        return None
    line1, line2 = pair
    logger.debug(f"MRZ candidates: {line1} / {line2}")
    return line1, line2
