import string as st
import logging
import sys

from config.settings import LOG_LEVEL

FILLER = "<"
TD3_LINE_LENGTH = 44
MRZ_ALPHABET = frozenset(st.ascii_uppercase + st.digits + FILLER)


def setup_logger(name=__name__):
    """Sets up a logger with standard formatting."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    return logger


def is_mrz_text(text):
    """True if every character of text belongs to the MRZ alphabet."""
    return all(c in MRZ_ALPHABET for c in text)


def strip_filler(text):
    """Removes trailing filler characters from a field."""
    if not text:
        return ""
    return text.rstrip(FILLER)


def filler_to_spaces(text):
    """
    Turns a filler-separated run of tokens into a space-separated string.
    'ANNA<MARIA<<<<' -> 'ANNA MARIA'
    """
    if not text:
        return ""
    return " ".join(token for token in text.split(FILLER) if token)
