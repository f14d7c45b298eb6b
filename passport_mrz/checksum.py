"""
ICAO 9303 check digits.

Each character gets a value (digits as themselves, A=10 ... Z=35, '<'=0),
values are multiplied by the repeating weights 7, 3, 1 and the sum is taken
modulo 10.

>>> compute_check_digit('L898902C<')
'3'
>>> compute_check_digit('690806')
'1'
>>> is_valid_check_digit('ZE184226B<<<<<', '<')
True
"""
import string as st

from passport_mrz.records import ChecksumFlags
from passport_mrz.utils import FILLER

CHECK_WEIGHTS = (7, 3, 1)

CHECK_VALUES = {str(i): i for i in range(10)}
CHECK_VALUES.update({c: i + 10 for i, c in enumerate(st.ascii_uppercase)})
CHECK_VALUES[FILLER] = 0


def compute_check_digit(text):
    """
    Returns the check digit of text as a single character.
    Raises ValueError for characters outside the MRZ alphabet.
    """
    total = 0
    for i, char in enumerate(text):
        try:
            value = CHECK_VALUES[char]
        except KeyError:
            raise ValueError(f"Character {char!r} has no MRZ check value") from None
        total += value * CHECK_WEIGHTS[i % 3]
    return str(total % 10)


def is_valid_check_digit(text, declared):
    """
    Compares the declared check digit with the computed one.
    A declared filler means the check digit is not used and always passes.
    """
    if declared == FILLER:
        return True
    try:
        return compute_check_digit(text) == declared
    except ValueError:
        return False


def validate_td3(fields):
    """Checks every TD3 check digit independently, including the composite."""
    return ChecksumFlags(
        document_number=is_valid_check_digit(fields.document_number, fields.document_number_check),
        birth_date=is_valid_check_digit(fields.birth_date, fields.birth_date_check),
        expiry_date=is_valid_check_digit(fields.expiry_date, fields.expiry_date_check),
        optional_data=is_valid_check_digit(fields.optional_data, fields.optional_data_check),
        composite=is_valid_check_digit(fields.composite_span, fields.composite_check),
    )
