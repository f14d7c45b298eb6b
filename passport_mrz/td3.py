"""
ICAO 9303 TD3 (passport) field layout.

Two lines of 44 characters. Positions below are 0-indexed slices.

Line 1: P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<
        |  |  |
        |  |  name field: SURNAME<<GIVEN<NAMES
        |  issuing state
        document type

Line 2: L898902C<3UTO6908061F9406236ZE184226B<<<<<14
        number(9) cd nat(3) dob(6) cd sex exp(6) cd optional(14) cd composite

The decoder only slices. Filler trimming happens in the assembler and check
digits are judged by the checksum module.
"""
from passport_mrz.errors import MalformedMrzError, MrzInvariantError
from passport_mrz.records import Td3Fields
from passport_mrz.utils import FILLER, MRZ_ALPHABET, TD3_LINE_LENGTH, filler_to_spaces, is_mrz_text

NAME_SEPARATOR = FILLER * 2

# Line 1
DOCUMENT_TYPE = slice(0, 2)
ISSUING_STATE = slice(2, 5)
NAME_FIELD = slice(5, 44)

# Line 2
DOCUMENT_NUMBER = slice(0, 9)
DOCUMENT_NUMBER_CHECK = slice(9, 10)
NATIONALITY = slice(10, 13)
BIRTH_DATE = slice(13, 19)
BIRTH_DATE_CHECK = slice(19, 20)
SEX = slice(20, 21)
EXPIRY_DATE = slice(21, 27)
EXPIRY_DATE_CHECK = slice(27, 28)
OPTIONAL_DATA = slice(28, 42)
OPTIONAL_DATA_CHECK = slice(42, 43)
COMPOSITE_CHECK = slice(43, 44)


def parse_name_field(name_field):
    """
    Splits an MRZ name field into (surname, given_names).

    The first '<<' separates surname from given names; single fillers separate
    tokens inside each half. Without '<<' everything is surname.

    >>> parse_name_field('ERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<')
    ('ERIKSSON', 'ANNA MARIA')
    >>> parse_name_field('VAN<DER<BERG<<<<<<<')
    ('VAN DER BERG', '')
    """
    surname, _, given_names = name_field.partition(NAME_SEPARATOR)
    return filler_to_spaces(surname), filler_to_spaces(given_names)


def check_structure(line1, line2):
    """Raises MalformedMrzError if the two lines cannot be sliced as TD3."""
    for index, line in enumerate((line1, line2)):
        if line is None or len(line) != TD3_LINE_LENGTH:
            length = None if line is None else len(line)
            raise MalformedMrzError(
                f"line {index + 1} has length {length}, expected {TD3_LINE_LENGTH}",
                line_index=index,
            )
        if not is_mrz_text(line):
            char = next(c for c in line if c not in MRZ_ALPHABET)
            raise MrzInvariantError(index, char)


def decode_td3(line1, line2):
    """Slices two normalized lines into Td3Fields."""
    check_structure(line1, line2)

    name_field = line1[NAME_FIELD]
    surname, given_names = parse_name_field(name_field)

    return Td3Fields(
        document_type=line1[DOCUMENT_TYPE],
        issuing_state=line1[ISSUING_STATE],
        name_field=name_field,
        surname=surname,
        given_names=given_names,
        document_number=line2[DOCUMENT_NUMBER],
        document_number_check=line2[DOCUMENT_NUMBER_CHECK],
        nationality=line2[NATIONALITY],
        birth_date=line2[BIRTH_DATE],
        birth_date_check=line2[BIRTH_DATE_CHECK],
        sex=line2[SEX],
        expiry_date=line2[EXPIRY_DATE],
        expiry_date_check=line2[EXPIRY_DATE_CHECK],
        optional_data=line2[OPTIONAL_DATA],
        optional_data_check=line2[OPTIONAL_DATA_CHECK],
        composite_check=line2[COMPOSITE_CHECK],
    )
