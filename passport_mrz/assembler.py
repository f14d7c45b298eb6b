from passport_mrz.records import DecodeOutcome, MrzRecord
from passport_mrz.utils import strip_filler


def assemble_record(fields, flags):
    """
    Builds the final MrzRecord from raw TD3 slices and their checksum flags.
    Dates are kept as YYMMDD text; the century is left to the caller.
    """
    return MrzRecord(
        document_type=strip_filler(fields.document_type),
        issuing_state=strip_filler(fields.issuing_state),
        surname=strip_filler(fields.surname),
        given_names=strip_filler(fields.given_names),
        document_number=strip_filler(fields.document_number),
        document_number_check_digit=fields.document_number_check,
        nationality=strip_filler(fields.nationality),
        birth_date=fields.birth_date,
        birth_date_check_digit=fields.birth_date_check,
        sex=fields.sex,
        expiry_date=fields.expiry_date,
        expiry_date_check_digit=fields.expiry_date_check,
        optional_data=strip_filler(fields.optional_data),
        optional_data_check_digit=fields.optional_data_check,
        composite_check_digit=fields.composite_check,
        document_number_valid=flags.document_number,
        birth_date_valid=flags.birth_date,
        expiry_date_valid=flags.expiry_date,
        optional_data_valid=flags.optional_data,
        composite_valid=flags.composite,
    )


def outcome_for(flags):
    """SUCCESS when every check digit matched, PARTIAL_SUCCESS otherwise."""
    if flags.all_valid:
        return DecodeOutcome.SUCCESS
    return DecodeOutcome.PARTIAL_SUCCESS
