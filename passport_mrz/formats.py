import os

import pandas as pd

from passport_mrz.utils import FILLER, setup_logger
from passport_mrz.validators import fields_to_verify

logger = setup_logger(__name__)

# Editable passport form, in display order
FORM_FIELDS = (
    "surname",
    "given_names",
    "document_number",
    "nationality",
    "issuing_state",
    "sex",
    "birth_date",
    "expiry_date",
    "document_type",
    "optional_data",
)


def record_to_row(result, source_file=None):
    """
    Flattens a DecodeResult into one table row.
    Rows for NotFound/Malformed results keep the outcome so the table shows every file.
    """
    record = result.record
    values = record.to_dict() if record else {}
    row = {"source_file": source_file or "", "format": result.format, "outcome": result.outcome.value}
    for field in FORM_FIELDS:
        row[field] = values.get(field, "")
    row["checksums_valid"] = record.checksums_valid if record else False
    row["verify"] = "; ".join(fields_to_verify(record))
    row["mrz"] = " / ".join(result.normalized_lines) if result.normalized_lines else ""
    return row


def results_to_frame(results):
    """
    Builds a DataFrame from (source_file, DecodeResult) pairs.
    """
    rows = [record_to_row(result, source_file=source) for source, result in results]
    return pd.DataFrame(rows, columns=["source_file", "format", "outcome", *FORM_FIELDS, "checksums_valid", "verify", "mrz"])


def merge_into_form(form_state, record):
    """
    Returns a copy of form_state updated from record.
    Only fields the decoder populated are written; empty fields never overwrite what
    the user already entered. An unspecified sex ('<') counts as empty.
    """
    merged = dict(form_state or {})
    if record is None:
        return merged

    for field in FORM_FIELDS:
        value = getattr(record, field)
        if not value or value == FILLER:
            continue
        merged[field] = value
    return merged


def export_to_spreadsheet(data, output_file, format='excel'):
    """
    Exports a DataFrame (or a list of row dicts) to a spreadsheet (Excel or CSV).
    """
    df = data if isinstance(data, pd.DataFrame) else pd.DataFrame(data)
    if df.empty:
        logger.warning("No data to export.")
        return False

    try:
        # Ensure output directory exists
        out_dir = os.path.dirname(output_file)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)

        if format.lower() == 'excel' or output_file.endswith('.xlsx'):
            if not output_file.endswith('.xlsx'):
                output_file += '.xlsx'
            df.to_excel(output_file, index=False, engine='openpyxl')
            logger.info(f"Data exported to {output_file}")

        elif format.lower() == 'csv' or output_file.endswith('.csv'):
            if not output_file.endswith('.csv'):
                output_file += '.csv'
            df.to_csv(output_file, index=False)
            logger.info(f"Data exported to {output_file}")

        else:
            logger.error(f"Unsupported format: {format}")
            return False

        return True

    except OSError as e:
        logger.error(f"Failed to export data: {e}")
        return False
