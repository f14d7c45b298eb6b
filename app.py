import sys
import os

# Ensure project root is in python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

import streamlit as st
from io import BytesIO
import pandas as pd

from config.settings import MAX_UPLOAD_MB, OCR_CHAR_REMAP, SUPPORTED_IMAGE_TYPES, USE_GPU
from passport_mrz.decoder import MrzDecoder
from passport_mrz.errors import OcrError
from passport_mrz.extractor import PassportExtractor
from passport_mrz.formats import FORM_FIELDS, merge_into_form, results_to_frame
from passport_mrz.normalizer import REMAP_PROFILES, get_remap
from passport_mrz.utils import setup_logger
from passport_mrz.validators import fields_to_verify, outcome_message

logger = setup_logger(__name__)

FORM_LABELS = {
    "surname": "Surname",
    "given_names": "Given names",
    "document_number": "Passport number",
    "nationality": "Nationality",
    "issuing_state": "Issuing state",
    "sex": "Sex",
    "birth_date": "Date of birth (YYMMDD)",
    "expiry_date": "Expiration date (YYMMDD)",
    "document_type": "Document type",
    "optional_data": "Personal number",
}

# Set page configuration
st.set_page_config(
    page_title="Passport MRZ Reader",
    page_icon="🛂",
    layout="wide"
)


# Initialize Extractor (cached to avoid reloading model)
@st.cache_resource
def get_extractor(use_gpu=False, remap_profile=OCR_CHAR_REMAP):
    return PassportExtractor(use_gpu=use_gpu, decoder=MrzDecoder(remap=get_remap(remap_profile)))


def process_file(extractor, uploaded_file):
    """
    Runs OCR + MRZ decoding on one uploaded file.

    Returns:
        List[(str, DecodeResult)]: one entry per image, or per page for PDFs
    """
    data = uploaded_file.getvalue()
    is_pdf = uploaded_file.type == "application/pdf" or uploaded_file.name.lower().endswith('.pdf')

    if is_pdf:
        st.write(f"📄 Processing as PDF: {uploaded_file.name}")
        return [
            (f"{uploaded_file.name} (page {page})", result)
            for page, result in extractor.extract_pdf(data)
        ]

    st.write(f"🖼️ Processing as image: {uploaded_file.name}")
    return [(uploaded_file.name, extractor.extract(data))]


def fill_form(record):
    """Merges decoded fields into the form without clearing what the user typed."""
    current = {field: st.session_state.get(f"form_{field}", "") for field in FORM_FIELDS}
    for field, value in merge_into_form(current, record).items():
        st.session_state[f"form_{field}"] = value


def render_result(index, source, result, show_raw_text):
    with st.expander(f"{source}: {outcome_message(result)}", expanded=not result.found):
        if result.found:
            if result.record.checksums_valid:
                st.success(outcome_message(result))
            for hint in fields_to_verify(result.record):
                st.warning(hint)
            st.code("\n".join(result.normalized_lines), language=None)
            st.button("Fill form from this MRZ", key=f"fill_{index}", on_click=fill_form, args=(result.record,))
        else:
            st.error(result.message)

        if show_raw_text:
            st.text_area("OCR text", result.raw_text, height=150, key=f"raw_{index}", disabled=True)


def render_form():
    st.subheader("Passport details")
    cols = st.columns(2)
    for i, field in enumerate(FORM_FIELDS):
        cols[i % 2].text_input(FORM_LABELS[field], key=f"form_{field}")


def main():
    st.title("🛂 Passport MRZ Reader")

    # Add a description
    st.markdown("""
    This tool reads the Machine Readable Zone (MRZ) at the bottom of a passport photo page.
    Upload passport images or PDFs; decoded fields can be copied into the form below and corrected by hand.
    Fields whose check digit does not match are flagged for verification.
    """)

    # Sidebar Configuration
    st.sidebar.header("Settings")
    use_gpu = st.sidebar.checkbox("Enable GPU Acceleration", value=USE_GPU)
    profiles = list(REMAP_PROFILES)
    remap_profile = st.sidebar.selectbox(
        "OCR character correction",
        profiles,
        index=profiles.index(OCR_CHAR_REMAP) if OCR_CHAR_REMAP in profiles else 0,
    )
    show_raw_text = st.sidebar.checkbox("Show OCR text", value=True)

    # File Uploader
    uploaded_files = st.file_uploader(
        "Upload Passport Files",
        type=SUPPORTED_IMAGE_TYPES + ['pdf'],
        accept_multiple_files=True
    )

    if uploaded_files and st.button("Extract Data"):
        extractor = get_extractor(use_gpu=use_gpu, remap_profile=remap_profile)

        all_results = []
        main_progress_bar = st.progress(0)

        for i, file in enumerate(uploaded_files):
            st.write(f"Processing file {i+1} of {len(uploaded_files)}: {file.name}")

            file_size = len(file.getvalue())
            if file_size > MAX_UPLOAD_MB * 1024 * 1024:
                st.error(f"❌ File too large: {file.name} ({file_size / (1024*1024):.1f} MB). Max {MAX_UPLOAD_MB} MB allowed.")
                main_progress_bar.progress((i + 1) / len(uploaded_files))
                continue

            try:
                all_results.extend(process_file(extractor, file))
            except OcrError as e:
                logger.error(f"{file.name}: {e.to_dict()}")
                st.error(f"❌ {e.message}: {e.details.get('reason')}")
            except Exception as e:
                logger.exception(f"Unexpected error processing {file.name}")
                st.error(f"❌ Error processing {file.name}: {str(e)}")

            # Update main progress bar
            main_progress_bar.progress((i + 1) / len(uploaded_files))

        st.session_state["results"] = all_results

    results = st.session_state.get("results", [])
    if results:
        for index, (source, result) in enumerate(results):
            render_result(index, source, result, show_raw_text)

        df = results_to_frame(results)
        st.dataframe(df)

        # Download buttons
        col1, col2 = st.columns(2)

        with col1:
            csv = df.to_csv(index=False).encode('utf-8')
            st.download_button(
                label="Download data as CSV",
                data=csv,
                file_name="passport_mrz.csv",
                mime="text/csv",
            )

        with col2:
            # Create an in-memory Excel file
            output = BytesIO()
            with pd.ExcelWriter(output, engine='openpyxl') as writer:
                df.to_excel(writer, index=False, sheet_name='PassportData')

            st.download_button(
                label="Download data as Excel",
                data=output.getvalue(),
                file_name="passport_mrz.xlsx",
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            )

    render_form()


if __name__ == "__main__":
    main()
