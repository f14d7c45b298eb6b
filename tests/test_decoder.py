"""
End-to-end tests for the MRZ decoding pipeline.
"""
import dataclasses

import pytest

from passport_mrz import decoder as decoder_module
from passport_mrz.decoder import MrzDecoder, decode_mrz
from passport_mrz.errors import MrzInvariantError
from passport_mrz.records import DecodeOutcome


class TestSuccess:

    def test_icao_specimen(self, plain_decoder, icao_lines):
        result = plain_decoder.decode("\n".join(icao_lines))
        assert result.outcome is DecodeOutcome.SUCCESS
        record = result.record
        assert record.document_type == "P"
        assert record.issuing_state == "UTO"
        assert record.surname == "ERIKSSON"
        assert record.given_names == "ANNA MARIA"
        assert record.document_number == "L898902C"
        assert record.nationality == "UTO"
        assert record.birth_date == "690806"
        assert record.sex == "F"
        assert record.expiry_date == "940623"
        assert record.optional_data == "ZE184226B"
        assert record.document_number_check_digit == "3"
        assert record.composite_check_digit == "4"
        assert record.checksums_valid

    def test_default_decoder_on_page_text(self, ocr_page_text):
        result = decode_mrz(ocr_page_text)
        assert result.outcome is DecodeOutcome.SUCCESS
        assert result.record.surname == "SMITH"
        assert result.record.given_names == "JOHN PETER"
        assert result.record.document_number == "AB1234567"
        assert result.record.optional_data == ""
        assert result.record.optional_data_check_digit == "<"
        assert result.message == "MRZ decoded"

    def test_short_first_line_is_padded(self, plain_decoder, icao_lines):
        """OCR often drops trailing filler; the normalizer pads it back."""
        result = plain_decoder.decode([icao_lines[0].rstrip("<"), icao_lines[1]])
        assert result.outcome is DecodeOutcome.SUCCESS
        assert result.normalized_lines == icao_lines

    def test_noisy_ocr_line(self, plain_decoder, smith_lines):
        noisy = smith_lines[0].replace("<<JOHN", "«<JOHN").lower()
        result = plain_decoder.decode(f"header\n{noisy}\n{smith_lines[1]}")
        assert result.record.surname == "SMITH"
        assert result.record.given_names == "JOHN PETER"

    def test_kl_remap_applies_by_default(self, icao_lines):
        result = decode_mrz("\n".join(icao_lines))
        assert result.record.surname == "ERI SSON"
        assert result.candidate_lines == icao_lines

    def test_record_is_immutable(self, plain_decoder, icao_lines):
        record = plain_decoder.decode("\n".join(icao_lines)).record
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.surname = "X"

    def test_idempotent(self, ocr_page_text):
        assert decode_mrz(ocr_page_text) == decode_mrz(ocr_page_text)

    def test_record_to_dict(self, plain_decoder, icao_lines):
        values = plain_decoder.decode("\n".join(icao_lines)).record.to_dict()
        assert values["surname"] == "ERIKSSON"
        assert values["document_number"] == "L898902C"
        assert values["composite_valid"] is True
        assert "checksums_valid" not in values

    def test_result_format_is_td3(self, ocr_page_text):
        assert decode_mrz(ocr_page_text).format == "TD3"
        assert decode_mrz("").format == "TD3"


class TestPartialSuccess:

    def test_document_number_mismatch(self, plain_decoder, icao_lines):
        line2 = icao_lines[1].replace("L898902C", "L898903C")
        result = plain_decoder.decode(f"{icao_lines[0]}\n{line2}")
        assert result.outcome is DecodeOutcome.PARTIAL_SUCCESS
        record = result.record
        assert not record.document_number_valid
        assert not record.composite_valid
        assert record.birth_date_valid
        assert record.expiry_date_valid
        assert record.optional_data_valid
        # fields are still returned
        assert record.document_number == "L898903C"
        assert record.surname == "ERIKSSON"

    def test_composite_only_mismatch(self, plain_decoder, icao_lines):
        line2 = icao_lines[1][:43] + "0"
        result = plain_decoder.decode(f"{icao_lines[0]}\n{line2}")
        assert result.outcome is DecodeOutcome.PARTIAL_SUCCESS
        assert result.record.checksums.failed_fields() == ("composite",)
        assert result.message == "MRZ decoded, some fields need checking"


class TestNotFound:

    @pytest.mark.parametrize("raw_text", [
        "",
        None,
        "PASSPORT\nREPUBLIC OF UTOPIA",
        "only one line with filler <<<",
        ["SMITH", "P<UTOSMITH<<JOHN"],
    ])
    def test_not_found(self, raw_text):
        result = decode_mrz(raw_text)
        assert result.outcome is DecodeOutcome.NOT_FOUND
        assert result.record is None
        assert result.message == "MRZ not detected, retake image"
        assert not result.found

    def test_raw_text_is_retained(self):
        result = decode_mrz(["PASSPORT", "SMITH"])
        assert result.raw_text == "PASSPORT\nSMITH"


class TestMalformed:

    @pytest.fixture
    def broken_normalizer(self, monkeypatch):
        def install(output):
            monkeypatch.setattr(decoder_module, "normalize_line", lambda line, remap: output)
        return install

    def test_invariant_violation_degrades_to_malformed(self, broken_normalizer, icao_lines):
        broken_normalizer("p" * 44)
        result = MrzDecoder().decode("\n".join(icao_lines))
        assert result.outcome is DecodeOutcome.MALFORMED
        assert result.record is None
        assert result.candidate_lines == icao_lines
        assert result.raw_text == "\n".join(icao_lines)

    def test_invariant_violation_raises_when_strict(self, broken_normalizer, icao_lines):
        broken_normalizer("p" * 44)
        with pytest.raises(MrzInvariantError):
            MrzDecoder(strict=True).decode("\n".join(icao_lines))

    def test_wrong_width_is_malformed_even_when_strict(self, broken_normalizer, icao_lines):
        broken_normalizer("P" * 43)
        result = MrzDecoder(strict=True).decode("\n".join(icao_lines))
        assert result.outcome is DecodeOutcome.MALFORMED
        assert result.message == "MRZ could not be decoded, retake image"
