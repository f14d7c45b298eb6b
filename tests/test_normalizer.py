"""
Tests for MRZ line normalization.
"""
import pytest

from passport_mrz.normalizer import (
    DEFAULT_REMAP,
    IDENTITY_REMAP,
    KL_FILLER_REMAP,
    CharRemap,
    fix_width,
    get_remap,
    normalize_line,
)
from passport_mrz.utils import MRZ_ALPHABET

ODD_INPUTS = [
    "",
    "<",
    "p<uto smith<<john",
    "P<UTOÉRIKSSON<<ÅNNA",
    "L898902C<3UTO6908061F9406236ZE184226B<<<<<14 trailing junk that makes it long",
    "«»@#$%^&*()_+=-0987654321",
    "\t\n ",
    "straße",
    "X" * 200,
    "ﬁ①²",
]


@pytest.mark.parametrize("raw", ODD_INPUTS)
def test_output_is_44_mrz_characters(raw):
    for remap in (DEFAULT_REMAP, IDENTITY_REMAP):
        line = normalize_line(raw, remap)
        assert len(line) == 44
        assert set(line) <= MRZ_ALPHABET


@pytest.mark.parametrize("raw", ODD_INPUTS)
def test_idempotent(raw):
    for remap in (DEFAULT_REMAP, IDENTITY_REMAP):
        once = normalize_line(raw, remap)
        assert normalize_line(once, remap) == once


def test_uppercases():
    assert normalize_line("p<uto", IDENTITY_REMAP).startswith("P<UTO<")


def test_unknown_glyphs_become_filler():
    assert normalize_line("AB-CD.E", IDENTITY_REMAP)[:7] == "AB<CD<E"


def test_inner_whitespace_is_filler():
    """Whitespace is outside the alphabet, so it turns into filler before whitespace removal."""
    assert normalize_line("P<UTO SMITH", IDENTITY_REMAP)[:11] == "P<UTO<SMITH"


def test_default_remap_turns_k_and_l_into_filler():
    assert normalize_line("KLMK", DEFAULT_REMAP)[:4] == "<<M<"
    assert DEFAULT_REMAP is KL_FILLER_REMAP


def test_identity_remap_keeps_k_and_l():
    assert normalize_line("KLMK", IDENTITY_REMAP)[:4] == "KLMK"


def test_custom_remap_can_drop_glyphs():
    drop_x = CharRemap({"X": " "}, name="drop-x")
    assert normalize_line("AXBXC", drop_x) == "ABC" + "<" * 41


def test_custom_remap_rejects_non_mrz_targets():
    with pytest.raises(ValueError):
        CharRemap({"O": "o"})
    with pytest.raises(ValueError):
        CharRemap({"OO": "0"})


def test_pads_short_lines():
    assert normalize_line("P<UTO", IDENTITY_REMAP) == "P<UTO" + "<" * 39


def test_truncates_long_lines():
    assert normalize_line("1" * 50, IDENTITY_REMAP) == "1" * 44


def test_fix_width():
    assert fix_width("AB", 4) == "AB<<"
    assert fix_width("ABCDEF", 4) == "ABCD"


def test_get_remap():
    assert get_remap("KL") is KL_FILLER_REMAP
    assert get_remap("none") is IDENTITY_REMAP
    with pytest.raises(ValueError):
        get_remap("tesseract")


def test_default_remap_leaves_smith_specimen_intact(smith_lines):
    for line in smith_lines:
        assert normalize_line(line, DEFAULT_REMAP) == line
