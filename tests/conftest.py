"""
Pytest configuration and fixtures for MRZ reader tests.
"""
import pytest

from passport_mrz.decoder import MrzDecoder
from passport_mrz.normalizer import IDENTITY_REMAP

# ICAO 9303 specimen passport. Contains genuine K and L letters, so it is
# decoded without the K/L filler remap.
ICAO_LINE1 = "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<"
ICAO_LINE2 = "L898902C<3UTO6908061F9406236ZE184226B<<<<<14"

# Specimen without K or L anywhere on either line, safe for the default remap.
SMITH_LINE1 = "P<UTOSMITH<<JOHN<PETER<<<<<<<<<<<<<<<<<<<<<<"
SMITH_LINE2 = "AB12345671UTO8501019M3001019<<<<<<<<<<<<<<<0"


@pytest.fixture
def icao_lines():
    """ICAO specimen TD3 MRZ, all check digits valid."""
    return ICAO_LINE1, ICAO_LINE2


@pytest.fixture
def smith_lines():
    """TD3 MRZ with no K/L characters, all check digits valid."""
    return SMITH_LINE1, SMITH_LINE2


@pytest.fixture
def plain_decoder():
    """Decoder without OCR character remapping."""
    return MrzDecoder(remap=IDENTITY_REMAP)


@pytest.fixture
def ocr_page_text():
    """Typical OCR output of a full passport page, MRZ at the bottom."""
    return "\n".join([
        "PASSPORT  PASSEPORT",
        "Type/Type  P   Code/Code UTO",
        "Surname/Nom",
        "SMITH",
        "Given names/Prenoms",
        "JOHN PETER",
        "Date of birth  01 JAN 1985",
        "",
        "  " + SMITH_LINE1 + "  ",
        SMITH_LINE2,
    ])
