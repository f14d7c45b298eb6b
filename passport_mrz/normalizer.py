"""
Normalization of candidate MRZ lines into the canonical TD3 form.

Output of normalize_line is always 44 characters long and drawn from
A-Z, 0-9 and '<'. The decoder relies on this and does not clean again.
"""
from passport_mrz.utils import FILLER, MRZ_ALPHABET, TD3_LINE_LENGTH, setup_logger

logger = setup_logger(__name__)


class CharRemap:
    """
    Character substitutions for a specific OCR engine's error profile.

    Targets must be MRZ characters, whitespace, or '' (whitespace and '' drop the glyph).
    """

    def __init__(self, mapping=None, name="custom"):
        mapping = dict(mapping or {})
        for source, target in mapping.items():
            if len(source) != 1:
                raise ValueError(f"Remap source must be a single character: {source!r}")
            if target and (len(target) != 1 or not (target in MRZ_ALPHABET or target.isspace())):
                raise ValueError(f"Remap target for {source!r} is not an MRZ character: {target!r}")
        self.name = name
        self._table = str.maketrans(mapping)

    def apply(self, text):
        return text.translate(self._table)

    def __repr__(self):
        return f"CharRemap({self.name})"


# EasyOCR tends to read the filler chevron as K or L on printed MRZ lines.
KL_FILLER_REMAP = CharRemap({"K": FILLER, "L": FILLER}, name="kl")
IDENTITY_REMAP = CharRemap(name="none")
DEFAULT_REMAP = KL_FILLER_REMAP

REMAP_PROFILES = {
    "kl": KL_FILLER_REMAP,
    "none": IDENTITY_REMAP,
}


def get_remap(profile):
    """Resolves a remap profile name (see config.settings.OCR_CHAR_REMAP)."""
    try:
        return REMAP_PROFILES[profile.lower()]
    except KeyError:
        raise ValueError(f"Unknown OCR remap profile: {profile}") from None


def fix_width(line, width=TD3_LINE_LENGTH):
    """Truncates or right-pads with filler to exactly width characters."""
    if len(line) < width:
        line += FILLER * (width - len(line))
    return line[:width]


def normalize_line(line, remap=DEFAULT_REMAP):
    """Fix bad characters and width of one OCR'd MRZ line."""
    if not line:
        return FILLER * TD3_LINE_LENGTH

    line = line.upper()

    # Unrecognized glyphs default to filler
    line = "".join(c if c in MRZ_ALPHABET else FILLER for c in line)

    line = remap.apply(line)
    line = "".join(c for c in line if not c.isspace())

    normalized = fix_width(line)
    if len(line) != TD3_LINE_LENGTH:
        logger.debug(f"MRZ line width {len(line)} fixed to {TD3_LINE_LENGTH}")
    return normalized
