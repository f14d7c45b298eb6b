"""
Configuration settings for the passport MRZ reader.
Values come from the environment (or a local .env file).
"""
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _get_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# OCR
USE_GPU = _get_bool("USE_GPU", False)
OCR_LANGUAGES = [lang.strip() for lang in os.getenv("OCR_LANGUAGES", "en").split(",") if lang.strip()]

# Character remapping profile applied to MRZ lines before decoding.
#   kl   - K and L read as filler (EasyOCR on printed MRZ)
#   none - no remapping
OCR_CHAR_REMAP = os.getenv("OCR_CHAR_REMAP", "kl").strip().lower()

# Uploads
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "10"))
SUPPORTED_IMAGE_TYPES = ['png', 'jpg', 'jpeg', 'webp', 'bmp', 'tiff']
PDF_DPI = int(os.getenv("PDF_DPI", "300"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
