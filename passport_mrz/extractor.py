import os
import warnings

import cv2
import numpy as np
from pdf2image import convert_from_bytes, convert_from_path
from PIL import Image

from config.settings import OCR_CHAR_REMAP, OCR_LANGUAGES, PDF_DPI, USE_GPU
from passport_mrz.decoder import MrzDecoder
from passport_mrz.errors import OcrError
from passport_mrz.normalizer import get_remap
from passport_mrz.utils import setup_logger

# Suppress EasyOCR/torch chatter
warnings.filterwarnings('ignore', category=UserWarning, module='torch')
warnings.filterwarnings('ignore', category=UserWarning, module='easyocr')

logger = setup_logger(__name__)


class PassportExtractor:
    """
    OCR collaborator: turns a passport image (or PDF) into raw text with EasyOCR
    and hands the text to the MRZ decoder.
    """

    def __init__(self, use_gpu=USE_GPU, languages=None, reader=None, decoder=None):
        self.languages = languages if languages else OCR_LANGUAGES
        self.use_gpu = use_gpu
        self.decoder = decoder if decoder is not None else MrzDecoder(remap=get_remap(OCR_CHAR_REMAP))
        self._reader = reader

    @property
    def reader(self):
        if self._reader is None:
            self._reader = self._create_reader()
        return self._reader

    def _create_reader(self):
        import easyocr

        # Set model storage directory to project/data/models to avoid permission issues
        base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        model_dir = os.path.join(base_dir, 'data', 'models')
        os.makedirs(model_dir, exist_ok=True)

        logger.info(f"Initializing EasyOCR Reader (GPU={self.use_gpu})...")
        reader = easyocr.Reader(self.languages, gpu=self.use_gpu, model_storage_directory=model_dir)
        logger.info("EasyOCR Reader initialized.")
        return reader

    @staticmethod
    def load_image(image):
        """
        Accepts a file path, encoded image bytes, a PIL image or an ndarray; returns a BGR ndarray.
        """
        if isinstance(image, np.ndarray):
            return image
        if isinstance(image, Image.Image):
            return cv2.cvtColor(np.array(image.convert('RGB')), cv2.COLOR_RGB2BGR)
        if isinstance(image, (bytes, bytearray)):
            buf = np.frombuffer(image, dtype=np.uint8)
            img = cv2.imdecode(buf, cv2.IMREAD_COLOR)
            if img is None:
                raise OcrError("uploaded bytes", reason="not a decodable image")
            return img

        try:
            path = os.fspath(image)
        except TypeError as e:
            raise OcrError(str(type(image)), reason="unsupported image type") from e
        if not os.path.exists(path):
            raise OcrError(path, reason="file not found")
        img = cv2.imread(path)
        if img is None:
            raise OcrError(path, reason="not a decodable image")
        return img

    def read_text(self, image):
        """
        Runs OCR over the whole image and returns the recognized lines joined by newlines.
        """
        img = self.load_image(image)
        try:
            # detail=0 returns just the list of strings
            lines = self.reader.readtext(img, detail=0, paragraph=False)
        except Exception as e:
            logger.error(f"EasyOCR failed: {e}")
            raise OcrError("image", reason=str(e)) from e

        logger.debug(f"EasyOCR returned {len(lines)} lines")
        return "\n".join(str(line) for line in lines)

    def extract(self, image):
        """
        Extracts the MRZ from a single image.
        Returns a DecodeResult; the OCR text is kept on it as raw_text.
        """
        raw_text = self.read_text(image)
        return self.decoder.decode(raw_text)

    def render_pdf(self, pdf):
        """Converts a PDF (path or bytes) to a list of PIL pages."""
        try:
            if isinstance(pdf, (bytes, bytearray)):
                return convert_from_bytes(bytes(pdf), dpi=PDF_DPI)
            return convert_from_path(os.fspath(pdf), dpi=PDF_DPI)
        except Exception as e:
            logger.warning(f"pdf2image failed ({e}), falling back to PyMuPDF")

        try:
            import fitz
            if isinstance(pdf, (bytes, bytearray)):
                doc = fitz.open(stream=bytes(pdf), filetype="pdf")
            else:
                doc = fitz.open(os.fspath(pdf))
            pages = []
            for i in range(len(doc)):
                page = doc.load_page(i)
                pix = page.get_pixmap(dpi=PDF_DPI)
                pages.append(Image.frombytes("RGB", [pix.width, pix.height], pix.samples))
            doc.close()
            return pages
        except Exception as e:
            logger.error(f"Failed to convert PDF: {e}")
            raise OcrError("PDF", reason=str(e)) from e

    def extract_pdf(self, pdf):
        """
        Extracts the MRZ from every page of a PDF.
        Returns a list of (page_number, DecodeResult) pairs, one per page.
        """
        results = []
        for i, page in enumerate(self.render_pdf(pdf)):
            logger.info(f"Processing page {i + 1}...")
            results.append((i + 1, self.extract(page)))
        return results
