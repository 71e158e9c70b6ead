from io import BytesIO
import logging
import pytesseract
from PIL import Image

from pdf_tool.core.config import settings
from pdf_tool.core.errors import ExternalToolError, MalformedInputError

logger = logging.getLogger(__name__)


class OCRService:
    @staticmethod
    def recognize(image_bytes: bytes, lang: str = None) -> str:
        """Run Tesseract over a single image and return the recognized text."""
        lang = lang or settings.OCR_LANGUAGE
        try:
            image = Image.open(BytesIO(image_bytes))
            image.load()
        except (OSError, ValueError) as e:
            raise MalformedInputError("File is not a readable image") from e

        if settings.TESSERACT_CMD:
            pytesseract.pytesseract.tesseract_cmd = settings.TESSERACT_CMD

        try:
            text = pytesseract.image_to_string(
                image, lang=lang, timeout=settings.TOOL_TIMEOUT_SECONDS
            )
        except pytesseract.TesseractNotFoundError as e:
            raise ExternalToolError("tesseract", "executable not found") from e
        except RuntimeError as e:
            # TesseractError and the timeout error are both RuntimeErrors
            raise ExternalToolError("tesseract", str(e)) from e
        finally:
            image.close()

        logger.info("OCR recognized %d characters (lang=%s)", len(text), lang)
        return text

ocr_service = OCRService()
