from io import BytesIO
import img2pdf
import logging
from PIL import Image
from starlette.concurrency import run_in_threadpool

from pdf_tool.core.errors import MalformedInputError, UnsupportedFileTypeError
from pdf_tool.schemas.pdf import UploadedFile
from pdf_tool.services.external_tools import office_to_pdf

logger = logging.getLogger(__name__)


class ConversionService:
    # Raster formats, each converted to a single page
    IMAGE_FORMATS = {'.jpg', '.jpeg', '.png', '.gif', '.bmp', '.tif', '.tiff'}
    # Formats handed to LibreOffice
    OFFICE_FORMATS = {'.docx', '.doc', '.odt', '.rtf'}
    PDF_FORMATS = {'.pdf'}

    @staticmethod
    def is_supported(extension: str) -> bool:
        return (
            extension in ConversionService.IMAGE_FORMATS
            or extension in ConversionService.OFFICE_FORMATS
            or extension in ConversionService.PDF_FORMATS
        )

    @staticmethod
    def _flatten_alpha(image_bytes: bytes) -> bytes:
        """Composite a transparent image onto white; PDF images carry no alpha."""
        with Image.open(BytesIO(image_bytes)) as img:
            rgba = img.convert("RGBA")
            background = Image.new("RGB", rgba.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.getchannel("A"))
            output = BytesIO()
            background.save(output, format="PNG")
            return output.getvalue()

    @staticmethod
    def image_to_pdf(image_bytes: bytes, name: str = "") -> bytes:
        try:
            try:
                return img2pdf.convert(image_bytes)
            except img2pdf.AlphaChannelError:
                logger.debug("Flattening alpha channel of %s", name or "image")
                return img2pdf.convert(ConversionService._flatten_alpha(image_bytes))
        except (img2pdf.ImageOpenError, OSError, ValueError) as e:
            raise MalformedInputError(f"{name or 'File'} is not a readable image") from e

    @staticmethod
    async def to_pdf(file: UploadedFile) -> bytes:
        """Convert one upload to PDF bytes according to its extension."""
        ext = file.extension
        if ext in ConversionService.IMAGE_FORMATS:
            return await run_in_threadpool(
                ConversionService.image_to_pdf, file.content, file.original_name
            )
        elif ext in ConversionService.OFFICE_FORMATS:
            return await office_to_pdf(file.content, ext)
        elif ext in ConversionService.PDF_FORMATS:
            return file.content
        raise UnsupportedFileTypeError(ext)

conversion_service = ConversionService()
