from pypdf import PdfReader, PdfWriter
from reportlab.pdfgen import canvas
from io import BytesIO
from typing import Dict, List, Sequence, Tuple
import logging
import zipfile

from pdf_tool.core.errors import MalformedInputError

logger = logging.getLogger(__name__)

# Watermark overlay, in PDF points from the page origin
WATERMARK_POSITION = (50, 50)
WATERMARK_FONT = "Helvetica"
# Standard Type 1 fonts are drawn with WinAnsiEncoding
WATERMARK_ENCODING = "cp1252"
WATERMARK_FONT_SIZE = 24
WATERMARK_COLOR = (0.95, 0.1, 0.1)
WATERMARK_OPACITY = 0.5

ROTATION_DEGREES = 90


class PDFService:
    @staticmethod
    def load_pdf(content: bytes, name: str = "") -> PdfReader:
        """Parse PDF bytes, forcing the page tree to load.

        Raises MalformedInputError when the bytes are not a readable PDF.
        """
        try:
            reader = PdfReader(BytesIO(content))
            len(reader.pages)
        except Exception as e:
            raise MalformedInputError(f"{name or 'File'} is not a valid PDF") from e
        return reader

    @staticmethod
    def to_bytes(writer: PdfWriter) -> bytes:
        output = BytesIO()
        writer.write(output)
        return output.getvalue()

    @staticmethod
    def merge_pdfs(readers: Sequence[PdfReader]) -> bytes:
        """Concatenate every page of every document, in the given order."""
        merger = PdfWriter()
        for reader in readers:
            for page in reader.pages:
                merger.add_page(page)
        return PDFService.to_bytes(merger)

    @staticmethod
    def _watermark_overlay(text: str, width: float, height: float):
        buffer = BytesIO()
        overlay = canvas.Canvas(buffer, pagesize=(width, height))
        overlay.setFillColorRGB(*WATERMARK_COLOR)
        overlay.setFillAlpha(WATERMARK_OPACITY)
        overlay.setFont(WATERMARK_FONT, WATERMARK_FONT_SIZE)
        overlay.drawString(*WATERMARK_POSITION, text)
        overlay.save()
        buffer.seek(0)
        return PdfReader(buffer).pages[0]

    @staticmethod
    def watermark_pdf(reader: PdfReader, text: str) -> bytes:
        """Stamp ``text`` translucently on top of every page."""
        try:
            text.encode(WATERMARK_ENCODING)
        except UnicodeEncodeError as e:
            raise MalformedInputError(
                "Watermark text contains characters the watermark font cannot render"
            ) from e
        writer = PdfWriter(clone_from=reader)
        overlays: Dict[Tuple[float, float], object] = {}
        for page in writer.pages:
            size = (float(page.mediabox.width), float(page.mediabox.height))
            if size not in overlays:
                overlays[size] = PDFService._watermark_overlay(text, *size)
            page.merge_page(overlays[size])
        return PDFService.to_bytes(writer)

    @staticmethod
    def rotate_pdf(reader: PdfReader, degrees: int = ROTATION_DEGREES) -> bytes:
        """Set every page's rotation to ``degrees``, replacing any existing value."""
        writer = PdfWriter(clone_from=reader)
        for page in writer.pages:
            page.rotation = degrees
        return PDFService.to_bytes(writer)

    @staticmethod
    def split_pdf(reader: PdfReader) -> List[bytes]:
        """One single-page document per page, in page order."""
        documents = []
        for page in reader.pages:
            writer = PdfWriter()
            writer.add_page(page)
            documents.append(PDFService.to_bytes(writer))
        return documents

    @staticmethod
    def zip_pages(documents: Sequence[bytes]) -> bytes:
        """Archive documents as page_1.pdf ... page_N.pdf."""
        output = BytesIO()
        with zipfile.ZipFile(output, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for number, document in enumerate(documents, start=1):
                archive.writestr(f"page_{number}.pdf", document)
        return output.getvalue()

pdf_service = PDFService()
