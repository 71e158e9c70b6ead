"""The seven document pipelines and the router that selects one per request.

Every pipeline takes the normalized uploads (in submission order) plus the
request parameters and returns exactly one ``PipelineResult``.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from pypdf import PdfReader
from starlette.concurrency import run_in_threadpool

from pdf_tool.core.errors import InvalidActionError, MalformedInputError, UnsupportedFileTypeError
from pdf_tool.schemas.pdf import (
    Action,
    ActionParameters,
    ArchiveResult,
    DocumentResult,
    PipelineResult,
    TextResult,
    UnparseablePolicy,
    UploadedFile,
)
from pdf_tool.services.conversion_service import conversion_service
from pdf_tool.services.external_tools import compress_pdf
from pdf_tool.services.ocr_service import ocr_service
from pdf_tool.services.pdf_service import pdf_service

logger = logging.getLogger(__name__)

PipelineHandler = Callable[[List[UploadedFile], ActionParameters], Awaitable[PipelineResult]]


async def compose_documents(
    documents: Sequence[Tuple[str, bytes]], policy: UnparseablePolicy
) -> bytes:
    """Concatenate PDFs page by page in the order given.

    Documents are parsed concurrently; pages are appended strictly in input
    order. With ``UnparseablePolicy.SKIP`` a document that fails to parse is
    left out, with ``FAIL`` it aborts the whole composition.
    """
    async def load(name: str, content: bytes) -> Optional[PdfReader]:
        try:
            return await run_in_threadpool(pdf_service.load_pdf, content, name)
        except MalformedInputError:
            if policy is UnparseablePolicy.SKIP:
                logger.info("Skipping non-PDF file %r", name)
                return None
            raise

    readers = await asyncio.gather(*(load(name, content) for name, content in documents))
    parsed = [reader for reader in readers if reader is not None]
    if not parsed:
        logger.warning("No parseable PDF among %d input(s); producing an empty document", len(documents))
    return await run_in_threadpool(pdf_service.merge_pdfs, parsed)


def _first(files: List[UploadedFile], action: Action) -> UploadedFile:
    if len(files) > 1:
        logger.debug("%s uses only the first of %d files", action.value, len(files))
    return files[0]


async def _load_first(files: List[UploadedFile], action: Action) -> PdfReader:
    file = _first(files, action)
    return await run_in_threadpool(pdf_service.load_pdf, file.content, file.original_name)


async def merge(files: List[UploadedFile], parameters: ActionParameters) -> PipelineResult:
    documents = [(f.original_name, f.content) for f in files]
    merged = await compose_documents(documents, UnparseablePolicy.SKIP)
    return DocumentResult(content=merged)


async def compress(files: List[UploadedFile], parameters: ActionParameters) -> PipelineResult:
    file = _first(files, Action.COMPRESS)
    return DocumentResult(content=await compress_pdf(file.content))


async def convert(files: List[UploadedFile], parameters: ActionParameters) -> PipelineResult:
    # All-or-nothing: reject before any conversion work starts.
    for file in files:
        if not conversion_service.is_supported(file.extension):
            raise UnsupportedFileTypeError(file.extension)

    converted = await asyncio.gather(*(conversion_service.to_pdf(f) for f in files))
    documents = [(f.original_name, pdf) for f, pdf in zip(files, converted)]
    combined = await compose_documents(documents, UnparseablePolicy.FAIL)
    return DocumentResult(content=combined)


async def watermark(files: List[UploadedFile], parameters: ActionParameters) -> PipelineResult:
    reader = await _load_first(files, Action.WATERMARK)
    stamped = await run_in_threadpool(pdf_service.watermark_pdf, reader, parameters.watermark_text)
    return DocumentResult(content=stamped)


async def ocr(files: List[UploadedFile], parameters: ActionParameters) -> PipelineResult:
    file = _first(files, Action.OCR)
    text = await run_in_threadpool(ocr_service.recognize, file.content)
    return TextResult(text=text)


async def split(files: List[UploadedFile], parameters: ActionParameters) -> PipelineResult:
    reader = await _load_first(files, Action.SPLIT)
    pages = await run_in_threadpool(pdf_service.split_pdf, reader)
    archive = await run_in_threadpool(pdf_service.zip_pages, pages)
    logger.info("Split document into %d page(s)", len(pages))
    return ArchiveResult(content=archive)


async def rotate(files: List[UploadedFile], parameters: ActionParameters) -> PipelineResult:
    reader = await _load_first(files, Action.ROTATE)
    rotated = await run_in_threadpool(pdf_service.rotate_pdf, reader)
    return DocumentResult(content=rotated)


PIPELINES: Dict[Action, PipelineHandler] = {
    Action.MERGE: merge,
    Action.COMPRESS: compress,
    Action.CONVERT: convert,
    Action.WATERMARK: watermark,
    Action.OCR: ocr,
    Action.SPLIT: split,
    Action.ROTATE: rotate,
}


def route(action: Optional[str]) -> PipelineHandler:
    """Look up the pipeline for ``action`` (exact, case-sensitive)."""
    try:
        return PIPELINES[Action(action)]
    except (ValueError, KeyError):
        raise InvalidActionError(action)
