"""Map pipeline results and errors onto HTTP responses."""
import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from pdf_tool.core.errors import PDFToolError, PipelineError
from pdf_tool.schemas.pdf import (
    ArchiveResult,
    DocumentResult,
    MessageResponse,
    OCRResponse,
    PipelineResult,
    TextResult,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def message_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=MessageResponse(message=message).model_dump())


def encode_result(result: PipelineResult) -> Response:
    if isinstance(result, TextResult):
        return JSONResponse(content=OCRResponse(text=result.text).model_dump())
    if isinstance(result, ArchiveResult):
        return Response(
            content=result.content,
            media_type=result.media_type,
            headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
        )
    if isinstance(result, DocumentResult):
        return Response(content=result.content, media_type=result.media_type)
    raise TypeError(f"Unknown pipeline result: {type(result).__name__}")


async def pdf_tool_error_handler(request: Request, exc: PDFToolError) -> JSONResponse:
    if exc.status_code >= 500:
        kind = exc.kind.value if isinstance(exc, PipelineError) else "unknown"
        logger.error(
            "Request failed | path=%s kind=%s error=%s",
            request.url.path, kind, exc.message, exc_info=exc,
        )
        return message_response(exc.status_code, INTERNAL_ERROR_MESSAGE)

    logger.warning("Rejected request | path=%s error=%s", request.url.path, exc.message)
    return message_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Method not allowed"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=MessageResponse(message=message).model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception | path=%s", request.url.path)
    return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)
