from fastapi import APIRouter, Depends, File as FileParam, Form, HTTPException, Request, UploadFile, status
from typing import List, Optional
import logging

from pdf_tool.api.responses import encode_result
from pdf_tool.schemas.pdf import ActionParameters, ActionRequest, MessageResponse, OCRResponse
from pdf_tool.services.pipelines import route
from pdf_tool.services.uploads import normalize_uploads

logger = logging.getLogger(__name__)

router = APIRouter(tags=["PDF Tool"])


def require_multipart(request: Request) -> None:
    content_type = request.headers.get("content-type", "")
    if not content_type.lower().startswith("multipart/form-data"):
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Unsupported media type",
        )


@router.post(
    "/pdf-tool",
    dependencies=[Depends(require_multipart)],
    responses={
        200: {
            "content": {
                "application/pdf": {},
                "application/zip": {},
                "application/json": {"schema": OCRResponse.model_json_schema()},
            },
            "description": "Processed document, page archive, or recognized text",
        },
        400: {"model": MessageResponse},
        405: {"model": MessageResponse},
        500: {"model": MessageResponse},
    },
)
async def process_documents(
    action: Optional[str] = Form(None),
    watermark: str = Form(""),
    files: Optional[List[UploadFile]] = FileParam(None),
):
    # Route before touching the uploads so a bad action has no side effects.
    handler = route(action)

    uploads = await normalize_uploads(files)
    request = ActionRequest(
        action=action,
        parameters=ActionParameters(watermark_text=watermark),
        files=uploads,
    )
    logger.info(
        "Running %s on %d file(s): %s",
        request.action.value, len(request.files), [f.original_name for f in request.files],
    )

    result = await handler(request.files, request.parameters)
    return encode_result(result)
