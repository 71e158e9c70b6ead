import asyncio
import logging
from typing import List, Optional, Sequence, Union

from fastapi import UploadFile

from pdf_tool.core.config import settings
from pdf_tool.core.errors import MalformedInputError
from pdf_tool.schemas.pdf import UploadedFile

logger = logging.getLogger(__name__)


async def _read_upload(upload: UploadFile) -> UploadedFile:
    content = await upload.read()
    await upload.close()
    if len(content) > settings.MAX_FILE_SIZE_BYTES:
        raise MalformedInputError(f"File too large: {upload.filename}")
    return UploadedFile(content=content, original_name=upload.filename or "")


async def normalize_uploads(
    files: Optional[Union[UploadFile, Sequence[UploadFile]]],
) -> List[UploadedFile]:
    """Read every uploaded part into memory, preserving submission order.

    A lone upload is wrapped into a one-element list so nothing downstream
    has to care whether one or many files were sent.
    """
    if files is None:
        raise MalformedInputError("No files uploaded")
    if not isinstance(files, (list, tuple)):
        files = [files]
    if not files:
        raise MalformedInputError("No files uploaded")

    uploaded = await asyncio.gather(*(_read_upload(f) for f in files))
    logger.debug("Read %d uploaded file(s): %s", len(uploaded), [f.original_name for f in uploaded])
    return list(uploaded)
