from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Literal, Union
import os


def file_extension(filename: str) -> str:
    """Lowercase extension with its leading dot, or "" when there is none."""
    return os.path.splitext(filename or "")[1].lower()


class Action(str, Enum):
    MERGE = "merge"
    COMPRESS = "compress"
    CONVERT = "convert"
    WATERMARK = "watermark"
    OCR = "ocr"
    SPLIT = "split"
    ROTATE = "rotate"


class UnparseablePolicy(str, Enum):
    """What a multi-document pipeline does with an input that is not a PDF."""
    SKIP = "skip"
    FAIL = "fail"


class UploadedFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: bytes
    original_name: str = ""
    extension: str = ""

    @model_validator(mode="before")
    @classmethod
    def derive_extension(cls, data):
        if isinstance(data, dict) and not data.get("extension"):
            data = {**data, "extension": file_extension(data.get("original_name", ""))}
        return data


class ActionParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    watermark_text: str = ""


class ActionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: Action
    parameters: ActionParameters = Field(default_factory=ActionParameters)
    files: List[UploadedFile] = Field(..., min_length=1)


class DocumentResult(BaseModel):
    kind: Literal["document"] = "document"
    content: bytes
    media_type: str = "application/pdf"


class ArchiveResult(BaseModel):
    kind: Literal["archive"] = "archive"
    content: bytes
    media_type: str = "application/zip"
    filename: str = "split_pages.zip"


class TextResult(BaseModel):
    kind: Literal["text"] = "text"
    text: str


PipelineResult = Union[DocumentResult, ArchiveResult, TextResult]


class MessageResponse(BaseModel):
    message: str


class OCRResponse(BaseModel):
    text: str
