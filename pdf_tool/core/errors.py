"""Error taxonomy for the PDF tool endpoint.

Every error carries the HTTP status it maps to. Pipeline failures also carry
an ``ErrorKind`` so they can be logged by category.
"""
from enum import Enum


class ErrorKind(str, Enum):
    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
    EXTERNAL_TOOL_FAILURE = "external_tool_failure"
    MALFORMED_INPUT = "malformed_input"


class PDFToolError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidActionError(PDFToolError):
    """Raised by the action router for an unknown or missing action."""
    status_code = 400

    def __init__(self, action=None):
        super().__init__("Invalid action")
        self.action = action


class PipelineError(PDFToolError):
    kind: ErrorKind


class MalformedInputError(PipelineError):
    kind = ErrorKind.MALFORMED_INPUT
    status_code = 400


class UnsupportedFileTypeError(PipelineError):
    kind = ErrorKind.UNSUPPORTED_FILE_TYPE
    status_code = 400

    def __init__(self, extension: str):
        super().__init__(f"Unsupported file type: {extension or '(none)'}")
        self.extension = extension


class ExternalToolError(PipelineError):
    kind = ErrorKind.EXTERNAL_TOOL_FAILURE
    status_code = 500

    def __init__(self, tool: str, message: str):
        super().__init__(f"{tool}: {message}")
        self.tool = tool
