"""Command-line tools the pipelines shell out to (Ghostscript, LibreOffice).

Each call gets its own temporary directory so concurrent requests never share
a path, and the directory is removed on every exit path.
"""
import asyncio
import logging
import shutil
import tempfile
from pathlib import Path
from typing import List

from pdf_tool.core.config import settings
from pdf_tool.core.errors import ExternalToolError

logger = logging.getLogger(__name__)

GHOSTSCRIPT_FLAGS = [
    "-sDEVICE=pdfwrite",
    "-dCompatibilityLevel=1.4",
    "-dPDFSETTINGS=/screen",
    "-dNOPAUSE",
    "-dQUIET",
    "-dBATCH",
]


async def run_tool(tool: str, args: List[str], timeout: float) -> None:
    """Run ``args`` once and raise ``ExternalToolError`` unless it exits 0."""
    executable = shutil.which(args[0])
    if executable is None:
        raise ExternalToolError(tool, f"executable not found: {args[0]}")

    logger.debug("Running %s: %s", tool, " ".join(args))
    process = await asyncio.create_subprocess_exec(
        executable,
        *args[1:],
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        raise ExternalToolError(tool, f"timed out after {timeout:g}s")
    finally:
        # Timeout or cancellation: never leave the child running.
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()

    if process.returncode != 0:
        detail = (stderr or stdout or b"").decode("utf-8", errors="replace").strip()
        raise ExternalToolError(tool, f"exited with status {process.returncode}: {detail}")


async def compress_pdf(content: bytes) -> bytes:
    """Rewrite a PDF through Ghostscript with the lossy ``/screen`` preset."""
    with tempfile.TemporaryDirectory(prefix="pdf_tool_compress_") as workdir:
        input_path = Path(workdir) / "input.pdf"
        output_path = Path(workdir) / "compressed.pdf"
        input_path.write_bytes(content)

        await run_tool(
            "ghostscript",
            [
                settings.GHOSTSCRIPT_BINARY,
                *GHOSTSCRIPT_FLAGS,
                f"-sOutputFile={output_path}",
                str(input_path),
            ],
            timeout=settings.TOOL_TIMEOUT_SECONDS,
        )
        if not output_path.exists():
            raise ExternalToolError("ghostscript", "produced no output")

        compressed = output_path.read_bytes()

    logger.info("Compressed PDF from %d to %d bytes", len(content), len(compressed))
    return compressed


async def office_to_pdf(content: bytes, extension: str) -> bytes:
    """Convert an office document to PDF with headless LibreOffice."""
    with tempfile.TemporaryDirectory(prefix="pdf_tool_office_") as workdir:
        input_path = Path(workdir) / f"document{extension}"
        input_path.write_bytes(content)

        # LibreOffice refuses to start when another instance holds the same
        # profile, so each conversion gets a private one.
        profile_dir = Path(workdir) / "profile"
        await run_tool(
            "libreoffice",
            [
                settings.LIBREOFFICE_BINARY,
                f"-env:UserInstallation={profile_dir.as_uri()}",
                "--headless",
                "--convert-to",
                "pdf",
                "--outdir",
                workdir,
                str(input_path),
            ],
            timeout=settings.TOOL_TIMEOUT_SECONDS,
        )

        output_path = Path(workdir) / "document.pdf"
        if not output_path.exists():
            raise ExternalToolError("libreoffice", "produced no output")
        return output_path.read_bytes()
