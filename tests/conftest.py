"""
Pytest configuration and fixtures for the PDF tool tests.

Documents are generated on the fly with pypdf and Pillow. Every page of a
generated PDF gets a distinct width so tests can tell pages apart after
merging, splitting or reordering.
"""

import os
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from pypdf import PdfReader, PdfWriter

os.environ.setdefault("LOG_LEVEL", "DEBUG")

from pdf_tool.main import app


def make_pdf(*widths, height=792, rotation=0):
    """Build a PDF with one blank page per width given."""
    writer = PdfWriter()
    for width in widths or (612,):
        page = writer.add_blank_page(width=width, height=height)
        if rotation:
            page.rotation = rotation
    output = BytesIO()
    writer.write(output)
    return output.getvalue()


def make_image(size=(120, 80), mode="RGB", fmt="PNG"):
    color = (200, 30, 30, 128) if mode == "RGBA" else (200, 30, 30)
    output = BytesIO()
    Image.new(mode, size, color).save(output, format=fmt)
    return output.getvalue()


def page_widths(content):
    return [float(page.mediabox.width) for page in PdfReader(BytesIO(content)).pages]


@pytest.fixture
def client():
    """Test client that turns unhandled errors into 500 responses."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def sample_pdf():
    return make_pdf(300, 400, 500)


@pytest.fixture
def sample_png():
    return make_image()
