#!/usr/bin/env python3
"""
Unit tests for the PyMuPDF page renderer.
"""

import io

import pytest

from docthumbs.exceptions import ConversionError
from docthumbs.services.thumbnail_pipeline.converters.pdf_image_converter import (
    PyMuPDFImageConverter,
)


@pytest.mark.unit
@pytest.mark.thumbnail
class TestPyMuPDFImageConverter:
    """Test suite for PyMuPDFImageConverter."""

    def test_renders_first_page_at_72_dpi(self, pdf_converter, pdf_bytes):
        image = pdf_converter.get_image_of_page(io.BytesIO(pdf_bytes), 0)
        assert image.mode == "RGB"
        assert image.size == (612, 792)

    def test_renders_requested_page(self, pdf_converter, build_pdf_bytes):
        data = build_pdf_bytes(pages=2, width=300, height=200)
        image = pdf_converter.get_image_of_page(io.BytesIO(data), 1)
        assert image.size == (300, 200)

    def test_accepts_file_path(self, pdf_converter, pdf_bytes, tmp_path):
        pdf_file = tmp_path / "doc.pdf"
        pdf_file.write_bytes(pdf_bytes)
        image = pdf_converter.get_image_of_page(pdf_file, 0)
        assert image.size == (612, 792)

    def test_stream_is_left_open(self, pdf_converter, pdf_bytes):
        stream = io.BytesIO(pdf_bytes)
        pdf_converter.get_image_of_page(stream, 0)
        assert not stream.closed

    def test_page_index_past_end(self, pdf_converter, multi_page_pdf_bytes):
        with pytest.raises(ConversionError) as exc_info:
            pdf_converter.get_image_of_page(io.BytesIO(multi_page_pdf_bytes), 3)
        assert exc_info.value.details["page_count"] == 3

    def test_negative_page_index(self, pdf_converter, pdf_bytes):
        with pytest.raises(ConversionError):
            pdf_converter.get_image_of_page(io.BytesIO(pdf_bytes), -1)

    def test_zero_byte_input(self, pdf_converter):
        with pytest.raises(ConversionError):
            pdf_converter.get_image_of_page(io.BytesIO(b""), 0)

    def test_undecodable_input(self, pdf_converter):
        with pytest.raises(ConversionError):
            pdf_converter.get_image_of_page(io.BytesIO(b"this is not a pdf at all"), 0)

    def test_enabled_flag(self):
        assert PyMuPDFImageConverter().is_enabled() is True
        assert PyMuPDFImageConverter(enabled=False).is_enabled() is False
