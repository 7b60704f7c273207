#!/usr/bin/env python3
# tests/conftest.py
"""
Pytest configuration and shared fixtures for docthumbs tests.
"""

from pathlib import Path
from typing import List, Tuple

import fitz  # pymupdf
import pytest
from PIL import Image, ImageDraw

from docthumbs.config import ThumbnailSettings
from docthumbs.exceptions import ConversionError
from docthumbs.repository.memory import InMemoryContentRepository
from docthumbs.services.thumbnail_pipeline.converters.base import (
    DocumentConverter,
    VideoFrameExtractor,
)
from docthumbs.services.thumbnail_pipeline.converters.pdf_image_converter import (
    PyMuPDFImageConverter,
)
from docthumbs.services.thumbnail_pipeline.document_thumbnail_service import (
    DocumentThumbnailService,
)
from docthumbs.services.thumbnail_pipeline.services.pdf_normalizer import PdfNormalizer
from docthumbs.services.thumbnail_pipeline.services.thumbnail_store import (
    ThumbnailStoreWriter,
)
from docthumbs.services.thumbnail_pipeline.utils.thumbnail_utils import (
    parse_thumbnail_size,
)
from docthumbs.services.thumbnail_pipeline.video_thumbnail_service import (
    VideoThumbnailService,
)
from docthumbs.utils.temp_file_manager import TempFileManager

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def build_pdf(pages: int = 1, width: int = 612, height: int = 792) -> bytes:
    """Create a small PDF with a line of text on each page."""
    document = fitz.open()
    try:
        for index in range(pages):
            page = document.new_page(width=width, height=height)
            page.insert_text((72, 72), f"Page {index + 1}", fontsize=24)
        return document.tobytes()
    finally:
        document.close()


class FakeDocumentConverter(DocumentConverter):
    """Document converter producing a fixed PDF without an office suite."""

    def __init__(self, enabled: bool = True, pdf_bytes: bytes = None, fail: bool = False):
        self.enabled = enabled
        self.pdf_bytes = pdf_bytes if pdf_bytes is not None else build_pdf()
        self.fail = fail
        self.calls: List[Tuple[Path, str, str]] = []
        self.produced: List[Path] = []
        self.seen_input_exists = None

    def is_enabled(self) -> bool:
        return self.enabled

    def convert(self, in_file: Path, source_mime_type: str, target_mime_type: str) -> Path:
        self.calls.append((in_file, source_mime_type, target_mime_type))
        self.seen_input_exists = in_file.exists()
        if self.fail:
            raise ConversionError("converter exploded")
        out_file = in_file.with_name(in_file.name + ".converted.pdf")
        out_file.write_bytes(self.pdf_bytes)
        self.produced.append(out_file)
        return out_file


class FakeFrameExtractor(VideoFrameExtractor):
    """Frame extractor drawing a synthetic 16:9 frame instead of running ffmpeg."""

    def __init__(
        self,
        enabled: bool = True,
        frame_size: Tuple[int, int] = (1280, 720),
        fail: bool = False,
        temp_dir: Path = None,
    ):
        self.enabled = enabled
        self.frame_size = frame_size
        self.fail = fail
        self.temp_dir = temp_dir
        self.calls: List[Tuple[Path, Path, int, str]] = []
        self.video_bytes_seen: List[bytes] = []

    def is_enabled(self) -> bool:
        return self.enabled

    def generate_thumbnail(
        self, video_file: Path, output_file: Path, offset_seconds: int, thumbnail_size: str
    ) -> bool:
        self.calls.append((video_file, output_file, offset_seconds, thumbnail_size))
        self.video_bytes_seen.append(Path(video_file).read_bytes())
        if self.fail:
            raise ConversionError(f"No frame at {offset_seconds}s")

        frame = Image.new("RGB", self.frame_size, color="navy")
        frame.thumbnail(parse_thumbnail_size(thumbnail_size), Image.Resampling.LANCZOS)
        frame.save(output_file, "JPEG")
        return True

    def generate_thumbnail_file(
        self, video_file: Path, offset_seconds: int, thumbnail_size: str
    ) -> Path:
        output_file = Path(self.temp_dir) / f"frame-{len(self.calls)}.jpg"
        self.generate_thumbnail(video_file, output_file, offset_seconds, thumbnail_size)
        return output_file


@pytest.fixture
def make_settings():
    """Factory for isolated settings (no .env file), with field overrides."""

    def _make(**overrides) -> ThumbnailSettings:
        return ThumbnailSettings(_env_file=None, **overrides)

    return _make


@pytest.fixture
def thumbnail_settings(make_settings):
    """Settings generating inline PNG thumbnails."""
    return make_settings(use_background_job=False)


@pytest.fixture
def repository():
    """Provide a fresh in-memory content repository."""
    return InMemoryContentRepository()


@pytest.fixture
def temp_dir(tmp_path):
    """Private temp directory so leaked files can be detected."""
    directory = tmp_path / "scratch"
    directory.mkdir()
    return directory


@pytest.fixture
def temp_file_manager(temp_dir):
    return TempFileManager(temp_dir)


@pytest.fixture
def pdf_bytes():
    """A one page US letter PDF."""
    return build_pdf()


@pytest.fixture
def multi_page_pdf_bytes():
    """A three page PDF."""
    return build_pdf(pages=3)


@pytest.fixture
def sample_image():
    """A landscape RGB image with some content."""
    img = Image.new("RGB", (800, 400), color="skyblue")
    draw = ImageDraw.Draw(img)
    draw.rectangle([100, 100, 700, 300], fill="lightgreen")
    return img


@pytest.fixture
def pdf_converter():
    return PyMuPDFImageConverter()


@pytest.fixture
def document_converter():
    return FakeDocumentConverter()


@pytest.fixture
def frame_extractor(temp_dir):
    return FakeFrameExtractor(temp_dir=temp_dir)


@pytest.fixture
def store():
    return ThumbnailStoreWriter()


@pytest.fixture
def pdf_node(repository, pdf_bytes):
    return repository.create_file("/files/report.pdf", pdf_bytes, "application/pdf")


@pytest.fixture
def docx_node(repository):
    return repository.create_file("/files/letter.docx", b"PK\x03\x04 fake docx", DOCX_MIME_TYPE)


@pytest.fixture
def video_node(repository):
    return repository.create_file("/files/clip.mp4", b"\x00\x00\x00\x18ftypmp42 fake", "video/mp4")


@pytest.fixture
def make_document_converter():
    """Factory for fake document converters (enabled, pdf_bytes, fail)."""
    return FakeDocumentConverter


@pytest.fixture
def make_frame_extractor(temp_dir):
    """Factory for fake frame extractors (enabled, frame_size, fail)."""

    def _make(**kwargs) -> FakeFrameExtractor:
        kwargs.setdefault("temp_dir", temp_dir)
        return FakeFrameExtractor(**kwargs)

    return _make


@pytest.fixture
def build_pdf_bytes():
    """Factory for generated PDFs (pages, width, height)."""
    return build_pdf


@pytest.fixture
def document_service(thumbnail_settings, pdf_converter, document_converter, temp_file_manager):
    """Document thumbnail service with real PDF rendering and a fake office converter."""
    return DocumentThumbnailService(
        thumbnail_settings,
        pdf_converter,
        PdfNormalizer(document_converter, temp_file_manager),
        ThumbnailStoreWriter(),
    )


@pytest.fixture
def video_service(thumbnail_settings, frame_extractor, temp_file_manager):
    """Video thumbnail service with a fake frame extractor."""
    return VideoThumbnailService(
        thumbnail_settings, frame_extractor, ThumbnailStoreWriter(), temp_file_manager
    )
