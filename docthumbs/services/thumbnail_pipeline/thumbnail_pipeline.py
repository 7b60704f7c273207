# docthumbs/services/thumbnail_pipeline/thumbnail_pipeline.py
"""
Main Thumbnail Pipeline Class

Wires converters, services, the job queue and the worker together from one
ThumbnailSettings instance, with every collaborator replaceable through
dependency injection.
"""

from typing import Optional

from apscheduler.schedulers.base import BaseScheduler

from ...config import ThumbnailSettings
from ...config import settings as default_settings
from ...enums import LogEmoji, LoggerName, LogSource
from ...exceptions import ConfigurationError
from ...repository.base import ContentRepository
from ...repository.memory import InMemoryContentRepository
from ...services.logger import configure_logging, get_service_logger
from ...utils.temp_file_manager import TempFileManager
from ...workers.thumbnail_worker import ThumbnailWorker
from ..scheduling.job_queue_service import (
    APSchedulerJobDispatcher,
    EndOfRequestJobQueue,
    InlineJobDispatcher,
    JobDispatcher,
)
from .converters.base import DocumentConverter, PDFImageConverter, VideoFrameExtractor
from .converters.ffmpeg_frame_extractor import FFmpegFrameExtractor
from .converters.libreoffice_converter import LibreOfficeConverter
from .converters.pdf_image_converter import PyMuPDFImageConverter
from .document_thumbnail_service import DocumentThumbnailService
from .services.pdf_normalizer import PdfNormalizer
from .services.thumbnail_store import ThumbnailStoreWriter
from .thumbnail_rule_service import ThumbnailRuleService
from .video_thumbnail_service import VideoThumbnailService

logger = get_service_logger(
    LoggerName.THUMBNAIL_PIPELINE, LogSource.PIPELINE, LogEmoji.THUMBNAIL
)


class ThumbnailPipeline:
    """
    Main thumbnail pipeline providing unified access to all thumbnail
    functionality.

    Attributes:
        rule_service: Entry point for rule-engine triggers
        job_queue: End-of-request job queue (use request_scope() per request)
        document_service / video_service: Generation orchestrators
        worker: Executes deferred jobs
    """

    def __init__(
        self,
        settings: ThumbnailSettings,
        repository: ContentRepository,
        document_converter: Optional[DocumentConverter] = None,
        pdf_converter: Optional[PDFImageConverter] = None,
        frame_extractor: Optional[VideoFrameExtractor] = None,
        dispatcher: Optional[JobDispatcher] = None,
        temp_file_manager: Optional[TempFileManager] = None,
    ):
        """
        Initialize thumbnail pipeline with dependency injection.

        Args:
            settings: Pipeline configuration
            repository: Content repository deferred jobs resolve nodes from
            document_converter: Document-to-PDF engine (None disables conversion)
            pdf_converter: PDF page renderer (None disables document thumbnails)
            frame_extractor: Video frame engine (None disables video thumbnails)
            dispatcher: Where deferred jobs go; defaults to inline execution
            temp_file_manager: Temporary file manager shared by all components
        """
        self.settings = settings
        self.repository = repository
        self.temp_file_manager = temp_file_manager or TempFileManager(settings.temp_path)

        self.document_converter = document_converter
        self.pdf_converter = pdf_converter
        self.frame_extractor = frame_extractor

        self.store = ThumbnailStoreWriter(
            image_format=settings.thumbnail_image_format,
            jpeg_quality=settings.jpeg_quality,
        )
        self.normalizer = PdfNormalizer(document_converter, self.temp_file_manager)
        self.document_service = DocumentThumbnailService(
            settings, pdf_converter, self.normalizer, self.store
        )
        self.video_service = VideoThumbnailService(
            settings, frame_extractor, self.store, self.temp_file_manager
        )
        self.worker = ThumbnailWorker(
            repository, self.document_service, self.video_service
        )
        self.job_queue = EndOfRequestJobQueue(
            dispatcher or InlineJobDispatcher(self.worker)
        )
        self.rule_service = ThumbnailRuleService(
            settings, self.document_service, self.video_service, self.job_queue
        )

        logger.debug(
            "ThumbnailPipeline initialized",
            extra_context={
                "document_thumbnails": self.document_service.is_enabled(),
                "video_thumbnails": self.video_service.is_enabled(),
                "document_conversion": self.normalizer.is_enabled(),
                "background_jobs": self.rule_service.use_background_job,
            },
        )

    def get_status(self):
        """Pipeline and worker status for health reporting."""
        return {
            "document_thumbnails_enabled": self.document_service.is_enabled(),
            "video_thumbnails_enabled": self.video_service.is_enabled(),
            "document_conversion_enabled": self.normalizer.is_enabled(),
            "use_background_job": self.rule_service.use_background_job,
            "worker": self.worker.get_status(),
        }


def create_thumbnail_pipeline(
    settings: Optional[ThumbnailSettings] = None,
    repository: Optional[ContentRepository] = None,
    scheduler: Optional[BaseScheduler] = None,
    setup_logging: bool = True,
) -> ThumbnailPipeline:
    """
    Factory function to create a thumbnail pipeline with the stock engines.

    Engines are constructed from configuration; one that is switched off
    stays in place and reports itself disabled.

    Args:
        settings: Pipeline configuration (defaults to the global settings)
        repository: Content repository (defaults to a new in-memory repository)
        scheduler: APScheduler scheduler for deferred jobs; jobs run inline
            at the end of the request when omitted
        setup_logging: Install log sinks from settings.log_level and
            settings.log_file (replaces existing loguru sinks)

    Returns:
        Configured ThumbnailPipeline instance

    Raises:
        ConfigurationError: if the temporary directory cannot be created
    """
    settings = settings or default_settings
    if setup_logging:
        configure_logging(settings.log_level, settings.log_file)
    repository = repository if repository is not None else InMemoryContentRepository()
    try:
        temp_file_manager = TempFileManager(settings.temp_path)
    except OSError as e:
        raise ConfigurationError(
            f"Temporary directory {settings.temp_directory} is not usable: {e}"
        ) from e

    document_converter = LibreOfficeConverter(
        soffice_path=settings.soffice_path,
        enabled=settings.document_converter_enabled,
        timeout_seconds=settings.conversion_timeout_seconds,
        temp_file_manager=temp_file_manager,
    )
    pdf_converter = PyMuPDFImageConverter(enabled=settings.pdf_renderer_enabled)
    frame_extractor = FFmpegFrameExtractor(
        ffmpeg_path=settings.ffmpeg_path,
        enabled=settings.ffmpeg_enabled,
        timeout_seconds=settings.conversion_timeout_seconds,
        temp_file_manager=temp_file_manager,
    )

    pipeline = ThumbnailPipeline(
        settings,
        repository,
        document_converter=document_converter,
        pdf_converter=pdf_converter,
        frame_extractor=frame_extractor,
        temp_file_manager=temp_file_manager,
    )
    if scheduler is not None:
        pipeline.job_queue.dispatcher = APSchedulerJobDispatcher(scheduler, pipeline.worker)
    return pipeline
