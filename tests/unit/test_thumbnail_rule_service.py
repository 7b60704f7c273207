#!/usr/bin/env python3
"""
Unit tests for ThumbnailRuleService, the rule-engine entry point.
"""

from unittest.mock import MagicMock, patch

import pytest

from docthumbs.enums import ThumbnailJobType
from docthumbs.exceptions import SchedulingError
from docthumbs.models.shared_models import DeferredThumbnailJob
from docthumbs.repository.exceptions import RepositoryOperationError
from docthumbs.services.scheduling.job_queue_service import (
    EndOfRequestJobQueue,
    ThumbnailJobScheduler,
)
from docthumbs.services.thumbnail_pipeline.thumbnail_rule_service import (
    ThumbnailRuleService,
)


@pytest.mark.unit
@pytest.mark.scheduler
class TestThumbnailRuleService:
    """Test suite for inline and deferred thumbnail requests."""

    @pytest.fixture
    def scheduler(self):
        return MagicMock(spec=ThumbnailJobScheduler)

    @pytest.fixture
    def deferred_settings(self, make_settings):
        return make_settings(use_background_job=True)

    @pytest.fixture
    def inline_rules(self, thumbnail_settings, document_service, video_service):
        return ThumbnailRuleService(thumbnail_settings, document_service, video_service)

    @pytest.fixture
    def deferred_rules(self, deferred_settings, document_service, video_service, scheduler):
        return ThumbnailRuleService(
            deferred_settings, document_service, video_service, scheduler
        )

    # ============================================================================
    # ENABLEMENT
    # ============================================================================

    def test_is_enabled(self, inline_rules, thumbnail_settings):
        assert inline_rules.is_enabled() is True
        assert ThumbnailRuleService(thumbnail_settings).is_enabled() is False

    def test_missing_service_is_a_no_op(self, thumbnail_settings, pdf_node, video_node):
        rules = ThumbnailRuleService(thumbnail_settings)
        rules.request_document_thumbnail(pdf_node, "thumbnail", 150)
        rules.request_video_thumbnail(video_node, "thumbnail", 5, "320x240")
        assert pdf_node.get_child("thumbnail") is None
        assert video_node.get_child("thumbnail") is None

    # ============================================================================
    # INLINE MODE
    # ============================================================================

    def test_inline_document_request(self, inline_rules, pdf_node):
        inline_rules.request_document_thumbnail(pdf_node, "thumbnail", 150)
        assert pdf_node.get_child("thumbnail") is not None

    def test_inline_video_request(self, inline_rules, video_node, frame_extractor):
        inline_rules.request_video_thumbnail(video_node, "thumbnail", 5, "320x240")
        assert video_node.get_child("thumbnail") is not None
        assert frame_extractor.calls[0][2] == 5

    def test_background_without_scheduler_runs_inline(
        self, deferred_settings, document_service, pdf_node
    ):
        rules = ThumbnailRuleService(deferred_settings, document_service)
        assert rules.use_background_job is False
        rules.request_document_thumbnail(pdf_node, "thumbnail", 150)
        assert pdf_node.get_child("thumbnail") is not None

    def test_unsupported_node_is_skipped(self, deferred_rules, scheduler, repository):
        node = repository.create_file("/files/photo.png", b"png", "image/png")
        deferred_rules.request_document_thumbnail(node, "thumbnail", 150)
        scheduler.schedule_at_end_of_request.assert_not_called()

    # ============================================================================
    # DEFERRED MODE
    # ============================================================================

    def test_deferred_document_request(self, deferred_rules, scheduler, pdf_node):
        deferred_rules.request_document_thumbnail(pdf_node, "thumbnail", 150)

        scheduler.schedule_at_end_of_request.assert_called_once()
        job = scheduler.schedule_at_end_of_request.call_args.args[0]
        assert isinstance(job, DeferredThumbnailJob)
        assert job.job_type == ThumbnailJobType.DOCUMENT
        assert job.node_identifier == pdf_node.identifier
        assert job.workspace == pdf_node.workspace
        assert job.thumbnail_name == "thumbnail"
        assert job.thumbnail_size == 150
        assert pdf_node.get_child("thumbnail") is None

    def test_deferred_video_request(self, deferred_rules, scheduler, video_node):
        deferred_rules.request_video_thumbnail(video_node, "thumbnail", 5, "320x240")

        job = scheduler.schedule_at_end_of_request.call_args.args[0]
        assert job.job_type == ThumbnailJobType.VIDEO
        assert job.offset_seconds == 5
        assert job.thumbnail_size == "320x240"

    def test_disabled_service_schedules_nothing(
        self, make_settings, document_service, scheduler, pdf_node
    ):
        settings = make_settings(use_background_job=True)
        document_service.settings = make_settings(document_thumbnails_enabled=False)
        rules = ThumbnailRuleService(settings, document_service, scheduler=scheduler)
        rules.request_document_thumbnail(pdf_node, "thumbnail", 150)
        scheduler.schedule_at_end_of_request.assert_not_called()

    def test_one_job_per_node_and_name_per_request(
        self, deferred_settings, document_service, video_service, pdf_node
    ):
        dispatcher = MagicMock()
        queue = EndOfRequestJobQueue(dispatcher)
        rules = ThumbnailRuleService(deferred_settings, document_service, video_service, queue)

        with queue.request_scope():
            rules.request_document_thumbnail(pdf_node, "thumbnail", 150)
            rules.request_document_thumbnail(pdf_node, "thumbnail", 200)
            rules.request_document_thumbnail(pdf_node, "thumbnail2", 300)
            dispatcher.dispatch.assert_not_called()

        dispatched = [c.args[0] for c in dispatcher.dispatch.call_args_list]
        assert [(job.thumbnail_name, job.thumbnail_size) for job in dispatched] == [
            ("thumbnail", 200),
            ("thumbnail2", 300),
        ]

    # ============================================================================
    # ERROR SWALLOWING
    # ============================================================================

    def test_scheduling_errors_do_not_propagate(self, deferred_rules, scheduler, pdf_node):
        scheduler.schedule_at_end_of_request.side_effect = SchedulingError("scheduler down")
        deferred_rules.request_document_thumbnail(pdf_node, "thumbnail", 150)

    def test_repository_errors_do_not_propagate(self, inline_rules, document_service, pdf_node):
        with patch.object(
            document_service, "create_thumbnail", side_effect=RepositoryOperationError("boom")
        ):
            inline_rules.request_document_thumbnail(pdf_node, "thumbnail", 150)

    def test_gate_errors_do_not_propagate(self, inline_rules, video_service, video_node):
        with patch.object(video_service, "can_handle", side_effect=RuntimeError("broken")):
            inline_rules.request_video_thumbnail(video_node, "thumbnail", 5, "320x240")
