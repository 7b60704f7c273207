# docthumbs/exceptions.py
"""
Custom exceptions for the thumbnail pipeline.

Centralized location for all custom exception classes to avoid
duplicating exception definitions across modules. Repository failures have
their own hierarchy in ``docthumbs.repository.exceptions``.
"""

from typing import Any, Dict, Optional


class DocThumbsError(Exception):
    """Base exception for all pipeline-specific errors."""

    pass


class ThumbnailGenerationError(DocThumbsError):
    """
    A thumbnail could not be produced for a content node.

    Carries the path of the node being processed so the failure can be traced
    back to the source item in the logs.
    """

    def __init__(
        self,
        message: str,
        node_path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.node_path = node_path
        self.details = details or {}

    def __str__(self):
        if self.node_path:
            return f"{super().__str__()} (node: {self.node_path})"
        return super().__str__()


class ConversionError(ThumbnailGenerationError):
    """An external conversion engine failed or produced no usable output."""

    pass


class InvalidThumbnailSizeError(DocThumbsError, ValueError):
    """Custom exception for malformed or non-positive thumbnail sizes."""

    pass


class SchedulingError(DocThumbsError):
    """Custom exception for deferred job scheduling failures."""

    pass


class ConfigurationError(DocThumbsError):
    """Custom exception for configuration and validation errors."""

    pass
