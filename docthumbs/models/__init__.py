from .shared_models import DeferredThumbnailJob, ThumbnailGenerationResult

__all__ = ["DeferredThumbnailJob", "ThumbnailGenerationResult"]
