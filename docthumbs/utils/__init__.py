"""
Utility functions for the thumbnail pipeline
"""

from .temp_file_manager import TempFileManager, delete_quietly
from .time_utils import elapsed_ms, start_timer, utc_now

__all__ = ["TempFileManager", "delete_quietly", "utc_now", "start_timer", "elapsed_ms"]
