# docthumbs/services/thumbnail_pipeline/converters/ffmpeg_frame_extractor.py
"""
FFmpeg video frame extractor.

Seeks to an offset, grabs one frame and writes it as JPEG fitted into a
WxH box.
"""

import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

from ....constants import DEFAULT_CONVERSION_TIMEOUT_SECONDS, TEMP_PREFIX_VIDEO_FRAME
from ....enums import LoggerName, LogSource
from ....exceptions import ConversionError, InvalidThumbnailSizeError
from ....services.logger import get_service_logger
from ....utils.temp_file_manager import TempFileManager, delete_quietly
from ....utils.time_utils import elapsed_ms, start_timer
from ..utils.thumbnail_utils import parse_thumbnail_size
from .base import VideoFrameExtractor

logger = get_service_logger(LoggerName.FFMPEG, LogSource.CONVERTER)


def build_frame_command(
    ffmpeg_path: str,
    video_file: Path,
    output_file: Path,
    offset_seconds: int,
    size: Tuple[int, int],
) -> List[str]:
    """
    Build the FFmpeg command extracting a single frame.

    Input seeking (-ss before -i) keeps extraction fast on long videos. The
    box is capped at the source resolution so small videos are never enlarged.
    """
    width, height = size
    return [
        ffmpeg_path,
        "-y",
        "-loglevel",
        "error",
        "-ss",
        str(offset_seconds),
        "-i",
        str(video_file),
        "-frames:v",
        "1",
        "-vf",
        f"scale='min({width},iw)':'min({height},ih)':force_original_aspect_ratio=decrease",
        "-q:v",
        "2",
        "-f",
        "image2",
        str(output_file),
    ]


class FFmpegFrameExtractor(VideoFrameExtractor):
    """Video frame extractor backed by the ffmpeg command line tool."""

    def __init__(
        self,
        ffmpeg_path: str = "ffmpeg",
        enabled: bool = True,
        timeout_seconds: int = DEFAULT_CONVERSION_TIMEOUT_SECONDS,
        temp_file_manager: Optional[TempFileManager] = None,
    ):
        self.ffmpeg_path = ffmpeg_path
        self.enabled = enabled
        self.timeout_seconds = timeout_seconds
        self.temp_file_manager = temp_file_manager or TempFileManager()
        self._executable: Optional[str] = None
        self._executable_resolved = False

    def is_enabled(self) -> bool:
        return self.enabled and self._resolve_executable() is not None

    def _resolve_executable(self) -> Optional[str]:
        if not self._executable_resolved:
            self._executable_resolved = True
            self._executable = shutil.which(self.ffmpeg_path)
            if self._executable is None:
                logger.warning(
                    f"FFmpeg executable '{self.ffmpeg_path}' not found, video thumbnails unavailable"
                )
        return self._executable

    def generate_thumbnail(
        self,
        video_file: Path,
        output_file: Path,
        offset_seconds: int,
        thumbnail_size: str,
    ) -> bool:
        if offset_seconds < 0:
            raise ConversionError(f"Frame offset must not be negative, got {offset_seconds}")
        try:
            size = parse_thumbnail_size(thumbnail_size)
        except InvalidThumbnailSizeError as e:
            raise ConversionError(str(e)) from e

        output_file = Path(output_file)
        cmd = build_frame_command(
            self._resolve_executable() or self.ffmpeg_path,
            Path(video_file),
            output_file,
            offset_seconds,
            size,
        )
        logger.debug(f"Executing FFmpeg command: {' '.join(cmd)}")

        timer = start_timer()
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ConversionError(
                f"FFmpeg frame extraction timed out after {self.timeout_seconds} seconds"
            ) from e
        except OSError as e:
            raise ConversionError(f"Failed to start FFmpeg: {e}") from e

        if result.returncode != 0:
            raise ConversionError(
                f"FFmpeg failed with code {result.returncode}: {result.stderr.strip()}",
                details={"offset_seconds": offset_seconds},
            )

        # ffmpeg exits 0 without writing a frame when seeking past the end
        if not output_file.is_file() or output_file.stat().st_size == 0:
            raise ConversionError(
                f"No frame at {offset_seconds}s, offset may be past the end of the video",
                details={"offset_seconds": offset_seconds},
            )

        logger.debug(
            f"Extracted frame at {offset_seconds}s in {elapsed_ms(timer)} ms"
        )
        return True

    def generate_thumbnail_file(
        self, video_file: Path, offset_seconds: int, thumbnail_size: str
    ) -> Path:
        output_file = self.temp_file_manager.create_temp_path(
            TEMP_PREFIX_VIDEO_FRAME, ".jpg"
        )
        try:
            self.generate_thumbnail(video_file, output_file, offset_seconds, thumbnail_size)
        except Exception:
            delete_quietly(output_file)
            raise
        return output_file
