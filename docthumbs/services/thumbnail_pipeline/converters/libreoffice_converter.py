# docthumbs/services/thumbnail_pipeline/converters/libreoffice_converter.py
"""
LibreOffice document converter.

Runs ``soffice --headless --convert-to`` in a private output directory and
hands the produced file back to the caller.
"""

import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

from ....constants import (
    DEFAULT_CONVERSION_TIMEOUT_SECONDS,
    PDF_MIME_TYPE,
    TEMP_PREFIX_PDF_OUTPUT,
)
from ....enums import LoggerName, LogSource
from ....exceptions import ConversionError
from ....services.logger import get_service_logger
from ....utils.temp_file_manager import TempFileManager
from ....utils.time_utils import elapsed_ms, start_timer
from .base import DocumentConverter

logger = get_service_logger(LoggerName.DOCUMENT_CONVERTER, LogSource.CONVERTER)

# soffice --convert-to filter per target mime type
TARGET_FORMATS = {PDF_MIME_TYPE: "pdf"}


class LibreOfficeConverter(DocumentConverter):
    """
    Document converter backed by a headless LibreOffice executable.

    Each conversion runs with its own user profile directory so that
    concurrent conversions do not contend for the profile lock.
    """

    def __init__(
        self,
        soffice_path: str = "soffice",
        enabled: bool = True,
        timeout_seconds: int = DEFAULT_CONVERSION_TIMEOUT_SECONDS,
        temp_file_manager: Optional[TempFileManager] = None,
    ):
        self.soffice_path = soffice_path
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
            self._executable = shutil.which(self.soffice_path)
            if self._executable is None:
                logger.warning(
                    f"LibreOffice executable '{self.soffice_path}' not found, document conversion unavailable"
                )
        return self._executable

    def build_command(self, in_file: Path, out_dir: Path, target_format: str) -> List[str]:
        profile_dir = out_dir.resolve() / "profile"
        return [
            self._resolve_executable() or self.soffice_path,
            f"-env:UserInstallation={profile_dir.as_uri()}",
            "--headless",
            "--norestore",
            "--convert-to",
            target_format,
            "--outdir",
            str(out_dir),
            str(in_file),
        ]

    def convert(self, in_file: Path, source_mime_type: str, target_mime_type: str) -> Path:
        """
        Convert a document with LibreOffice.

        Args:
            in_file: Source document
            source_mime_type: Mime type of the source, used for diagnostics
            target_mime_type: Only application/pdf is supported

        Returns:
            Path of a temporary file holding the converted document

        Raises:
            ConversionError: on unsupported target, timeout, engine failure or missing output
        """
        in_file = Path(in_file)
        target_format = TARGET_FORMATS.get(target_mime_type)
        if target_format is None:
            raise ConversionError(
                f"Unsupported conversion target {target_mime_type}",
                details={"source_mime_type": source_mime_type},
            )

        out_dir = Path(
            tempfile.mkdtemp(
                prefix=TEMP_PREFIX_PDF_OUTPUT,
                dir=str(self.temp_file_manager.base_temp_dir),
            )
        )
        timer = start_timer()
        try:
            cmd = self.build_command(in_file, out_dir, target_format)
            logger.debug(
                f"Executing LibreOffice conversion: {' '.join(cmd)}",
                extra_context={"source_mime_type": source_mime_type},
            )
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
                    f"LibreOffice conversion timed out after {self.timeout_seconds} seconds",
                    details={"source_mime_type": source_mime_type},
                ) from e
            except OSError as e:
                raise ConversionError(
                    f"Failed to start LibreOffice: {e}",
                    details={"source_mime_type": source_mime_type},
                ) from e

            if result.returncode != 0:
                raise ConversionError(
                    f"LibreOffice failed with code {result.returncode}: {result.stderr.strip()}",
                    details={"source_mime_type": source_mime_type},
                )

            produced = out_dir / f"{in_file.stem}.{target_format}"
            if not produced.is_file() or produced.stat().st_size == 0:
                raise ConversionError(
                    f"LibreOffice produced no {target_format} output for {in_file.name}",
                    details={"stdout": result.stdout.strip()},
                )

            converted = self.temp_file_manager.create_temp_path(
                TEMP_PREFIX_PDF_OUTPUT, f".{target_format}"
            )
            shutil.move(str(produced), str(converted))
            logger.debug(
                f"Converted {in_file.name} to {target_format} in {elapsed_ms(timer)} ms"
            )
            return converted
        finally:
            shutil.rmtree(out_dir, ignore_errors=True)
