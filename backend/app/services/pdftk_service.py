"""
pdftk service for dumping form field metadata from PDF files.
"""
import logging
import os
import shutil
import subprocess
from typing import Optional

from app.config import Config
from app.services.errors import ToolUnavailable, ExtractionFailed

logger = logging.getLogger(__name__)


class PdftkService:
    """Runs ``pdftk <file> dump_data_fields`` and returns its text output."""

    def __init__(self, command: Optional[str] = None, timeout: Optional[int] = None):
        """
        Initialize pdftk service.

        Args:
            command: pdftk executable (defaults to Config.PDFTK_COMMAND)
            timeout: Seconds before the dump is abandoned (defaults to Config.PDFTK_TIMEOUT)
        """
        self.command = command or Config.PDFTK_COMMAND
        self.timeout = timeout or Config.PDFTK_TIMEOUT

    def is_available(self) -> bool:
        """Check whether the pdftk executable is on PATH."""
        return shutil.which(self.command) is not None

    def dump_data_fields(self, pdf_path: str) -> str:
        """
        Dump the form fields of a PDF.

        Args:
            pdf_path: Path to the PDF file

        Returns:
            Raw dump_data_fields output

        Raises:
            ToolUnavailable: pdftk is not installed
            ExtractionFailed: the file is unreadable or pdftk failed
        """
        if not os.path.isfile(pdf_path) or not os.access(pdf_path, os.R_OK):
            raise ExtractionFailed(f"Failed to extract fields: cannot read {pdf_path}")

        if not self.is_available():
            raise ToolUnavailable(self.command)

        logger.info(f"Running {self.command} to extract fields from {pdf_path}")
        try:
            result = subprocess.run(
                [self.command, pdf_path, 'dump_data_fields'],
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except FileNotFoundError as e:
            raise ToolUnavailable(self.command) from e
        except subprocess.TimeoutExpired as e:
            raise ExtractionFailed(
                f"Failed to extract fields: {self.command} timed out after {self.timeout}s"
            ) from e
        except OSError as e:
            raise ExtractionFailed(f"Failed to extract fields: {e}") from e

        stderr = (result.stderr or '').strip()
        if stderr and 'Warning' not in stderr:
            logger.warning(f"pdftk stderr: {stderr}")

        if result.returncode != 0:
            raise ExtractionFailed(
                f"Failed to extract fields: {self.command} exited with status "
                f"{result.returncode}: {stderr or 'no error output'}"
            )

        return result.stdout or ''
