"""Image upload relay to the media host."""

import base64
import logging
from typing import Optional

from ..clients import CloudinaryClient, CloudinaryUploadError
from ..config import CloudinaryConfig
from ..models import UploadResult
from .errors import UnexpectedError, UploadConfigError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def to_data_uri(content: bytes, content_type: Optional[str]) -> str:
    """Encode file content as a base64 data URI."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type or DEFAULT_CONTENT_TYPE};base64,{encoded}"


class UploadService:
    """Forwards uploaded files to Cloudinary and returns their public URL."""

    def __init__(self, config: CloudinaryConfig):
        self._config = config

    def _check_config(self) -> None:
        missing = self._config.missing_credentials()
        if missing:
            raise UploadConfigError(
                f"Please define {', '.join(missing)} environment variables. "
                f"For local development, add them to your .env file."
            )

    async def upload_file(
        self,
        filename: Optional[str],
        content_type: Optional[str],
        content: Optional[bytes],
    ) -> UploadResult:
        """
        Upload a file to the media host.

        Args:
            filename: Original file name, used for logging only.
            content_type: MIME type of the file.
            content: Raw file bytes.

        Returns:
            UploadResult with the public URL and media host id.

        Raises:
            UploadConfigError: If any media host credential is missing.
            ValidationError: If no file content was provided.
            UnexpectedError: If the media host call fails.
        """
        self._check_config()

        if not content:
            raise ValidationError("No file provided")

        logger.info(f"Uploading {filename or 'unnamed file'} ({len(content)} bytes)")

        client = CloudinaryClient(self._config)
        try:
            return await client.upload(to_data_uri(content, content_type))
        except CloudinaryUploadError as e:
            logger.exception(f"Error uploading image: {e}")
            raise UnexpectedError(str(e)) from e
