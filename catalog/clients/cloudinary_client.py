"""Cloudinary upload client."""

import asyncio
import logging
from typing import Any

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from catalog.config.configuration import CloudinaryConfig
from catalog.models.upload import UploadResult

logger = logging.getLogger(__name__)


class CloudinaryUploadError(Exception):
    """Raised when the media host rejects an upload or cannot be reached."""

    pass


class CloudinaryClient:
    """Uploads files to Cloudinary through the official SDK.

    The SDK is synchronous, so each upload runs in a worker thread.
    Credentials are passed per call instead of through the SDK's global
    configuration.
    """

    def __init__(self, config: CloudinaryConfig):
        """Initialize the client.

        Args:
            config: Cloudinary configuration with all credentials present.
        """
        self._config = config

    def upload_options(self) -> dict[str, Any]:
        return {
            "cloud_name": self._config.cloud_name,
            "api_key": self._config.api_key,
            "api_secret": self._config.api_secret,
            "upload_prefix": self._config.upload_prefix,
            "folder": self._config.folder,
            "resource_type": "auto",
            "timeout": self._config.timeout,
        }

    async def upload(self, data_uri: str) -> UploadResult:
        """
        Upload a data URI into the configured folder.

        Args:
            data_uri: ``data:<mime>;base64,<payload>`` string.

        Returns:
            UploadResult with the secure URL and public id.

        Raises:
            CloudinaryUploadError: If the SDK reports a failure or the
                response lacks the expected fields.
        """
        try:
            payload = await asyncio.to_thread(
                cloudinary.uploader.upload, data_uri, **self.upload_options()
            )
        except CloudinaryError as e:
            raise CloudinaryUploadError(f"Media host rejected upload: {e}") from e

        try:
            result = UploadResult(url=payload["secure_url"], public_id=payload["public_id"])
        except (KeyError, TypeError) as e:
            raise CloudinaryUploadError("Unexpected response from media host") from e

        logger.info(f"Uploaded image to media host: {result.public_id}")
        return result
