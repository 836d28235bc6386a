# src/askit/services/file_host.py
"""Image hosting through Cloudinary."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from askit.core.errors import InternalError
from askit.core.settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadResult:
    """Location of an uploaded asset."""

    secure_url: str


class FileHost(Protocol):
    """Anything that can ingest a file and return where it now lives."""

    def upload(self, source: str, resource_type: str = "image") -> UploadResult:
        ...


class CloudinaryFileHost:
    """Upload files into the configured Cloudinary folder."""

    def __init__(self, folder: str | None = None) -> None:
        self.folder = folder or settings.cloudinary_folder
        if settings.cloudinary_configured:
            cloudinary.config(
                cloud_name=settings.cloudinary_cloud_name,
                api_key=settings.cloudinary_api_key,
                api_secret=settings.cloudinary_api_secret,
                secure=True,
            )

    def upload(self, source: str, resource_type: str = "image") -> UploadResult:
        """Upload ``source`` (a remote URL or data URI) and return its secure URL.

        Raises:
            InternalError: If the host is not configured or rejects the upload.
        """
        if not settings.cloudinary_configured:
            logger.error("Upload of %s attempted without Cloudinary credentials", source)
            raise InternalError("File upload failed")
        try:
            result = cloudinary.uploader.upload(
                source,
                resource_type=resource_type,
                folder=self.folder,
            )
        except (CloudinaryError, OSError) as err:
            logger.error("Cloudinary upload of %s failed: %s", source, err)
            raise InternalError("File upload failed") from err

        secure_url = result.get("secure_url")
        if not secure_url:
            logger.error("Cloudinary returned no secure_url for %s", source)
            raise InternalError("File upload failed")
        return UploadResult(secure_url=secure_url)


_file_host: FileHost | None = None


def get_file_host() -> FileHost:
    """Return the process-wide file host, creating it on first use."""
    global _file_host
    if _file_host is None:
        _file_host = CloudinaryFileHost()
    return _file_host
