"""
Campus Market Backend: Image Upload Service
=============================================

What:  Validates uploaded images, stores them under UPLOAD_DIR and resolves
       stored names back to files for serving.
How:   Extension whitelist (jpg, jpeg, png, gif), size cap (MAX_UPLOAD_SIZE,
       5 MiB by default), generated file names, async writes via aiofiles.
Who:   Called by POST /api/upload and GET /uploads/{name}.

Stored names:
    <epoch-ms>-<random 0..1e9><ext>   e.g. 1746523800123-482915733.png

    The client's file name is never used on disk; only its extension,
    lower-cased, is kept. Uploads are stored flat so the public URL is
    simply /uploads/<name>.
"""

import logging
import os
import secrets
import time
from pathlib import Path
from typing import Optional, Tuple

import aiofiles

from campus_market.config import settings
from campus_market.exceptions import (
    FileStorageError,
    NotFoundError,
    RequestInvalidError,
    UploadRejectedError,
)

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif"}

UPLOAD_URL_PREFIX = "/uploads"


class FileService:
    """
    Manages image upload validation, storage and lookup.

    Lifecycle of an uploaded file:
        1. Route reads at most MAX_UPLOAD_SIZE + 1 bytes from the multipart part
        2. validate_extension(): reject anything but jpg/jpeg/png/gif
        3. validate_size(): reject bodies over the cap
        4. store_file(): write to UPLOAD_DIR under a generated name
        5. Return the public URL /uploads/<name>
    """

    def __init__(self, storage_root: Optional[str] = None):
        """
        Args:
            storage_root: Override the upload directory (used in tests).
                          If None, settings.upload_dir is used on every call.
        """
        self._storage_root = storage_root

    @property
    def storage_root(self) -> Path:
        root = Path(self._storage_root) if self._storage_root else settings.upload_path
        return root.resolve()

    def validate_extension(self, filename: str) -> str:
        """
        Check the file extension against the whitelist.

        Returns:  Normalized extension (lowercase with dot).
        Raises:   UploadRejectedError if the extension is not allowed.
        """
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise UploadRejectedError(
                message="Only image files can be uploaded.",
                details=(
                    f"extension '{ext or '(none)'}' is not allowed; "
                    f"allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
            )
        return ext

    def validate_size(self, content_length: Optional[int], actual_size: int) -> None:
        """
        Enforce settings.max_upload_size.

        Args:
            content_length: Size reported by the client (may be None or wrong)
            actual_size:    Number of bytes actually read
        """
        max_size = settings.max_upload_size
        max_mb = max_size / (1024 * 1024)

        if (content_length and content_length > max_size) or actual_size > max_size:
            raise UploadRejectedError(
                message=f"File too large. The maximum size is {max_mb:.0f}MB.",
                details=f"limit is {max_size} bytes",
            )

    def _generate_filename(self, extension: str) -> str:
        return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9 + 1)}{extension}"

    async def store_file(self, content: bytes, extension: str) -> Tuple[str, str]:
        """
        Write validated content to the upload directory.

        Returns:  (absolute_path, stored_name)
        Raises:   FileStorageError if the directory or file cannot be written;
                  any partially written file is removed first.
        """
        stored_name = self._generate_filename(extension)
        absolute_path = self.storage_root / stored_name

        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store upload at %s: %s", absolute_path, str(e))
            # a failed write can leave a truncated file behind
            await self.cleanup_file(str(absolute_path))
            raise FileStorageError(
                message="An error occurred while uploading the image.",
                details=str(e),
            )

        logger.info("Upload stored: %s (%d bytes)", stored_name, len(content))
        return str(absolute_path), stored_name

    async def cleanup_file(self, file_path: str) -> None:
        """Best-effort removal of a stored upload; missing files are ignored."""
        path = Path(file_path)
        try:
            os.remove(path)
            logger.info("Cleaned up file: %s", path.name)
        except FileNotFoundError:
            logger.debug("Cleanup: file already gone: %s", path.name)
        except OSError as e:
            logger.warning("Failed to clean up file %s: %s", file_path, str(e))

    async def validate_and_store(
        self,
        filename: str,
        content: bytes,
        content_length: Optional[int] = None,
    ) -> str:
        """
        Full upload pipeline: extension → size → write.

        Returns:
            Public URL of the stored image, e.g. "/uploads/1746523800123-482915733.png"
        """
        ext = self.validate_extension(filename)
        self.validate_size(content_length, len(content))
        _, stored_name = await self.store_file(content, ext)
        return f"{UPLOAD_URL_PREFIX}/{stored_name}"

    def resolve_upload(self, file_path: str) -> Path:
        """
        Map a requested upload name to a file inside the upload directory.

        Raises:
            RequestInvalidError: the path escapes the upload directory
            NotFoundError:       no such file
        """
        root = self.storage_root
        full_path = (root / file_path).resolve()

        if not full_path.is_relative_to(root):
            raise RequestInvalidError(message="Invalid file path.")

        if not full_path.is_file():
            raise NotFoundError(resource="file", resource_id=file_path)

        return full_path


file_service = FileService()
