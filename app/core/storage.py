# app/core/storage.py
"""
Local storage for uploaded blog images, served under the public mount.
"""
import uuid
import logging
import aiofiles
from pathlib import Path
from typing import Optional, Tuple
from datetime import datetime

logger = logging.getLogger(__name__)


class StorageService:
    """
    Service for storing and removing uploaded images on the local filesystem.
    """

    def __init__(
        self,
        upload_dir: str = "./public",
        max_file_size: int = 10 * 1024 * 1024,  # 10MB default
        allowed_types: Optional[list[str]] = None,
    ):
        """
        Initialize storage service.

        Args:
            upload_dir: Directory served as the public mount
            max_file_size: Maximum file size in bytes
            allowed_types: Accepted MIME types (None accepts anything)
        """
        self.upload_dir = Path(upload_dir)
        self.max_file_size = max_file_size
        self.allowed_types = allowed_types
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def generate_filename(self, original_filename: str) -> str:
        """
        Generate a unique filename keeping the original extension.

        Format: {timestamp}_{uuid}{ext}
        """
        ext = Path(original_filename or "").suffix.lower()
        timestamp = datetime.utcnow().strftime("%Y%m%d_%H%M%S")
        return f"{timestamp}_{uuid.uuid4().hex}{ext}"

    def validate(self, file_size: int, content_type: Optional[str]) -> None:
        """
        Raises:
            ValueError: the file is empty, too large or of a refused type
        """
        if file_size == 0:
            raise ValueError("File is empty")
        if file_size > self.max_file_size:
            raise ValueError(f"File size {file_size} exceeds maximum {self.max_file_size}")
        if self.allowed_types is not None and content_type not in self.allowed_types:
            raise ValueError(f"File type {content_type} is not allowed")

    async def save_file(
        self,
        file_content: bytes,
        filename: str,
        content_type: Optional[str] = None
    ) -> Tuple[str, int]:
        """
        Save file to the upload directory.

        Returns:
            Tuple of (stored filename, file_size)
        """
        file_size = len(file_content)
        self.validate(file_size, content_type)

        unique_filename = self.generate_filename(filename)
        file_path = self.upload_dir / unique_filename

        async with aiofiles.open(file_path, "wb") as f:
            await f.write(file_content)

        logger.info(f"Saved file locally: {file_path}")
        return unique_filename, file_size


# Global storage instance
_storage_instance: Optional[StorageService] = None


def get_storage_service() -> StorageService:
    """Get the global storage service instance."""
    global _storage_instance
    if _storage_instance is None:
        from app.core.config import settings

        _storage_instance = StorageService(
            upload_dir=settings.UPLOAD_DIR,
            max_file_size=settings.MAX_FILE_SIZE,
            allowed_types=settings.ALLOWED_IMAGE_TYPES,
        )
    return _storage_instance
