"""
SoYummy Avatar Service
Uploads user avatars to Cloudinary
"""

from typing import Any, BinaryIO, Dict

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
import structlog
from starlette.concurrency import run_in_threadpool

from core.config import get_settings
from core.exceptions import BadRequestError

settings = get_settings()
logger = structlog.get_logger()


class AvatarService:
    def __init__(self):
        self.upload_preset = settings.CLOUDINARY_AVATAR_PRESET
        self.allowed_types = settings.ALLOWED_FILE_TYPES
        self.max_file_size = settings.MAX_FILE_SIZE
        self._configured = False

    def _configure(self) -> None:
        if self._configured:
            return
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True,
        )
        self._configured = True

    def validate(self, content_type: str, size: int) -> None:
        if content_type not in self.allowed_types:
            raise BadRequestError(f"Unsupported file type: {content_type}")
        if size == 0:
            raise BadRequestError("Avatar file is empty")
        if size > self.max_file_size:
            raise BadRequestError("Avatar file is too large")

    async def upload(self, file: BinaryIO, user_id: str) -> str:
        """
        Upload an avatar and return its public URL

        The SDK is synchronous, so the upload runs in the threadpool.
        Upload failures propagate to the caller.
        """
        self._configure()
        try:
            result: Dict[str, Any] = await run_in_threadpool(
                cloudinary.uploader.upload,
                file,
                upload_preset=self.upload_preset,
                public_id=f"{user_id}_avatar",
                overwrite=True,
            )
        except CloudinaryError as e:
            logger.error("Avatar upload failed", user_id=user_id, error=str(e))
            raise

        avatar_url = result.get("secure_url") or result["url"]
        logger.info("Avatar uploaded", user_id=user_id, avatar_url=avatar_url)
        return avatar_url


# Create singleton instance
avatar_service = AvatarService()
