"""
labourconnect/services/storage_service.py

Purpose: Profile picture storage (GridFS)

- One picture per user under profile-pictures/{userId}
- Uploading replaces any earlier picture
- Pictures are served back through /media/profile-pictures/{userId}
"""

from typing import Callable, Optional

from gridfs.errors import NoFile

from labourconnect.core.logging import get_logger
from labourconnect.core.result import NotFound, Ok, Result
from labourconnect.db.mongo import get_profile_pictures_bucket
from labourconnect.services.gateway import gateway_call

logger = get_logger(__name__)

MEDIA_PREFIX = "/media/profile-pictures"


def picture_filename(user_id: str) -> str:
    return f"profile-pictures/{user_id}"


def picture_url(user_id: str) -> str:
    return f"{MEDIA_PREFIX}/{user_id}"


class ProfilePictureStorage:
    """
    Stores profile pictures in a GridFS bucket.

    The bucket is resolved per call so the storage can be built before
    Mongo is connected.
    """

    def __init__(self, bucket_factory: Optional[Callable] = None):
        self.bucket_factory = bucket_factory or get_profile_pictures_bucket

    @gateway_call("uploading profile picture")
    async def upload(self, user_id: str, data: bytes, content_type: str) -> Result:
        """
        Stores the bytes and deletes older pictures of the same user.

        Returns:
            Ok({"url": "/media/profile-pictures/{userId}"})
        """
        bucket = self.bucket_factory()
        filename = picture_filename(user_id)

        file_id = await bucket.upload_from_stream(
            filename,
            data,
            metadata={"contentType": content_type, "userId": user_id}
        )

        async for old in bucket.find({"filename": filename, "_id": {"$ne": file_id}}):
            await bucket.delete(old._id)

        logger.info(f"Profile picture stored ({len(data)} bytes)", extra={"user_id": user_id})
        return Ok({"url": picture_url(user_id)})

    @gateway_call("reading profile picture")
    async def download(self, user_id: str) -> Result:
        """
        Returns:
            Ok((data, content_type)) or NotFound
        """
        bucket = self.bucket_factory()

        try:
            grid_out = await bucket.open_download_stream_by_name(picture_filename(user_id))
        except NoFile:
            return NotFound("Profile picture not found")

        data = await grid_out.read()
        metadata = grid_out.metadata or {}
        return Ok((data, metadata.get("contentType", "application/octet-stream")))


# Singleton instance
profile_picture_storage = ProfilePictureStorage()
