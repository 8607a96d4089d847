"""
File storage service for candidate submissions.

Candidate photos go to a public bucket and are referenced by public URL.
Proof documents go to a private bucket; only the object path is stored and
downloads use short-lived signed URLs.
"""

import secrets
import time
from dataclasses import dataclass
from typing import Optional

import httpx
import structlog
from storage3.utils import StorageException
from supabase import AsyncClient

from core.config import settings
from core.exceptions import BucketNotFound, UploadError

logger = structlog.get_logger(__name__)


@dataclass
class FileUpload:
    """A file received from a member, held in memory."""

    filename: str
    content: bytes
    content_type: Optional[str] = None

    @property
    def extension(self) -> str:
        if "." not in self.filename:
            return "bin"
        return self.filename.rsplit(".", 1)[-1].lower()


def _error_message(error: Exception) -> str:
    if isinstance(error, StorageException) and error.args and isinstance(error.args[0], dict):
        payload = error.args[0]
        return str(payload.get("message") or payload.get("error") or payload)
    return str(getattr(error, "message", None) or error)


def build_object_path(user_id: str, upload: FileUpload, tag: str = "", token_bytes: int = 4) -> str:
    """
    Randomized object path inside the user's folder.

    Format: ``{user_id}/{epoch_ms}_{tag}{random}.{ext}``. The original file
    name is discarded so non-ASCII names and collisions are not an issue.
    """
    prefix = f"{tag}_" if tag else ""
    random_part = secrets.token_hex(token_bytes)
    return f"{user_id}/{int(time.time() * 1000)}_{prefix}{random_part}.{upload.extension}"


class StorageService:
    """Upload and URL operations over Supabase Storage."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def upload(
        self,
        bucket: str,
        path: str,
        upload: FileUpload,
        upsert: bool = False,
        cache_control_seconds: Optional[int] = None,
    ) -> str:
        """
        Upload bytes to ``bucket`` at ``path``.

        Returns:
            The stored object path

        Raises:
            BucketNotFound: If the bucket does not exist
            UploadError: For any other storage failure, remote message appended
        """
        file_options = {
            "upsert": "true" if upsert else "false",
        }
        if upload.content_type:
            file_options["content-type"] = upload.content_type
        if cache_control_seconds is not None:
            file_options["cache-control"] = str(cache_control_seconds)

        try:
            await self.client.storage.from_(bucket).upload(path=path, file=upload.content, file_options=file_options)
        except (StorageException, httpx.HTTPError) as e:
            message = _error_message(e)
            logger.error("storage_upload_failed", bucket=bucket, path=path, error=message)
            if "Bucket not found" in message:
                raise BucketNotFound(bucket) from e
            raise UploadError(f"Upload failed: {message}", context={"bucket": bucket}) from e

        logger.info("storage_upload_succeeded", bucket=bucket, path=path)
        return path

    async def public_url(self, bucket: str, path: str) -> str:
        """Public URL of an object in a public bucket."""
        return await self.client.storage.from_(bucket).get_public_url(path)

    async def signed_url(self, bucket: str, path: str, expires_in: int) -> str:
        """
        Time-limited download URL for an object in a private bucket.

        Raises:
            UploadError: If the storage service refuses to sign the path
        """
        try:
            result = await self.client.storage.from_(bucket).create_signed_url(path, expires_in)
        except (StorageException, httpx.HTTPError) as e:
            message = _error_message(e)
            logger.error("storage_sign_failed", bucket=bucket, path=path, error=message)
            raise UploadError(f"Signing URL failed: {message}", context={"bucket": bucket}) from e
        return result.get("signedURL") or result.get("signedUrl") or ""

    async def upload_candidate_photo(self, upload: FileUpload, user_id: str) -> str:
        """
        Upload a candidate's profile photo to the public bucket.

        Returns:
            Public URL of the photo
        """
        bucket = settings.CANDIDATE_PHOTO_BUCKET
        path = build_object_path(user_id, upload)
        await self.upload(
            bucket,
            path,
            upload,
            upsert=False,
            cache_control_seconds=settings.PHOTO_CACHE_CONTROL_SECONDS,
        )
        return await self.public_url(bucket, path)

    async def upload_proof_doc(self, upload: FileUpload, user_id: str) -> str:
        """
        Upload a proof document to the private bucket.

        Private objects have no public URL; the returned path is stored on the
        candidate row and later exchanged for a signed URL.

        Returns:
            Object path inside the proof bucket
        """
        bucket = settings.CANDIDATE_PROOF_BUCKET
        path = build_object_path(user_id, upload, tag="proof", token_bytes=3)
        try:
            return await self.upload(bucket, path, upload, upsert=True)
        except UploadError as e:
            if isinstance(e, BucketNotFound):
                raise
            raise UploadError(f"Proof document upload failed: {e.message}", context=e.context) from e
