import logging
import re
import time
from typing import Any, BinaryIO, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from storefront.core.config import Settings
from storefront.core.exceptions import StorageConfigError, StorageUploadError


logger = logging.getLogger(__name__)

def sanitize_filename(filename: str) -> str:
    """Replaces every character outside [A-Za-z0-9_.-] with an underscore."""
    return re.sub(r"[^a-zA-Z0-9_.-]", "_", filename)


def build_object_key(filename: Optional[str], now_ns: Optional[int] = None) -> str:
    """
    Builds the bucket key for an uploaded file.

    The sanitized original name is prefixed with a nanosecond timestamp, so
    two uploads of the same file never collide and no key can contain a path
    separator.

    Args:
        filename (Optional[str]): The name the browser sent, if any.
        now_ns (Optional[int]): Timestamp override, used by tests.

    Returns:
        str: The key, e.g. '1718035200123456789-my_file_.png'.
    """
    now_ns = now_ns if now_ns is not None else time.time_ns()
    original = filename or f"file-{now_ns // 1_000_000}"
    return f"{now_ns}-{sanitize_filename(original)}"


class StorageService:
    """Uploads admin media files to the S3-compatible bucket.

    The S3 client is created on first upload and reused afterwards.
    """

    def __init__(self, settings: Settings, client: Any = None) -> None:
        self.settings = settings
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client(
                "s3",
                endpoint_url=self.settings.SUFY_ENDPOINT,
                region_name=self.settings.SUFY_REGION,
                aws_access_key_id=self.settings.SUFY_ACCESS_KEY,
                aws_secret_access_key=self.settings.SUFY_SECRET_KEY,
                # Path-style addressing is required by S3-compatible services
                config=Config(s3={"addressing_style": "path"}),
            )
        return self._client

    def resolve_target(self) -> tuple[str, str]:
        """
        Returns the bucket name and the public URL prefix (with one trailing slash).

        Raises:
            StorageConfigError: If either setting is missing.
        """
        bucket = self.settings.SUFY_BUCKET_NAME
        prefix = self.settings.SUFY_PUBLIC_URL_PREFIX
        if not bucket:
            raise StorageConfigError("Sufy bucket name is not configured.")
        if not prefix:
            raise StorageConfigError("Sufy public URL prefix is not configured.")
        return bucket, prefix if prefix.endswith("/") else f"{prefix}/"

    def upload(self, fileobj: BinaryIO, filename: Optional[str], content_type: Optional[str] = None) -> str:
        """
        Stores a file in the bucket as a public object.

        Args:
            fileobj (BinaryIO): The file contents.
            filename (Optional[str]): The original filename.
            content_type (Optional[str]): The MIME type to store with the object.

        Returns:
            str: The public URL of the stored object.

        Raises:
            StorageConfigError: If the bucket or public URL prefix is not configured.
            StorageUploadError: If the object store fails the upload.
        """
        bucket, public_prefix = self.resolve_target()
        key = build_object_key(filename)

        extra_args = {"ACL": "public-read"}
        if content_type:
            extra_args["ContentType"] = content_type

        try:
            self.client.upload_fileobj(fileobj, bucket, key, ExtraArgs=extra_args)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Upload of {key} to bucket {bucket} failed: {e}")
            raise StorageUploadError("Upload to Sufy failed.") from e

        logger.info(f"Uploaded {key} to bucket {bucket}.")
        return f"{public_prefix}{key}"
