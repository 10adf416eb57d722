"""Recipe image storage for imported recipes.

Images referenced by the feed are downloaded and re-hosted in S3 so recipes do
not depend on the source site staying up. Any download or upload problem
leaves the original URL in place; a broken image never fails a recipe.
"""

import logging
import re
import time
from typing import Any

import boto3
import httpx
from botocore.exceptions import BotoCoreError, ClientError

from src.config import Settings, get_settings

logger = logging.getLogger(__name__)

IMAGE_KEY_PREFIX = "recipe-images"
DEFAULT_CONTENT_TYPE = "image/jpeg"

_SLUG_INVALID = re.compile(r"[^a-z0-9]+")


def slugify_title(title: str) -> str:
    """Lowercase a title and collapse everything but letters and digits to dashes."""
    slug = _SLUG_INVALID.sub("-", title.lower()).strip("-")
    return slug or "recipe"


def extension_for_content_type(content_type: str) -> str:
    if "png" in content_type:
        return "png"
    if "gif" in content_type:
        return "gif"
    if "webp" in content_type:
        return "webp"
    return "jpg"


def build_image_key(title: str, timestamp_ms: int, extension: str) -> str:
    return f"{IMAGE_KEY_PREFIX}/{slugify_title(title)}-{timestamp_ms}.{extension}"


class ImageService:
    """Fetch-and-store resolver for recipe image URLs."""

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.Client | None = None,
        s3_client: Any | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.timeout = self.settings.image_fetch_timeout_seconds
        self._http_client = http_client
        self._s3_client = s3_client

    @property
    def http_client(self) -> httpx.Client:
        if self._http_client is None:
            self._http_client = httpx.Client(timeout=self.timeout, follow_redirects=True)
        return self._http_client

    @property
    def s3_client(self) -> Any:
        if self._s3_client is None:
            self._s3_client = boto3.client(
                "s3",
                region_name=self.settings.aws_s3_region,
                aws_access_key_id=self.settings.aws_access_key_id,
                aws_secret_access_key=self.settings.aws_secret_access_key,
            )
        return self._s3_client

    def is_stored_image(self, url: str) -> bool:
        """Check if a URL already points into our own bucket."""
        base_url = self.settings.s3_public_base_url
        return bool(base_url) and url.startswith(f"{base_url}/")

    def public_url(self, key: str) -> str:
        return f"{self.settings.s3_public_base_url}/{key}"

    def resolve_image(self, url: str | None, recipe_title: str) -> str:
        """Return the URL to store for a recipe image.

        Returns an empty string when no image is supplied, the S3 URL after a
        successful upload, and the original URL otherwise.
        """
        if not url or not url.strip():
            return ""
        url = url.strip()

        if self.is_stored_image(url):
            return url

        if not self.settings.s3_enabled:
            logger.info(f"S3 not configured, keeping source image URL for '{recipe_title}'")
            return url

        try:
            return self.upload_from_url(url, recipe_title)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, BotoCoreError, ClientError) as e:
            logger.warning(f"Could not store image for '{recipe_title}' from {url}: {e}")
            return url

    def upload_from_url(self, url: str, recipe_title: str) -> str:
        """Download an image and upload it to S3, returning its public URL."""
        logger.info(f"Uploading image for recipe: {recipe_title}")
        response = self.http_client.get(url)
        response.raise_for_status()

        content_type = response.headers.get("content-type") or DEFAULT_CONTENT_TYPE
        content_type = content_type.split(";")[0].strip()
        key = build_image_key(
            recipe_title, int(time.time() * 1000), extension_for_content_type(content_type)
        )

        self.s3_client.put_object(
            Bucket=self.settings.aws_s3_bucket_name,
            Key=key,
            Body=response.content,
            ContentType=content_type,
        )
        return self.public_url(key)

    def close(self) -> None:
        if self._http_client is not None:
            self._http_client.close()
            self._http_client = None
