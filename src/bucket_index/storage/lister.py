"""S3-compatible bucket lister."""

import logging
from typing import Any, Callable, Dict, List, Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import Settings
from ..models import Entry

logger = logging.getLogger(__name__)


class ListingError(RuntimeError):
    """Raised when any page of a bucket listing fails."""


class BucketLister:
    """Lists every object of one bucket, following pagination.

    A new client is created for each listing so credentials and endpoint
    always come from the values given at construction time.

    Attributes:
        bucket: Bucket name
        public_domain: Prefix prepended to each key to form its public URL
    """

    def __init__(
        self,
        bucket: str,
        public_domain: str,
        *,
        endpoint_url: str,
        region: str,
        access_key: str,
        secret_key: str,
        client_factory: Optional[Callable[..., Any]] = None,
    ):
        """Initialize the lister.

        Args:
            bucket: Bucket name
            public_domain: URL prefix for public object links
            endpoint_url: S3-compatible endpoint URL
            region: Region name
            access_key: Static access key id
            secret_key: Static secret access key
            client_factory: Callable with the ``boto3.client`` signature
        """
        self.bucket = bucket
        self.public_domain = public_domain
        self.endpoint_url = endpoint_url
        self.region = region
        self._access_key = access_key
        self._secret_key = secret_key
        self._client_factory = client_factory or boto3.client

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "BucketLister":
        """Build a lister from service settings."""
        return cls(
            settings.BUCKET,
            settings.PUBLIC_DOMAIN,
            endpoint_url=settings.ENDPOINT_URL,
            region=settings.AWS_DEFAULT_REGION,
            access_key=settings.AWS_ACCESS_KEY_ID,
            secret_key=settings.AWS_SECRET_ACCESS_KEY,
            **kwargs,
        )

    def _create_client(self):
        config = Config(signature_version="s3v4", s3={"addressing_style": "path"})
        return self._client_factory(
            "s3",
            endpoint_url=self.endpoint_url,
            aws_access_key_id=self._access_key,
            aws_secret_access_key=self._secret_key,
            region_name=self.region,
            config=config,
        )

    def _to_entry(self, obj: Dict[str, Any]) -> Entry:
        key = obj["Key"]
        # Keys are concatenated verbatim, without percent-encoding
        return Entry(
            url=f"{self.public_domain}{key}",
            size=int(obj.get("Size", 0)),
            key=key,
            last_modified=obj["LastModified"],
        )

    def list_all(self) -> List[Entry]:
        """List every object in the bucket.

        Returns:
            Entries for all pages, in listing order

        Raises:
            ListingError: If creating the client or fetching any page fails;
                no partial result is returned
        """
        entries: List[Entry] = []
        token: Optional[str] = None
        page = 0

        try:
            client = self._create_client()
        except (ValueError, BotoCoreError) as e:
            raise ListingError(f"Failed to create client for {self.endpoint_url}: {e}") from e

        try:
            while True:
                params: Dict[str, Any] = {"Bucket": self.bucket}
                if token:
                    params["ContinuationToken"] = token
                response = client.list_objects_v2(**params)
                page += 1

                contents = response.get("Contents", [])
                entries.extend(self._to_entry(obj) for obj in contents)
                logger.debug(f"Listed page {page} of {self.bucket}: {len(contents)} objects")

                token = response.get("NextContinuationToken")
                if not response.get("IsTruncated", False) or not token:
                    break
        except (ClientError, BotoCoreError) as e:
            raise ListingError(f"Failed to list bucket {self.bucket} (page {page + 1}): {e}") from e

        logger.info(f"Listed {len(entries)} objects from {self.bucket} in {page} page(s)")
        return entries
