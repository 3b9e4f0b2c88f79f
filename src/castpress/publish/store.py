"""Object store capability and its S3-compatible backend."""

import logging
from typing import BinaryIO, Protocol

import boto3

from castpress.config.schema import Region

logger = logging.getLogger(__name__)

PUBLIC_READ_ACL = "public-read"


def public_object_url(bucket: str, host: str, key: str) -> str:
    """Public URL of an object: ``https://{bucket}.{host}/{key}``."""
    return f"https://{bucket}.{host}/{key}"


class ObjectStore(Protocol):
    """Anything that can store a public object and report its URL."""

    def put(
        self,
        bucket: str,
        key: str,
        body: BinaryIO,
        length: int,
        content_type: str,
    ) -> str:
        """Store ``length`` bytes read from ``body`` as a public-read object.

        Returns:
            Public URL of the stored object
        """
        ...


class S3ObjectStore:
    """S3-compatible object store (AWS, DigitalOcean Spaces, MinIO, ...).

    Credentials come from the usual boto3 sources (environment variables,
    shared credentials file).
    """

    def __init__(self, region: Region, client=None):
        self.region = region
        if client is None:
            session = boto3.session.Session()
            client = session.client(
                "s3",
                region_name=region.name,
                endpoint_url=region.endpoint_url,
            )
        self.client = client

    def put(
        self,
        bucket: str,
        key: str,
        body: BinaryIO,
        length: int,
        content_type: str,
    ) -> str:
        """Issue a single PutObject request.

        SDK errors (``botocore.exceptions.ClientError``, ``BotoCoreError``)
        propagate unchanged.
        """
        logger.debug(
            "PutObject bucket=%s key=%s length=%d content_type=%s",
            bucket,
            key,
            length,
            content_type,
        )
        self.client.put_object(
            Bucket=bucket,
            Key=key,
            Body=body,
            ContentLength=length,
            ContentType=content_type,
            ACL=PUBLIC_READ_ACL,
        )
        return public_object_url(bucket, self.region.host, key)
