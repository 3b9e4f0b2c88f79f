"""Publishing artifacts to object storage."""

from castpress.publish.store import ObjectStore, S3ObjectStore, public_object_url
from castpress.publish.uploader import (
    ArtifactPublisher,
    ProgressCallback,
    ProgressReader,
    UploadResult,
    UploadTarget,
    resolve_content_type,
)

__all__ = [
    "ArtifactPublisher",
    "ObjectStore",
    "ProgressCallback",
    "ProgressReader",
    "S3ObjectStore",
    "UploadResult",
    "UploadTarget",
    "public_object_url",
    "resolve_content_type",
]
