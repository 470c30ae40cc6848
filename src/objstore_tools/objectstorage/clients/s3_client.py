"""S3 connection adapter.

This module provides an S3-backed object storage connection with support for
multiple authentication methods and S3-compatible services.

Authentication Methods Supported:
    1. Explicit credentials (access_key_id, secret_access_key)
    2. AWS CLI profiles (aws_profile)
    3. IAM roles / environment variables (no explicit credentials)
    4. Temporary credentials (session_token)

S3-Compatible Services:
    Supports custom endpoints for services like MinIO, Ceph RGW and other
    S3-compatible object storage providers via endpoint_url.

S3 has no manifest objects (a completed multipart upload is a single object),
so this connection does not offer the ``ManifestEndpoint`` capability.
"""

import base64
from contextlib import closing, contextmanager
from typing import Any, BinaryIO, Dict, Iterator, Mapping, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from objstore_tools.core import get_logger, settings
from objstore_tools.core.exceptions import NotFound, TransportError
from objstore_tools.objectstorage.connection import ObjectInfo
from objstore_tools.schemas import S3StorageConfig

logger = get_logger(__name__)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NoSuchBucket"}


@contextmanager
def _remote_call(operation: str) -> Iterator[None]:
    """Translate botocore failures raised inside the block."""
    try:
        yield
    except ClientError as e:
        logger.error("S3 request failed", operation=operation, error=str(e))
        code = e.response.get("Error", {}).get("Code", "")
        status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if status == 404 or code in _NOT_FOUND_CODES:
            raise NotFound(operation, e) from e
        raise TransportError(operation, e) from e
    except BotoCoreError as e:
        logger.error("S3 request failed", operation=operation, error=str(e))
        raise TransportError(operation, e) from e


class S3Connection:
    """S3 object operations over a lazily created boto3 client."""

    def __init__(self, config: S3StorageConfig, client: Any = None):
        """Initialize S3 connection.

        Args:
            config: S3 storage configuration
            client: Pre-built boto3 S3 client, created on first use if omitted
        """
        self.config = config
        self._client = client
        logger.info("S3 connection initialized", region=self.region_name)

    @property
    def region_name(self) -> str:
        return self.config.region_name or "us-east-1"

    @property
    def client(self):
        """Get or create S3 client instance."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """Create boto3 S3 client with the configured settings."""
        kwargs: Dict[str, Any] = {
            "region_name": self.region_name,
        }

        if self.config.endpoint_url:
            kwargs["endpoint_url"] = self.config.endpoint_url

        if self.config.aws_profile:
            session = boto3.Session(profile_name=self.config.aws_profile)
            client = session.client("s3", **kwargs)  # type: ignore
            logger.info(
                "S3 client created with profile", profile=self.config.aws_profile
            )
        else:
            if self.config.access_key_id and self.config.secret_access_key:
                kwargs.update(
                    {
                        "aws_access_key_id": self.config.access_key_id,
                        "aws_secret_access_key": self.config.secret_access_key,
                    }
                )
                if self.config.session_token:
                    kwargs["aws_session_token"] = self.config.session_token
                logger.info("S3 client created with explicit credentials")
            else:
                logger.info("S3 client created with default credential chain")

            client = boto3.client("s3", **kwargs)  # type: ignore

        return client

    def head_object(self, container: str, object_name: str) -> ObjectInfo:
        with _remote_call(f"get object {object_name}"):
            response = self.client.head_object(Bucket=container, Key=object_name)

        last_modified = response.get("LastModified")
        return ObjectInfo(
            name=object_name,
            content_type=response.get("ContentType", ""),
            size=response.get("ContentLength", 0),
            last_modified=last_modified.isoformat() if last_modified else "",
            hash=response.get("ETag", "").strip('"'),
            pseudo_directory=object_name.endswith("/"),
            headers=dict(response["ResponseMetadata"].get("HTTPHeaders", {})),
        )

    def list_object_names(
        self, container: str, marker: Optional[str], limit: int
    ) -> list[str]:
        kwargs: Dict[str, Any] = {"Bucket": container, "MaxKeys": limit}
        if marker:
            kwargs["StartAfter"] = marker

        with _remote_call(f"list objects in container {container}"):
            response = self.client.list_objects_v2(**kwargs)

        return [obj["Key"] for obj in response.get("Contents", [])]

    def put_object(
        self,
        container: str,
        object_name: str,
        data: bytes,
        md5_hash: str,
        content_type: str,
        metadata: Optional[Mapping[str, str]] = None,
    ) -> None:
        # S3 verifies integrity against the base64 form of the raw digest
        content_md5 = base64.b64encode(bytes.fromhex(md5_hash)).decode("ascii")
        with _remote_call(f"create object {object_name}"):
            self.client.put_object(
                Bucket=container,
                Key=object_name,
                Body=data,
                ContentMD5=content_md5,
                ContentType=content_type,
                Metadata=dict(metadata or {}),
            )

    def copy_object(
        self,
        container: str,
        object_name: str,
        destination_container: str,
        destination_name: str,
    ) -> None:
        with _remote_call(f"copy object {object_name}"):
            self.client.copy_object(
                Bucket=destination_container,
                Key=destination_name,
                CopySource={"Bucket": container, "Key": object_name},
            )

    def download_object(
        self, container: str, object_name: str, fileobj: BinaryIO
    ) -> None:
        with _remote_call(f"get object {object_name}"):
            response = self.client.get_object(Bucket=container, Key=object_name)
            with closing(response["Body"]) as body:
                for chunk in body.iter_chunks(settings.download_chunk_size):
                    fileobj.write(chunk)

    def delete_object(self, container: str, object_name: str) -> None:
        with _remote_call(f"delete object {object_name}"):
            self.client.delete_object(Bucket=container, Key=object_name)
