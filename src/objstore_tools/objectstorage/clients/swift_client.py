"""OpenStack Swift connection adapter.

Wraps ``swiftclient.client.Connection`` so it satisfies both the
``ObjectStorageConnection`` and ``ManifestEndpoint`` capability interfaces.
Library exceptions are translated into the objstore-tools error taxonomy:
a 404 becomes ``NotFound``, anything else ``TransportError``. With retries
disabled, object bodies are read straight from urllib3, so its read errors
are translated too.

The client is created with ``retries=0``: a single remote failure is
surfaced to the caller immediately.
"""

from contextlib import contextmanager
from typing import BinaryIO, Iterator, Mapping, Optional

from requests.exceptions import RequestException
from swiftclient import client as swift_client
from swiftclient.exceptions import ClientException
from urllib3.exceptions import HTTPError as Urllib3HTTPError

from objstore_tools.core import get_logger, settings
from objstore_tools.core.exceptions import NotFound, TransportError
from objstore_tools.objectstorage.connection import ObjectInfo
from objstore_tools.schemas import SwiftStorageConfig

logger = get_logger(__name__)

DIRECTORY_CONTENT_TYPE = "application/directory"


@contextmanager
def _remote_call(operation: str) -> Iterator[None]:
    """Translate swiftclient failures raised inside the block."""
    try:
        yield
    except (ClientException, RequestException, Urllib3HTTPError) as e:
        logger.error("Swift request failed", operation=operation, error=str(e))
        if isinstance(e, ClientException) and e.http_status == 404:
            raise NotFound(operation, e) from e
        raise TransportError(operation, e) from e


class SwiftConnection:
    """Swift object operations over an authenticated swiftclient connection."""

    def __init__(self, connection: swift_client.Connection):
        self._conn = connection

    @classmethod
    def from_config(cls, config: SwiftStorageConfig) -> "SwiftConnection":
        """Create a connection from a Swift storage configuration."""
        os_options = {
            key: value
            for key, value in {
                "project_name": config.project_name,
                "project_id": config.project_id,
                "user_domain_name": config.user_domain_name,
                "project_domain_name": config.project_domain_name,
                "region_name": config.region_name,
            }.items()
            if value
        }

        connection = swift_client.Connection(
            authurl=config.auth_url,
            user=config.username,
            key=config.api_key,
            auth_version=config.auth_version,
            os_options=os_options,
            preauthurl=config.storage_url,
            preauthtoken=config.auth_token,
            retries=0,
            timeout=settings.request_timeout,
        )

        if config.storage_url and config.auth_token:
            logger.info("Swift connection created with pre-authenticated token")
        else:
            logger.info(
                "Swift connection created",
                auth_url=config.auth_url,
                auth_version=config.auth_version,
            )
        return cls(connection)

    def get_endpoint(self) -> tuple[str, str]:
        """Return the storage URL and auth token, authenticating if needed."""
        url, token = self._conn.url, self._conn.token
        if not (url and token):
            with _remote_call("authenticate"):
                url, token = self._conn.get_auth()
        return url, token

    def head_object(self, container: str, object_name: str) -> ObjectInfo:
        with _remote_call(f"get object {object_name}"):
            headers = self._conn.head_object(container, object_name)

        content_type = headers.get("content-type", "")
        return ObjectInfo(
            name=object_name,
            content_type=content_type,
            size=int(headers.get("content-length", 0)),
            last_modified=headers.get("last-modified", ""),
            hash=headers.get("etag", "").strip('"'),
            pseudo_directory=content_type == DIRECTORY_CONTENT_TYPE,
            headers=dict(headers),
        )

    def list_object_names(
        self, container: str, marker: Optional[str], limit: int
    ) -> list[str]:
        with _remote_call(f"list objects in container {container}"):
            _, listing = self._conn.get_container(
                container, marker=marker, limit=limit
            )
        # Listings may carry "subdir" entries when a delimiter is in play
        return [item["name"] for item in listing if "name" in item]

    def put_object(
        self,
        container: str,
        object_name: str,
        data: bytes,
        md5_hash: str,
        content_type: str,
        metadata: Optional[Mapping[str, str]] = None,
    ) -> None:
        headers = {
            f"X-Object-Meta-{key}": value for key, value in (metadata or {}).items()
        }
        with _remote_call(f"create object {object_name}"):
            self._conn.put_object(
                container,
                object_name,
                contents=data,
                content_length=len(data),
                etag=md5_hash,
                content_type=content_type,
                headers=headers,
            )

    def copy_object(
        self,
        container: str,
        object_name: str,
        destination_container: str,
        destination_name: str,
    ) -> None:
        with _remote_call(f"copy object {object_name}"):
            self._conn.copy_object(
                container,
                object_name,
                destination=f"/{destination_container}/{destination_name}",
            )

    def download_object(
        self, container: str, object_name: str, fileobj: BinaryIO
    ) -> None:
        with _remote_call(f"get object {object_name}"):
            _, body = self._conn.get_object(
                container,
                object_name,
                resp_chunk_size=settings.download_chunk_size,
            )
            for chunk in body:
                fileobj.write(chunk)

    def delete_object(self, container: str, object_name: str) -> None:
        with _remote_call(f"delete object {object_name}"):
            self._conn.delete_object(container, object_name)
