"""Test configuration and fixtures for objstore-tools."""

import hashlib
from typing import BinaryIO, Mapping, Optional
from unittest.mock import MagicMock, patch

import pytest

from objstore_tools.core.exceptions import NotFound, TransportError
from objstore_tools.objectstorage.connection import LoggingStageReporter, ObjectInfo

STORAGE_URL = "https://swift.example.com/v1/AUTH_test"
AUTH_TOKEN = "test-token"


class InMemoryConnection:
    """Connection double keeping objects in a dict.

    Satisfies both ``ObjectStorageConnection`` and ``ManifestEndpoint``.
    Set ``fail_on[method]`` to an exception to make that method raise it.
    """

    def __init__(self, storage_url: str = STORAGE_URL, auth_token: str = AUTH_TOKEN):
        self.storage_url = storage_url
        self.auth_token = auth_token
        self.containers: dict[str, dict[str, dict]] = {}
        self.calls: list[str] = []
        self.fail_on: dict[str, Exception] = {}
        self.partial_download: Optional[bytes] = None

    def _record(self, method: str) -> None:
        self.calls.append(method)
        if method in self.fail_on:
            raise self.fail_on[method]

    def _get(self, container: str, object_name: str) -> dict:
        try:
            return self.containers[container][object_name]
        except KeyError:
            raise NotFound(f"get object {object_name}", "404 Not Found")

    def add_object(self, container: str, object_name: str, data: bytes) -> None:
        self.containers.setdefault(container, {})[object_name] = {
            "data": data,
            "hash": hashlib.md5(data).hexdigest(),
            "content_type": "application/octet-stream",
            "headers": {},
        }

    def get_endpoint(self) -> tuple[str, str]:
        return self.storage_url, self.auth_token

    def head_object(self, container: str, object_name: str) -> ObjectInfo:
        self._record("head_object")
        stored = self._get(container, object_name)
        return ObjectInfo(
            name=object_name,
            content_type=stored["content_type"],
            size=len(stored["data"]),
            last_modified="Mon, 02 Dec 2024 10:00:00 GMT",
            hash=stored["hash"],
            headers=dict(stored["headers"]),
        )

    def list_object_names(
        self, container: str, marker: Optional[str], limit: int
    ) -> list[str]:
        self._record("list_object_names")
        if container not in self.containers:
            raise NotFound(f"list objects in container {container}", "404 Not Found")
        names = sorted(self.containers[container])
        if marker is not None:
            names = [name for name in names if name > marker]
        return names[:limit]

    def put_object(
        self,
        container: str,
        object_name: str,
        data: bytes,
        md5_hash: str,
        content_type: str,
        metadata: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._record("put_object")
        if hashlib.md5(data).hexdigest() != md5_hash:
            raise TransportError(f"create object {object_name}", "422 Unprocessable")
        self.add_object(container, object_name, data)
        stored = self.containers[container][object_name]
        stored["content_type"] = content_type
        stored["headers"] = {
            f"x-object-meta-{key}": value for key, value in (metadata or {}).items()
        }

    def copy_object(
        self,
        container: str,
        object_name: str,
        destination_container: str,
        destination_name: str,
    ) -> None:
        self._record("copy_object")
        stored = self._get(container, object_name)
        self.containers.setdefault(destination_container, {})[destination_name] = dict(
            stored
        )

    def download_object(
        self, container: str, object_name: str, fileobj: BinaryIO
    ) -> None:
        self._record("download_object")
        stored = self._get(container, object_name)
        if self.partial_download is not None:
            fileobj.write(self.partial_download)
            raise TransportError(f"get object {object_name}", "connection reset")
        fileobj.write(stored["data"])

    def delete_object(self, container: str, object_name: str) -> None:
        self._record("delete_object")
        self._get(container, object_name)
        del self.containers[container][object_name]


@pytest.fixture
def connection():
    """An empty in-memory connection with a ``reports`` container."""
    conn = InMemoryConnection()
    conn.containers["reports"] = {}
    return conn


@pytest.fixture
def reporter():
    """A stage reporter remembering the last stage."""
    return LoggingStageReporter()


@pytest.fixture
def report_file(tmp_path):
    """A 1,024-byte CSV file named report.csv."""
    path = tmp_path / "report.csv"
    row = b"2024-01-01,sales,1000\n"
    data = (row * (1024 // len(row) + 1))[:1024]
    path.write_bytes(data)
    return path


def make_http_response(status_code, reason="", chunks=()):
    """A streamed ``requests`` response usable as a context manager."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.iter_content.return_value = iter(chunks)
    response.__enter__.return_value = response
    return response


@pytest.fixture
def http_delete():
    """Patch ``requests.delete`` for the raw manifest delete; answers 204."""
    with patch(
        "objstore_tools.objectstorage.object_operations.requests.delete"
    ) as mock_delete:
        mock_delete.return_value = make_http_response(204, "No Content")
        yield mock_delete
