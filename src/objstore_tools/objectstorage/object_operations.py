"""Object operations: metadata, listing, upload, copy, download, rename, delete.

Every operation takes an authenticated connection satisfying
``ObjectStorageConnection``, reports its stage to a ``StageReporter`` and
either returns a result or raises an ``ObjstoreToolsError`` subclass. There is
no retry and no rollback: the first failure is raised to the caller.

Known limitations:
    - Rename is a copy followed by a delete. If the delete fails both the
      original and the renamed object remain and ``TransportError`` is raised.
    - A failed upload or download is not cleaned up; the remote object or the
      local file may hold partial content. A download that fails before any
      content arrives leaves an existing local file untouched.
"""

import hashlib
import mimetypes
import os
from typing import BinaryIO, Mapping, Optional
from urllib.parse import quote

import requests

from objstore_tools.core import get_logger, get_tracer, settings
from objstore_tools.core.exceptions import (
    FileTooLarge,
    InvalidArguments,
    LocalIOError,
    ProtocolError,
    TransportError,
)
from objstore_tools.objectstorage.connection import (
    ManifestEndpoint,
    ObjectInfo,
    ObjectStorageConnection,
    StageReporter,
)

logger = get_logger(__name__)
tracer = get_tracer(__name__)

# Largest object the service accepts in a single (non-segmented) upload.
MAX_OBJECT_SIZE = 1000 * 1000 * 1000 * 5

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def get_object_info(
    connection: ObjectStorageConnection,
    container: str,
    object_name: str,
    reporter: StageReporter,
) -> ObjectInfo:
    """Fetch metadata for one object.

    Raises:
        NotFound: If the object does not exist
        TransportError: If the remote call fails
    """
    reporter.set_current_stage("Fetching object info")

    with tracer.start_as_current_span("object.info"):
        info = connection.head_object(container, object_name)

    logger.info("Object info fetched", container=container, object=object_name)
    return info


def list_objects(
    connection: ObjectStorageConnection,
    container: str,
    reporter: StageReporter,
) -> list[str]:
    """Return the names of all objects in a container.

    Pages through the listing with the last name of each page as the marker
    until the service returns an empty page.

    Raises:
        TransportError: If any page request fails
    """
    reporter.set_current_stage("Displaying objects")

    names: list[str] = []
    marker: Optional[str] = None

    with tracer.start_as_current_span("object.list"):
        while True:
            page = connection.list_object_names(
                container, marker=marker, limit=settings.listing_page_size
            )
            if not page:
                break
            names.extend(page)
            marker = page[-1]

    logger.info("Objects listed", container=container, object_count=len(names))
    return names


def read_source_file(source_path: str) -> bytes:
    """Read a file that is to be uploaded as a single object.

    The size is checked before any content is read.

    Raises:
        FileTooLarge: If the file is larger than ``MAX_OBJECT_SIZE``
        LocalIOError: If the file cannot be opened, stat'ed or read
    """
    try:
        source = open(source_path, "rb")
    except OSError as e:
        raise LocalIOError("open source file", e) from e

    with source:
        try:
            size = os.fstat(source.fileno()).st_size
        except OSError as e:
            raise LocalIOError("get source file info", e) from e

        if size > MAX_OBJECT_SIZE:
            raise FileTooLarge(os.path.basename(source_path), size, MAX_OBJECT_SIZE)

        try:
            return source.read()
        except OSError as e:
            raise LocalIOError("read source file", e) from e


def hash_source(data: bytes) -> str:
    """Return the hex-encoded MD5 digest of ``data``."""
    return hashlib.md5(data).hexdigest()


def put_object(
    connection: ObjectStorageConnection,
    container: str,
    source_path: str,
    reporter: StageReporter,
    object_name: Optional[str] = None,
    metadata: Optional[Mapping[str, str]] = None,
) -> str:
    """Upload a local file as a plain object and return the object name.

    The MD5 digest of the content is sent with the request so the service can
    verify the upload.

    Raises:
        FileTooLarge: If the file exceeds ``MAX_OBJECT_SIZE`` (no remote call)
        LocalIOError: If the file cannot be read (no remote call)
        TransportError: If creating the object fails
    """
    reporter.set_current_stage("Uploading object")

    object_name = object_name or os.path.basename(source_path)
    data = read_source_file(source_path)
    md5_hash = hash_source(data)
    content_type = mimetypes.guess_type(object_name)[0] or DEFAULT_CONTENT_TYPE

    with tracer.start_as_current_span("object.put"):
        connection.put_object(
            container,
            object_name,
            data,
            md5_hash=md5_hash,
            content_type=content_type,
            metadata=metadata,
        )

    logger.info(
        "Object uploaded",
        container=container,
        object=object_name,
        size=len(data),
        hash=md5_hash,
    )
    return object_name


def copy_object(
    connection: ObjectStorageConnection,
    container: str,
    object_name: str,
    destination_container: str,
    reporter: StageReporter,
) -> None:
    """Copy an object to another container under the same name."""
    reporter.set_current_stage("Copying object")

    with tracer.start_as_current_span("object.copy"):
        connection.copy_object(
            container, object_name, destination_container, object_name
        )

    logger.info(
        "Object copied",
        container=container,
        object=object_name,
        destination_container=destination_container,
    )


def rename_object(
    connection: ObjectStorageConnection,
    container: str,
    object_name: str,
    new_name: str,
    reporter: StageReporter,
) -> None:
    """Rename an object by copying it within its container, then deleting it.

    Not atomic: if the delete fails the renamed copy is kept alongside the
    original and ``TransportError`` is raised.
    """
    reporter.set_current_stage("Renaming object")

    with tracer.start_as_current_span("object.rename"):
        connection.copy_object(container, object_name, container, new_name)
        try:
            connection.delete_object(container, object_name)
        except TransportError as e:
            logger.warning(
                "Rename left both objects in place",
                container=container,
                object=object_name,
                new_name=new_name,
            )
            raise TransportError(
                f"delete object {object_name} after copying it to {new_name}",
                e.cause,
            ) from e

    logger.info(
        "Object renamed", container=container, object=object_name, new_name=new_name
    )


class _DestinationFile:
    """Local download target opened on the first write.

    An existing file is only truncated once the remote object starts
    arriving, so a fetch that fails up front leaves it untouched.
    """

    def __init__(self, path: str):
        self.path = path
        self._file: Optional[BinaryIO] = None

    def open(self) -> BinaryIO:
        if self._file is None:
            try:
                self._file = open(self.path, "wb")
            except OSError as e:
                raise LocalIOError("open/create object file", e) from e
        return self._file

    def write(self, data: bytes) -> int:
        return self.open().write(data)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()


def get_object(
    connection: ObjectStorageConnection,
    container: str,
    object_name: str,
    destination_path: str,
    reporter: StageReporter,
) -> None:
    """Download an object into a local file, creating or truncating it.

    The file is opened when the first chunk arrives; an empty object still
    creates an empty file.

    Raises:
        LocalIOError: If the local file cannot be opened or written
        TransportError: If the remote fetch fails (partial content is kept)
    """
    reporter.set_current_stage("Downloading object")

    destination = _DestinationFile(destination_path)
    try:
        with tracer.start_as_current_span("object.get"):
            try:
                connection.download_object(container, object_name, destination)
            except OSError as e:
                raise LocalIOError(f"write object file {destination_path}", e) from e
            destination.open()
    finally:
        destination.close()

    logger.info(
        "Object downloaded",
        container=container,
        object=object_name,
        destination=destination_path,
    )


def delete_object(
    connection: ObjectStorageConnection,
    container: str,
    object_name: str,
    reporter: StageReporter,
    large: bool = False,
) -> None:
    """Delete an object, or a manifest object and all its segments if ``large``.

    Raises:
        InvalidArguments: If ``large`` is set on a connection without manifest
            support
        TransportError: If the remote delete fails
    """
    reporter.set_current_stage("Deleting object")

    with tracer.start_as_current_span("object.delete"):
        if large:
            if not isinstance(connection, ManifestEndpoint):
                raise InvalidArguments(
                    "Large object deletion is not supported by this connection"
                )
            delete_large_object(connection, container, object_name)
        else:
            connection.delete_object(container, object_name)

    logger.info(
        "Object deleted", container=container, object=object_name, large=large
    )


def delete_large_object(
    endpoint: ManifestEndpoint, container: str, object_name: str
) -> None:
    """Delete a manifest object (SLO/DLO) together with its segments.

    Issues the DELETE directly against the storage URL so the service removes
    the manifest and every referenced segment in one request.

    Raises:
        ProtocolError: If the service answers with a non-2xx status
        TransportError: If the request cannot be made or the body cannot be read
    """
    operation = f"delete large object {object_name}"
    storage_url, auth_token = endpoint.get_endpoint()
    delete_url = (
        f"{storage_url.rstrip('/')}/{quote(container)}/{quote(object_name)}"
    )

    logger.debug("Deleting large object", url=delete_url)

    try:
        with requests.delete(
            delete_url,
            params={"multipart-manifest": "delete"},
            headers={"X-Auth-Token": auth_token},
            timeout=settings.request_timeout,
            stream=True,
        ) as response:
            if not 200 <= response.status_code < 300:
                logger.error(
                    "Large object delete rejected",
                    status_code=response.status_code,
                    reason=response.reason,
                )
                raise ProtocolError(
                    operation, response.status_code, response.reason or ""
                )

            # Drain so the connection can be reused
            for _ in response.iter_content(chunk_size=settings.download_chunk_size):
                pass
    except requests.RequestException as e:
        logger.error("Large object delete failed", error=str(e))
        raise TransportError(operation, e) from e
