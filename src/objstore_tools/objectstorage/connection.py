"""Connection capability interfaces used by the object operations.

Object operations never depend on a concrete client library. They are written
against the protocols below, which the Swift and S3 adapters in
``objstore_tools.objectstorage.clients`` satisfy structurally.
"""

from dataclasses import dataclass, field
from typing import BinaryIO, Mapping, Optional, Protocol, runtime_checkable

from objstore_tools.core import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ObjectInfo:
    """Metadata describing a single stored object."""

    name: str
    content_type: str
    size: int
    last_modified: str
    hash: str
    pseudo_directory: bool = False
    subdir: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)


@runtime_checkable
class ObjectStorageConnection(Protocol):
    """Object CRUD calls an authenticated connection must provide."""

    def head_object(self, container: str, object_name: str) -> ObjectInfo:
        """Fetch metadata for one object."""
        ...

    def list_object_names(
        self, container: str, marker: Optional[str], limit: int
    ) -> list[str]:
        """Return one page of object names sorted after ``marker``."""
        ...

    def put_object(
        self,
        container: str,
        object_name: str,
        data: bytes,
        md5_hash: str,
        content_type: str,
        metadata: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Create a plain (non-segmented) object from ``data``."""
        ...

    def copy_object(
        self,
        container: str,
        object_name: str,
        destination_container: str,
        destination_name: str,
    ) -> None:
        """Server-side copy of an object."""
        ...

    def download_object(
        self, container: str, object_name: str, fileobj: BinaryIO
    ) -> None:
        """Stream an object's content into ``fileobj``."""
        ...

    def delete_object(self, container: str, object_name: str) -> None:
        """Delete a single object."""
        ...


@runtime_checkable
class ManifestEndpoint(Protocol):
    """Raw endpoint access needed to delete manifest (SLO/DLO) objects."""

    def get_endpoint(self) -> tuple[str, str]:
        """Return ``(storage_url, auth_token)``, authenticating if needed."""
        ...


class StageReporter(Protocol):
    """Sink for the progress stage of a running operation."""

    def set_current_stage(self, stage: str) -> None: ...


class LoggingStageReporter:
    """Reports stages through the structured logger."""

    def __init__(self) -> None:
        self.current_stage: Optional[str] = None

    def set_current_stage(self, stage: str) -> None:
        self.current_stage = stage
        logger.info("Stage changed", stage=stage)
