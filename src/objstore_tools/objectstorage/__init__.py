"""Object operations for Swift and S3-compatible object storage."""

from .clients import S3Connection, SwiftConnection, open_connection
from .commands import execute_request, parse_command_args, run_command
from .connection import (
    LoggingStageReporter,
    ManifestEndpoint,
    ObjectInfo,
    ObjectStorageConnection,
    StageReporter,
)
from .object_operations import (
    MAX_OBJECT_SIZE,
    copy_object,
    delete_large_object,
    delete_object,
    get_object,
    get_object_info,
    hash_source,
    list_objects,
    put_object,
    rename_object,
)

__all__ = [
    "MAX_OBJECT_SIZE",
    "LoggingStageReporter",
    "ManifestEndpoint",
    "ObjectInfo",
    "ObjectStorageConnection",
    "S3Connection",
    "StageReporter",
    "SwiftConnection",
    "copy_object",
    "delete_large_object",
    "delete_object",
    "execute_request",
    "get_object",
    "get_object_info",
    "hash_source",
    "list_objects",
    "open_connection",
    "parse_command_args",
    "put_object",
    "rename_object",
    "run_command",
]
