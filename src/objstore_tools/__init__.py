"""Object storage operations for Swift and S3-compatible services.

This package provides get-info, list, upload, copy, download, rename and
delete operations for objects, including deletion of large (manifest)
objects together with their segments. Operations work against any connection
satisfying the ``ObjectStorageConnection`` protocol; Swift and S3 adapters
are included.

Recommended Usage:

    >>> from objstore_tools import SwiftStorageConfig, open_connection, run_command
    >>> from objstore_tools import LoggingStageReporter
    >>> config = SwiftStorageConfig(
    ...     storage_url="https://swift.example.com/v1/AUTH_acct", auth_token="tok"
    ... )
    >>> connection = open_connection(config)
    >>> print(run_command(connection, ["object", "list", "reports"],
    ...                   LoggingStageReporter()))

Command-line usage:

    $ objstore-tools -t swift object put reports ./report.csv
"""

__version__ = "0.1.0"

from .objectstorage import (
    MAX_OBJECT_SIZE,
    LoggingStageReporter,
    ManifestEndpoint,
    ObjectInfo,
    ObjectStorageConnection,
    S3Connection,
    StageReporter,
    SwiftConnection,
    copy_object,
    delete_large_object,
    delete_object,
    execute_request,
    get_object,
    get_object_info,
    list_objects,
    open_connection,
    parse_command_args,
    put_object,
    rename_object,
    run_command,
)
from .schemas import S3StorageConfig, StorageConfig, SwiftStorageConfig

__all__ = [
    # Storage configurations
    "S3StorageConfig",
    "StorageConfig",
    "SwiftStorageConfig",
    # Connections
    "ManifestEndpoint",
    "ObjectStorageConnection",
    "S3Connection",
    "SwiftConnection",
    "open_connection",
    # Commands
    "LoggingStageReporter",
    "StageReporter",
    "execute_request",
    "parse_command_args",
    "run_command",
    # Object operations
    "MAX_OBJECT_SIZE",
    "ObjectInfo",
    "copy_object",
    "delete_large_object",
    "delete_object",
    "get_object",
    "get_object_info",
    "list_objects",
    "put_object",
    "rename_object",
]
